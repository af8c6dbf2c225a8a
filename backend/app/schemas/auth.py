from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from app.models.user import Branch, UserRole


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2, max_length=50)
    registration_no: str = Field(..., min_length=1, max_length=50)
    branch: Branch
    semester: str = Field(..., pattern=r'^[1-8]$')
    mobile: str = Field(
        ...,
        pattern=r'^\+\d{1,4}\d{10}$',
        description="Format should be +[country code][10 digits]"
    )

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator('registration_no')
    @classmethod
    def uppercase_registration_no(cls, v: str) -> str:
        return v.strip().upper()


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    registration_no: str
    branch: str
    semester: str
    mobile: str
    is_admin: bool = Field(False, serialization_alias="isAdmin")
    role: UserRole

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class FcmTokenUpdate(BaseModel):
    token: Optional[str] = Field(None, max_length=4096)


class UserRoleUpdate(BaseModel):
    # Checked against UserRole in the endpoint so a bad value is a 400
    role: Optional[str] = None


class UserRoleResponse(BaseModel):
    success: bool = True
    data: UserResponse
