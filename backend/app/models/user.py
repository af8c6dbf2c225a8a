from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Text
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, utcnow


class UserRole(str, enum.Enum):
    """User roles"""
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUPERADMIN)


class Branch(str, enum.Enum):
    CSE = "CSE"
    EEE = "EEE"
    ECE_VLSI = "ECE (VLSI)"
    MECHANICAL = "Mechanical"
    CIVIL = "Civil"
    MINING = "Mining"


class User(Base):
    """Account directory entry"""
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Student details
    registration_no = Column(String(50), unique=True, index=True, nullable=False)
    branch = Column(String(50), nullable=False)
    semester = Column(String(2), nullable=False)
    mobile = Column(String(20), nullable=False)

    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)
    is_admin = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)

    # Device push-notification token (FCM)
    fcm_token = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def has_admin_access(self) -> bool:
        return self.role in ADMIN_ROLES

    def __repr__(self):
        return f"<User {self.email}>"
