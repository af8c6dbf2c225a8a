"""Custom SQLAlchemy types and column helpers shared by the models"""
from sqlalchemy import TypeDecorator, String
from datetime import datetime, timezone
import uuid


def generate_uuid():
    """Generate a UUID string"""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every DateTime column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GUID(TypeDecorator):
    """Platform-independent GUID type that stores UUIDs as VARCHAR(36)"""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return str(value)
        return value


def is_valid_uuid(value: str) -> bool:
    """Check an id from a URL or body before it reaches a query"""
    try:
        uuid.UUID(str(value))
    except (ValueError, TypeError):
        return False
    return True
