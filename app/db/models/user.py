"""User database model."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class User(Base):
    """Represents an account, either email based or anonymous with a recovery key."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=True, index=True)
    hashed_password = Column(String(255), nullable=True)
    name = Column(String(255))
    recovery_key = Column(String(64), unique=True, nullable=True, index=True)

    # Settings
    notification_time = Column(String(5), nullable=False, default="09:00")

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    is_active = Column(Boolean, default=True)

    plants = relationship("Plant", back_populates="owner", cascade="all, delete-orphan")

    @property
    def is_anonymous(self) -> bool:
        return self.email is None

    def notification_hour(self) -> int:
        """Return the hour component of the preferred ``HH:MM`` notification time."""

        return int((self.notification_time or "09:00").split(":", 1)[0])
