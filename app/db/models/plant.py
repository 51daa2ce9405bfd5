"""Plant database model."""
import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class Plant(Base):
    """A tracked plant with its four care schedules."""

    __tablename__ = "plants"
    __table_args__ = (
        CheckConstraint("water_frequency_days > 0", name="water_frequency_positive"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    photo_url = Column(Text, nullable=False)

    # Watering is always scheduled
    water_frequency_days = Column(Integer, nullable=False)
    last_watered_date = Column(Date, nullable=False, index=True)

    # Optional tracks, active only when frequency and last date are both set
    fertilize_frequency_days = Column(Integer)
    last_fertilized_date = Column(Date)
    repot_frequency_months = Column(Integer)
    last_repotted_date = Column(Date)
    prune_frequency_months = Column(Integer)
    last_pruned_date = Column(Date)

    notes = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="plants")
