"""
Irrigation event database model.

One row per irrigation run. A run whose end_time is earlier than its
start_time crossed midnight and is dated by the day it started.
"""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, String, Time, Uuid, CheckConstraint

from compliance.models.base import BaseModel


class IrrigationEvent(BaseModel):
    """Single irrigation run on one sprayfield."""

    __tablename__ = "irrigation_events"

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning company"
    )
    facility_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        comment="Facility the run belongs to"
    )
    sprayfield_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("sprayfields.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Field irrigated"
    )
    irrigation_date = Column(Date, nullable=False, comment="Date the run started")
    start_time = Column(Time, nullable=False, comment="Run start time")
    end_time = Column(Time, nullable=False, comment="Run end time (earlier than start for overnight runs)")
    total_volume_gallons = Column(Float, nullable=False, default=0.0, comment="Volume applied in gallons")
    flow_rate_gpm = Column(Float, nullable=False, default=0.0, comment="Flow rate in gallons per minute")
    weather_conditions = Column(String(200), nullable=True, comment="Weather observed during the run")

    __table_args__ = (
        Index('idx_irrigation_facility_date', 'facility_id', 'irrigation_date'),
        CheckConstraint('total_volume_gallons >= 0', name='check_irrigation_volume_non_negative'),
    )
