"""
Operator log database model.

Daily operations record supplying the weather, temperature, precipitation,
storage and 5-day upset columns of the detailed report.
"""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, String, Uuid

from compliance.models.base import BaseModel


class OperatorLog(BaseModel):
    """Daily operator observations for a facility."""

    __tablename__ = "operator_logs"

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
        comment="Facility observed"
    )
    log_date = Column(Date, nullable=False, comment="Date of the observations")
    weather_conditions = Column(String(200), nullable=True, comment="Weather code or description")
    temperature_f = Column(Float, nullable=True, comment="Temperature in °F")
    precipitation_in = Column(Float, nullable=True, comment="Precipitation in inches")
    storage_ft = Column(Float, nullable=True, comment="Storage freeboard in feet")
    five_day_upset_ft = Column(Float, nullable=True, comment="5-day upset storage in feet")

    __table_args__ = (
        Index('idx_operator_log_facility_date', 'facility_id', 'log_date'),
    )
