"""
Monthly compliance report database models.

- DetailedMonthlyReport: NDAR-1 daily loading report. Shared daily
  observation series are JSON columns of 31 entries; the four sprayfield
  blocks are stored together as a JSON list.
- SummaryMonthlyReport: facility-level irrigation summary and its
  compliance status.

Both tables allow exactly one report per facility and month. The unique
constraint is the final guard against concurrent generation of the same
period.
"""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, JSON, String, Text, Uuid, UniqueConstraint, CheckConstraint

from compliance.models.base import BaseModel


class DetailedMonthlyReport(BaseModel):
    """
    Non-Discharge Application Report (NDAR-1).

    field_reports holds one object per slot (1-4) with the field's
    metadata, four daily series, monthly loading, monthly maximum hourly
    loading and 12-month floating total.
    """

    __tablename__ = "detailed_monthly_reports"

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
        index=True,
        comment="Facility reported"
    )
    year = Column(Integer, nullable=False, comment="Calendar year")
    month = Column(Integer, nullable=False, comment="Month number (1-12)")
    did_irrigation_occur = Column(Boolean, nullable=False, default=False, comment="Any irrigation in the month")

    weather_code_daily = Column(JSON, nullable=False, comment="Weather by day (31 entries)")
    temperature_daily = Column(JSON, nullable=False, comment="Temperature in °F by day (31 entries)")
    precipitation_daily = Column(JSON, nullable=False, comment="Precipitation in inches by day (31 entries)")
    storage_daily = Column(JSON, nullable=False, comment="Storage in feet by day (31 entries)")
    five_day_upset_daily = Column(JSON, nullable=False, comment="5-day upset in feet by day (31 entries)")

    field_reports = Column(JSON, nullable=False, comment="Sprayfield blocks for slots 1-4")

    __table_args__ = (
        UniqueConstraint('facility_id', 'year', 'month', name='uq_detailed_report_facility_year_month'),
        CheckConstraint('month >= 1 AND month <= 12', name='check_detailed_report_month_valid'),
    )

    def __repr__(self):
        return f"<DetailedMonthlyReport(id={self.id}, facility_id={self.facility_id}, year={self.year}, month={self.month})>"


class SummaryMonthlyReport(BaseModel):
    """Monthly irrigation summary with compliance classification."""

    __tablename__ = "summary_monthly_reports"

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
        index=True,
        comment="Facility reported"
    )
    year = Column(Integer, nullable=False, comment="Calendar year")
    month = Column(Integer, nullable=False, comment="Month number (1-12)")

    total_volume_applied = Column(Float, nullable=False, default=0.0, comment="Gallons applied")
    total_application_rate = Column(Float, nullable=False, default=0.0, comment="Inches applied over total field area")
    hydraulic_loading_rate = Column(Float, nullable=False, default=0.0, comment="Annualized loading in inches/year")
    hydraulic_loading_limit = Column(Float, nullable=False, default=0.0, comment="Limit classified against in inches/year")
    nitrogen_loading_rate = Column(Float, nullable=False, default=0.0, comment="Annualized NH3-N loading in lbs/acre/year")
    pan_uptake_rate = Column(Float, nullable=False, default=0.0, comment="Area-weighted PAN uptake in lbs/acre/year")
    application_efficiency = Column(Float, nullable=False, default=0.0, comment="Percent of target rate applied")
    weather_summary = Column(String(500), nullable=False, default="", comment="Distinct weather notes")
    operational_notes = Column(Text, nullable=False, default="", comment="Generation notes")
    compliance_status = Column(String(20), nullable=False, comment="Compliant, UnderReview or NonCompliant")

    __table_args__ = (
        UniqueConstraint('facility_id', 'year', 'month', name='uq_summary_report_facility_year_month'),
        CheckConstraint('month >= 1 AND month <= 12', name='check_summary_report_month_valid'),
        CheckConstraint('application_efficiency >= 0 AND application_efficiency <= 100', name='check_efficiency_valid'),
    )

    def __repr__(self):
        return f"<SummaryMonthlyReport(id={self.id}, facility_id={self.facility_id}, year={self.year}, month={self.month})>"
