"""
Water quality database models.

- WastewaterCharacteristic: monthly lab results for the applied wastewater,
  daily values in 31-slot JSON series
- GroundwaterSample: individual monitoring-well samples
"""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, Integer, JSON, Uuid, UniqueConstraint, CheckConstraint

from compliance.models.base import BaseModel


class WastewaterCharacteristic(BaseModel):
    """Monthly wastewater characteristics for a facility."""

    __tablename__ = "wastewater_characteristics"

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
        comment="Facility sampled"
    )
    year = Column(Integer, nullable=False, comment="Calendar year")
    month = Column(Integer, nullable=False, comment="Month number (1-12)")
    nh3n_daily = Column(JSON, nullable=False, comment="Ammonia-nitrogen mg/L by day (31 entries)")
    tn_daily = Column(JSON, nullable=False, comment="Total nitrogen mg/L by day (31 entries)")

    __table_args__ = (
        UniqueConstraint('facility_id', 'year', 'month', name='uq_wastewater_facility_year_month'),
        CheckConstraint('month >= 1 AND month <= 12', name='check_wastewater_month_valid'),
    )


class GroundwaterSample(BaseModel):
    """Groundwater sample from a monitoring well."""

    __tablename__ = "groundwater_samples"

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
        comment="Facility sampled"
    )
    monitoring_well_id = Column(Uuid(as_uuid=True), nullable=True, comment="Monitoring well sampled")
    sample_date = Column(Date, nullable=False, comment="Date sampled")
    nh3n = Column(Float, nullable=True, comment="Ammonia-nitrogen mg/L")
    no3n = Column(Float, nullable=True, comment="Nitrate-nitrogen mg/L")
    tkn = Column(Float, nullable=True, comment="Total Kjeldahl nitrogen mg/L")

    __table_args__ = (
        Index('idx_groundwater_facility_date', 'facility_id', 'sample_date'),
    )
