"""
Crop and sprayfield database models.

Sprayfield area and crop data drive every loading and nitrogen rate
calculation.
"""

from sqlalchemy import Column, Float, ForeignKey, String, Uuid, UniqueConstraint, CheckConstraint

from compliance.models.base import BaseModel


class Crop(BaseModel):
    """Cover crop with its nitrogen uptake characteristics."""

    __tablename__ = "crops"

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning company"
    )
    name = Column(String(100), nullable=False, comment="Crop name")
    pan_factor = Column(Float, nullable=False, default=0.0, comment="Plant-available nitrogen factor")
    n_uptake = Column(Float, nullable=False, default=0.0, comment="Nitrogen uptake in lbs/acre/year")


class Sprayfield(BaseModel):
    """
    Field wastewater is irrigated onto.

    Fields are placed into report slots in field_label order.
    """

    __tablename__ = "sprayfields"

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning company"
    )
    facility_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Facility the field belongs to"
    )
    crop_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("crops.id", ondelete="SET NULL"),
        nullable=True,
        comment="Crop currently grown on the field"
    )
    field_label = Column(String(50), nullable=False, comment="Field identifier shown on reports")
    size_acres = Column(Float, nullable=False, comment="Field area in acres")
    hydraulic_loading_limit_in_per_yr = Column(
        Float,
        nullable=False,
        default=0.0,
        comment="Permitted hydraulic loading in inches/year"
    )
    hourly_rate_inches = Column(Float, nullable=True, comment="Permitted hourly application rate in inches")
    annual_rate_inches = Column(Float, nullable=True, comment="Permitted annual application rate in inches")

    __table_args__ = (
        UniqueConstraint('facility_id', 'field_label', name='uq_sprayfield_facility_label'),
        CheckConstraint('size_acres > 0', name='check_sprayfield_area_positive'),
    )

    def __repr__(self):
        return f"<Sprayfield(id={self.id}, label='{self.field_label}', acres={self.size_acres})>"
