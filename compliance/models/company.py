"""
Company and facility database models.

A company owns facilities; every other record carries the owning
company's id so report generation can reject cross-company references.
"""

from sqlalchemy import Column, ForeignKey, String, Uuid

from compliance.models.base import BaseModel


class Company(BaseModel):
    """Tenant that owns facilities and their records."""

    __tablename__ = "companies"

    name = Column(String(200), nullable=False, unique=True, comment="Company name")


class Facility(BaseModel):
    """
    Permitted wastewater land-application facility.

    Reports are generated per facility and month.
    """

    __tablename__ = "facilities"

    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning company"
    )
    name = Column(String(200), nullable=False, comment="Facility name")
    permit_number = Column(String(50), nullable=False, default="", comment="State non-discharge permit number")
    county = Column(String(100), nullable=False, default="", comment="County the facility is located in")

    def __repr__(self):
        return f"<Facility(id={self.id}, name='{self.name}', permit='{self.permit_number}')>"
