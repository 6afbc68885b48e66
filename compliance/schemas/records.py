"""
Pydantic schemas for the raw records report generation consumes.

Records reference each other by UUID only. Lookups (sprayfield -> crop,
facility -> sprayfields) are resolved by the repositories and handed to the
calculators as plain collections.
"""

from datetime import date as date_type, time
from typing import Optional
from uuid import UUID

from pydantic import Field

from compliance.schemas.base import BaseSchema, CompanyScopedSchema, FloatSeries
from compliance.utils.daily_series import empty_series


class Company(BaseSchema):
    """Company that owns facilities and their records."""
    id: UUID
    name: str


class Facility(CompanyScopedSchema):
    """Permitted wastewater land-application facility."""
    name: str
    permit_number: str = ""
    county: str = ""


class Crop(CompanyScopedSchema):
    """Cover crop grown on a sprayfield."""
    name: str
    pan_factor: float = Field(..., ge=0, description="Plant-available nitrogen factor")
    n_uptake: float = Field(..., ge=0, description="Nitrogen uptake rate in lbs/acre/year")


class Sprayfield(CompanyScopedSchema):
    """Land area wastewater is irrigated onto."""
    facility_id: Optional[UUID] = None
    crop_id: Optional[UUID] = None
    field_label: str = Field(..., description="Field identifier shown on reports (e.g. 'SF-1')")
    size_acres: float = Field(..., gt=0, description="Field area in acres")
    hydraulic_loading_limit_in_per_yr: float = Field(0.0, ge=0, description="Annual hydraulic loading limit in inches/year")
    hourly_rate_inches: Optional[float] = None
    annual_rate_inches: Optional[float] = None


class IrrigationEvent(CompanyScopedSchema):
    """
    A single irrigation run on one sprayfield.

    end_time earlier than start_time means the run crossed midnight.
    """
    facility_id: UUID
    sprayfield_id: UUID
    irrigation_date: date_type
    start_time: time
    end_time: time
    total_volume_gallons: float = Field(..., ge=0)
    flow_rate_gpm: float = Field(0.0, ge=0)
    weather_conditions: Optional[str] = None


class OperatorLogEntry(CompanyScopedSchema):
    """Daily operations record with the observations carried onto NDAR-1."""
    facility_id: UUID
    log_date: date_type
    weather_conditions: Optional[str] = None
    temperature_f: Optional[float] = None
    precipitation_in: Optional[float] = None
    storage_ft: Optional[float] = None
    five_day_upset_ft: Optional[float] = None


class WastewaterCharacteristic(CompanyScopedSchema):
    """Monthly wastewater quality record with daily lab results."""
    facility_id: UUID
    year: int
    month: int = Field(..., ge=1, le=12)
    nh3n_daily: FloatSeries = Field(default_factory=empty_series, description="Ammonia-nitrogen mg/L by day")
    tn_daily: FloatSeries = Field(default_factory=empty_series, description="Total nitrogen mg/L by day")


class GroundwaterSample(CompanyScopedSchema):
    """Groundwater sample taken at a monitoring well."""
    facility_id: UUID
    monitoring_well_id: Optional[UUID] = None
    sample_date: date_type
    nh3n: Optional[float] = Field(None, description="Ammonia-nitrogen mg/L")
    no3n: Optional[float] = Field(None, description="Nitrate-nitrogen mg/L")
    tkn: Optional[float] = Field(None, description="Total Kjeldahl nitrogen mg/L")
