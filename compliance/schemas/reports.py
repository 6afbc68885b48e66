"""
Pydantic schemas for generated compliance reports.

- DetailedMonthlyReport: NDAR-1 style daily loading report with up to four
  sprayfield blocks and 12-month floating totals
- SummaryMonthlyReport: facility-level monthly irrigation summary with a
  compliance status
- MassLoadingReport: monthly nitrogen mass loading per sprayfield
- DailyMonitoringReport: daily flow and groundwater nitrogen results

Every daily series is normalized to exactly 31 entries on validation.
"""

from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from compliance.schemas.base import BaseSchema, FloatSeries, TextSeries
from compliance.utils.daily_series import empty_series

FIELD_SLOTS = 4


class ComplianceStatus(str, Enum):
    """Compliance classification of a summary report."""
    COMPLIANT = "Compliant"
    UNDER_REVIEW = "UnderReview"
    NON_COMPLIANT = "NonCompliant"


class ReportPeriodBase(BaseSchema):
    """Common identity of a monthly report."""
    id: Optional[UUID] = None
    company_id: UUID
    facility_id: UUID
    year: int = Field(..., ge=1, description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Month (1-12)")


# ============================================================================
# DETAILED MONTHLY REPORT (NDAR-1)
# ============================================================================

class MonthlyFieldReport(BaseSchema):
    """
    One sprayfield block of the detailed report.

    A slot without a configured sprayfield keeps sprayfield_id None, all-empty
    series and zero monthly scalars.
    """
    slot: int = Field(..., ge=1, le=FIELD_SLOTS)
    sprayfield_id: Optional[UUID] = None
    field_label: str = ""
    size_acres: Optional[float] = None
    crop_name: str = ""
    hourly_rate_inches: Optional[float] = None
    annual_rate_inches: Optional[float] = None

    volume_applied_daily: FloatSeries = Field(default_factory=empty_series, description="Gallons applied by day")
    time_irrigated_daily: FloatSeries = Field(default_factory=empty_series, description="Minutes irrigated by day")
    daily_loading_daily: FloatSeries = Field(default_factory=empty_series, description="Daily loading in inches")
    max_hourly_loading_daily: FloatSeries = Field(default_factory=empty_series, description="Maximum hourly loading in inches")

    monthly_loading: float = Field(0.0, description="Sum of daily loading in inches")
    max_hourly_loading: float = Field(0.0, description="Largest daily maximum hourly loading in inches")
    twelve_month_floating_total: float = Field(0.0, description="Current plus up to 11 preceding months of loading in inches")

    @property
    def is_configured(self) -> bool:
        return self.sprayfield_id is not None


class DetailedMonthlyReport(ReportPeriodBase):
    """Non-Discharge Application Report (NDAR-1) for one facility and month."""
    did_irrigation_occur: bool = False

    weather_code_daily: TextSeries = Field(default_factory=empty_series)
    temperature_daily: FloatSeries = Field(default_factory=empty_series, description="Temperature in °F")
    precipitation_daily: FloatSeries = Field(default_factory=empty_series, description="Precipitation in inches")
    storage_daily: FloatSeries = Field(default_factory=empty_series, description="Storage in feet")
    five_day_upset_daily: FloatSeries = Field(default_factory=empty_series, description="5-day upset in feet")

    field_reports: List[MonthlyFieldReport] = Field(
        default_factory=lambda: [MonthlyFieldReport(slot=slot) for slot in range(1, FIELD_SLOTS + 1)]
    )

    @field_validator("field_reports")
    @classmethod
    def fill_field_slots(cls, v: List[MonthlyFieldReport]) -> List[MonthlyFieldReport]:
        """Keep exactly one block per slot, ordered by slot."""
        by_slot = {}
        for block in v:
            if block.slot in by_slot:
                raise ValueError(f"Duplicate field slot {block.slot}")
            by_slot[block.slot] = block
        return [by_slot.get(slot) or MonthlyFieldReport(slot=slot) for slot in range(1, FIELD_SLOTS + 1)]

    def field_for(self, sprayfield_id: UUID) -> Optional[MonthlyFieldReport]:
        """Block reporting the given sprayfield, if any."""
        for block in self.field_reports:
            if block.sprayfield_id == sprayfield_id:
                return block
        return None


# ============================================================================
# SUMMARY MONTHLY REPORT
# ============================================================================

class SummaryMonthlyReport(ReportPeriodBase):
    """Monthly irrigation summary with compliance classification."""
    total_volume_applied: float = Field(0.0, description="Gallons applied across all fields")
    total_application_rate: float = Field(0.0, description="Inches applied over the total field area")
    hydraulic_loading_rate: float = Field(0.0, description="Annualized application rate in inches/year")
    hydraulic_loading_limit: float = Field(0.0, description="Limit the rate was classified against (inches/year)")
    nitrogen_loading_rate: float = Field(0.0, description="Annualized ammonia-nitrogen loading in lbs/acre/year")
    pan_uptake_rate: float = Field(0.0, description="Area-weighted crop PAN uptake in lbs/acre/year")
    application_efficiency: float = Field(0.0, ge=0, le=100, description="Percent of target monthly rate applied")
    weather_summary: str = ""
    operational_notes: str = ""
    compliance_status: ComplianceStatus = ComplianceStatus.UNDER_REVIEW


# ============================================================================
# MASS LOADING AND DAILY MONITORING
# ============================================================================

class MassLoadingField(BaseSchema):
    """Monthly nitrogen mass loading for one field slot."""
    slot: int = Field(..., ge=1, le=FIELD_SLOTS)
    sprayfield_id: Optional[UUID] = None
    field_label: str = ""
    size_acres: Optional[float] = None
    crop_name: str = ""
    load_type: str = "Wastewater"
    field_loaded: bool = False
    monthly_volume_gallons: float = 0.0
    average_concentration_mg_l: Optional[float] = None
    monthly_load_lbs_per_acre: Optional[float] = None
    twelve_month_floating_total: float = 0.0


class MassLoadingReport(ReportPeriodBase):
    """Non-Discharge Mass Loading Report (NDMLR) derived from a detailed report."""
    average_concentration_mg_l: Optional[float] = Field(
        None,
        description="Mean total nitrogen (TKN + NO3-N) over the month's groundwater samples"
    )
    field_reports: List[MassLoadingField] = Field(default_factory=list)


class DailyMonitoringReport(ReportPeriodBase):
    """Non-Discharge Monitoring Report (NDMR) daily flow and nitrogen grid."""
    flow_gallons_daily: FloatSeries = Field(default_factory=empty_series)
    total_nitrogen_daily: FloatSeries = Field(default_factory=empty_series)
    nh3n_daily: FloatSeries = Field(default_factory=empty_series)
    no3n_daily: FloatSeries = Field(default_factory=empty_series)
    tkn_daily: FloatSeries = Field(default_factory=empty_series)
