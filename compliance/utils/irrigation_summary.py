"""
Facility-level monthly irrigation summary.

Independent of the detailed NDAR-1 aggregation. Works from the month's
irrigation events and the facility's sprayfield and crop metadata:

- Total application rate (in) = Total volume (gal) / (Total acres x 27,152)
- Hydraulic loading rate (in/yr) = Total application rate x 12
- Nitrogen loading rate (lbs/ac/yr) =
      Avg NH3-N (mg/L) x Total volume x 8.34 / (Total acres x 1,000,000) x 12
- PAN uptake rate = acreage-weighted mean of (N uptake x PAN factor)
- Application efficiency (%) = min(100, Total application rate / Target rate x 100),
  target rate being the acreage-weighted mean of each field's annual limit / 12
"""

from calendar import month_name
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from compliance.exceptions import BusinessRuleViolation
from compliance.schemas.records import Crop, Facility, IrrigationEvent, Sprayfield, WastewaterCharacteristic
from compliance.schemas.reports import SummaryMonthlyReport
from compliance.utils.aggregation import check_company_scope, events_in_month
from compliance.utils.compliance_status import classify_compliance
from compliance.utils.daily_series import series_mean
from compliance.utils.loading import GALLONS_PER_ACRE_INCH
from compliance.utils.logging_config import get_logger
from compliance.utils.periods import validate_period

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12
LBS_PER_GALLON_PER_MG_L = 8.34
MG_PER_KG_SCALE = 1_000_000.0
WEATHER_SUMMARY_LIMIT = 5
WEATHER_SEPARATOR = "; "


# ============================================================================
# RATE CALCULATIONS
# ============================================================================

def total_application_rate(total_volume: float, total_acres: float) -> float:
    """Inches applied across the facility's field area, 0 without area."""
    if total_acres <= 0:
        return 0.0
    return total_volume / (total_acres * GALLONS_PER_ACRE_INCH)


def nitrogen_loading_rate(
    average_ammonia_mg_l: Optional[float],
    total_volume: float,
    total_acres: float,
) -> float:
    """
    Annualized ammonia-nitrogen loading in lbs/acre/year.

    Returns 0 when no concentration data exists or the area is 0.
    """
    if average_ammonia_mg_l is None or total_acres <= 0:
        return 0.0
    monthly = average_ammonia_mg_l * total_volume * LBS_PER_GALLON_PER_MG_L / (total_acres * MG_PER_KG_SCALE)
    return monthly * MONTHS_PER_YEAR


def pan_uptake_rate(sprayfields: Iterable[Sprayfield], crops: Dict[UUID, Crop]) -> float:
    """
    Acreage-weighted mean of crop N uptake x PAN factor.

    Fields without a crop are left out of both the sum and the weights.
    """
    weighted = 0.0
    weights = 0.0
    for sprayfield in sprayfields:
        crop = crops.get(sprayfield.crop_id) if sprayfield.crop_id else None
        if crop is None:
            continue
        weighted += sprayfield.size_acres * crop.n_uptake * crop.pan_factor
        weights += sprayfield.size_acres
    if weights <= 0:
        return 0.0
    return weighted / weights


def target_monthly_rate(sprayfields: Sequence[Sprayfield]) -> float:
    """Acreage-weighted mean of each field's monthly share of its annual limit."""
    total_acres = sum((sf.size_acres for sf in sprayfields), 0.0)
    if total_acres <= 0:
        return 0.0
    weighted = sum(
        (sf.size_acres * sf.hydraulic_loading_limit_in_per_yr / MONTHS_PER_YEAR for sf in sprayfields),
        0.0,
    )
    return weighted / total_acres


def application_efficiency(application_rate: float, target_rate: float) -> float:
    """Percent of the target rate applied, capped at 100; 0 without a target."""
    if target_rate <= 0:
        return 0.0
    return min(100.0, application_rate / target_rate * 100.0)


def hydraulic_loading_limit(sprayfields: Iterable[Sprayfield]) -> float:
    """Largest annual hydraulic loading limit among the fields, 0 if none."""
    return max((sf.hydraulic_loading_limit_in_per_yr for sf in sprayfields), default=0.0)


def average_ammonia_concentration(characteristic: Optional[WastewaterCharacteristic]) -> Optional[float]:
    """Mean of the month's NH3-N daily lab results, None without data."""
    if characteristic is None:
        return None
    return series_mean(characteristic.nh3n_daily)


# ============================================================================
# TEXT FIELDS
# ============================================================================

def summarize_weather(events: Iterable[IrrigationEvent]) -> str:
    """
    Distinct non-empty weather notes, first five in chronological order.

    Example:
        "Clear; Light rain"
    """
    seen: List[str] = []
    for event in sorted(events, key=lambda e: (e.irrigation_date, e.start_time)):
        text = (event.weather_conditions or "").strip()
        if text and text not in seen:
            seen.append(text)
        if len(seen) == WEATHER_SUMMARY_LIMIT:
            break
    return WEATHER_SEPARATOR.join(seen)


def operational_notes(event_count: int) -> str:
    return f"Generated from {event_count} irrigation record(s)."


# ============================================================================
# SUMMARY REPORT
# ============================================================================

def build_summary_report(
    facility: Facility,
    year: int,
    month: int,
    *,
    effective_company_id: UUID,
    sprayfields: Sequence[Sprayfield],
    irrigation_events: Iterable[IrrigationEvent],
    crops: Optional[Dict[UUID, Crop]] = None,
    average_ammonia_mg_l: Optional[float] = None,
) -> SummaryMonthlyReport:
    """
    Build the monthly irrigation summary and classify its compliance.

    Args:
        facility: Facility being reported
        year: Report year
        month: Report month (1-12)
        effective_company_id: Company the request acts for
        sprayfields: The facility's sprayfields
        irrigation_events: Irrigation events (filtered to facility and month here)
        crops: Crops by id
        average_ammonia_mg_l: Mean NH3-N concentration for the month, if measured

    Returns:
        SummaryMonthlyReport

    Raises:
        ValueError: If the period is invalid
        BusinessRuleViolation: On an ownership mismatch or a month with no irrigation
    """
    validate_period(year, month)
    check_company_scope(effective_company_id, facility, sprayfields)

    events = events_in_month(irrigation_events, facility.id, year, month)
    if not events:
        logger.warning(f"No irrigation records for {facility.name} {year}-{month:02d}")
        raise BusinessRuleViolation(
            f"No irrigation records found for facility '{facility.name}' for {month_name[month]} {year}."
        )

    crops = crops or {}
    total_volume = sum((e.total_volume_gallons for e in events), 0.0)
    total_acres = sum((sf.size_acres for sf in sprayfields), 0.0)

    application_rate = total_application_rate(total_volume, total_acres)
    loading_rate = application_rate * MONTHS_PER_YEAR
    efficiency = application_efficiency(application_rate, target_monthly_rate(sprayfields))
    limit = hydraulic_loading_limit(sprayfields)

    report = SummaryMonthlyReport(
        company_id=facility.company_id,
        facility_id=facility.id,
        year=year,
        month=month,
        total_volume_applied=total_volume,
        total_application_rate=application_rate,
        hydraulic_loading_rate=loading_rate,
        hydraulic_loading_limit=limit,
        nitrogen_loading_rate=nitrogen_loading_rate(average_ammonia_mg_l, total_volume, total_acres),
        pan_uptake_rate=pan_uptake_rate(sprayfields, crops),
        application_efficiency=efficiency,
        weather_summary=summarize_weather(events),
        operational_notes=operational_notes(len(events)),
        compliance_status=classify_compliance(loading_rate, limit, efficiency),
    )

    logger.info(
        f"Built summary report for {facility.name} {year}-{month:02d}: "
        f"{total_volume:.0f} gal, {loading_rate:.3f} in/yr, {report.compliance_status.value}"
    )
    return report
