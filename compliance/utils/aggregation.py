"""
Monthly aggregation for the detailed NDAR-1 report.

Drives the per-day loading calculator across every day of a month for up
to four sprayfields, totals each field's month, fills the shared daily
observation series from operator logs and finishes with the 12-month
floating totals.

All inputs are already-fetched records. Ownership checks run before any
output structure is built, so a rejected request never yields a partial
report.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from compliance.exceptions import BusinessRuleViolation
from compliance.schemas.records import Crop, Facility, IrrigationEvent, OperatorLogEntry, Sprayfield
from compliance.schemas.reports import FIELD_SLOTS, DetailedMonthlyReport, MonthlyFieldReport
from compliance.utils.daily_series import DailySeries, series_max, series_sum
from compliance.utils.floating_totals import apply_floating_totals
from compliance.utils.loading import compute_field_day
from compliance.utils.logging_config import get_logger
from compliance.utils.periods import days_in_month, month_date_range, validate_period

logger = get_logger(__name__)


# ============================================================================
# OWNERSHIP AND FILTERING
# ============================================================================

def check_company_scope(
    effective_company_id: UUID,
    facility: Facility,
    sprayfields: Iterable[Sprayfield] = (),
) -> None:
    """
    Reject a facility or sprayfield that belongs to another company.

    Raises:
        BusinessRuleViolation: On any cross-company or cross-facility reference
    """
    if facility.company_id != effective_company_id:
        logger.warning(f"Facility {facility.id} is not owned by company {effective_company_id}")
        raise BusinessRuleViolation("Facility must belong to the same company.")

    for sprayfield in sprayfields:
        if sprayfield.company_id != effective_company_id:
            logger.warning(f"Sprayfield {sprayfield.id} is not owned by company {effective_company_id}")
            raise BusinessRuleViolation("Sprayfield must belong to the same company as the facility.")
        if sprayfield.facility_id is not None and sprayfield.facility_id != facility.id:
            logger.warning(f"Sprayfield {sprayfield.id} is not part of facility {facility.id}")
            raise BusinessRuleViolation(
                f"Sprayfield '{sprayfield.field_label}' does not belong to facility '{facility.name}'."
            )


def events_in_month(
    events: Iterable[IrrigationEvent],
    facility_id: UUID,
    year: int,
    month: int,
) -> List[IrrigationEvent]:
    """Irrigation events of one facility dated inside the month."""
    first_day, last_day = month_date_range(year, month)
    return [
        e for e in events
        if e.facility_id == facility_id and first_day <= e.irrigation_date <= last_day
    ]


# ============================================================================
# FIELD SLOTS
# ============================================================================

def assign_field_slots(
    sprayfields: Iterable[Sprayfield],
    crops: Optional[Dict[UUID, Crop]] = None,
) -> List[MonthlyFieldReport]:
    """
    Place sprayfields into the report's four slots.

    Sprayfields are ordered by field label and the first four are used.
    Remaining slots stay unconfigured.

    Args:
        sprayfields: The facility's sprayfields
        crops: Crops by id, used for the crop name shown on the report

    Returns:
        Exactly four MonthlyFieldReport blocks, slots 1-4
    """
    crops = crops or {}
    ordered = sorted(sprayfields, key=lambda sf: sf.field_label)[:FIELD_SLOTS]

    blocks = []
    for slot in range(1, FIELD_SLOTS + 1):
        if slot > len(ordered):
            blocks.append(MonthlyFieldReport(slot=slot))
            continue

        sprayfield = ordered[slot - 1]
        crop = crops.get(sprayfield.crop_id) if sprayfield.crop_id else None
        blocks.append(MonthlyFieldReport(
            slot=slot,
            sprayfield_id=sprayfield.id,
            field_label=sprayfield.field_label,
            size_acres=sprayfield.size_acres,
            crop_name=crop.name if crop else "",
            hourly_rate_inches=sprayfield.hourly_rate_inches,
            annual_rate_inches=sprayfield.annual_rate_inches,
        ))
    return blocks


def aggregate_field_month(
    block: MonthlyFieldReport,
    events: Iterable[IrrigationEvent],
    year: int,
    month: int,
) -> None:
    """
    Fill one field block's daily series and monthly scalars.

    Args:
        block: Configured field block (sprayfield_id set)
        events: That field's events for the month
        year: Report year
        month: Report month
    """
    by_day = defaultdict(list)
    for event in events:
        by_day[event.irrigation_date.day].append(event)

    volume = DailySeries()
    minutes = DailySeries()
    daily_loading = DailySeries()
    max_hourly = DailySeries()

    for day in range(1, days_in_month(year, month) + 1):
        result = compute_field_day(by_day.get(day, []), block.size_acres)
        volume.set(day, result.volume_applied)
        minutes.set(day, result.minutes_irrigated)
        daily_loading.set(day, result.daily_loading)
        max_hourly.set(day, result.max_hourly_loading)

    block.volume_applied_daily = volume.to_list()
    block.time_irrigated_daily = minutes.to_list()
    block.daily_loading_daily = daily_loading.to_list()
    block.max_hourly_loading_daily = max_hourly.to_list()
    block.monthly_loading = series_sum(block.daily_loading_daily)
    block.max_hourly_loading = series_max(block.max_hourly_loading_daily)

    logger.debug(
        f"Field {block.field_label} ({block.slot}): {len(by_day)} irrigated day(s), "
        f"monthly loading {block.monthly_loading:.4f} in"
    )


# ============================================================================
# DAILY OBSERVATIONS
# ============================================================================

def logs_by_day(
    operator_logs: Iterable[OperatorLogEntry],
    facility_id: UUID,
    year: int,
    month: int,
) -> Dict[int, OperatorLogEntry]:
    """First operator log per day of month for one facility."""
    first_day, last_day = month_date_range(year, month)
    result = {}
    for log in sorted(operator_logs, key=lambda entry: entry.log_date):
        if log.facility_id != facility_id or not first_day <= log.log_date <= last_day:
            continue
        result.setdefault(log.log_date.day, log)
    return result


def populate_daily_observations(
    report: DetailedMonthlyReport,
    operator_logs: Iterable[OperatorLogEntry],
) -> None:
    """
    Fill weather, temperature, precipitation, storage and upset series.

    Days without an operator log keep no value.
    """
    weather = DailySeries()
    temperature = DailySeries()
    precipitation = DailySeries()
    storage = DailySeries()
    upset = DailySeries()

    for day, log in logs_by_day(operator_logs, report.facility_id, report.year, report.month).items():
        weather.set(day, log.weather_conditions or None)
        temperature.set(day, log.temperature_f)
        precipitation.set(day, log.precipitation_in)
        storage.set(day, log.storage_ft)
        upset.set(day, log.five_day_upset_ft)

    report.weather_code_daily = weather.to_list()
    report.temperature_daily = temperature.to_list()
    report.precipitation_daily = precipitation.to_list()
    report.storage_daily = storage.to_list()
    report.five_day_upset_daily = upset.to_list()


# ============================================================================
# DETAILED REPORT
# ============================================================================

def build_detailed_report(
    facility: Facility,
    year: int,
    month: int,
    *,
    effective_company_id: UUID,
    sprayfields: Sequence[Sprayfield],
    irrigation_events: Iterable[IrrigationEvent],
    operator_logs: Iterable[OperatorLogEntry] = (),
    crops: Optional[Dict[UUID, Crop]] = None,
    prior_reports: Iterable[DetailedMonthlyReport] = (),
) -> DetailedMonthlyReport:
    """
    Build a complete detailed monthly report for one facility.

    Args:
        facility: Facility being reported
        year: Report year
        month: Report month (1-12)
        effective_company_id: Company the request acts for
        sprayfields: The facility's sprayfields
        irrigation_events: Irrigation events (filtered to facility and month here)
        operator_logs: Daily operations records
        crops: Crops by id
        prior_reports: Previously generated detailed reports for the facility

    Returns:
        DetailedMonthlyReport with floating totals applied

    Raises:
        ValueError: If the period is invalid
        BusinessRuleViolation: On an ownership mismatch
    """
    validate_period(year, month)
    check_company_scope(effective_company_id, facility, sprayfields)

    events = events_in_month(irrigation_events, facility.id, year, month)
    blocks = assign_field_slots(sprayfields, crops)

    events_by_field = defaultdict(list)
    for event in events:
        events_by_field[event.sprayfield_id].append(event)

    for block in blocks:
        if block.is_configured:
            aggregate_field_month(block, events_by_field.get(block.sprayfield_id, []), year, month)

    report = DetailedMonthlyReport(
        company_id=facility.company_id,
        facility_id=facility.id,
        year=year,
        month=month,
        did_irrigation_occur=bool(events),
        field_reports=blocks,
    )
    populate_daily_observations(report, operator_logs)
    apply_floating_totals(report, prior_reports)

    logger.info(
        f"Built detailed report for {facility.name} {year}-{month:02d}: "
        f"{len(events)} event(s), {sum(1 for b in blocks if b.is_configured)} field(s)"
    )
    return report

