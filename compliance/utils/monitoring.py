"""
Nitrogen mass loading (NDMLR) and daily monitoring (NDMR) reports.

Mass loading per field:
    Monthly load (lbs/ac) = Volume (gal) x Concentration (mg/L) x 8.34e-6 / Area (ac)

The concentration is the month's mean groundwater total nitrogen, each
sample contributing TKN + NO3-N.
"""

from collections import defaultdict
from typing import Iterable, List, Optional
from uuid import UUID

from compliance.schemas.records import Facility, GroundwaterSample, IrrigationEvent
from compliance.schemas.reports import (
    DailyMonitoringReport, DetailedMonthlyReport, MassLoadingField, MassLoadingReport,
)
from compliance.utils.aggregation import check_company_scope, events_in_month
from compliance.utils.daily_series import DailySeries, series_mean, series_sum
from compliance.utils.logging_config import get_logger
from compliance.utils.periods import days_in_month, month_date_range, validate_period

logger = get_logger(__name__)

# lbs per gallon per mg/L
MASS_LOAD_FACTOR = 8.34e-6


def samples_in_month(
    samples: Iterable[GroundwaterSample],
    facility_id: UUID,
    year: int,
    month: int,
) -> List[GroundwaterSample]:
    first_day, last_day = month_date_range(year, month)
    return [
        s for s in samples
        if s.facility_id == facility_id and first_day <= s.sample_date <= last_day
    ]


def sample_total_nitrogen(sample: GroundwaterSample) -> Optional[float]:
    """
    TKN + NO3-N for one sample.

    A missing component counts as 0; a sample with neither is None.
    """
    if sample.tkn is None and sample.no3n is None:
        return None
    return (sample.tkn or 0.0) + (sample.no3n or 0.0)


def average_total_nitrogen(samples: Iterable[GroundwaterSample]) -> Optional[float]:
    """Mean total nitrogen over samples that measured it."""
    return series_mean(sample_total_nitrogen(s) for s in samples)


def compute_mass_load(
    volume_gallons: float,
    concentration_mg_l: Optional[float],
    area_acres: Optional[float],
) -> Optional[float]:
    """
    Monthly nitrogen load in lbs/acre.

    None without a positive area, a concentration or a positive volume.
    """
    if concentration_mg_l is None or not area_acres or area_acres <= 0 or volume_gallons <= 0:
        return None
    return volume_gallons * concentration_mg_l * MASS_LOAD_FACTOR / area_acres


# ============================================================================
# MASS LOADING REPORT
# ============================================================================

def build_mass_loading_report(
    detailed: DetailedMonthlyReport,
    groundwater_samples: Iterable[GroundwaterSample],
) -> MassLoadingReport:
    """
    Derive the mass loading report from a generated detailed report.

    Args:
        detailed: Detailed monthly report for the same facility and period
        groundwater_samples: Groundwater samples (filtered to facility and month here)

    Returns:
        MassLoadingReport with one entry per configured field
    """
    samples = samples_in_month(groundwater_samples, detailed.facility_id, detailed.year, detailed.month)
    concentration = average_total_nitrogen(samples)

    field_reports = []
    for block in detailed.field_reports:
        if not block.is_configured:
            continue
        volume = series_sum(block.volume_applied_daily)
        field_reports.append(MassLoadingField(
            slot=block.slot,
            sprayfield_id=block.sprayfield_id,
            field_label=block.field_label,
            size_acres=block.size_acres,
            crop_name=block.crop_name,
            field_loaded=volume > 0,
            monthly_volume_gallons=volume,
            average_concentration_mg_l=concentration,
            monthly_load_lbs_per_acre=compute_mass_load(volume, concentration, block.size_acres),
            twelve_month_floating_total=block.twelve_month_floating_total,
        ))

    logger.info(
        f"Built mass loading report for facility {detailed.facility_id} "
        f"{detailed.year}-{detailed.month:02d}: {len(samples)} sample(s)"
    )
    return MassLoadingReport(
        company_id=detailed.company_id,
        facility_id=detailed.facility_id,
        year=detailed.year,
        month=detailed.month,
        average_concentration_mg_l=concentration,
        field_reports=field_reports,
    )


# ============================================================================
# DAILY MONITORING REPORT
# ============================================================================

def build_daily_monitoring_report(
    facility: Facility,
    year: int,
    month: int,
    *,
    effective_company_id: UUID,
    irrigation_events: Iterable[IrrigationEvent],
    groundwater_samples: Iterable[GroundwaterSample] = (),
) -> DailyMonitoringReport:
    """
    Daily flow and nitrogen results for one facility and month.

    Flow is the total volume irrigated each day. Nitrogen values are the
    day's mean over groundwater samples that measured them.
    """
    validate_period(year, month)
    check_company_scope(effective_company_id, facility)

    events_by_day = defaultdict(list)
    for event in events_in_month(irrigation_events, facility.id, year, month):
        events_by_day[event.irrigation_date.day].append(event)

    samples_by_day = defaultdict(list)
    for sample in samples_in_month(groundwater_samples, facility.id, year, month):
        samples_by_day[sample.sample_date.day].append(sample)

    flow = DailySeries()
    total_nitrogen = DailySeries()
    nh3n = DailySeries()
    no3n = DailySeries()
    tkn = DailySeries()

    for day in range(1, days_in_month(year, month) + 1):
        if day in events_by_day:
            flow.set(day, sum((e.total_volume_gallons for e in events_by_day[day]), 0.0))

        day_samples = samples_by_day.get(day, [])
        day_tkn = series_mean(s.tkn for s in day_samples)
        day_no3n = series_mean(s.no3n for s in day_samples)
        tkn.set(day, day_tkn)
        no3n.set(day, day_no3n)
        nh3n.set(day, series_mean(s.nh3n for s in day_samples))
        if day_tkn is not None or day_no3n is not None:
            total_nitrogen.set(day, (day_tkn or 0.0) + (day_no3n or 0.0))

    return DailyMonitoringReport(
        company_id=facility.company_id,
        facility_id=facility.id,
        year=year,
        month=month,
        flow_gallons_daily=flow,
        total_nitrogen_daily=total_nitrogen,
        nh3n_daily=nh3n,
        no3n_daily=no3n,
        tkn_daily=tkn,
    )
