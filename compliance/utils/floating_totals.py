"""
Rolling 12-month loading totals.

The floating total for a field is the current month's loading plus the
loading recorded for that field in the facility's reports for the 11
months immediately before it. Facilities with less history are summed
over whatever prior months exist.
"""

from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from compliance.schemas.reports import DetailedMonthlyReport
from compliance.utils.logging_config import get_logger
from compliance.utils.periods import preceding_periods

logger = get_logger(__name__)

PRIOR_MONTHS = 11


def compute_floating_total(current_monthly_loading: float, prior_monthly_loadings: Sequence[float]) -> float:
    """
    Current month plus at most 11 prior monthly loadings.

    Args:
        current_monthly_loading: This month's loading in inches
        prior_monthly_loadings: Prior months' loading, most recent first

    Returns:
        Floating total in inches
    """
    return current_monthly_loading + sum(prior_monthly_loadings[:PRIOR_MONTHS], 0.0)


def select_prior_reports(
    reports: Iterable[DetailedMonthlyReport],
    facility_id: UUID,
    year: int,
    month: int,
) -> List[DetailedMonthlyReport]:
    """
    Reports for the 11 months immediately preceding (year, month).

    Reports for other facilities, for the current period or outside the
    window are ignored. At most one report per period is kept.

    Returns:
        Qualifying reports, most recent first
    """
    window = preceding_periods(year, month, PRIOR_MONTHS)
    rank = {period: i for i, period in enumerate(window)}

    by_period = {}
    for report in reports:
        if report.facility_id != facility_id:
            continue
        period = (report.year, report.month)
        if period in rank and period not in by_period:
            by_period[period] = report

    return [by_period[p] for p in sorted(by_period, key=rank.get)][:PRIOR_MONTHS]


def prior_field_loadings(prior_reports: Iterable[DetailedMonthlyReport], sprayfield_id: UUID) -> List[float]:
    """Monthly loading recorded for a sprayfield in each prior report that includes it."""
    loadings = []
    for report in prior_reports:
        block = report.field_for(sprayfield_id)
        if block is not None:
            loadings.append(block.monthly_loading)
    return loadings


def apply_floating_totals(
    report: DetailedMonthlyReport,
    prior_reports: Optional[Iterable[DetailedMonthlyReport]] = None,
) -> None:
    """
    Set twelve_month_floating_total on every configured field block.

    Prior months are matched to the field by sprayfield id, not by slot.
    """
    selected = select_prior_reports(prior_reports or [], report.facility_id, report.year, report.month)
    logger.debug(f"Floating totals for {report.year}-{report.month:02d} use {len(selected)} prior report(s)")

    for block in report.field_reports:
        if not block.is_configured:
            continue
        history = prior_field_loadings(selected, block.sprayfield_id)
        block.twelve_month_floating_total = compute_floating_total(block.monthly_loading, history)
