"""
Monitoring report queries.

Mass loading and daily monitoring reports are derived on request from
stored records and are not persisted.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from compliance import schemas
from compliance.crud.records import groundwater_sample as groundwater_crud, irrigation_event as irrigation_event_crud
from compliance.crud.reports import detailed_report as detailed_report_crud, resolve_facility
from compliance.exceptions import EntityNotFoundError
from compliance.utils.monitoring import build_daily_monitoring_report, build_mass_loading_report
from compliance.utils.periods import validate_period


async def get_mass_loading_report(
    db: AsyncSession,
    *,
    facility_id: UUID,
    year: int,
    month: int,
    effective_company_id: UUID
) -> schemas.MassLoadingReport:
    """
    Mass loading report for a facility and month.

    Requires the month's detailed report to have been generated.

    Raises:
        EntityNotFoundError: If the facility or the detailed report does not exist
        BusinessRuleViolation: If the facility belongs to another company
    """
    validate_period(year, month)
    await resolve_facility(db, facility_id, effective_company_id)

    detailed = await detailed_report_crud.get_for_period(db, facility_id, year, month)
    if detailed is None:
        raise EntityNotFoundError("DetailedMonthlyReport", f"{facility_id}/{year}-{month:02d}")

    samples = await groundwater_crud.get_in_month(db, facility_id, year, month)
    return build_mass_loading_report(detailed, samples)


async def get_daily_monitoring_report(
    db: AsyncSession,
    *,
    facility_id: UUID,
    year: int,
    month: int,
    effective_company_id: UUID
) -> schemas.DailyMonitoringReport:
    """Daily flow and groundwater nitrogen report for a facility and month."""
    validate_period(year, month)
    facility = await resolve_facility(db, facility_id, effective_company_id)

    events = await irrigation_event_crud.get_in_month(db, facility_id, year, month)
    samples = await groundwater_crud.get_in_month(db, facility_id, year, month)
    return build_daily_monitoring_report(
        facility,
        year,
        month,
        effective_company_id=effective_company_id,
        irrigation_events=events,
        groundwater_samples=samples,
    )
