"""
Monthly report CRUD operations.

Report generation follows a fixed sequence so a rejected request never
leaves a partial report behind:
1. Validate the period
2. Resolve the facility (NotFound) and check its owning company
3. Reject a period that already has a report
4. Fetch every input as plain records
5. Run the calculators
6. Persist, with the unique constraint as the final duplicate guard
"""

from calendar import month_name
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_, desc, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from compliance import schemas
from compliance.crud.base import CRUDBase
from compliance.crud.records import (
    crop as crop_crud,
    facility as facility_crud,
    irrigation_event as irrigation_event_crud,
    operator_log as operator_log_crud,
    sprayfield as sprayfield_crud,
    wastewater_characteristic as wastewater_crud,
)
from compliance.exceptions import BusinessRuleViolation
from compliance.models.monthly_report import DetailedMonthlyReport, SummaryMonthlyReport
from compliance.utils.aggregation import build_detailed_report
from compliance.utils.daily_series import ensure_initialized
from compliance.utils.irrigation_summary import average_ammonia_concentration, build_summary_report
from compliance.utils.logging_config import get_logger
from compliance.utils.periods import preceding_periods, validate_period

logger = get_logger(__name__)

REPORT_SERIES = (
    "weather_code_daily",
    "temperature_daily",
    "precipitation_daily",
    "storage_daily",
    "five_day_upset_daily",
)
FIELD_SERIES = (
    "volume_applied_daily",
    "time_irrigated_daily",
    "daily_loading_daily",
    "max_hourly_loading_daily",
)


async def resolve_facility(
    db: AsyncSession,
    facility_id: UUID,
    effective_company_id: UUID
) -> schemas.Facility:
    """
    Load a facility and confirm the requesting company owns it.

    Raises:
        EntityNotFoundError: If the facility does not exist
        BusinessRuleViolation: If it belongs to another company
    """
    row = await facility_crud.get_required(db, facility_id)
    facility = schemas.Facility.model_validate(row)
    if facility.company_id != effective_company_id:
        logger.warning(f"Company {effective_company_id} requested a report for facility {facility_id} it does not own")
        raise BusinessRuleViolation("Facility must belong to the same company.")
    return facility


def duplicate_period_message(report_name: str, facility: schemas.Facility, year: int, month: int) -> str:
    return f"A {report_name} already exists for facility '{facility.name}' for {month_name[month]} {year}."


# ============================================================================
# DETAILED MONTHLY REPORT CRUD
# ============================================================================

class CRUDDetailedMonthlyReport(CRUDBase[DetailedMonthlyReport, schemas.DetailedMonthlyReport, dict]):
    """
    CRUD operations for DetailedMonthlyReport model.

    Reports are generated once per facility and month; regeneration of a
    reported period is rejected.
    """

    async def get_for_period(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> Optional[schemas.DetailedMonthlyReport]:
        """
        Get the stored report for a facility and month.

        Returns:
            DetailedMonthlyReport or None if not generated yet
        """
        result = await db.execute(
            select(DetailedMonthlyReport).where(
                and_(
                    DetailedMonthlyReport.facility_id == facility_id,
                    DetailedMonthlyReport.year == year,
                    DetailedMonthlyReport.month == month
                )
            )
        )
        row = result.scalars().first()
        return schemas.DetailedMonthlyReport.model_validate(row) if row else None

    async def get_prior_reports(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> List[schemas.DetailedMonthlyReport]:
        """
        Get the facility's reports for the 11 months before a period.

        Args:
            db: Database session
            facility_id: Facility ID
            year: Current report year
            month: Current report month

        Returns:
            Reports found in the window, most recent first
        """
        window = [
            and_(DetailedMonthlyReport.year == y, DetailedMonthlyReport.month == m)
            for y, m in preceding_periods(year, month)
        ]
        result = await db.execute(
            select(DetailedMonthlyReport)
            .where(
                and_(
                    DetailedMonthlyReport.facility_id == facility_id,
                    or_(*window)
                )
            )
            .order_by(desc(DetailedMonthlyReport.year), desc(DetailedMonthlyReport.month))
        )
        return [schemas.DetailedMonthlyReport.model_validate(row) for row in result.scalars().all()]

    def _to_row(self, report: schemas.DetailedMonthlyReport) -> Dict[str, Any]:
        data = report.model_dump(exclude={"id", "field_reports"})
        for name in REPORT_SERIES:
            data[name] = ensure_initialized(data[name])

        blocks = []
        for block in report.field_reports:
            block_data = block.model_dump(mode="json")
            for name in FIELD_SERIES:
                block_data[name] = ensure_initialized(block_data[name])
            blocks.append(block_data)
        data["field_reports"] = blocks
        return data

    async def save(self, db: AsyncSession, report: schemas.DetailedMonthlyReport) -> schemas.DetailedMonthlyReport:
        """
        Persist a generated report with every daily series normalized to 31 entries.

        Raises:
            BusinessRuleViolation: If a report for the period was stored concurrently
        """
        db_obj = DetailedMonthlyReport(**self._to_row(report))
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Duplicate detailed report for facility {report.facility_id} {report.year}-{report.month:02d}")
            raise BusinessRuleViolation(
                f"A detailed monthly report already exists for {month_name[report.month]} {report.year}."
            )
        await db.refresh(db_obj)
        return schemas.DetailedMonthlyReport.model_validate(db_obj)

    async def generate(
        self,
        db: AsyncSession,
        *,
        facility_id: UUID,
        year: int,
        month: int,
        effective_company_id: UUID
    ) -> schemas.DetailedMonthlyReport:
        """
        Generate and store the detailed report for a facility and month.

        Args:
            db: Database session
            facility_id: Facility ID
            year: Year
            month: Month (1-12)
            effective_company_id: Company the request acts for

        Returns:
            Stored DetailedMonthlyReport

        Raises:
            ValueError: If the period is invalid
            EntityNotFoundError: If the facility does not exist
            BusinessRuleViolation: On ownership mismatch or an already reported period
        """
        validate_period(year, month)
        facility = await resolve_facility(db, facility_id, effective_company_id)

        if await self.get_for_period(db, facility_id, year, month) is not None:
            logger.warning(f"Detailed report for {facility.name} {year}-{month:02d} already exists")
            raise BusinessRuleViolation(duplicate_period_message("detailed monthly report", facility, year, month))

        sprayfields = await sprayfield_crud.get_for_facility(db, facility_id)
        crops = await crop_crud.get_by_ids(db, (sf.crop_id for sf in sprayfields))
        events = await irrigation_event_crud.get_in_month(db, facility_id, year, month)
        logs = await operator_log_crud.get_in_month(db, facility_id, year, month)
        prior_reports = await self.get_prior_reports(db, facility_id, year, month)

        report = build_detailed_report(
            facility,
            year,
            month,
            effective_company_id=effective_company_id,
            sprayfields=sprayfields,
            irrigation_events=events,
            operator_logs=logs,
            crops=crops,
            prior_reports=prior_reports,
        )
        return await self.save(db, report)


# ============================================================================
# SUMMARY MONTHLY REPORT CRUD
# ============================================================================

class CRUDSummaryMonthlyReport(CRUDBase[SummaryMonthlyReport, schemas.SummaryMonthlyReport, dict]):
    """CRUD operations for SummaryMonthlyReport model."""

    async def get_for_period(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> Optional[schemas.SummaryMonthlyReport]:
        """Get the stored summary for a facility and month, or None."""
        result = await db.execute(
            select(SummaryMonthlyReport).where(
                and_(
                    SummaryMonthlyReport.facility_id == facility_id,
                    SummaryMonthlyReport.year == year,
                    SummaryMonthlyReport.month == month
                )
            )
        )
        row = result.scalars().first()
        return schemas.SummaryMonthlyReport.model_validate(row) if row else None

    async def save(self, db: AsyncSession, report: schemas.SummaryMonthlyReport) -> schemas.SummaryMonthlyReport:
        """
        Persist a generated summary.

        Raises:
            BusinessRuleViolation: If a summary for the period was stored concurrently
        """
        data = report.model_dump(exclude={"id"})
        data["compliance_status"] = report.compliance_status.value

        db_obj = SummaryMonthlyReport(**data)
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Duplicate summary report for facility {report.facility_id} {report.year}-{report.month:02d}")
            raise BusinessRuleViolation(
                f"A summary monthly report already exists for {month_name[report.month]} {report.year}."
            )
        await db.refresh(db_obj)
        return schemas.SummaryMonthlyReport.model_validate(db_obj)

    async def generate(
        self,
        db: AsyncSession,
        *,
        facility_id: UUID,
        year: int,
        month: int,
        effective_company_id: UUID
    ) -> schemas.SummaryMonthlyReport:
        """
        Generate and store the irrigation summary for a facility and month.

        Raises:
            ValueError: If the period is invalid
            EntityNotFoundError: If the facility does not exist
            BusinessRuleViolation: On ownership mismatch, an already reported
                period or a month without irrigation
        """
        validate_period(year, month)
        facility = await resolve_facility(db, facility_id, effective_company_id)

        if await self.get_for_period(db, facility_id, year, month) is not None:
            logger.warning(f"Summary report for {facility.name} {year}-{month:02d} already exists")
            raise BusinessRuleViolation(duplicate_period_message("summary monthly report", facility, year, month))

        sprayfields = await sprayfield_crud.get_for_facility(db, facility_id)
        crops = await crop_crud.get_by_ids(db, (sf.crop_id for sf in sprayfields))
        events = await irrigation_event_crud.get_in_month(db, facility_id, year, month)
        characteristic = await wastewater_crud.get_for_period(db, facility_id, year, month)

        report = build_summary_report(
            facility,
            year,
            month,
            effective_company_id=effective_company_id,
            sprayfields=sprayfields,
            irrigation_events=events,
            crops=crops,
            average_ammonia_mg_l=average_ammonia_concentration(characteristic),
        )
        return await self.save(db, report)


# Create instances of CRUD classes
detailed_report = CRUDDetailedMonthlyReport(DetailedMonthlyReport)
summary_report = CRUDSummaryMonthlyReport(SummaryMonthlyReport)
