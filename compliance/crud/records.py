"""
Input record CRUD operations.

Fetch functions return plain lists of pydantic records so the report
calculators never touch the database session.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from compliance import schemas
from compliance.crud.base import CRUDBase
from compliance.models.company import Company, Facility
from compliance.models.irrigation_event import IrrigationEvent
from compliance.models.operator_log import OperatorLog
from compliance.models.sprayfield import Crop, Sprayfield
from compliance.models.water_quality import GroundwaterSample, WastewaterCharacteristic
from compliance.utils.periods import month_date_range, validate_period


class CRUDCompany(CRUDBase[Company, schemas.Company, schemas.Company]):
    """CRUD operations for Company model."""


class CRUDFacility(CRUDBase[Facility, schemas.Facility, schemas.Facility]):
    """CRUD operations for Facility model."""


class CRUDCrop(CRUDBase[Crop, schemas.Crop, schemas.Crop]):
    """CRUD operations for Crop model."""

    async def get_by_ids(self, db: AsyncSession, ids: Iterable[Optional[UUID]]) -> Dict[UUID, schemas.Crop]:
        """
        Resolve crops by ID.

        Args:
            db: Database session
            ids: Crop IDs; None entries are ignored

        Returns:
            Dict mapping crop ID to Crop record
        """
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await db.execute(select(Crop).where(Crop.id.in_(wanted)))
        return {row.id: schemas.Crop.model_validate(row) for row in result.scalars().all()}


class CRUDSprayfield(CRUDBase[Sprayfield, schemas.Sprayfield, schemas.Sprayfield]):
    """CRUD operations for Sprayfield model."""

    async def get_for_facility(self, db: AsyncSession, facility_id: UUID) -> List[schemas.Sprayfield]:
        """
        Get a facility's sprayfields in field label order.

        Args:
            db: Database session
            facility_id: Facility ID

        Returns:
            List of Sprayfield records
        """
        result = await db.execute(
            select(Sprayfield)
            .where(Sprayfield.facility_id == facility_id)
            .order_by(Sprayfield.field_label)
        )
        return [schemas.Sprayfield.model_validate(row) for row in result.scalars().all()]


class CRUDIrrigationEvent(CRUDBase[IrrigationEvent, schemas.IrrigationEvent, schemas.IrrigationEvent]):
    """CRUD operations for IrrigationEvent model."""

    async def get_in_month(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> List[schemas.IrrigationEvent]:
        """
        Get a facility's irrigation events for one month.

        Args:
            db: Database session
            facility_id: Facility ID
            year: Year
            month: Month (1-12)

        Returns:
            List of IrrigationEvent records ordered by date and start time
        """
        validate_period(year, month)
        first_day, last_day = month_date_range(year, month)
        result = await db.execute(
            select(IrrigationEvent)
            .where(
                and_(
                    IrrigationEvent.facility_id == facility_id,
                    IrrigationEvent.irrigation_date >= first_day,
                    IrrigationEvent.irrigation_date <= last_day
                )
            )
            .order_by(IrrigationEvent.irrigation_date, IrrigationEvent.start_time)
        )
        return [schemas.IrrigationEvent.model_validate(row) for row in result.scalars().all()]


class CRUDOperatorLog(CRUDBase[OperatorLog, schemas.OperatorLogEntry, schemas.OperatorLogEntry]):
    """CRUD operations for OperatorLog model."""

    async def get_in_month(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> List[schemas.OperatorLogEntry]:
        """Get a facility's operator logs for one month, ordered by date."""
        validate_period(year, month)
        first_day, last_day = month_date_range(year, month)
        result = await db.execute(
            select(OperatorLog)
            .where(
                and_(
                    OperatorLog.facility_id == facility_id,
                    OperatorLog.log_date >= first_day,
                    OperatorLog.log_date <= last_day
                )
            )
            .order_by(OperatorLog.log_date)
        )
        return [schemas.OperatorLogEntry.model_validate(row) for row in result.scalars().all()]


class CRUDWastewaterCharacteristic(
    CRUDBase[WastewaterCharacteristic, schemas.WastewaterCharacteristic, schemas.WastewaterCharacteristic]
):
    """CRUD operations for WastewaterCharacteristic model."""

    async def get_for_period(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> Optional[schemas.WastewaterCharacteristic]:
        """
        Get the month's wastewater characteristics for a facility.

        Returns:
            WastewaterCharacteristic record or None if not recorded
        """
        validate_period(year, month)
        result = await db.execute(
            select(WastewaterCharacteristic).where(
                and_(
                    WastewaterCharacteristic.facility_id == facility_id,
                    WastewaterCharacteristic.year == year,
                    WastewaterCharacteristic.month == month
                )
            )
        )
        row = result.scalars().first()
        return schemas.WastewaterCharacteristic.model_validate(row) if row else None


class CRUDGroundwaterSample(CRUDBase[GroundwaterSample, schemas.GroundwaterSample, schemas.GroundwaterSample]):
    """CRUD operations for GroundwaterSample model."""

    async def get_in_month(
        self,
        db: AsyncSession,
        facility_id: UUID,
        year: int,
        month: int
    ) -> List[schemas.GroundwaterSample]:
        """Get a facility's groundwater samples for one month, ordered by date."""
        validate_period(year, month)
        first_day, last_day = month_date_range(year, month)
        result = await db.execute(
            select(GroundwaterSample)
            .where(
                and_(
                    GroundwaterSample.facility_id == facility_id,
                    GroundwaterSample.sample_date >= first_day,
                    GroundwaterSample.sample_date <= last_day
                )
            )
            .order_by(GroundwaterSample.sample_date)
        )
        return [schemas.GroundwaterSample.model_validate(row) for row in result.scalars().all()]


# Create instances of CRUD classes
company = CRUDCompany(Company)
facility = CRUDFacility(Facility)
crop = CRUDCrop(Crop)
sprayfield = CRUDSprayfield(Sprayfield)
irrigation_event = CRUDIrrigationEvent(IrrigationEvent)
operator_log = CRUDOperatorLog(OperatorLog)
wastewater_characteristic = CRUDWastewaterCharacteristic(WastewaterCharacteristic)
groundwater_sample = CRUDGroundwaterSample(GroundwaterSample)
