"""
Shared fixtures: an in-memory database per test and record factories.
"""

from datetime import date, time
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import compliance.models  # noqa: F401
from compliance.database import Base
from compliance.schemas import Crop, Facility, IrrigationEvent, OperatorLogEntry, Sprayfield

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def db():
    """Create a fresh in-memory test database."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def company_id():
    return uuid4()


@pytest.fixture
def facility(company_id):
    return Facility(id=uuid4(), company_id=company_id, name="Riverside WWTP", permit_number="WQ0001234")


@pytest.fixture
def make_sprayfield(facility):
    """Factory for sprayfields of the facility."""
    def _make(field_label="SF-1", size_acres=1.0, limit=24.0, crop_id=None, **kwargs):
        return Sprayfield(
            id=kwargs.pop("id", uuid4()),
            company_id=kwargs.pop("company_id", facility.company_id),
            facility_id=kwargs.pop("facility_id", facility.id),
            crop_id=crop_id,
            field_label=field_label,
            size_acres=size_acres,
            hydraulic_loading_limit_in_per_yr=limit,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_crop(company_id):
    """Factory for crops."""
    def _make(name="Bermuda", pan_factor=0.5, n_uptake=200.0):
        return Crop(id=uuid4(), company_id=company_id, name=name, pan_factor=pan_factor, n_uptake=n_uptake)
    return _make


@pytest.fixture
def make_event(facility):
    """Factory for irrigation events on a sprayfield."""
    def _make(sprayfield, on, start=time(8, 0), end=time(10, 0), gallons=27152.0, weather=None, **kwargs):
        return IrrigationEvent(
            id=uuid4(),
            company_id=kwargs.pop("company_id", facility.company_id),
            facility_id=kwargs.pop("facility_id", facility.id),
            sprayfield_id=sprayfield.id,
            irrigation_date=on,
            start_time=start,
            end_time=end,
            total_volume_gallons=gallons,
            weather_conditions=weather,
        )
    return _make


@pytest.fixture
def make_log(facility):
    """Factory for operator log entries."""
    def _make(on: date, **kwargs):
        return OperatorLogEntry(
            id=uuid4(),
            company_id=facility.company_id,
            facility_id=facility.id,
            log_date=on,
            **kwargs,
        )
    return _make
