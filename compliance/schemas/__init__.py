# Pydantic schemas package

from compliance.schemas.base import BaseSchema, IDSchema, CompanyScopedSchema, FloatSeries, TextSeries
from compliance.schemas.records import (
    Company, Facility, Crop, Sprayfield, IrrigationEvent,
    OperatorLogEntry, WastewaterCharacteristic, GroundwaterSample,
)
from compliance.schemas.reports import (
    FIELD_SLOTS, ComplianceStatus,
    MonthlyFieldReport, DetailedMonthlyReport, SummaryMonthlyReport,
    MassLoadingField, MassLoadingReport, DailyMonitoringReport,
)

__all__ = [
    # Base schemas
    "BaseSchema", "IDSchema", "CompanyScopedSchema", "FloatSeries", "TextSeries",

    # Input records
    "Company", "Facility", "Crop", "Sprayfield", "IrrigationEvent",
    "OperatorLogEntry", "WastewaterCharacteristic", "GroundwaterSample",

    # Reports
    "FIELD_SLOTS", "ComplianceStatus",
    "MonthlyFieldReport", "DetailedMonthlyReport", "SummaryMonthlyReport",
    "MassLoadingField", "MassLoadingReport", "DailyMonitoringReport",
]
