# Database models package

from compliance.models.base import BaseModel
from compliance.models.company import Company, Facility
from compliance.models.sprayfield import Crop, Sprayfield
from compliance.models.irrigation_event import IrrigationEvent
from compliance.models.operator_log import OperatorLog
from compliance.models.water_quality import WastewaterCharacteristic, GroundwaterSample
from compliance.models.monthly_report import DetailedMonthlyReport, SummaryMonthlyReport

__all__ = [
    "BaseModel",
    "Company",
    "Facility",
    "Crop",
    "Sprayfield",
    "IrrigationEvent",
    "OperatorLog",
    "WastewaterCharacteristic",
    "GroundwaterSample",
    "DetailedMonthlyReport",
    "SummaryMonthlyReport",
]
