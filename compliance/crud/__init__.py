# CRUD operations package

from compliance.crud.base import CRUDBase
from compliance.crud.records import (
    CRUDCompany, CRUDFacility, CRUDCrop, CRUDSprayfield, CRUDIrrigationEvent,
    CRUDOperatorLog, CRUDWastewaterCharacteristic, CRUDGroundwaterSample,
    company, facility, crop, sprayfield, irrigation_event,
    operator_log, wastewater_characteristic, groundwater_sample,
)
from compliance.crud.reports import (
    CRUDDetailedMonthlyReport, CRUDSummaryMonthlyReport,
    detailed_report, summary_report,
)
from compliance.crud.monitoring import get_mass_loading_report, get_daily_monitoring_report

__all__ = [
    "CRUDBase",
    "CRUDCompany", "CRUDFacility", "CRUDCrop", "CRUDSprayfield", "CRUDIrrigationEvent",
    "CRUDOperatorLog", "CRUDWastewaterCharacteristic", "CRUDGroundwaterSample",
    "company", "facility", "crop", "sprayfield", "irrigation_event",
    "operator_log", "wastewater_characteristic", "groundwater_sample",
    "CRUDDetailedMonthlyReport", "CRUDSummaryMonthlyReport",
    "detailed_report", "summary_report",
    "get_mass_loading_report", "get_daily_monitoring_report",
]
