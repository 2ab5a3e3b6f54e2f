"""Application DTOs passed between the store, services and controllers."""

from fieldreport.application.dtos.incident_statistics import IncidentStatistics
from fieldreport.application.dtos.operation_result import OperationResult
from fieldreport.application.dtos.store_result import StoreResult
from fieldreport.application.dtos.sync_summary import SyncSummary

__all__ = [
    "IncidentStatistics",
    "OperationResult",
    "StoreResult",
    "SyncSummary",
]
