"""Application layer - services and DTOs."""

from .dtos import ProductSnapshotDTO, SalesSummaryDTO, StatusBreakdownDTO
from .services import SalesAnalyzer, SalesReportService, distinct_orders

__all__ = [
    # DTOs
    "ProductSnapshotDTO",
    "SalesSummaryDTO",
    "StatusBreakdownDTO",
    # Services
    "SalesAnalyzer",
    "SalesReportService",
    "distinct_orders",
]
