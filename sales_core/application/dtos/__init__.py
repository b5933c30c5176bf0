"""Application DTOs."""

from .sales_dto import ProductSnapshotDTO, SalesSummaryDTO, StatusBreakdownDTO

__all__ = ["ProductSnapshotDTO", "SalesSummaryDTO", "StatusBreakdownDTO"]
