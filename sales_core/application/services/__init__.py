"""Application services."""
from .sales_analyzer import SalesAnalyzer, distinct_orders
from .sales_report_service import SalesReportService

__all__ = ["SalesAnalyzer", "SalesReportService", "distinct_orders"]
