"""Application layer - Probes, formatting and report assembly."""

from .report_service import ReportService

__all__ = [
    "ReportService"
]
