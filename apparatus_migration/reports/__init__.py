"""
Relatórios de diagnóstico (revisão manual do corpus).
"""

from .overlap_report import (
    AppWithLocations,
    DocumentOverlaps,
    OverlapRecord,
    OverlapReportEngine,
    OverlapReportWriter,
    is_overlappable,
)

__all__ = [
    "AppWithLocations",
    "DocumentOverlaps",
    "OverlapRecord",
    "OverlapReportEngine",
    "OverlapReportWriter",
    "is_overlappable",
]
