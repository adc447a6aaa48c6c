"""Infrastructure layer - packing engine, record stores and formatters."""

from .bin_packing import (
    NestingCancelledError,
    NestingConfig,
    NestingPlan,
    PanelNester,
    SheetPlan,
    StockPolicy,
)
from .formatters import (
    EdgeTapeReportFormatter,
    NestingJsonExporter,
    NestingReportFormatter,
)
from .stores import InMemoryRecordStore, SupabaseRecordStore

__all__ = [
    # Nesting engine
    "NestingCancelledError",
    "NestingConfig",
    "NestingPlan",
    "PanelNester",
    "SheetPlan",
    "StockPolicy",
    # Formatters
    "EdgeTapeReportFormatter",
    "NestingJsonExporter",
    "NestingReportFormatter",
    # Record stores
    "InMemoryRecordStore",
    "SupabaseRecordStore",
]
