"""Mini README: Reporting views over a running station.

Exports ``ReportBuilder`` for summaries and printable receipts, plus the
static text panels shown from the console menu.
"""

from .report_builder import (
    DYNAMIC_STORAGE_ADVANTAGES,
    SAMPLE_RECEIPT_FORMAT,
    STORAGE_STRATEGY_NOTES,
    ReportBuilder,
)

__all__ = [
    "DYNAMIC_STORAGE_ADVANTAGES",
    "ReportBuilder",
    "SAMPLE_RECEIPT_FORMAT",
    "STORAGE_STRATEGY_NOTES",
]
