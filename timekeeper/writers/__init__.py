"""Writers module for generating report tables and exported documents.

This module lays out aggregated reports as pandas tables and writes them
as xlsx, csv or html files.
"""

from timekeeper.writers.report_document_writer import (
    SUPPORTED_FORMATS,
    ReportDocumentWriter,
)
from timekeeper.writers.report_table_generator import (
    DETAIL_COLUMNS,
    SUMMARY_COLUMNS,
    ReportTableGenerator,
    ReportTables,
)

__all__ = [
    "DETAIL_COLUMNS",
    "SUMMARY_COLUMNS",
    "SUPPORTED_FORMATS",
    "ReportDocumentWriter",
    "ReportTableGenerator",
    "ReportTables",
]
