"""Document writer for exporting report tables to files.

Supported formats:
- xlsx: "Time Entries" sheet (title, period, detail table, footer) and a
  "Summary" sheet, written with pandas and the openpyxl engine
- csv: the detail table only, for spreadsheets and scripts
- html: printable page with title, period, both tables and footer
"""

import datetime as dt
import html
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from timekeeper.models.report import DateRange
from timekeeper.utils.formatting import format_date
from timekeeper.writers.report_table_generator import DETAIL_COLUMNS, ReportTables

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("xlsx", "csv", "html")

DETAILS_SHEET = "Time Entries"
SUMMARY_SHEET = "Summary"

# Detail table starts below the title and period lines
_TABLE_START_ROW = 3

_HEADING_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
_TOTAL_FILL = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")
_BOLD = Font(bold=True)
_TITLE_FONT = Font(bold=True, size=14)

_HTML_STYLE = """
body { font-family: Helvetica, Arial, sans-serif; margin: 24px; color: #222; }
h1 { font-size: 20px; margin-bottom: 4px; }
p.period { color: #555; margin-top: 0; }
table { border-collapse: collapse; width: 100%; margin-bottom: 24px; font-size: 12px; }
th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: left; }
th { background: #4472c4; color: #fff; }
td.employee { background: #ddebf7; font-weight: bold; }
td.total { background: #f2f2f2; font-weight: bold; }
p.footer { color: #777; font-size: 11px; }
"""


class ReportDocumentWriter:
    """Write report tables as an xlsx, csv or html document.

    Example:
        >>> writer = ReportDocumentWriter(output_dir="reports")
        >>> path = writer.write(tables, result.date_range, "xlsx")
        >>> path.name
        'time_entries_2025-11-01_to_2025-11-30.xlsx'
    """

    def __init__(
        self,
        title: str = "Time Entries Report",
        output_dir: Union[str, Path] = "reports",
        date_format: str = "%d/%m/%Y",
        generated_at: Optional[dt.datetime] = None,
    ):
        """Initialize the writer.

        Args:
            title: Document title
            output_dir: Directory for documents written without an explicit path
            date_format: strftime format for the period and footer dates
            generated_at: Timestamp for the footer (default: now, at write time)
        """
        self.title = title
        self.output_dir = Path(output_dir)
        self.date_format = date_format
        self.generated_at = generated_at

    @classmethod
    def from_config(
        cls, config: Any, generated_at: Optional[dt.datetime] = None
    ) -> "ReportDocumentWriter":
        return cls(
            title=config.report_title,
            output_dir=config.output_dir,
            date_format=config.date_format,
            generated_at=generated_at,
        )

    @staticmethod
    def default_filename(date_range: DateRange, fmt: str) -> str:
        start, end = date_range.start.isoformat(), date_range.end.isoformat()
        return f"time_entries_{start}_to_{end}.{fmt}"

    def period_line(self, date_range: DateRange) -> str:
        start = format_date(date_range.start, self.date_format)
        end = format_date(date_range.end, self.date_format)
        return f"Period: {start} to {end}"

    def footer_line(self) -> str:
        generated = self.generated_at or dt.datetime.now()
        return (
            f"Generated on {format_date(generated.date(), self.date_format)} "
            f"at {generated.strftime('%H:%M')}"
        )

    def write(
        self,
        tables: ReportTables,
        date_range: DateRange,
        fmt: str,
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Write the document and return its path.

        Args:
            tables: Output of ReportTableGenerator
            date_range: Period covered by the report
            fmt: One of "xlsx", "csv", "html"
            output_path: Target file (default: output_dir/default_filename)

        Raises:
            ValueError: If the format is not supported
        """
        fmt = fmt.lower()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {fmt}. "
                f"Must be one of {', '.join(SUPPORTED_FORMATS)}"
            )

        path = (
            Path(output_path)
            if output_path
            else self.output_dir / self.default_filename(date_range, fmt)
        )
        path.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "xlsx":
            self._write_xlsx(tables, date_range, path)
        elif fmt == "csv":
            self._write_csv(tables, path)
        else:
            path.write_text(self.render_html(tables, date_range), encoding="utf-8")

        logger.info(f"Wrote {fmt} report with {len(tables.details)} rows to {path}")
        return path

    def _write_xlsx(
        self, tables: ReportTables, date_range: DateRange, path: Path
    ) -> None:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            tables.details.to_excel(
                writer, sheet_name=DETAILS_SHEET, index=False, startrow=_TABLE_START_ROW
            )
            tables.summary.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)

            sheet = writer.sheets[DETAILS_SHEET]
            sheet.cell(row=1, column=1, value=self.title).font = _TITLE_FONT
            sheet.cell(row=2, column=1, value=self.period_line(date_range))

            # Data rows start one below the header row (openpyxl is 1-based)
            first_data_row = _TABLE_START_ROW + 2
            self._style_rows(sheet, tables.heading_rows, first_data_row, _HEADING_FILL)
            self._style_rows(sheet, tables.total_rows, first_data_row, _TOTAL_FILL)

            footer_row = first_data_row + len(tables.details) + 1
            sheet.cell(row=footer_row, column=1, value=self.footer_line())

            self._fit_columns(sheet, tables.details)
            self._fit_columns(writer.sheets[SUMMARY_SHEET], tables.summary)

    def _style_rows(
        self, sheet, positions: List[int], first_data_row: int, fill
    ) -> None:
        width = len(DETAIL_COLUMNS)
        for position in positions:
            for column in range(1, width + 1):
                cell = sheet.cell(row=first_data_row + position, column=column)
                cell.font = _BOLD
                cell.fill = fill

    def _fit_columns(self, sheet, frame: pd.DataFrame) -> None:
        for index, column in enumerate(frame.columns, start=1):
            values = [str(column)] + [str(v) for v in frame[column].tolist()]
            width = min(max(len(v) for v in values) + 2, 50)
            sheet.column_dimensions[get_column_letter(index)].width = width

    def _write_csv(self, tables: ReportTables, path: Path) -> None:
        tables.details.to_csv(path, index=False, encoding="utf-8")

    def render_html(self, tables: ReportTables, date_range: DateRange) -> str:
        """Render the printable html document."""
        parts = [
            "<!DOCTYPE html>",
            '<html><head><meta charset="utf-8">',
            f"<title>{html.escape(self.title)}</title>",
            f"<style>{_HTML_STYLE}</style>",
            "</head><body>",
            f"<h1>{html.escape(self.title)}</h1>",
            f'<p class="period">{html.escape(self.period_line(date_range))}</p>',
            _html_table(
                tables.details, "details", tables.heading_rows, tables.total_rows
            ),
            f"<h2>{SUMMARY_SHEET}</h2>",
            _html_table(tables.summary, "summary"),
            f'<p class="footer">{html.escape(self.footer_line())}</p>',
            "</body></html>",
        ]
        return "\n".join(parts)


def _html_table(
    frame: pd.DataFrame,
    name: str,
    heading_rows: Sequence[int] = (),
    total_rows: Sequence[int] = (),
) -> str:
    if frame.empty:
        placeholder = ["No entries"] + [""] * (len(frame.columns) - 1)
        frame = pd.DataFrame([placeholder], columns=frame.columns)

    classes = pd.DataFrame("", index=frame.index, columns=frame.columns)
    classes.iloc[list(heading_rows)] = "employee"
    classes.iloc[list(total_rows)] = "total"

    styler = (
        frame.style.set_uuid(name)
        .hide(axis="index")
        .format(escape="html")
        .set_td_classes(classes)
    )
    return styler.to_html()
