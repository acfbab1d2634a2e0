from __future__ import annotations

"""
STORMHARM report generator
--------------------------
This module writes a DOCX report for one ImpactResult: the three ranked
tables (fatalities, injuries, damage), a bar chart for each, and enough
context (citation, data dictionary, exponent table, command log) to
reproduce the numbers.

python-docx and matplotlib are imported lazily, only when a report is made.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging
import os
import tempfile

from .charts import CHART_SPECS, plot_impact
from .damage import EXPONENT_MULTIPLIERS
from .engine import ImpactResult
from .models import AggregateRow

logger = logging.getLogger(__name__)


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "Storm Events Database"
    institutional_author: str = "U.S. National Oceanic and Atmospheric Administration (NOAA)"
    website: str = "https://www.ncdc.noaa.gov/stormevents/"
    file_name: Optional[str] = None
    file_note: Optional[str] = "Course copy of the storm database (1950-2011), bzip2-compressed CSV."


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Storm Harm Report"
    subtitle: str = "Health and economic impact of severe weather events in the U.S."
    dataset_name: str = "NOAA storm database (StormData.csv.bz2)"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # Optional: list of CLI commands used in the session
    command_log: Optional[List[str]] = None


TABLE_HEADINGS = {
    "fatalities": ("Most harmful to population health: fatalities", "Fatalities"),
    "injuries": ("Most harmful to population health: injuries", "Injuries"),
    "damage": ("Greatest economic consequences: property + crop damage", "Damage (US$)"),
}


def _fmt(v: float) -> str:
    return f"{v:,.0f}"


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    result: ImpactResult,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report + charts for one analysis result.

    The result tables are written exactly as ranked; labels are not cleaned.
    """
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    if result.is_empty():
        raise ValueError("Nothing to report on (all ranked tables are empty).")

    tables = result.tables()

    # -----------------------------
    # Build DOCX report
    # -----------------------------
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    def _ranking_table(rows: Sequence[AggregateRow], value_header: str) -> None:
        t = doc.add_table(rows=1, cols=3)
        h = t.rows[0].cells
        h[0].text = "Rank"
        h[1].text = "Event type"
        h[2].text = value_header
        for i, r in enumerate(rows, start=1):
            c = t.add_row().cells
            c[0].text = str(i)
            c[1].text = r.event_type
            c[2].text = _fmt(r.total)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    _kv("Records analysed", str(result.n_events))
    _kv("Top-N per table", str(result.top_n))

    # Dataset citation section
    doc.add_paragraph("")
    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    if cit.file_note:
        doc.add_paragraph(f"File note: {cit.file_note}")
    doc.add_paragraph(f"{cit.institutional_author}. {cit.database_name}. {cit.website}")

    # Data dictionary
    doc.add_paragraph("")
    doc.add_heading("Columns used (data dictionary)", level=1)
    t = doc.add_table(rows=1, cols=2)
    t.rows[0].cells[0].text = "Column"
    t.rows[0].cells[1].text = "Meaning"
    for k, v in [
        ("EVTYPE", "Event type, used verbatim as the grouping label"),
        ("FATALITIES", "Deaths attributed to the event"),
        ("INJURIES", "Injuries attributed to the event"),
        ("PROPDMG", "Property damage magnitude"),
        ("PROPDMGEXP", "Property damage exponent code"),
        ("CROPDMG", "Crop damage magnitude"),
        ("CROPDMGEXP", "Crop damage exponent code"),
    ]:
        row = t.add_row().cells
        row[0].text = k
        row[1].text = v

    # Exponent table
    doc.add_paragraph("")
    doc.add_heading("Damage exponent codes", level=1)
    doc.add_paragraph(
        "Damage in US$ = magnitude x multiplier(exponent). Codes not listed "
        "below are treated as 0. This mapping follows the common reading of "
        "the codes and is not an official NOAA definition."
    )
    t2 = doc.add_table(rows=1, cols=2)
    t2.rows[0].cells[0].text = "Code"
    t2.rows[0].cells[1].text = "Multiplier"
    for code, mult in EXPONENT_MULTIPLIERS.items():
        row = t2.add_row().cells
        row[0].text = repr(code) if code == "" else code
        row[1].text = _fmt(mult)

    # Results; chart PNGs only need to exist until add_picture has read them
    with tempfile.TemporaryDirectory(prefix="stormharm_report_") as tmpdir:
        chart_paths = plot_impact({k: v for k, v in tables.items() if v}, tmpdir)
        logger.info("Rendered %d charts into %s", len(chart_paths), tmpdir)

        for name in ("fatalities", "injuries", "damage"):
            rows = tables[name]
            heading, value_header = TABLE_HEADINGS[name]
            doc.add_paragraph("")
            doc.add_heading(heading, level=1)
            if not rows:
                doc.add_paragraph("No data.")
                continue
            _ranking_table(rows, value_header)
            doc.add_paragraph("")
            doc.add_paragraph(CHART_SPECS[name][0])
            doc.add_picture(chart_paths[name], width=Inches(6.5))

    doc.add_heading("Notes", level=1)
    doc.add_paragraph(
        "Event type labels are used exactly as recorded. Near-duplicate "
        "spellings (for example 'TSTM WIND' and 'THUNDERSTORM WIND') are "
        "counted as separate categories."
    )

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_paragraph("")
    doc.add_heading("Reproducibility footer", level=1)

    from . import __version__ as stormharm_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_paragraph(f"stormharm version: {stormharm_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")
    if config.citation.file_name:
        doc.add_paragraph(f"Dataset file: {config.citation.file_name}")

    if config.command_log:
        doc.add_paragraph("Commands used (log):")
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
