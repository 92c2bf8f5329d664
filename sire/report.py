from __future__ import annotations

"""
SIRE report generator
---------------------
This module generates a DOCX report from a StormImpactEngine.

Design goals:
- Keep SIRE usable even if report dependencies are missing (lazy imports).
- Show both rankings: population health (fatalities / injuries) and
  economic consequences (property / crop damage).
- Tables list the top N categories; charts plot the full ordered views.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple
import os
import tempfile

from .models import CategorySummary

if TYPE_CHECKING:
    from .engine import StormImpactEngine


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "Storm Events Database"
    institutional_author: str = "NOAA National Centers for Environmental Information"
    location: str = "Asheville, NC, USA"
    access_date_iso: str = "2026-10-17"
    website: str = "https://www.ncdc.noaa.gov/stormevents/"
    file_name: Optional[str] = None
    file_note: Optional[str] = "Bulk storm events export (CSV)."


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "SIRE Storm Impact Report"
    subtitle: str = "Most harmful weather event categories in the United States"
    dataset_name: str = "NOAA Storm Events export"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # How many categories to show in tables
    top_n: int = 5

    # How many categories to show in bar charts
    chart_n: int = 15

    # Optional: list of CLI commands used before the report
    command_log: Optional[List[str]] = None


def _usd(v: float) -> str:
    """Format US$ amounts in billions for tables."""
    return f"{v / 1e9:,.2f} bn"


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    engine: "StormImpactEngine",
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report + charts for an engine's category summaries.

    This does NOT modify the source dataset.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not engine.summaries:
        raise ValueError("No categories to report on (every row was unclassifiable or the dataset is empty).")

    health = engine.health()
    financial = engine.financial()
    severity = engine.severity()
    totals = engine.totals()

    # -----------------------------
    # 1) Charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="sire_report_")
    # Each chart is: (title, file_path, caption)
    chart_paths: List[Tuple[str, str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(tmpdir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=200)
        plt.close()
        return path

    def _grouped_bar(title: str, rows: Sequence[CategorySummary], series: List[Tuple[str, List[float]]],
                     ylabel: str, caption: str, filename: str) -> None:
        if not rows:
            return
        labels = [s.category for s in rows]
        x = np.arange(len(labels))
        width = 0.8 / len(series)
        plt.figure(figsize=(9, 5))
        for i, (name, values) in enumerate(series):
            plt.bar(x + i * width, values, width, label=name, color=f"C{i}")
        plt.xticks(x + width * (len(series) - 1) / 2, labels, rotation=45, ha="right")
        plt.title(title)
        plt.ylabel(ylabel)
        plt.legend()
        chart_paths.append((title, _save(filename), caption))

    h_rows = health.rows[:config.chart_n]
    _grouped_bar(
        "Fatalities and injuries by event category",
        h_rows,
        [("Fatalities", [float(s.fatalities) for s in h_rows]),
         ("Injuries", [float(s.injuries) for s in h_rows])],
        "People",
        "Categories ordered by fatalities; categories with no casualties are omitted.",
        "health.png",
    )

    f_rows = financial.rows[:config.chart_n]
    _grouped_bar(
        "Property and crop damage by event category",
        f_rows,
        [("Property", [s.prop_damage_usd / 1e9 for s in f_rows]),
         ("Crops", [s.crop_damage_usd / 1e9 for s in f_rows])],
        "Damage (US$ billions)",
        "Categories ordered by property damage; categories with no damage are omitted.",
        "financial.png",
    )

    if severity:
        top_sev = severity[:config.chart_n]
        plt.figure(figsize=(9, 5))
        plt.barh([c for c, _ in reversed(top_sev)], [v for _, v in reversed(top_sev)], color="C3")
        plt.title("Composite severity score")
        plt.xlabel("Score (fatalities, injuries and frequency combined)")
        chart_paths.append((
            "Composite severity score",
            _save("severity.png"),
            "Relative ranking only; the score has no physical unit.",
        ))

    # -----------------------------
    # 2) Build DOCX report
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

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    _kv("Records loaded", f"{len(engine.events):,}")
    _kv("Records unclassifiable (excluded)", f"{engine.unclassified:,}")
    _kv("Canonical categories", str(len(engine.summaries)))
    _kv("Total fatalities", f"{int(totals['fatalities']):,}")
    _kv("Total injuries", f"{int(totals['injuries']):,}")
    _kv("Total property damage (US$)", _usd(totals["prop_damage_usd"]))
    _kv("Total crop damage (US$)", _usd(totals["crop_damage_usd"]))

    doc.add_paragraph("")
    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    if cit.file_note:
        doc.add_paragraph(f"File note: {cit.file_note}")
    doc.add_paragraph(
        f"{cit.institutional_author} (accessed {cit.access_date_iso}). "
        f"{cit.database_name}. {cit.location}. {cit.website}."
    )

    def _table(title: str, headers: List[str], rows: List[List[str]]) -> None:
        doc.add_paragraph(title)
        t = doc.add_table(rows=1, cols=len(headers))
        for i, h in enumerate(headers):
            t.rows[0].cells[i].text = h
        for values in rows:
            cells = t.add_row().cells
            for i, v in enumerate(values):
                cells[i].text = v

    doc.add_paragraph("")
    doc.add_heading("Population health", level=1)
    _table(
        f"Top {config.top_n} categories by fatalities",
        ["Category", "Events", "Fatalities", "Injuries"],
        [[s.category, f"{s.events:,}", f"{s.fatalities:,}", f"{s.injuries:,}"]
         for s in health.top(config.top_n)],
    )

    doc.add_paragraph("")
    doc.add_heading("Economic consequences", level=1)
    _table(
        f"Top {config.top_n} categories by property damage",
        ["Category", "Events", "Property (US$)", "Crops (US$)"],
        [[s.category, f"{s.events:,}", _usd(s.prop_damage_usd), _usd(s.crop_damage_usd)]
         for s in financial.top(config.top_n)],
    )

    doc.add_paragraph("")
    doc.add_heading("Visualizations", level=1)
    for title, path, caption in chart_paths:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.5))
        doc.add_paragraph(caption)
        doc.add_paragraph("")

    if config.command_log:
        doc.add_heading("Command log (reproducibility)", level=1)
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    from . import __version__ as sire_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_heading("Reproducibility footer", level=1)
    doc.add_paragraph(f"SIRE version: {sire_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")
    if config.citation.file_name:
        doc.add_paragraph(f"Dataset file: {config.citation.file_name}")
    for note in [
        "Event types are cleaned by an ordered rule cascade; the first matching rule wins.",
        "Rows with non-event labels (e.g. monthly summaries) are excluded from every total.",
        "Damage is scaled by its exponent code (H, K/T, M, B); unknown codes scale by 1.",
    ]:
        doc.add_paragraph(note, style="List Bullet")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
