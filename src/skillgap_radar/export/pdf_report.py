"""PDF and HTML report export for an AnalysisResult."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from fpdf import FPDF
from fpdf.fonts import FontFace
from jinja2 import Environment, FileSystemLoader

from skillgap_radar.dashboard.views import gap_label, resource_link, score_band
from skillgap_radar.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent

REPORT_FILENAME = "SkillGap_Report.pdf"
HTML_REPORT_FILENAME = "SkillGap_Report.html"
REPORT_TITLE = "SkillGap Radar - Analysis Report"

SKILL_HEADINGS = ("Skill", "Required", "Observed", "Gap", "Importance")
PATHWAY_HEADINGS = ("Action", "Priority", "Timeline", "Resource")

_HEADER_FILL = (79, 70, 229)
_STRIPE_FILL = (243, 244, 246)

# Unicode-capable font search paths (Linux, macOS, Windows)
_UNICODE_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

# Typographic characters LLMs like to emit, mapped for the latin-1 core fonts
_LATIN1_REPLACEMENTS = str.maketrans({
    "\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"',
    "\u2013": "-", "\u2014": "-", "\u2022": "*", "\u2026": "...",
    "\u2192": "->", "\u00a0": " ",
})


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    text = text.translate(_LATIN1_REPLACEMENTS)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _setup_font(pdf: FPDF) -> bool:
    """Use a Unicode TTF when one is installed. Returns True if bold is available."""
    font_path = _find_unicode_font()
    if font_path:
        try:
            pdf.add_font("ReportFont", "", font_path)
            pdf.set_font("ReportFont", size=10)
            return False
        except Exception:
            logger.debug("Failed to load font %s", font_path, exc_info=True)
    pdf.set_font("Helvetica", size=10)
    return True


def _heading(pdf: FPDF, text: str, size: int) -> None:
    pdf.set_font_size(size)
    pdf.cell(0, size * 0.6, _safe_text(text, pdf), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font_size(10)


def _table(
    pdf: FPDF,
    headings: tuple[str, ...],
    rows: list[tuple[str, ...]],
    col_widths: tuple[int, ...],
    *,
    bold: bool,
    striped: bool,
) -> None:
    headings_style = FontFace(
        emphasis="BOLD" if bold else None,
        color=(255, 255, 255),
        fill_color=_HEADER_FILL,
    )
    kwargs: dict = {}
    if striped:
        kwargs.update(cell_fill_color=_STRIPE_FILL, cell_fill_mode="ROWS")
    with pdf.table(
        col_widths=col_widths,
        headings_style=headings_style,
        line_height=5,
        text_align="LEFT",
        **kwargs,
    ) as table:
        header = table.row()
        for heading in headings:
            header.cell(heading)
        for values in rows:
            row = table.row()
            for value in values:
                row.cell(_safe_text(value, pdf))


def skill_rows(result: AnalysisResult) -> list[tuple[str, ...]]:
    return [
        (s.name, str(s.required_level), str(s.observed_level), gap_label(s), s.importance)
        for s in result.skills
    ]


def pathway_rows(result: AnalysisResult) -> list[tuple[str, ...]]:
    return [(a.action, a.priority, a.timeline, a.resource) for a in result.learning_pathway]


def build_pdf(result: AnalysisResult) -> FPDF:
    """Lay out the fixed report: summary, skill table, learning pathway table."""
    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()
    pdf.set_text_color(40, 40, 40)
    bold = _setup_font(pdf)

    _heading(pdf, REPORT_TITLE, 20)
    pdf.ln(2)
    pdf.set_font_size(12)
    pdf.cell(0, 8, f"Match Score: {result.match_score}%", new_x="LMARGIN", new_y="NEXT")
    if result.model_used:
        pdf.set_font_size(9)
        pdf.cell(0, 5, _safe_text(f"Model: {result.model_used}", pdf), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font_size(10)
    pdf.ln(4)

    _heading(pdf, "Executive Summary", 14)
    pdf.ln(1)
    pdf.multi_cell(0, 5, _safe_text(result.executive_summary, pdf), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(5)

    _heading(pdf, "Skill Gap Matrix", 14)
    pdf.ln(1)
    _table(pdf, SKILL_HEADINGS, skill_rows(result), (60, 25, 25, 25, 35), bold=bold, striped=False)
    pdf.ln(8)

    _heading(pdf, "Recommended Learning Pathway", 14)
    pdf.ln(1)
    _table(pdf, PATHWAY_HEADINGS, pathway_rows(result), (70, 25, 35, 60), bold=bold, striped=True)

    return pdf


def render_pdf(result: AnalysisResult) -> bytes:
    return bytes(build_pdf(result).output())


def render_html_report(result: AnalysisResult, theme: str = "light") -> str:
    """Render the same report as a standalone HTML page."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("report.html")
    return template.render(
        title=REPORT_TITLE,
        theme=theme,
        result=result,
        band=score_band(result.match_score),
        skills=[(s, gap_label(s)) for s in result.skills],
        actions=[(a, resource_link(a.resource)) for a in result.learning_pathway],
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
