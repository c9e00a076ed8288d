"""Report export for skillgap-radar."""
from skillgap_radar.export.pdf_report import (
    HTML_REPORT_FILENAME,
    REPORT_FILENAME,
    render_html_report,
    render_pdf,
)

__all__ = ["render_pdf", "render_html_report", "REPORT_FILENAME", "HTML_REPORT_FILENAME"]
