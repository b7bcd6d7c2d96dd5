"""
PDF Report Generation Service.

Aggregates orders per office and installation type and renders the result
as a PDF with reportlab. Files are written to REPORT_STORAGE_PATH and served
back by name through the download endpoint.
"""

import html
import io
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy import func
from sqlalchemy.orm import Session

from signorders.core.config import settings
from signorders.core.errors import NotFoundError, ServerError, ValidationError
from signorders.db.enums import InstallationType
from signorders.db.models import Office, Order
from signorders.schemas.auth import UserSession
from signorders.schemas.report import ReportData, ReportFilters
from signorders.services.order_filters import OrderFilter, apply_role_scope

logger = logging.getLogger(__name__)

REPORT_FILENAME_PATTERN = re.compile(r"^report_\d+\.pdf$")
NO_DATA_MESSAGE = "No data found for the specified criteria"

HEADER_COLOR = colors.HexColor("#3b82f6")
GRID_COLOR = colors.HexColor("#e2e8f0")
STRIPE_COLOR = colors.HexColor("#f8fafc")


# =============================================================================
# Aggregation
# =============================================================================

def collect_report_data(db: Session, session: UserSession, filters: ReportFilters) -> ReportData:
    """
    Count orders grouped by office name and installation type.

    Raises:
        NotFoundError: nothing matches the filters
    """
    scoped = apply_role_scope(
        OrderFilter(office_id=filters.office_id), session
    )
    agent_id = scoped.agent_id

    conditions = []
    if filters.start_date and filters.end_date:
        conditions.append(Order.created_at.between(filters.start_date, filters.end_date))
    if scoped.office_id:
        conditions.append(Order.office_id == scoped.office_id)
    if agent_id:
        conditions.append(Order.agent_id == agent_id)
    if filters.vendor_id:
        conditions.append(Order.vendor_id == filters.vendor_id)
    if filters.installation_type:
        conditions.append(Order.installation_type == filters.installation_type.value)

    rows = (
        db.query(Office.name, Order.installation_type, func.count(Order.id))
        .join(Office, Office.id == Order.office_id)
        .filter(*conditions)
        .group_by(Office.name, Order.installation_type)
        .order_by(Office.name, Order.installation_type)
        .all()
    )
    if not rows:
        raise NotFoundError("Report data", message=NO_DATA_MESSAGE)

    grouped: dict[str, dict[str, int]] = {}
    type_totals = {t.value: 0 for t in InstallationType}
    for office_name, installation_type, count in rows:
        grouped.setdefault(office_name, {})[installation_type] = count
        type_totals[installation_type] = type_totals.get(installation_type, 0) + count

    return ReportData(
        total_orders=sum(type_totals.values()),
        total_offices=len(grouped),
        data=grouped,
        type_totals=type_totals,
        filters=filters,
    )


# =============================================================================
# Rendering
# =============================================================================

def _filters_text(filters: ReportFilters, office_names: dict) -> list[str]:
    lines = []
    if filters.start_date and filters.end_date:
        lines.append(
            f"Date Range: {filters.start_date:%m/%d/%Y} - {filters.end_date:%m/%d/%Y}"
        )
    if filters.office_id:
        lines.append(f"Office: {office_names.get(filters.office_id, filters.office_id)}")
    if filters.vendor_id:
        lines.append(f"Vendor: {filters.vendor_id}")
    if filters.installation_type:
        lines.append(f"Installation Type: {filters.installation_type.label}")
    return [html.escape(line) for line in lines] or ["All orders"]


def render_report_pdf(report: ReportData, office_names: dict | None = None) -> bytes:
    """Render the office x installation-type table as PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=50,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=22,
        spaceAfter=15,
        textColor=colors.HexColor("#1e293b"),
    )
    heading_style = ParagraphStyle(
        "ReportHeading",
        parent=styles["Heading2"],
        fontSize=14,
        spaceAfter=10,
        spaceBefore=15,
        textColor=colors.HexColor("#334155"),
    )
    muted_style = ParagraphStyle(
        "Muted",
        parent=styles["Normal"],
        fontSize=10,
        textColor=colors.HexColor("#64748b"),
    )

    elements = [Paragraph("Sign Order Report", title_style)]
    generated_at = datetime.now(timezone.utc).strftime("%B %d, %Y at %H:%M UTC")
    elements.append(Paragraph(f"Generated: {generated_at}", muted_style))
    elements.append(Spacer(1, 10))

    elements.append(Paragraph("Filters Applied", heading_style))
    for line in _filters_text(report.filters, office_names or {}):
        elements.append(Paragraph(line, muted_style))

    elements.append(Paragraph("Orders by Office", heading_style))
    types = [t.value for t in InstallationType]
    table_data = [["Office"] + [f"{InstallationType(t).label}s" for t in types] + ["Total"]]
    for office_name, counts in report.data.items():
        row_counts = [counts.get(t, 0) for t in types]
        table_data.append([office_name] + [str(c) for c in row_counts] + [str(sum(row_counts))])
    table_data.append(
        ["Grand Total"]
        + [str(report.type_totals.get(t, 0)) for t in types]
        + [str(report.total_orders)]
    )

    table = Table(
        table_data,
        colWidths=[2.4 * inch, 1.2 * inch, 1.0 * inch, 1.0 * inch, 0.9 * inch],
    )
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("ALIGN", (1, 0), (-1, -1), "CENTER"),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ROWBACKGROUNDS", (0, 1), (-1, -2), [colors.white, STRIPE_COLOR]),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    elements.append(table)

    elements.append(Paragraph("Summary", heading_style))
    elements.append(Paragraph(f"Total Orders: {report.total_orders}", styles["Normal"]))
    elements.append(Paragraph(f"Offices: {report.total_offices}", styles["Normal"]))

    doc.build(elements)
    return buffer.getvalue()


# =============================================================================
# Storage
# =============================================================================

def storage_dir() -> Path:
    return Path(settings.REPORT_STORAGE_PATH)


def _new_filename(directory: Path) -> str:
    stamp = int(time.time() * 1000)
    while (directory / f"report_{stamp}.pdf").exists():
        stamp += 1
    return f"report_{stamp}.pdf"


def generate_report(db: Session, session: UserSession, filters: ReportFilters) -> tuple[str, ReportData]:
    """
    Aggregate, render and store a report.

    Returns:
        (filename, report data)

    Raises:
        NotFoundError: nothing matches the filters
        ServerError: rendering or writing the file failed
    """
    report = collect_report_data(db, session, filters)
    office_names = {}
    if filters.office_id:
        office = db.get(Office, filters.office_id)
        if office:
            office_names[office.id] = office.name

    directory = storage_dir()
    try:
        pdf_bytes = render_report_pdf(report, office_names)
        directory.mkdir(parents=True, exist_ok=True)
        filename = _new_filename(directory)
        (directory / filename).write_bytes(pdf_bytes)
    except Exception as exc:
        logger.exception("Report generation failed")
        raise ServerError("Failed to generate report") from exc

    logger.info("Report generated", extra={"report_file": filename})
    return filename, report


def resolve_report_path(filename: str) -> Path:
    """
    Map a requested filename to a stored report.

    Raises:
        ValidationError: filename is not report_<digits>.pdf
        NotFoundError: no such report
    """
    if not REPORT_FILENAME_PATTERN.match(filename):
        raise ValidationError("Invalid filename", code="INVALID_FILENAME")
    path = storage_dir() / filename
    if not path.is_file():
        raise NotFoundError("File")
    return path
