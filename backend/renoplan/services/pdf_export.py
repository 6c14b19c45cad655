"""Render a completed plan as a paginated PDF.

Layout is delegated to reportlab's platypus flowables; page breaks and line
wrapping come from the frame. Every page gets a running header with the
project name and a footer with the page number and generation date.
"""

import io
from datetime import datetime, timezone
from decimal import Decimal
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from renoplan.models.project_plan import ProjectPlanRecord
from renoplan.schemas.plan import ProjectPlan

BRAND_COLOR = colors.HexColor("#1E3A5F")
PAGE_MARGIN = 0.75 * inch


def _format_currency(value: float) -> str:
    return f"${Decimal(str(value)):,.2f}"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("PlanTitle", parent=base["Title"], textColor=BRAND_COLOR),
        "heading": ParagraphStyle(
            "PlanHeading", parent=base["Heading2"], textColor=BRAND_COLOR, spaceBefore=14
        ),
        "body": ParagraphStyle("PlanBody", parent=base["BodyText"], leading=14),
        "cell": ParagraphStyle("PlanCell", parent=base["BodyText"], fontSize=9, leading=11),
    }


def _para(text: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(text), style)


def _table(rows: list[list], col_widths: list[float], header: bool = True) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1 if header else 0)
    commands = [
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.HexColor("#E5E5E5")),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F9F9F9")]),
    ]
    if header:
        commands += [
            ("BACKGROUND", (0, 0), (-1, 0), BRAND_COLOR),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    table.setStyle(TableStyle(commands))
    return table


def _build_story(record: ProjectPlanRecord, plan: ProjectPlan, width: float) -> list:
    styles = _styles()
    story: list = [
        _para(plan.project_name, styles["title"]),
        _para(record.project_description, styles["body"]),
        Spacer(1, 0.2 * inch),
        Paragraph("Materials &amp; Tools", styles["heading"]),
    ]

    material_rows = [["Item", "Quantity", "Estimated Cost"]]
    for material in plan.materials:
        material_rows.append([
            _para(material.item, styles["cell"]),
            _para(material.quantity, styles["cell"]),
            _format_currency(material.estimated_cost),
        ])
    story.append(_table(material_rows, [width * 0.5, width * 0.25, width * 0.25]))

    costs = plan.cost_analysis
    story.append(Paragraph("Cost Analysis", styles["heading"]))
    story.append(_table(
        [
            ["Total Materials Cost", _format_currency(costs.total_materials_cost)],
            ["Estimated Labor Cost", _format_currency(costs.estimated_labor_cost)],
            ["Total Project Cost", _format_currency(costs.total_project_cost)],
        ],
        [width * 0.6, width * 0.4],
        header=False,
    ))

    story.append(Paragraph("Execution Steps", styles["heading"]))
    story.append(ListFlowable(
        [ListItem(_para(step, styles["body"])) for step in plan.execution_steps],
        bulletType="1",
    ))

    disposal = plan.disposal_info
    story.append(Paragraph("Disposal Information", styles["heading"]))
    story.append(_para(disposal.regulations_summary, styles["body"]))
    if disposal.landfill_options:
        story.append(Spacer(1, 0.1 * inch))
        landfill_rows = [["Facility", "Address"]]
        for option in disposal.landfill_options:
            landfill_rows.append([_para(option.name, styles["cell"]), _para(option.address, styles["cell"])])
        story.append(_table(landfill_rows, [width * 0.4, width * 0.6]))
    return story


def render_plan_pdf(record: ProjectPlanRecord, plan: ProjectPlan) -> bytes:
    buffer = io.BytesIO()
    generated_at = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN + 0.25 * inch,
        bottomMargin=PAGE_MARGIN,
        title=plan.project_name,
        author="RenoPlan",
    )

    def _decorate(canvas, document) -> None:
        page_width, page_height = document.pagesize
        canvas.saveState()
        canvas.setFont("Helvetica-Bold", 9)
        canvas.setFillColor(BRAND_COLOR)
        canvas.drawString(PAGE_MARGIN, page_height - PAGE_MARGIN + 6, plan.project_name[:90])
        canvas.setStrokeColor(BRAND_COLOR)
        canvas.line(PAGE_MARGIN, page_height - PAGE_MARGIN, page_width - PAGE_MARGIN, page_height - PAGE_MARGIN)
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(colors.grey)
        canvas.drawString(PAGE_MARGIN, PAGE_MARGIN / 2, f"Generated {generated_at}")
        canvas.drawRightString(page_width - PAGE_MARGIN, PAGE_MARGIN / 2, f"Page {document.page}")
        canvas.restoreState()

    doc.build(_build_story(record, plan, doc.width), onFirstPage=_decorate, onLaterPages=_decorate)
    return buffer.getvalue()
