import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from middag.utilities.translations import translate


def generate_pdf_for_plan(plan, language: str = "no"):
    """Generate a simple PDF table: Day / Dinner for the provided plan."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(translate(language, "weeklyPlanTitle").rstrip(":"), styles["Title"]),
        Spacer(1, 16),
    ]

    data = [[translate(language, "tableDayHeader"), translate(language, "tableMealHeader")]]
    for slot in plan:
        data.append([slot.day, Paragraph(escape(slot.dish), styles["BodyText"])])

    table = Table(data, repeatRows=1, colWidths=[120, 360])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#2563EB")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (0,-1), "LEFT"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
