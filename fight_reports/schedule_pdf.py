"""Printable PDF of a fight schedule: one section per area, standings at the end."""

from datetime import datetime
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from fight_scheduler.models import Event, MatchResult
from fight_scheduler.results import GroupStandings
from fight_scheduler.types import Schedule

TABLE_STYLE = TableStyle(
    [
        # Header row
        ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("BOX", (0, 0), (-1, 0), 1, colors.black),
        # Data rows
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.beige, colors.white]),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 5),
        ("RIGHTPADDING", (0, 0), (-1, -1), 5),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
)

SCHEDULE_COL_WIDTHS = [1.0 * cm, 1.5 * cm, 3.5 * cm, 4.5 * cm, 4.5 * cm, 2.0 * cm]
STANDINGS_COL_WIDTHS = [1.2 * cm, 5.0 * cm, 2.0 * cm, 1.3 * cm, 1.3 * cm, 1.3 * cm, 1.8 * cm, 1.5 * cm]


def _add_page_number(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 7)
    canvas.drawRightString(doc.width + doc.rightMargin - 5, doc.bottomMargin - 8, f"Page {canvas.getPageNumber()}")
    canvas.restoreState()


def create_schedule_pdf(
    schedule: Schedule,
    event: Event,
    output_path: Path,
    results: dict[str, MatchResult] | None = None,
    standings: list[GroupStandings] | None = None,
) -> None:
    """
    Create a PDF with the match list of every area.

    Args:
        schedule: Schedule to print
        event: Event the schedule belongs to
        output_path: Path of the PDF to write
        results: Recorded results, shown as scores next to the matches
        standings: Group standings, appended after the schedule when given
    """
    results = results or {}
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        rightMargin=1.0 * cm,
        leftMargin=1.0 * cm,
        topMargin=1.2 * cm,
        bottomMargin=1.2 * cm,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        name="TitleStyle",
        parent=styles["Heading1"],
        fontSize=14,
        alignment=TA_CENTER,
        spaceAfter=4,
    )
    subtitle_style = ParagraphStyle(
        name="SubtitleStyle",
        parent=styles["Normal"],
        fontSize=8,
        alignment=TA_CENTER,
        spaceAfter=8,
    )
    area_style = ParagraphStyle(
        name="AreaStyle",
        parent=styles["Heading2"],
        fontSize=11,
        spaceBefore=8,
        spaceAfter=4,
    )

    group_names = {group.id: group.name for group in event.groups}
    elements = [
        Paragraph(escape(event.name), title_style),
        Paragraph(
            f"{event.date} · {event.window_start}-{event.window_end} · "
            f"{schedule.stats.total_matches} matches · "
            f"generated {datetime.now().strftime('%d %B %Y %H:%M')}",
            subtitle_style,
        ),
    ]

    for area in event.areas:
        area_entries = schedule.entries_for_area(area.id)
        if not area_entries:
            continue

        elements.append(Paragraph(escape(area.name), area_style))
        table_data = [["#", "Time", "Group", "Athlete 1", "Athlete 2", "Score"]]
        for entry in area_entries:
            result = results.get(entry.match_id)
            table_data.append([
                str(entry.sequence_number),
                entry.scheduled_time,
                group_names.get(entry.group_id, ""),
                entry.athlete1_name,
                entry.athlete2_name,
                f"{result.athlete1_score}-{result.athlete2_score}" if result else "",
            ])

        table = Table(table_data, colWidths=SCHEDULE_COL_WIDTHS, repeatRows=1)
        table.setStyle(TABLE_STYLE)
        elements.append(table)
        elements.append(Spacer(1, 0.4 * cm))

    if standings:
        elements.append(PageBreak())
        elements.append(Paragraph("Standings", title_style))
        for standing in standings:
            elements.append(
                Paragraph(
                    f"{escape(standing.area_name)} - {escape(standing.group_name)} "
                    f"({standing.completion_percentage:.0f}% complete)",
                    area_style,
                )
            )
            table_data = [["Rank", "Athlete", "Played", "W", "D", "L", "Win %", "+/-"]]
            for athlete in standing.athletes:
                table_data.append([
                    str(athlete.rank or ""),
                    athlete.athlete_name,
                    f"{athlete.matches_played}/{athlete.matches_scheduled}",
                    str(athlete.wins),
                    str(athlete.draws),
                    str(athlete.losses),
                    f"{athlete.win_percentage:.1f}",
                    f"{athlete.points_differential:+d}",
                ])
            table = Table(table_data, colWidths=STANDINGS_COL_WIDTHS, repeatRows=1)
            table.setStyle(TABLE_STYLE)
            elements.append(table)
            elements.append(Spacer(1, 0.4 * cm))

    if len(elements) == 2:
        elements.append(Paragraph("No matches scheduled", styles["Normal"]))

    doc.build(elements, onFirstPage=_add_page_number, onLaterPages=_add_page_number)
