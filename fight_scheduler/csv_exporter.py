"""CSV exporter for scheduled fights.

One row per match in schedule order: sequence number, area, group, time and
the pairing.
"""

import csv
from pathlib import Path

from .models import Event
from .types import Schedule

CSV_FIELDNAMES = ["#", "Area", "Group", "Time", "Fight"]


def schedule_to_rows(schedule: Schedule, event: Event) -> list[dict[str, str]]:
    """Flatten the schedule into CSV rows."""
    area_names = {area.id: area.name for area in event.areas}
    group_names = {group.id: group.name for group in event.groups}

    return [
        {
            "#": str(entry.sequence_number),
            "Area": area_names.get(entry.area_id, ""),
            "Group": group_names.get(entry.group_id, ""),
            "Time": entry.scheduled_time,
            "Fight": f"{entry.athlete1_name} vs {entry.athlete2_name}",
        }
        for entry in schedule.entries
    ]


def export_schedule_csv(schedule: Schedule, event: Event, output_path: Path) -> int:
    """
    Write the schedule to a CSV file.

    Args:
        schedule: Schedule to export
        event: Event the schedule belongs to (for area and group names)
        output_path: Path for the output CSV file

    Returns:
        Number of rows written
    """
    rows = schedule_to_rows(schedule, event)

    with output_path.open("w", encoding="utf-8", newline="") as file:
        writer = csv.DictWriter(file, fieldnames=CSV_FIELDNAMES, quoting=csv.QUOTE_ALL)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)
