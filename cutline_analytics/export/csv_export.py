"""CsvExporter: serialises a display-filtered event list.

Output:
    time,size,confidence,source,id
    "00:00:00","Medium","0.912","Cutting Table 1","EVT-0001"

Every data field is quoted and embedded quotes are doubled.  Rows keep
the order of the list they were given.
"""

from __future__ import annotations

import csv
import io
from typing import Sequence

from cutline_analytics.domain.event import DetectionEvent

CSV_HEADER: tuple[str, ...] = ("time", "size", "confidence", "source", "id")


def event_row(event: DetectionEvent) -> list[str]:
    return [event.time, event.size.value, str(event.confidence), event.source, event.id]


def export_csv(events: Sequence[DetectionEvent]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(event_row(e) for e in events)
    return buffer.getvalue()


def parse_csv(text: str) -> list[dict[str, str]]:
    """Read exported text back into row dicts keyed by the header."""
    return list(csv.DictReader(io.StringIO(text)))
