"""Demo snapshot used by ``orbit-lite --sample``."""

from __future__ import annotations

import uuid
from typing import Any

from orbit_lite.calendar.date_utils import add_days


def _new_id() -> str:
    return str(uuid.uuid4())


def sample_state(today: str) -> dict[str, Any]:
    """Build a small events/todos snapshot anchored on ``today``."""
    return {
        "events": [
            {
                "id": _new_id(),
                "title": "Product sprint review",
                "date": today,
                "startTime": "09:30",
                "endTime": "10:30",
                "allDay": False,
                "priority": "important",
                "calendar": "Work",
                "repeat": "Weekly",
                "location": "Studio 4B",
                "guests": "Product team",
                "description": "Review sprint wins, risks, and dependencies.",
                "color": "#6c7bff",
            },
            {
                "id": _new_id(),
                "title": "Design lab",
                "date": today,
                "startTime": "11:00",
                "endTime": "13:00",
                "allDay": False,
                "priority": "urgent",
                "calendar": "Holiday",
                "repeat": "None",
                "location": "Innovation hub",
                "guests": "UX core",
                "color": "#f97316",
            },
            {
                "id": _new_id(),
                "title": "Deep work",
                "date": today,
                "startTime": "14:30",
                "endTime": "17:00",
                "allDay": False,
                "priority": "normal",
                "calendar": "Personal",
                "repeat": "None",
                "location": "Focus room",
                "color": "#22c55e",
            },
        ],
        "todos": [
            {
                "id": _new_id(),
                "title": "Finalize research outline",
                "startDate": today,
                "dueDate": add_days(today, 2),
                "link": "https://example.com/brief",
                "priority": "important",
                "notes": "Compile citations and key insights.",
                "completed": False,
            },
            {
                "id": _new_id(),
                "title": "Prep pitch deck",
                "startDate": add_days(today, 1),
                "dueDate": add_days(today, 4),
                "priority": "urgent",
                "notes": "Draft slides and collect visuals.",
                "completed": False,
            },
        ],
    }
