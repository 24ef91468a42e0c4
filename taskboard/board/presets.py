"""
Built-in status palette, defaults and templates.
"""

from __future__ import annotations

from taskboard.schemas.status import StatusPayload

STATUS_COLORS: tuple[str, ...] = (
    "#6B7280",  # gray
    "#3B82F6",  # blue
    "#14B8A6",  # teal
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#F97316",  # orange
    "#EF4444",  # red
    "#EC4899",  # pink
    "#8B5CF6",  # purple
    "#06B6D4",  # cyan
)

NEW_STATUS_NAME = "New Status"


def _preset(*rows: tuple[str, str, bool]) -> tuple[StatusPayload, ...]:
    return tuple(
        StatusPayload(name=name, color=color, is_done_status=done, position=i)
        for i, (name, color, done) in enumerate(rows)
    )


# Seeded into a project that has no statuses yet
DEFAULT_STATUSES = _preset(
    ("Haven't Started", "#6B7280", False),
    ("In Progress", "#3B82F6", False),
    ("Review", "#F59E0B", False),
    ("Done", "#10B981", True),
)

STATUS_TEMPLATES: dict[str, tuple[StatusPayload, ...]] = {
    "Basic": DEFAULT_STATUSES,
    "Detailed": _preset(
        ("Backlog", "#6B7280", False),
        ("To Do", "#3B82F6", False),
        ("In Progress", "#F59E0B", False),
        ("In Review", "#8B5CF6", False),
        ("Done", "#10B981", True),
    ),
    "Kanban": _preset(
        ("To Do", "#6B7280", False),
        ("Doing", "#3B82F6", False),
        ("Done", "#10B981", True),
    ),
}


def is_palette_color(color: str) -> bool:
    return color.upper() in STATUS_COLORS
