"""X-axis label thinning for dense time axes.

Every bar is still drawn; only the category labels of most interior points are
blanked so the axis stays readable.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Sequence

LABEL_BUDGET = 10
TIME_FORMAT = "%H:%M:%S"
HIDDEN_LABEL = ""


def format_time(t: datetime) -> str:
    """24-hour ``HH:MM:SS`` in UTC; naive datetimes are taken as UTC."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc).strftime(TIME_FORMAT)


def visible_label_indices(count: int, budget: int = LABEL_BUDGET) -> set[int]:
    if budget < 1:
        raise ValueError(f"label budget must be >= 1, got {budget}")
    if count <= budget:
        return set(range(count))

    visible = {0, count - 1}
    slots = budget - 2
    first, last = 1, count - 2
    if slots <= 0:
        return visible
    if slots == 1:
        positions = [(first + last) / 2]
    else:
        step = (last - first) / (slots - 1)
        positions = [first + i * step for i in range(slots)]
    for position in positions:
        index = math.floor(position + 0.5)
        visible.add(min(max(index, first), last))
    return visible


def thin_time_labels(
    times: Sequence[datetime], budget: int = LABEL_BUDGET
) -> list[str]:
    """Formatted labels, blanked where not selected; length always matches ``times``."""
    visible = visible_label_indices(len(times), budget)
    return [
        format_time(t) if i in visible else HIDDEN_LABEL for i, t in enumerate(times)
    ]
