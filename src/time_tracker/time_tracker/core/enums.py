from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    """Lifecycle of a project as shown next to its worked time."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
