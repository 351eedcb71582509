# models.py
from __future__ import annotations
import datetime
import uuid
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_ESTIMATED_MINUTES = 30

# Colors the icon prompt asks for. Anything else is passed through untouched.
ICON_COLORS = ("orange", "blue", "purple", "green", "brown", "red", "teal", "pink")


@dataclass(frozen=True)
class SubtaskSuggestion:
    title: str
    estimated_minutes: int = DEFAULT_ESTIMATED_MINUTES


@dataclass(frozen=True)
class IconSuggestion:
    symbol: str
    color: str

    @property
    def has_known_color(self) -> bool:
        return self.color in ICON_COLORS


@dataclass
class TaskItem:
    title: str
    is_subtask: bool = False
    parent_id: Optional[uuid.UUID] = None
    completed: bool = False
    estimated_minutes: int = DEFAULT_ESTIMATED_MINUTES
    order_index: int = 0
    icon: Optional[IconSuggestion] = None
    subtasks: List["TaskItem"] = field(default_factory=list)
    is_breaking_down: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    @property
    def completed_subtasks_count(self) -> int:
        return len([st for st in self.subtasks if st.completed])

    @property
    def total_subtasks_count(self) -> int:
        return len(self.subtasks)

    @property
    def progress_text(self) -> str | None:
        if not self.subtasks:
            return None
        return f"{self.completed_subtasks_count}/{self.total_subtasks_count} done"

    @property
    def sorted_subtasks(self) -> List["TaskItem"]:
        # Incomplete first, then creation order.
        return sorted(self.subtasks, key=lambda st: (st.completed, st.order_index))
