# task_board.py
import logging
from typing import List, Optional, Protocol

from models import TaskItem
from decomposition import TaskDecomposer
from icon_classifier import IconClassifier, select_icon_or_fallback
from core.errors import EmptyTaskTitle, MomentumError
from core.json_utils import JsonSerializer

logger = logging.getLogger(__name__)


class BreakdownInProgress(MomentumError):
    def __init__(self, title: str):
        super().__init__(f"'{title}' is already being broken down.")


class AlreadyBrokenDown(MomentumError):
    def __init__(self, title: str):
        super().__init__(f"'{title}' already has subtasks.")


class Feedback(Protocol):
    """User feedback hooks (haptics, sounds, banners) supplied by the presentation layer."""

    def impact(self) -> None: ...
    def success(self) -> None: ...
    def error(self) -> None: ...


class NullFeedback:
    def impact(self) -> None:
        pass

    def success(self) -> None:
        pass

    def error(self) -> None:
        pass


class TaskBoard:
    """In-memory to-do list that drives the decomposer and the icon classifier.

    The board owns the caller-side policies: icon fallback, one breakdown in
    flight per task, and subtask ordering.
    """

    def __init__(self, decomposer: Optional[TaskDecomposer] = None,
                 classifier: Optional[IconClassifier] = None,
                 feedback: Optional[Feedback] = None):
        self.decomposer = decomposer
        self.classifier = classifier
        self.feedback = feedback or NullFeedback()
        self.tasks: List[TaskItem] = []

    def add_task(self, title: str) -> TaskItem:
        """Append a top-level task at the end of the board."""
        title = (title or "").strip()
        if not title:
            raise EmptyTaskTitle()
        task = TaskItem(title=title, order_index=len(self.tasks))
        self.tasks.append(task)
        self.feedback.impact()
        return task

    def delete_task(self, task: TaskItem) -> None:
        """Remove a task (with its subtasks) or a single subtask."""
        # Subtasks live on the parent, so they go with it.
        self.feedback.impact()
        if task.is_subtask:
            parent = next((t for t in self.tasks if t.id == task.parent_id), None)
            if parent is None or task not in parent.subtasks:
                raise ValueError(f"subtask '{task.title}' is not on this board")
            parent.subtasks.remove(task)
        else:
            self.tasks.remove(task)

    async def assign_icon(self, task: TaskItem) -> str:
        """Set ``task.icon``; returns "ai" or "fallback"."""
        task.icon, source = await select_icon_or_fallback(self.classifier, task.title)
        return source

    async def break_down(self, task: TaskItem) -> List[TaskItem]:
        """Ask the decomposer for subtasks and attach them in the order returned."""
        if self.decomposer is None:
            raise RuntimeError("TaskBoard has no decomposer configured")
        if task.is_breaking_down:
            raise BreakdownInProgress(task.title)
        if task.subtasks:
            raise AlreadyBrokenDown(task.title)

        self.feedback.impact()
        task.is_breaking_down = True
        try:
            suggestions = await self.decomposer.breakdown(task.title)
        except MomentumError:
            self.feedback.error()
            raise
        finally:
            task.is_breaking_down = False

        task.subtasks = [
            TaskItem(
                title=s.title,
                is_subtask=True,
                parent_id=task.id,
                estimated_minutes=s.estimated_minutes,
                order_index=index,
            )
            for index, s in enumerate(suggestions)
        ]
        logger.info("broke down %r into %d subtasks", task.title, len(task.subtasks))
        self.feedback.success()
        return task.subtasks

    def complete_subtask(self, subtask: TaskItem) -> None:
        """Mark a subtask done."""
        self.feedback.impact()
        subtask.completed = True
        self.feedback.success()

    def snapshot(self) -> list:
        """JSON-ready copy of every task and its subtasks."""
        return JsonSerializer.make_serializable(self.tasks)
