# utils.py
from __future__ import annotations
from typing import Iterable

from models import TaskItem


# ----------------------------- Formatting helpers ----------------------------- #

def format_duration(minutes: int) -> str:
    """``45`` -> "45 mins", ``60`` -> "1 hr", ``90`` -> "1 hr 30 mins"."""
    if minutes < 60:
        return f"{minutes} mins"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} mins"


def render_checklist(tasks: Iterable[TaskItem]) -> str:
    lines = []
    for task in tasks:
        icon = f" ({task.icon.symbol}, {task.icon.color})" if task.icon else ""
        progress = f" - {task.progress_text}" if task.progress_text else ""
        lines.append(f"- [{'x' if task.completed else ' '}] {task.title}{icon}{progress}")
        for st in task.sorted_subtasks:
            mark = "x" if st.completed else " "
            lines.append(f"  - [{mark}] {st.title} ({format_duration(st.estimated_minutes)})")
    return "\n".join(lines)


# ----------------------------- File helpers ----------------------------- #

def save_markdown(content: str, filepath: str) -> None:
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(content.strip() + "\n")
