# prompts.py

from __future__ import annotations

class BreakdownPrompts:
    """Prompts for splitting a task into short subtasks."""

    SYSTEM = (
        """\
You are a task breakdown assistant. Break down the given task into 2-4 smaller actionable subtasks.
Each subtask should take 15-60 minutes to complete.

You MUST respond with valid JSON in this exact format:
{
  "subtasks": [
    {"title": "First subtask name", "estimatedMinutes": 20},
    {"title": "Second subtask name", "estimatedMinutes": 30}
  ]
}

Rules:
- Always use the key "subtasks" (not "tasks" or anything else)
- Each subtask must have "title" and "estimatedMinutes" fields
- estimatedMinutes should be between 15 and 60
- Provide 2-4 subtasks
"""
    )

    USER = "Break down this task: {task}"


class IconPrompts:
    """Prompts for picking an SF Symbol and a color for a task."""

    SYSTEM = (
        """\
You are an SF Symbols expert. Given a task title, select the most appropriate SF Symbol icon and color.

You MUST respond with valid JSON in this exact format:
{
  "symbol": "sf.symbol.name",
  "color": "colorName"
}

Rules for SF Symbols:
- Use actual SF Symbol names (e.g., "figure.golf", "cart.fill", "envelope.fill")
- Common symbols: checkmark, phone.fill, message.fill, envelope.fill, calendar, cart.fill,
  fork.knife, car.fill, airplane, book.fill, pencil, magnifyingglass, person.2.fill,
  video.fill, dollarsign.circle.fill, film.fill, music.note, gamecontroller.fill,
  figure.run, figure.golf, wrench.fill, cross.case.fill, sparkles
- Default to "checkmark" if unsure

Rules for colors (use these exact names):
- "orange" for sports, exercise, fitness
- "blue" for communication, calls, messages, emails
- "purple" for work, productivity, writing, coding
- "green" for shopping, finance, money
- "brown" for food, cooking
- "red" for health, medical, urgent tasks
- "teal" for travel, transportation
- "pink" for entertainment, leisure
- Default to "red" if unsure
"""
    )

    USER = "Select icon for task: {task}"


class PromptManager:
    """Formats the (system, user) pair for each call."""

    @staticmethod
    def format_breakdown_prompt(task: str) -> tuple[str, str]:
        return BreakdownPrompts.SYSTEM, BreakdownPrompts.USER.format(task=task)

    @staticmethod
    def format_icon_prompt(task: str) -> tuple[str, str]:
        return IconPrompts.SYSTEM, IconPrompts.USER.format(task=task)
