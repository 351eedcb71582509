import pytest

from models import IconSuggestion, TaskItem
from utils import format_duration, render_checklist, save_markdown


@pytest.mark.parametrize("minutes, text", [
    (15, "15 mins"),
    (60, "1 hr"),
    (90, "1 hr 30 mins"),
    (120, "2 hr"),
])
def test_format_duration(minutes, text):
    assert format_duration(minutes) == text


def test_render_checklist_puts_open_subtasks_first(tmp_path):
    task = TaskItem(title="Trip", icon=IconSuggestion("airplane", "teal"))
    task.subtasks = [
        TaskItem(title="Pack", is_subtask=True, parent_id=task.id, order_index=0, completed=True),
        TaskItem(title="Book hotel", is_subtask=True, parent_id=task.id, order_index=1,
                 estimated_minutes=75),
    ]
    text = render_checklist([task])
    assert text.splitlines() == [
        "- [ ] Trip (airplane, teal) - 1/2 done",
        "  - [ ] Book hotel (1 hr 15 mins)",
        "  - [x] Pack (30 mins)",
    ]

    path = tmp_path / "board.md"
    save_markdown(text, str(path))
    assert path.read_text(encoding="utf-8").endswith("Pack (30 mins)\n")
