import asyncio
import json
import uuid

import pytest

from core.errors import EmptyTaskTitle, InvalidFormat, NetworkFailure
from core.json_utils import JsonSerializer
from models import IconSuggestion, SubtaskSuggestion, TaskItem
from task_board import AlreadyBrokenDown, BreakdownInProgress, TaskBoard


class FakeDecomposer:
    def __init__(self, result=None, error=None, gate=None):
        self.result = result or [SubtaskSuggestion("Step one", 20), SubtaskSuggestion("Step two", 45)]
        self.error = error
        self.gate = gate
        self.calls = []

    async def breakdown(self, task_title):
        self.calls.append(task_title)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class FakeClassifier:
    def __init__(self, icon=None, error=None):
        self.icon = icon
        self.error = error

    async def select_icon(self, task_title):
        if self.error is not None:
            raise self.error
        return self.icon


class CountingFeedback:
    def __init__(self):
        self.events = []

    def impact(self):
        self.events.append("impact")

    def success(self):
        self.events.append("success")

    def error(self):
        self.events.append("error")


def test_add_task_assigns_order():
    board = TaskBoard()
    first = board.add_task("Plan trip")
    second = board.add_task("  Water plants  ")
    assert [t.order_index for t in board.tasks] == [0, 1]
    assert second.title == "Water plants"
    assert first.progress_text is None


def test_add_task_rejects_empty_title():
    with pytest.raises(EmptyTaskTitle):
        TaskBoard().add_task("   ")


def test_break_down_creates_ordered_subtasks():
    feedback = CountingFeedback()
    board = TaskBoard(decomposer=FakeDecomposer(), feedback=feedback)
    task = board.add_task("Write report")

    subtasks = asyncio.run(board.break_down(task))

    assert [(st.title, st.estimated_minutes, st.order_index) for st in subtasks] == [
        ("Step one", 20, 0), ("Step two", 45, 1),
    ]
    assert all(st.is_subtask and st.parent_id == task.id for st in subtasks)
    assert task.progress_text == "0/2 done"
    assert not task.is_breaking_down
    assert feedback.events[-1] == "success"


def test_second_breakdown_while_in_flight_is_refused():
    async def scenario():
        gate = asyncio.Event()
        decomposer = FakeDecomposer(gate=gate)
        board = TaskBoard(decomposer=decomposer)
        task = board.add_task("Move house")

        first = asyncio.ensure_future(board.break_down(task))
        await asyncio.sleep(0)
        assert task.is_breaking_down
        with pytest.raises(BreakdownInProgress):
            await board.break_down(task)
        gate.set()
        await first
        return decomposer.calls

    assert asyncio.run(scenario()) == ["Move house"]


def test_different_tasks_break_down_concurrently():
    async def scenario():
        board = TaskBoard(decomposer=FakeDecomposer())
        a = board.add_task("A")
        b = board.add_task("B")
        await asyncio.gather(board.break_down(a), board.break_down(b))
        return a, b

    a, b = asyncio.run(scenario())
    assert a.total_subtasks_count == b.total_subtasks_count == 2


def test_already_broken_down():
    board = TaskBoard(decomposer=FakeDecomposer())
    task = board.add_task("Bake cake")
    asyncio.run(board.break_down(task))
    with pytest.raises(AlreadyBrokenDown):
        asyncio.run(board.break_down(task))


def test_failed_breakdown_resets_state_and_reraises():
    feedback = CountingFeedback()
    board = TaskBoard(decomposer=FakeDecomposer(error=InvalidFormat("{}")), feedback=feedback)
    task = board.add_task("Learn piano")

    with pytest.raises(InvalidFormat):
        asyncio.run(board.break_down(task))
    assert not task.is_breaking_down
    assert task.subtasks == []
    assert feedback.events[-1] == "error"


def test_assign_icon_uses_classifier_then_fallback():
    board = TaskBoard(classifier=FakeClassifier(icon=IconSuggestion("airplane", "teal")))
    task = board.add_task("Book a flight to Tokyo")
    assert asyncio.run(board.assign_icon(task)) == "ai"
    assert task.icon == IconSuggestion("airplane", "teal")

    board.classifier = FakeClassifier(error=NetworkFailure(NetworkFailure.NO_CONNECTION))
    assert asyncio.run(board.assign_icon(task)) == "fallback"
    assert task.icon == IconSuggestion("book.fill", "teal")


def test_complete_subtask_and_sorting():
    board = TaskBoard(decomposer=FakeDecomposer(result=[
        SubtaskSuggestion("one"), SubtaskSuggestion("two"), SubtaskSuggestion("three"),
    ]))
    task = board.add_task("Garden")
    one, two, three = asyncio.run(board.break_down(task))

    board.complete_subtask(one)
    assert task.progress_text == "1/3 done"
    assert [st.title for st in task.sorted_subtasks] == ["two", "three", "one"]


def test_delete_task_and_subtask():
    board = TaskBoard(decomposer=FakeDecomposer())
    keep = board.add_task("Keep")
    gone = board.add_task("Gone")
    first, _ = asyncio.run(board.break_down(keep))

    board.delete_task(first)
    assert [st.title for st in keep.subtasks] == ["Step two"]
    board.delete_task(gone)
    assert board.tasks == [keep]


def test_delete_subtask_not_on_board():
    board = TaskBoard()
    board.add_task("Keep")
    orphan = TaskItem(title="orphan", is_subtask=True, parent_id=uuid.uuid4())
    with pytest.raises(ValueError, match="orphan"):
        board.delete_task(orphan)
    assert [t.title for t in board.tasks] == ["Keep"]


def test_suggestions_serialize_without_a_board():
    data = JsonSerializer.make_serializable(
        [SubtaskSuggestion("Pack a bag", 20), IconSuggestion("airplane", "blue")]
    )
    assert data == [
        {"title": "Pack a bag", "estimated_minutes": 20},
        {"symbol": "airplane", "color": "blue"},
    ]


def test_snapshot_is_json_ready():
    board = TaskBoard(decomposer=FakeDecomposer())
    task = board.add_task("Write report")
    task.icon = IconSuggestion("pencil", "purple")
    asyncio.run(board.break_down(task))

    snap = board.snapshot()
    json.dumps(snap)
    assert snap[0]["title"] == "Write report"
    assert snap[0]["icon"] == {"symbol": "pencil", "color": "purple"}
    assert snap[0]["progress"] == "0/2 done"
    assert [st["order_index"] for st in snap[0]["subtasks"]] == [0, 1]
    assert snap[0]["subtasks"][0]["parent_id"] == str(task.id)


def test_break_down_requires_decomposer():
    board = TaskBoard()
    with pytest.raises(RuntimeError):
        asyncio.run(board.break_down(TaskItem(title="x")))
