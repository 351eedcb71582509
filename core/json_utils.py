# core/json_utils.py
import json
import datetime
import uuid
from dataclasses import asdict, is_dataclass
from typing import Any, Dict

from models import TaskItem


class JsonSerializer:
    """JSON serialization for board snapshots and suggestions."""

    @staticmethod
    def is_serializable(obj: Any) -> bool:
        """Check if object is JSON serializable."""
        try:
            json.dumps(obj)
            return True
        except (TypeError, ValueError):
            return False

    @staticmethod
    def make_serializable(obj: Any) -> Any:
        """Convert object to JSON serializable format."""
        if isinstance(obj, TaskItem):
            return JsonSerializer._task_to_dict(obj)
        elif is_dataclass(obj) and not isinstance(obj, type):
            return JsonSerializer.make_serializable(asdict(obj))
        elif isinstance(obj, dict):
            return {k: JsonSerializer.make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [JsonSerializer.make_serializable(item) for item in obj]
        elif isinstance(obj, uuid.UUID):
            return str(obj)
        elif isinstance(obj, datetime.datetime):
            return obj.isoformat()
        elif isinstance(obj, (str, int, float, bool, type(None))):
            return obj
        else:
            return obj if JsonSerializer.is_serializable(obj) else str(obj)

    @staticmethod
    def _task_to_dict(task: TaskItem) -> Dict[str, Any]:
        # asdict() would recurse into subtasks without the derived fields.
        return {
            "id": str(task.id),
            "title": task.title,
            "is_subtask": task.is_subtask,
            "parent_id": str(task.parent_id) if task.parent_id else None,
            "completed": task.completed,
            "estimated_minutes": task.estimated_minutes,
            "order_index": task.order_index,
            "created_at": task.created_at.isoformat(),
            "icon": JsonSerializer.make_serializable(task.icon),
            "progress": task.progress_text,
            "subtasks": [JsonSerializer._task_to_dict(st) for st in task.sorted_subtasks],
        }

    @staticmethod
    def save_json(data: Any, file_path: str, indent: int = 2):
        """Save data as JSON file with proper serialization."""
        serializable_data = JsonSerializer.make_serializable(data)
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(serializable_data, f, indent=indent, ensure_ascii=False)
