# decomposition.py
import logging
from typing import List, Optional

from models import SubtaskSuggestion
from prompts import PromptManager
from core.errors import EmptyTaskTitle
from core.llm_utils import LLMClient
from core.normalization import normalize_breakdown

logger = logging.getLogger(__name__)


# ----------------------- Task breakdown into subtasks ---------------------- #


class TaskDecomposer:
    """Splits a task title into ordered subtask suggestions with time estimates."""

    def __init__(self, llm_client: LLMClient, timeout: float = 30.0, temperature: float = 0.7):
        self.llm_client = llm_client
        self.timeout = timeout
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings, llm_client: Optional[LLMClient] = None) -> "TaskDecomposer":
        return cls(llm_client or LLMClient.from_settings(settings),
                   timeout=settings.breakdown_timeout,
                   temperature=settings.breakdown_temperature)

    async def breakdown(self, task_title: str) -> List[SubtaskSuggestion]:
        """One chat-completion call, normalized into a non-empty list.

        The 2-4 count and the 15-60 minute range are only asked for in the
        prompt; whatever the model returns is kept in its original order.
        """
        if not task_title or not task_title.strip():
            raise EmptyTaskTitle()

        system, user = PromptManager.format_breakdown_prompt(task_title)
        content = await self.llm_client.send(system, user,
                                             temperature=self.temperature,
                                             timeout=self.timeout)
        subtasks = normalize_breakdown(content)
        logger.debug("breakdown produced %d subtasks", len(subtasks))
        return subtasks
