# icon_classifier.py
import logging
from typing import Optional, Tuple

from models import IconSuggestion
from prompts import PromptManager
from core.errors import EmptyTaskTitle, MomentumError
from core.llm_utils import LLMClient
from core.normalization import decode_icon

logger = logging.getLogger(__name__)


# ------------- Icon selection: AI classifier + keyword fallback ------------ #


class IconClassifier:
    """Asks the model for an SF Symbol name and a palette color.

    Failures propagate; combine with ``fallback_icon`` (see ``select_icon_or_fallback``)
    when a best-effort icon is wanted.
    """

    def __init__(self, llm_client: LLMClient, timeout: float = 10.0, temperature: float = 0.3):
        self.llm_client = llm_client
        self.timeout = timeout
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings, llm_client: Optional[LLMClient] = None) -> "IconClassifier":
        return cls(llm_client or LLMClient.from_settings(settings),
                   timeout=settings.icon_timeout,
                   temperature=settings.icon_temperature)

    async def select_icon(self, task_title: str) -> IconSuggestion:
        if not task_title or not task_title.strip():
            raise EmptyTaskTitle()
        system, user = PromptManager.format_icon_prompt(task_title)
        content = await self.llm_client.send(system, user,
                                             temperature=self.temperature,
                                             timeout=self.timeout)
        return decode_icon(content)


# Categories are checked top to bottom: sports, communication, work,
# errands, health, travel, outdoors, finance, entertainment.
SYMBOL_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    # Sports
    (("golf", "高爾夫"), "figure.golf"),
    (("gym", "workout", "exercise", "運動"), "figure.run"),
    (("yoga", "瑜伽"), "figure.mind.and.body"),
    (("swim", "游泳"), "figure.pool.swim"),
    # Communication
    (("call", "phone", "電話"), "phone.fill"),
    (("message", "text", "訊息", "聊天"), "message.fill"),
    (("email", "mail", "郵件"), "envelope.fill"),
    (("meeting", "會議"), "person.2.fill"),
    (("video", "zoom", "視訊"), "video.fill"),
    # Work & productivity
    (("write", "寫", "編輯"), "pencil"),
    (("read", "閱讀", "book"), "book.fill"),
    (("research", "search", "搜尋", "研究"), "magnifyingglass"),
    (("review", "檢閱", "check"), "checkmark.circle.fill"),
    (("plan", "規劃", "schedule"), "calendar"),
    (("presentation", "簡報"), "rectangle.on.rectangle"),
    (("code", "程式", "develop"), "chevron.left.forwardslash.chevron.right"),
    # Home & errands
    (("buy", "購買", "shop"), "cart.fill"),
    (("cook", "烹飪", "meal"), "fork.knife"),
    (("clean", "清潔"), "sparkles"),
    (("laundry", "洗衣"), "washer.fill"),
    (("fix", "repair", "修理"), "wrench.fill"),
    # Health
    (("doctor", "hospital", "醫生", "醫院"), "cross.case.fill"),
    (("medicine", "藥", "pill"), "pills.fill"),
    (("sleep", "睡眠", "rest"), "bed.double.fill"),
    # Travel
    (("flight", "fly", "航班", "飛"), "airplane"),
    (("drive", "car", "開車"), "car.fill"),
    (("train", "火車"), "train.side.front.car"),
    # Weather & outdoors
    (("weather", "天氣"), "sun.max.fill"),
    (("walk", "散步", "hike"), "figure.walk"),
    # Finance
    (("pay", "payment", "付款", "bill"), "dollarsign.circle.fill"),
    (("bank", "銀行"), "building.columns.fill"),
    # Entertainment
    (("movie", "film", "電影"), "film.fill"),
    (("music", "音樂"), "music.note"),
    (("game", "遊戲"), "gamecontroller.fill"),
)

COLOR_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("golf", "gym", "workout", "exercise", "運動", "高爾夫"), "orange"),
    (("call", "phone", "message", "email", "mail", "meeting",
      "電話", "訊息", "郵件", "會議"), "blue"),
    (("write", "read", "research", "code", "寫", "閱讀", "程式"), "purple"),
    (("buy", "shop", "購買"), "green"),
    (("cook", "meal", "烹飪"), "brown"),
    (("doctor", "hospital", "medicine", "醫生", "醫院"), "red"),
    (("flight", "fly", "drive", "航班", "開車"), "teal"),
    (("pay", "bank", "付款", "銀行"), "green"),
    (("movie", "music", "game", "電影", "音樂", "遊戲"), "pink"),
)

DEFAULT_SYMBOL = "checkmark"
DEFAULT_COLOR = "red"


def _lookup(title: str, table, default: str) -> str:
    lowered = title.lower()
    for keywords, value in table:
        if any(kw in lowered for kw in keywords):
            return value
    return default


def fallback_icon(task_title: str) -> IconSuggestion:
    """Deterministic, network-free icon for a title; never fails."""
    return IconSuggestion(
        symbol=_lookup(task_title, SYMBOL_KEYWORDS, DEFAULT_SYMBOL),
        color=_lookup(task_title, COLOR_KEYWORDS, DEFAULT_COLOR),
    )


async def select_icon_or_fallback(classifier: Optional[IconClassifier],
                                  task_title: str) -> Tuple[IconSuggestion, str]:
    """Try the classifier, fall back to the keyword table on any pipeline error.

    Returns the icon and where it came from ("ai" or "fallback").
    """
    if classifier is not None:
        try:
            return await classifier.select_icon(task_title), "ai"
        except MomentumError as e:
            logger.warning("icon classification failed, using keyword fallback: %s",
                           type(e).__name__)
    return fallback_icon(task_title), "fallback"
