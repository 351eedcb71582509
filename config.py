# config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv, find_dotenv

from core.llm_utils import DEFAULT_MODEL, DEFAULT_BASE_URL


@dataclass(frozen=True)
class Settings:
    api_key: str = field(default="", repr=False)
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    breakdown_timeout: float = 30.0     # seconds
    icon_timeout: float = 10.0
    breakdown_temperature: float = 0.7
    icon_temperature: float = 0.3

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def __repr__(self) -> str:
        key = "***" if self.api_key else "<unset>"
        return (f"Settings(api_key={key}, model={self.model!r}, base_url={self.base_url!r}, "
                f"breakdown_timeout={self.breakdown_timeout}, icon_timeout={self.icon_timeout})")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment, after loading a .env file if one exists."""
    if env_file:
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        model=os.getenv("MOMENTUM_MODEL") or DEFAULT_MODEL,
        base_url=os.getenv("MOMENTUM_BASE_URL") or DEFAULT_BASE_URL,
        breakdown_timeout=_float_env("MOMENTUM_BREAKDOWN_TIMEOUT", 30.0),
        icon_timeout=_float_env("MOMENTUM_ICON_TIMEOUT", 10.0),
        breakdown_temperature=_float_env("MOMENTUM_BREAKDOWN_TEMPERATURE", 0.7),
        icon_temperature=_float_env("MOMENTUM_ICON_TEMPERATURE", 0.3),
    )
