# core/errors.py
"""Typed failures for the chat-completion calls.

Every error is terminal for the single call that raised it. Nothing here is
retried; the caller decides what to show or which fallback to use.
"""
from __future__ import annotations

from http import HTTPStatus


class MomentumError(Exception):
    """Base class for every failure raised by the decomposition pipeline."""


class EmptyTaskTitle(MomentumError, ValueError):
    def __init__(self):
        super().__init__("Task title must not be empty.")


class MissingCredential(MomentumError):
    def __init__(self):
        super().__init__("OpenAI API key is missing. Please set OPENAI_API_KEY in the environment.")


class NetworkFailure(MomentumError):
    """Transport-level failure; ``reason`` tells the cases apart."""

    NO_CONNECTION = "No internet connection. Please check your network settings."
    TIMED_OUT = "Request timed out. Please try again."
    HOST_UNREACHABLE = "Cannot connect to OpenAI servers. Please check your internet connection."
    CONNECTION_LOST = "Network connection was lost. Please check your internet and try again."
    TLS_FAILED = "Secure connection failed. This might be a firewall or VPN issue."

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Network error: {reason}")


class ServiceError(MomentumError):
    """Non-2xx reply from the chat-completion endpoint."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message or default_status_message(status_code)
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.status_code == 429:
            return (
                "Rate limit exceeded. This usually means:\n"
                "- Free trial expired - add a payment method\n"
                "- No credits - add credits to your account\n"
                "- Too many requests - wait a few moments\n\n"
                f"Details: {self.message}"
            )
        return f"OpenAI API error {self.status_code}: {self.message}"


class Unauthorized(ServiceError):
    def __init__(self, message: str | None = None):
        super().__init__(401, message)

    def _describe(self) -> str:
        return f"OpenAI rejected the API key: {self.message}"


class EmptyReply(MomentumError):
    def __init__(self):
        super().__init__("No content in OpenAI response")


class InvalidFormat(MomentumError):
    """The model's answer could not be shaped into the expected records."""

    def __init__(self, raw_content: str, detail: str = ""):
        self.raw_content = raw_content
        self.detail = detail
        msg = "Invalid response format from OpenAI."
        if detail:
            msg += f" {detail}"
        super().__init__(f"{msg}\n\nDetails: {raw_content}")


def default_status_message(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return f"HTTP {status_code}"
