# core/llm_utils.py
import errno
import logging
import socket
import ssl
from typing import Iterator, Optional

import httpx
import openai

from core.errors import (
    EmptyReply, MissingCredential, NetworkFailure, ServiceError, Unauthorized,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"


class LLMClient:
    """Chat-completion client with typed errors and no retries.

    ``send`` returns the model's answer text (``choices[0].message.content``),
    which the callers re-parse as JSON. A client built without an API key
    raises ``MissingCredential`` on every call and never touches the network.
    """

    def __init__(self, api_key: str = "", model: str = DEFAULT_MODEL,
                 base_url: str = DEFAULT_BASE_URL,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.model = model
        self._client: Optional[openai.AsyncOpenAI] = None
        if api_key:
            self._client = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                http_client=http_client,
            )

    @classmethod
    def from_settings(cls, settings, http_client: Optional[httpx.AsyncClient] = None) -> "LLMClient":
        """Build a client from a Settings object."""
        return cls(api_key=settings.api_key, model=settings.model,
                   base_url=settings.base_url, http_client=http_client)

    @property
    def has_credential(self) -> bool:
        return self._client is not None

    async def send(self, system_prompt: str, user_prompt: str, temperature: float,
                   timeout: float) -> str:
        """POST one chat completion in JSON mode and return the answer text."""
        if self._client is None:
            raise MissingCredential()

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        logger.debug("chat completion: model=%s temperature=%s timeout=%ss",
                     self.model, temperature, timeout)
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                response_format={"type": "json_object"},
                timeout=timeout,
            )
        except openai.AuthenticationError as e:
            raise Unauthorized(_error_message(e)) from e
        except openai.APIStatusError as e:
            raise ServiceError(e.status_code, _error_message(e)) from e
        except openai.APITimeoutError as e:
            raise NetworkFailure(NetworkFailure.TIMED_OUT) from e
        except openai.APIConnectionError as e:
            raise NetworkFailure(_network_reason(e)) from e

        return _extract_content(resp)

    async def close(self) -> None:
        """Close the underlying HTTP connections."""
        if self._client is not None:
            await self._client.close()


def _error_message(err: openai.APIStatusError) -> Optional[str]:
    # The SDK unwraps {"error": {...}} into ``body``; anything else yields None.
    body = err.body
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _exception_chain(err: BaseException) -> Iterator[BaseException]:
    seen = set()
    exc = err.__cause__ or err.__context__
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def _network_reason(err: openai.APIConnectionError) -> str:
    for exc in _exception_chain(err):
        if isinstance(exc, (httpx.TimeoutException, TimeoutError, socket.timeout)):
            return NetworkFailure.TIMED_OUT
        if isinstance(exc, ssl.SSLError):
            return NetworkFailure.TLS_FAILED
        if isinstance(exc, socket.gaierror):
            return NetworkFailure.HOST_UNREACHABLE
        if isinstance(exc, (ConnectionResetError, ConnectionAbortedError,
                            httpx.RemoteProtocolError, httpx.ReadError, httpx.WriteError)):
            return NetworkFailure.CONNECTION_LOST
        if isinstance(exc, ConnectionRefusedError):
            return NetworkFailure.HOST_UNREACHABLE
        if isinstance(exc, OSError) and exc.errno in (errno.ENETUNREACH, errno.ENETDOWN):
            return NetworkFailure.NO_CONNECTION

    for exc in _exception_chain(err):
        if isinstance(exc, httpx.ConnectError):
            return NetworkFailure.HOST_UNREACHABLE
    return str(err.__cause__ or err)


def _extract_content(resp) -> str:
    choices = getattr(resp, "choices", None)
    if not choices:
        raise EmptyReply()
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content is None:
        raise EmptyReply()
    return content
