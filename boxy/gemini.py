from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from boxy.conversation import ConversationTurn, extract_reply, to_gemini_contents


logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """The model provider could not be reached or answered with garbage."""


class GeminiRestBackend:
    """Calls the Gemini ``generateContent`` REST endpoint directly."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_payload(self, turns: List[ConversationTurn]) -> Dict[str, Any]:
        return {"contents": to_gemini_contents(turns)}

    def generate(self, turns: List[ConversationTurn]) -> str:
        payload = self.build_payload(turns)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Gemini API call failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Gemini API returned a non-JSON body (status {response.status_code})"
            ) from exc

        if response.is_error:
            # The error body carries no candidates, so the caller gets the fallback.
            detail = data.get("error") if isinstance(data, dict) else data
            logger.warning(
                "Gemini API responded with status %s: %s",
                response.status_code,
                " ".join(str(detail).split())[:300],
            )
        return extract_reply(data)
