from __future__ import annotations

import logging
import time
from typing import List, Optional

import httpx

from boxy.conversation import Message, to_turns


logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "🤖 (No response)"


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession:
    """Client-side conversation state, talking to the ``/api/gemini`` proxy.

    The server keeps nothing between requests, so every send carries the
    whole history.
    """

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.messages: List[Message] = []
        self.loading = False
        self._client = client or httpx.Client(timeout=60.0)

    def clear(self) -> None:
        self.messages = []

    def close(self) -> None:
        self._client.close()

    def send(self, text: str) -> Optional[Message]:
        """Send ``text`` and append the model's answer.

        Returns the AI message, or ``None`` when the input was blank or the
        request failed. A failed request keeps the user message in history.
        """
        if not text.strip():
            return None

        user_message = Message(id=_now_ms(), sender="user", text=text)
        self.messages.append(user_message)
        self.loading = True

        conversation = [t.model_dump() for t in to_turns(self.messages)]
        try:
            response = self._client.post(
                f"{self.base_url}/api/gemini",
                json={"conversation": conversation},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching AI response: %s", exc)
            return None
        finally:
            self.loading = False

        reply = data.get("reply") if isinstance(data, dict) else None
        ai_message = Message(
            id=user_message.id + 1,
            sender="ai",
            text=reply or NO_RESPONSE_TEXT,
        )
        self.messages.append(ai_message)
        return ai_message
