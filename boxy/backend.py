from __future__ import annotations

from typing import List, Protocol

from boxy.conversation import ConversationTurn
from boxy.gemini import GeminiRestBackend
from boxy.llm import LangChainBackend, build_gemini_chat_model
from config.settings import Settings


class ChatBackend(Protocol):
    def generate(self, turns: List[ConversationTurn]) -> str: ...


def build_backend(settings: Settings) -> ChatBackend:
    if not settings.gemini_api_key:
        raise RuntimeError(
            "GEMINI_API_KEY not set. Please configure it in environment or .env"
        )

    if settings.chat_backend == "rest":
        return GeminiRestBackend(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout=settings.request_timeout,
        )
    if settings.chat_backend == "langchain":
        return LangChainBackend(build_gemini_chat_model(settings))
    raise RuntimeError(f"Unknown CHAT_BACKEND: {settings.chat_backend!r}")
