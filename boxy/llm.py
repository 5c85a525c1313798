from __future__ import annotations

from typing import Any, List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from boxy.conversation import FALLBACK_REPLY, ConversationTurn
from boxy.gemini import UpstreamError
from config.settings import Settings


def to_lc_messages(turns: List[ConversationTurn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in turns:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.text))
        else:
            messages.append(AIMessage(content=turn.text))
    return messages


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # Gemini may hand back a list of content blocks
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)


class LangChainBackend:
    """Sends the conversation through a LangChain chat model."""

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    def generate(self, turns: List[ConversationTurn]) -> str:
        try:
            result = self.llm.invoke(to_lc_messages(turns))
        except Exception as exc:
            raise UpstreamError(f"Chat model call failed: {exc}") from exc
        text = _content_text(getattr(result, "content", ""))
        return text or FALLBACK_REPLY


def build_gemini_chat_model(settings: Settings) -> BaseChatModel:
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.gemini_api_key,
        temperature=settings.temperature,
        top_p=settings.top_p,
    )
