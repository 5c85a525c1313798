from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal

from pydantic import BaseModel, Field, field_validator


FALLBACK_REPLY = "I couldn't generate a response."

USER_ROLES = {"user", "human"}
MODEL_ROLES = {"model", "assistant", "ai", "bot"}


def normalize_role(role: str) -> str:
    value = (role or "").strip().lower()
    if value in USER_ROLES:
        return "user"
    if value in MODEL_ROLES:
        return "model"
    raise ValueError(f"Unknown conversation role: {role!r}")


class Message(BaseModel):
    """A message as the chat window shows it."""

    id: int
    sender: Literal["user", "ai"]
    text: str


class ConversationTurn(BaseModel):
    role: str = Field(..., description="'user' or 'model'")
    text: str

    @field_validator("role")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_role(value)


def to_turns(messages: Iterable[Message]) -> List[ConversationTurn]:
    return [
        ConversationTurn(role="user" if m.sender == "user" else "model", text=m.text)
        for m in messages
    ]


def to_gemini_contents(turns: Iterable[ConversationTurn]) -> List[Dict[str, Any]]:
    return [{"role": t.role, "parts": [{"text": t.text}]} for t in turns]


def extract_reply(data: Any) -> str:
    """Pull the first candidate's text out of a generateContent response.

    Any missing link in ``candidates[0].content.parts[0].text`` (or an empty
    string at the end of it) gives the fallback reply.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_REPLY
    if not isinstance(text, str) or not text:
        return FALLBACK_REPLY
    return text
