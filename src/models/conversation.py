"""Conversation turn model for the chat assistant.

The caller owns the conversation and resends the whole history with
every request; nothing is stored server-side.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
