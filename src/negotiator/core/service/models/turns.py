"""Caller-supplied chat turns and their langchain message form."""

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
)
from pydantic import BaseModel, Field

from .constants import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER

__all__ = ["ChatTurn", "turn_to_message", "turns_to_messages"]

_ROLE_TO_MESSAGE: dict[str, type[BaseMessage]] = {
    ROLE_SYSTEM: SystemMessage,
    ROLE_USER: HumanMessage,
    ROLE_ASSISTANT: AIMessage,
}


class ChatTurn(BaseModel):
    """A single prior turn of the conversation.

    Roles are not validated; anything outside system/user/assistant is
    forwarded as a generic role message. Content is either plain text or
    a list of content blocks and is passed to the model as given.
    """

    role: str = Field(description="Message sender role")
    content: str | list[str | dict] = Field(description="Message content")


def turn_to_message(turn: ChatTurn) -> BaseMessage:
    message_cls = _ROLE_TO_MESSAGE.get(turn.role)
    if message_cls is None:
        return ChatMessage(role=turn.role, content=turn.content)
    return message_cls(content=turn.content)


def turns_to_messages(turns: list[ChatTurn]) -> list[BaseMessage]:
    return [turn_to_message(turn) for turn in turns]
