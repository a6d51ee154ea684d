"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a list of `ContentPart` objects.
Conversation history handed to ``create_message`` is a sequence of these; the
system prompt travels separately and is never part of the history.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Sequence, Union

from .content_part import ContentPart


# Message roles accepted in conversation history.
Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A role-tagged conversation message.

    Attributes:
        role: ``"user"`` or ``"assistant"``.
        content: Either a plain text string or a list of `ContentPart` items.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """Return a flattened string representation of the message content.

        Text parts are joined with newlines; non-text parts are represented by
        bracketed type tokens for compact logging.
        """
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text if p.text else f"[{p.type}]" for p in self.content)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Message":
        """Build a message from ``{"role": ..., "content": str | [part, ...]}``."""
        content = raw.get("content", "")
        if isinstance(content, str):
            return cls(role=raw["role"], content=content)
        parts: List[ContentPart] = []
        for item in content:
            if isinstance(item, ContentPart):
                parts.append(item)
            elif item.get("type") == "text":
                parts.append(ContentPart.of_text(item.get("text", "")))
            else:
                data = {k: v for k, v in item.items() if k != "type"}
                parts.append(ContentPart(type=item["type"], data=data))
        return cls(role=raw["role"], content=parts)


ConversationInput = Sequence[Message]


__all__ = [
    "Message",
    "Role",
    "ConversationInput",
]
