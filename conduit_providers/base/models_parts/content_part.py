"""
Structured content part model for conversation messages.

This module defines the `ContentPart` dataclass and its associated
`ContentPartType` literal. Conversation history entries may carry multiple
parts (text, images, tool calls and their results). This object captures a
normalized, provider-agnostic shape that adapters translate into their wire
format.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional


# Known content part types carried by conversation history.
ContentPartType = Literal[
    "text",          # Plain text content
    "image",         # data: {"media_type", "data"} (base64) or {"url"}
    "tool_use",      # data: {"id", "name", "input"} issued by the assistant
    "tool_result",   # data: {"tool_use_id", "content"} returned by the user side
]


@dataclass(frozen=True)
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the content part, e.g., ``"text"`` or
            ``"tool_use"``.
        text: Textual content for ``text`` parts.
        data: Payload for non-text parts; keys depend on ``type`` (see
            :data:`ContentPartType`).
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, data: str, media_type: str = "image/png") -> "ContentPart":
        return cls(type="image", data={"media_type": media_type, "data": data})

    @classmethod
    def of_tool_use(cls, id: str, name: str, input: Dict[str, Any]) -> "ContentPart":  # noqa: A002 - wire names
        return cls(type="tool_use", data={"id": id, "name": name, "input": input})

    @classmethod
    def of_tool_result(cls, tool_use_id: str, content: Any) -> "ContentPart":
        return cls(type="tool_result", data={"tool_use_id": tool_use_id, "content": content})

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the object."""
        return asdict(self)


__all__ = [
    "ContentPart",
    "ContentPartType",
]
