"""Model DTO parts (one class per module)."""

from .content_part import ContentPart, ContentPartType
from .message import ConversationInput, Message, Role
from .model_info import ModelInfo, ResolvedModel

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ConversationInput",
    "ModelInfo",
    "ResolvedModel",
]
