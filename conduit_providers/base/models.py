"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``conduit_providers.base.models_parts`` to preserve stable imports.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import ConversationInput, Message, Role
from .models_parts.model_info import ModelInfo, ResolvedModel

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ConversationInput",
    "ModelInfo",
    "ResolvedModel",
]
