"""Deepseek provider adapter."""

from .client import DeepseekProvider
from .models import DEEPSEEK_DEFAULT_MODEL, DEEPSEEK_MODELS

__all__ = ["DeepseekProvider", "DEEPSEEK_DEFAULT_MODEL", "DEEPSEEK_MODELS"]
