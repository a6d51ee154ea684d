"""NousResearch provider adapter."""

from .client import NousResearchProvider
from .models import NOUSRESEARCH_DEFAULT_MODEL, NOUSRESEARCH_MODELS

__all__ = ["NousResearchProvider", "NOUSRESEARCH_DEFAULT_MODEL", "NOUSRESEARCH_MODELS"]
