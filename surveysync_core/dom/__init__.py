"""Document query adapters."""

from .base import DocumentNode, SurveyDocument
from .soup import SoupDocument, SoupNode
from .live import snapshot_live_page

__all__ = [
    "DocumentNode",
    "SurveyDocument",
    "SoupDocument",
    "SoupNode",
    "snapshot_live_page",
]
