"""I/O layer - Backend HTTP access and client-local persisted state."""

from .api_client import ApiClient
from .tip_store import TipStore

__all__ = ["ApiClient", "TipStore"]
