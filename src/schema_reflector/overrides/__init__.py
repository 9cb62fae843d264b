"""Override store exports."""

from .override_store import OverrideKey, OverrideStore, override_identity

__all__ = ["OverrideKey", "OverrideStore", "override_identity"]
