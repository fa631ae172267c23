from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Raised when engine tunables violate their ordering or sign invariants.

    Only ever surfaced at construction time, never mid-game.
    """
