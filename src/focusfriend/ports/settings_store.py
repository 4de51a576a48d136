"""Settings store interface."""

from typing import Protocol


class SettingsStore(Protocol):
    """Interface for reading user-configured planning settings."""

    def read_values(self) -> dict[str, str]:
        """Read raw setting values keyed by setting name."""
        ...
