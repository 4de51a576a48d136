"""Config-file settings store adapter."""

from focusfriend.config import Config


class ConfigSettingsStore:
    """
    Settings read from focusfriend.conf.

    Implements SettingsStore protocol.
    """

    def __init__(self, config: Config):
        self.config = config

    def read_values(self) -> dict[str, str]:
        return dict(self.config.settings)
