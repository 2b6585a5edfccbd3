"""Utility layer errors."""


class ConfigurationError(Exception):
    """Raised when a component is resolved without the settings it needs.

    Attributes:
        setting: Environment variable that has to be set
    """

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"{setting} must be configured")
