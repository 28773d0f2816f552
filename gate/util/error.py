"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""


class ConfigurationError(UtilError):
    """A required setting is missing or unusable at startup."""

    def __init__(self, setting: str, reason: str = "must be configured"):
        self.setting = setting
        self.reason = reason
        super().__init__(f"{setting} {reason}")
