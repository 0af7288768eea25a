"""Error taxonomy for the notification router."""

from __future__ import annotations


class NotifyError(Exception):
    """Base class for all router errors."""

    code = "NOTIFY_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(NotifyError):
    """A destination URL could not be decomposed."""

    code = "PARSE_ERROR"

    def __init__(self, message: str, url: object = None) -> None:
        super().__init__(message)
        self.url = url


class MissingParamError(ParseError):
    """A ``{name}`` placeholder has no value in the send params."""

    def __init__(self, key: str, url: str) -> None:
        super().__init__(f"Missing param '{key}' for URL placeholder", url)
        self.key = key


class ProviderNotFoundError(NotifyError):
    code = "PROVIDER_NOT_FOUND"

    def __init__(self, scheme: str) -> None:
        super().__init__(f"No provider found for scheme: {scheme}")
        self.scheme = scheme


class ProviderError(NotifyError):
    """A provider reported a failed delivery."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, provider_id: str) -> None:
        super().__init__(message)
        self.provider_id = provider_id


class ConfigError(NotifyError):
    """A configuration source is malformed."""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ValidationError(NotifyError):
    code = "VALIDATION_ERROR"
