"""Error types and user-facing error formatting for pactl."""

from __future__ import annotations

from typing import Any, Optional


class DecodeError(ValueError):
    """Base class for configuration decoding failures."""

    message = "Failed to decode configuration."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidEncoding(DecodeError):
    message = "Input string is not Base64 encoded."


class UnsupportedVersion(DecodeError):
    message = "Invalid configuration version."

    def __init__(self, version: int, detail: Optional[str] = None):
        super().__init__(detail)
        self.version = version


class MalformedPayload(DecodeError):
    message = "Invalid configuration format."


class MissingRequiredKey(DecodeError):
    message = "Missing P-256 public key in the configuration"


def format_decode_error(error: DecodeError, context: dict[str, Any] | None = None) -> str:
    """Format a one-line diagnostic for a failed decode."""
    context = context or {}
    source = context.get("source")
    prefix = f"{source}: " if source else ""
    return f"{prefix}{error.message}"


def suggest_troubleshooting_steps(error: Exception) -> list[str]:
    """Suggest troubleshooting steps based on the error."""
    suggestions = []

    if isinstance(error, InvalidEncoding):
        suggestions.extend([
            "Pass the configuration exactly as exported, without line breaks",
            "Quote the argument so the shell does not split or expand it",
            "Check that the value was not URL-encoded along the way",
        ])

    elif isinstance(error, UnsupportedVersion):
        suggestions.extend([
            f"Found configuration version {error.version}; only version 1 is supported",
            "Make sure the value comes from PowerAuth Server 1.5 or newer",
        ])

    elif isinstance(error, MalformedPayload):
        suggestions.extend([
            "The configuration looks truncated; copy it again from the server",
            "Verify that the application key and secret are present",
        ])

    elif isinstance(error, MissingRequiredKey):
        suggestions.extend([
            "The server did not export a P-256 master public key",
            "Check the application's master key pair on the server",
        ])

    if not suggestions:
        suggestions.extend([
            "Check the logs with -v/--verbose flag for more details",
            "Verify your settings file is correct",
        ])

    return suggestions


def format_config_error(error: Exception) -> str:
    """Format settings-related error messages."""
    error_str = str(error)

    if "not found" in error_str.lower() and "pactl_config" in error_str.lower():
        return (
            f"Settings file error: {error_str}\n"
            "Either fix PACTL_CONFIG or unset it to use ~/.config/pactl/config.yaml."
        )

    if "unknown configuration name" in error_str.lower():
        return (
            f"{error_str}\n"
            "Check the 'configs' section of your settings file."
        )

    return f"Configuration error: {error_str}"
