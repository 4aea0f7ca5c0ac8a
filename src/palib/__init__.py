"""Core library for the legacy PowerAuth configuration helper.

Contains the binary reader, the configuration decoder and shared utilities used by the CLI.
"""

__all__ = [
    "config",
    "decoder",
    "errors",
    "reader",
]
