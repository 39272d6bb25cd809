"""Exception hierarchy for the module generator.

Validation failures are raised at the point a value is collected and are
recoverable in interactive sessions.  Render failures are collected by the
generator and reported together once every independent step has run.
"""

from __future__ import annotations


class ModgenError(Exception):
    """Base class for every error raised by modgen."""


class FormatError(ModgenError):
    """Raised when a single field value fails its shape/charset/enum rule."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(ModgenError):
    """Raised when a required field is absent in a non-interactive session."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f'The "{field}" option must be provided when running non-interactively.'
        )


class RenderError(ModgenError):
    """Raised when a template cannot be rendered or a file cannot be written."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(f"{target}: {message}")


class GenerationAborted(ModgenError):
    """Raised when the user declines the confirmation prompt."""

    def __init__(self) -> None:
        super().__init__("Command aborted")
