"""
Exception hierarchy.

Validation and setup errors stop a run before any font is written.
Codec errors are raised per format and end up in a GenerationOutcome.
"""


class MinifyFontError(Exception):
    """Base class for all minify-font errors."""


class ValidationError(MinifyFontError):
    """Invalid arguments, detected before any work begins."""


class UnknownCollection(ValidationError):
    """Requested character collection is not in the registry."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f'Invalid collection "{name}". Available: {", ".join(available)}'
        )


class SetupFailure(MinifyFontError):
    """Batch setup failed (unreadable input, output directory not creatable)."""


class InputNotFound(SetupFailure):
    """Input font file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} does not exist")


class CodecError(MinifyFontError):
    """A single conversion failed (unsupported format, bad codec options)."""
