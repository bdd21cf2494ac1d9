"""
Exception types raised while generating bridge fragments
"""


class OverrideValueError(ValueError):
    """A naming override attribute is present but its value is not a string literal"""

    def __init__(self, message: str, *, span=None):
        super().__init__(message)
        self.span = span


class DeclarationError(ValueError):
    """
    User-facing error for a foreign function that cannot be classified.

    Raised by the ``parse`` constructors of the parsed declaration records, so
    the CLI can point at the offending declaration instead of crashing.
    """

    def __init__(self, message: str, *, span=None):
        super().__init__(message)
        self.span = span


class SyntaxEmbedError(SyntaxError):
    """A declaration could not be re-embedded inside a synthesized extern block"""

    def __init__(self, message: str, *, span=None, filename: str | None = None):
        lineno = span.line if span is not None else None
        offset = span.column if span is not None else None
        super().__init__(message, (filename, lineno, offset, None))
        self.span = span


class DuplicateWrapperNameError(ValueError):
    """Two bridge declarations expose the same symbol on the same type"""
