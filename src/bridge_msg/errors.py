"""Exceptions raised by the bridge message layer."""


class ValidationError(ValueError):
    """A message or claim field failed its constraint check.

    Raised before any signing attempt is made. Subclasses ``ValueError`` so
    callers that already treat bad input as ``ValueError`` keep working.

    Attributes:
        field: JSON name of the offending field
        reason: Human-readable description of the violated constraint
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class EncodingDefect(RuntimeError):
    """A well-formed value could not be rendered to sign bytes.

    This signals a broken internal invariant, not bad input. It must not be
    caught and retried.
    """
