class InvalidPayload(ValueError):
    """The presentation payload is missing ``title`` or ``slides``."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ContentGenerationError(RuntimeError):
    """The content agent failed to produce a presentation payload."""
