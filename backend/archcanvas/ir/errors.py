class DiagramGenerationError(Exception):
    """Base class for failures on the generation path."""


class UpstreamError(DiagramGenerationError):
    """The text-generation API was unreachable or answered non-2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseFormatError(DiagramGenerationError, ValueError):
    def __init__(self, message: str = "Invalid response format from AI"):
        super().__init__(message)
