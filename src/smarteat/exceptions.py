"""Exceptions raised by the smarteat service layer."""


class SmartEatError(Exception):
    """Base exception for smarteat errors."""


class SummaryNotFoundError(SmartEatError):
    """Raised when a purchase summary id is unknown."""

    def __init__(self, summary_id: str):
        super().__init__(f"Purchase summary not found: {summary_id}")
        self.summary_id = summary_id


class SummaryCompletedError(SmartEatError):
    """Raised when changing a purchase summary whose shopping trip is complete."""

    def __init__(self, summary_id: str):
        super().__init__(f"Purchase summary already completed: {summary_id}")
        self.summary_id = summary_id


class RecognitionError(SmartEatError):
    """Raised by a recognizer or date extractor that could not process an image."""

    def __init__(self, message: str, image_uri: str | None = None):
        super().__init__(message)
        self.image_uri = image_uri
