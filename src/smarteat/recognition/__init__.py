"""Product recognition and expiration date collaborators."""

from smarteat.recognition.base import (
    DateExtractor,
    ExtractedDate,
    OCRResult,
    ProductRecognizer,
    RecognitionResult,
    RecognizedProduct,
    validate_extracted_dates,
    validate_recognition,
)
from smarteat.recognition.expiry import (
    ExpiryResolution,
    ExpiryResolver,
    ShelfLife,
    parse_date_string,
)
from smarteat.recognition.mock import MockDateExtractor, MockProductRecognizer

__all__ = [
    "DateExtractor",
    "ExpiryResolution",
    "ExpiryResolver",
    "ExtractedDate",
    "MockDateExtractor",
    "MockProductRecognizer",
    "OCRResult",
    "ProductRecognizer",
    "RecognitionResult",
    "RecognizedProduct",
    "ShelfLife",
    "parse_date_string",
    "validate_extracted_dates",
    "validate_recognition",
]
