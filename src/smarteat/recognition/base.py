"""Interfaces for product recognition and label date extraction."""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from smarteat.schemas import clamp_unit

DateFormat = Literal["best-before", "expires-on", "use-by"]


class RecognizedProduct(BaseModel):
    """A product identified in a photo."""

    name: str
    category: str = "other"
    confidence: float
    suggested_expiration_days: int | None = None
    barcode: str | None = None
    detected_quantity: float | None = None
    detected_unit: str | None = None

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return clamp_unit(value)


class ExtractedDate(BaseModel):
    """A date read from a product label."""

    date: dt.date
    confidence: float
    format: DateFormat = "best-before"
    raw_text: str = ""

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return clamp_unit(value)


class RecognitionResult(BaseModel):
    """Products recognized in one image."""

    products: list[RecognizedProduct] = Field(default_factory=list)
    processing_time: float = 0.0  # seconds

    @property
    def confidence(self) -> float:
        """Mean product confidence; 0 when nothing was recognized."""
        if not self.products:
            return 0.0
        return sum(p.confidence for p in self.products) / len(self.products)


class OCRResult(BaseModel):
    """Dates extracted from one image."""

    dates: list[ExtractedDate] = Field(default_factory=list)
    processing_time: float = 0.0  # seconds

    @property
    def best(self) -> ExtractedDate | None:
        """Highest-confidence date, first one on ties."""
        best: ExtractedDate | None = None
        for extracted in self.dates:
            if best is None or extracted.confidence > best.confidence:
                best = extracted
        return best


class ProductRecognizer(ABC):
    """Abstract base class for product recognition backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return recognizer name for logging and identification."""
        pass

    @abstractmethod
    async def recognize(self, image_uri: str) -> RecognitionResult:
        """
        Recognize products in an image.

        Args:
            image_uri: Location of the photo.

        Returns:
            RecognitionResult with zero or more products.

        Raises:
            RecognitionError: If the image could not be processed.
        """
        pass


class DateExtractor(ABC):
    """Abstract base class for expiration-date extraction backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return extractor name for logging and identification."""
        pass

    @abstractmethod
    async def extract_dates(self, image_uri: str) -> OCRResult:
        """
        Extract printed dates from an image.

        Args:
            image_uri: Location of the photo.

        Returns:
            OCRResult with zero or more dates.

        Raises:
            RecognitionError: If the image could not be processed.
        """
        pass


def validate_recognition(products: list[RecognizedProduct]) -> bool:
    """Check recognized products carry plausible names and confidence."""
    return all(
        0.3 <= product.confidence <= 1.0
        and len(product.name) > 0
        and (product.suggested_expiration_days is None or product.suggested_expiration_days > 0)
        for product in products
    )


def validate_extracted_dates(dates: list[ExtractedDate], today: dt.date | None = None) -> bool:
    """Check extracted dates are confident enough, in the future and labelled."""
    today = today or dt.date.today()
    return all(
        0.3 <= extracted.confidence <= 1.0
        and extracted.date > today
        and len(extracted.raw_text) > 0
        for extracted in dates
    )
