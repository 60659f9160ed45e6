"""Randomized stand-ins for product recognition and label OCR."""

import asyncio
import random
import time
from datetime import date, timedelta

from smarteat.logging_config import get_logger
from smarteat.recognition.base import (
    DateExtractor,
    DateFormat,
    ExtractedDate,
    OCRResult,
    ProductRecognizer,
    RecognitionResult,
    RecognizedProduct,
)

logger = get_logger(__name__)


# (name, category, typical shelf life in days)
MOCK_PRODUCTS: list[tuple[str, str, int]] = [
    ("Apple", "fruits", 14),
    ("Banana", "fruits", 7),
    ("Orange", "fruits", 14),
    ("Tomato", "vegetables", 7),
    ("Lettuce", "vegetables", 5),
    ("Carrot", "vegetables", 21),
    ("Milk", "dairy", 7),
    ("Cheese", "dairy", 14),
    ("Yogurt", "dairy", 10),
    ("Chicken Breast", "meat", 3),
    ("Ground Beef", "meat", 3),
    ("Bread", "pantry", 7),
    ("Pasta", "pantry", 365),
    ("Rice", "pantry", 730),
    ("Cereal", "pantry", 180),
    ("Water Bottle", "beverages", 730),
    ("Soda", "beverages", 365),
    ("Potato Chips", "snacks", 90),
    ("Cookies", "snacks", 60),
    ("Ice Cream", "frozen", 30),
]

DATE_FORMAT_LABELS: dict[str, str] = {
    "best-before": "Best Before",
    "expires-on": "Expires",
    "use-by": "Use By",
}


class MockProductRecognizer(ProductRecognizer):
    """
    Recognizer that picks random products from a fixed table.

    Roughly 80% of images yield one to three confident products (0.70-0.95);
    the rest yield a single low-confidence guess (0.30-0.60).
    """

    ACCURACY = 0.8

    def __init__(self, rng: random.Random | None = None, delay: float = 0.0):
        self.rng = rng or random.Random()
        self.delay = delay

    @property
    def name(self) -> str:
        return "mock"

    async def recognize(self, image_uri: str) -> RecognitionResult:
        started = time.perf_counter()
        if self.delay:
            await asyncio.sleep(self.delay)

        products = self._generate()
        elapsed = time.perf_counter() - started
        logger.info(f"Recognized {len(products)} products in {image_uri} ({elapsed:.2f}s)")
        return RecognitionResult(products=products, processing_time=elapsed)

    def _generate(self) -> list[RecognizedProduct]:
        if self.rng.random() >= self.ACCURACY:
            name, category, days = self.rng.choice(MOCK_PRODUCTS)
            return [
                RecognizedProduct(
                    name=name,
                    category=category,
                    confidence=0.3 + self.rng.random() * 0.3,
                    suggested_expiration_days=days,
                    detected_quantity=self.rng.randint(1, 2),
                    detected_unit="piece",
                )
            ]

        products = []
        for _ in range(self.rng.randint(1, 3)):
            name, category, days = self.rng.choice(MOCK_PRODUCTS)
            quantity, unit = self._detect_quantity(category)
            products.append(
                RecognizedProduct(
                    name=name,
                    category=category,
                    confidence=0.7 + self.rng.random() * 0.25,
                    suggested_expiration_days=days,
                    detected_quantity=quantity,
                    detected_unit=unit,
                )
            )
        return products

    def _detect_quantity(self, category: str) -> tuple[int | None, str | None]:
        # Quantity is read off the photo about 70% of the time
        if self.rng.random() >= 0.7:
            return None, None
        if category in ("fruits", "vegetables"):
            return self.rng.randint(1, 5), "pieces"
        if category == "pantry":
            return self.rng.randint(1, 3), "pack" if self.rng.random() < 0.3 else "piece"
        return self.rng.randint(1, 2), "piece"


class MockDateExtractor(DateExtractor):
    """
    Date extractor that invents future label dates.

    Roughly 90% of images yield one or two confident dates (0.8-1.0); half
    of the rest yield one low-confidence date and the others nothing.
    """

    ACCURACY = 0.9

    def __init__(
        self,
        rng: random.Random | None = None,
        today: date | None = None,
        delay: float = 0.0,
    ):
        self.rng = rng or random.Random()
        self.today = today
        self.delay = delay

    @property
    def name(self) -> str:
        return "mock"

    async def extract_dates(self, image_uri: str) -> OCRResult:
        started = time.perf_counter()
        if self.delay:
            await asyncio.sleep(self.delay)

        dates: list[ExtractedDate] = []
        if self.rng.random() < self.ACCURACY:
            for _ in range(self.rng.randint(1, 2)):
                dates.append(self._make_date(0.8 + self.rng.random() * 0.2))
        elif self.rng.random() < 0.5:
            dates.append(self._make_date(0.4 + self.rng.random() * 0.3))

        elapsed = time.perf_counter() - started
        logger.info(f"Extracted {len(dates)} dates from {image_uri} ({elapsed:.2f}s)")
        return OCRResult(dates=dates, processing_time=elapsed)

    def _make_date(self, confidence: float) -> ExtractedDate:
        today = self.today or date.today()
        expires = today + timedelta(days=self.rng.randint(1, 30))
        label_format: DateFormat = self.rng.choice(list(DATE_FORMAT_LABELS))
        return ExtractedDate(
            date=expires,
            confidence=confidence,
            format=label_format,
            raw_text=f"{DATE_FORMAT_LABELS[label_format]}: {expires:%d/%m/%Y}",
        )
