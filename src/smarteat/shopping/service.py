"""Post-shopping workflow: seed, scan, reconcile, confirm and complete a trip."""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from smarteat.config import Settings
from smarteat.exceptions import RecognitionError, SummaryCompletedError, SummaryNotFoundError
from smarteat.logging_config import LoggingContext, get_logger
from smarteat.recognition.base import DateExtractor, OCRResult, ProductRecognizer
from smarteat.recognition.expiry import ExpiryResolver
from smarteat.schemas import (
    GroceryList,
    InventoryItem,
    PurchaseItem,
    PurchaseSummary,
    utcnow,
)
from smarteat.shopping.reconcile import (
    PURCHASED_STATUSES,
    ReconciliationResult,
    reconcile,
    summarize_counts,
)
from smarteat.shopping.storage import PurchaseSummaryRepository

logger = get_logger(__name__)

# Grocery-list items in these states can still be matched by a later scan
OPEN_STATUSES = frozenset({"pending", "not_purchased"})

# Assigned by the service for manually added items
RESERVED_ADDITIONAL_FIELDS = frozenset({"id", "source", "status"})


class PostShoppingConfig(BaseModel):
    """Tunables of the post-shopping workflow."""

    auto_confirm_threshold: float = Field(0.8, ge=0.0, le=1.0)
    require_expiry_confirmation: bool = True
    default_scanned_unit: str = "piece"

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostShoppingConfig":
        return cls(
            auto_confirm_threshold=settings.auto_confirm_threshold,
            require_expiry_confirmation=settings.require_expiry_confirmation,
            default_scanned_unit=settings.default_scanned_unit,
        )


class ScanResult(BaseModel):
    """Outcome of processing one photo of purchased items."""

    success: bool
    items: list[PurchaseItem] = Field(default_factory=list)
    reconciliation: ReconciliationResult | None = None
    confidence: float = 0.0
    processing_time: float = 0.0  # seconds
    error: str | None = None


def build_scanned_items(
    recognition: Iterable[Any],
    ocr: OCRResult,
    resolver: ExpiryResolver,
    config: PostShoppingConfig,
    image_uri: str | None = None,
    today: date | None = None,
) -> list[PurchaseItem]:
    """
    Turn recognized products into observed purchase items.

    Products at or above the auto-confirm threshold are confirmed, unless
    their expiration date still needs the user and confirmation is required.

    Args:
        recognition: RecognizedProduct records from one image.
        ocr: Dates read from the same image.
        resolver: Expiration date resolver.
        config: Workflow tunables.
        image_uri: Photo the products were seen in.
        today: Reference day for expiry resolution.

    Returns:
        One scanned PurchaseItem per product.
    """
    items = []
    for product in recognition:
        resolution = resolver.resolve(product.name, ocr.dates, product.category, today)

        confident = product.confidence >= config.auto_confirm_threshold
        needs_date = config.require_expiry_confirmation and resolution.requires_user_input
        status = "confirmed" if confident and not needs_date else "pending"

        items.append(
            PurchaseItem(
                name=product.name,
                quantity=product.detected_quantity or 1,
                unit=product.detected_unit or config.default_scanned_unit,
                category=product.category,
                confidence=product.confidence,
                source="scanned",
                status=status,
                expiration_date=resolution.final_date,
                image_uri=image_uri,
            )
        )
    return items


class PostShoppingService:
    """
    Owns the purchase summary of each shopping trip.

    A summary is seeded from a grocery list, updated by scans, manual
    additions and confirmations, and becomes read-only once completed.
    Callers must serialize writes to one summary.
    """

    def __init__(
        self,
        repository: PurchaseSummaryRepository,
        recognizer: ProductRecognizer | None = None,
        date_extractor: DateExtractor | None = None,
        resolver: ExpiryResolver | None = None,
        config: PostShoppingConfig | None = None,
    ):
        self.repository = repository
        self.recognizer = recognizer
        self.date_extractor = date_extractor
        self.resolver = resolver or ExpiryResolver()
        self._config = config or PostShoppingConfig()

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def config(self) -> PostShoppingConfig:
        return self._config.model_copy()

    def update_config(self, **changes: Any) -> PostShoppingConfig:
        """Apply configuration changes, validating the result."""
        self._config = PostShoppingConfig.model_validate(
            {**self._config.model_dump(), **changes}
        )
        logger.info(f"Post-shopping config updated: {sorted(changes)}")
        return self.config

    # =========================================================================
    # Summary lifecycle
    # =========================================================================

    def start(self, grocery_list: GroceryList) -> PurchaseSummary:
        """
        Start a post-shopping check for a grocery list.

        Args:
            grocery_list: The list the shopper bought from.

        Returns:
            New summary with every list item pending.
        """
        summary = PurchaseSummary(
            grocery_list_id=grocery_list.id,
            items=[PurchaseItem.from_grocery_item(item) for item in grocery_list.items],
        )
        self._refresh(summary)

        with LoggingContext(summary_id=summary.id, grocery_list_id=grocery_list.id):
            logger.info(f"Started post-shopping check with {len(summary.items)} items")
        return summary

    def get_summary(self, summary_id: str) -> PurchaseSummary | None:
        return self.repository.get(summary_id)

    def list_summaries(self) -> list[PurchaseSummary]:
        """All summaries, newest shopping trip first."""
        return self.repository.list_all()

    async def process_scan(
        self,
        summary_id: str,
        image_uri: str,
        today: date | None = None,
    ) -> ScanResult:
        """
        Recognize purchased items in a photo and reconcile them.

        Recognition failures leave the summary untouched and are reported
        through an unsuccessful ScanResult.

        Raises:
            SummaryNotFoundError: If the summary does not exist.
            SummaryCompletedError: If the trip is already complete.
        """
        summary = self._load_open(summary_id)
        if self.recognizer is None or self.date_extractor is None:
            raise RuntimeError("Scanning requires a product recognizer and a date extractor")

        with LoggingContext(summary_id=summary.id, grocery_list_id=summary.grocery_list_id):
            try:
                recognition = await self.recognizer.recognize(image_uri)
                ocr = await self.date_extractor.extract_dates(image_uri)
            except RecognitionError as e:
                logger.warning(f"Scan of {image_uri} failed: {e}")
                return ScanResult(success=False, error=str(e))

            scanned = build_scanned_items(
                recognition.products,
                ocr,
                self.resolver,
                self._config,
                image_uri=image_uri,
                today=today,
            )
            reconciliation = self._fold(summary, scanned)

            confidence = (
                sum(item.confidence for item in scanned) / len(scanned) if scanned else 0.0
            )
            return ScanResult(
                success=True,
                items=scanned,
                reconciliation=reconciliation,
                confidence=confidence,
                processing_time=recognition.processing_time + ocr.processing_time,
            )

    def reconcile_items(
        self,
        summary_id: str,
        observed: Sequence[PurchaseItem],
    ) -> ReconciliationResult:
        """Reconcile a batch of observed items, e.g. entered by hand, into a summary."""
        summary = self._load_open(summary_id)
        with LoggingContext(summary_id=summary.id, grocery_list_id=summary.grocery_list_id):
            return self._fold(summary, observed)

    def confirm_items(
        self,
        summary_id: str,
        item_ids: Iterable[str],
        modifications: dict[str, dict[str, Any]] | None = None,
    ) -> PurchaseSummary:
        """
        Confirm items as purchased, optionally correcting them.

        Items with modifications end up "modified" unless the modifications
        set a status themselves. Unknown item ids are ignored.

        Raises:
            SummaryNotFoundError: If the summary does not exist.
            SummaryCompletedError: If the trip is already complete.
            pydantic.ValidationError: If a modification is invalid.
        """
        summary = self._load_open(summary_id)
        modifications = modifications or {}

        for item_id in item_ids:
            item = summary.find_item(item_id)
            if item is None:
                logger.warning(f"Cannot confirm unknown item {item_id}")
                continue

            changes = modifications.get(item_id)
            item.status = "modified" if changes else "confirmed"
            for field_name, value in (changes or {}).items():
                setattr(item, field_name, value)

        self._refresh(summary)
        return summary

    def mark_not_purchased(self, summary_id: str, item_ids: Iterable[str]) -> PurchaseSummary:
        """Mark items as not bought. Unknown item ids are ignored."""
        summary = self._load_open(summary_id)

        for item_id in item_ids:
            item = summary.find_item(item_id)
            if item is None:
                logger.warning(f"Cannot mark unknown item {item_id} as not purchased")
                continue
            item.status = "not_purchased"

        self._refresh(summary)
        return summary

    def add_additional_item(
        self,
        summary_id: str,
        name: str,
        quantity: float = 1,
        unit: str = "piece",
        category: str = "other",
        **details: Any,
    ) -> PurchaseItem:
        """
        Record an item bought without being on the list.

        Args:
            summary_id: Summary to add to.
            name: Product name.
            quantity: Amount bought.
            unit: Unit of the amount.
            category: Product category.
            **details: Optional PurchaseItem fields such as expiration_date,
                price, confidence, image_uri or notes.

        Returns:
            The new, confirmed, manually sourced item.

        Raises:
            ValueError: If details try to set id, source or status.
        """
        reserved = RESERVED_ADDITIONAL_FIELDS.intersection(details)
        if reserved:
            raise ValueError(f"Additional items cannot set {sorted(reserved)}")

        summary = self._load_open(summary_id)

        item = PurchaseItem(
            name=name,
            quantity=quantity,
            unit=unit,
            category=category,
            **details,
            source="manual",
            status="confirmed",
        )
        summary.items.append(item)
        self._refresh(summary)

        logger.info(f"Added additional item {name!r} to summary {summary.id}")
        return item

    def complete(self, summary_id: str, today: date | None = None) -> list[InventoryItem]:
        """
        Finish the shopping trip.

        Purchased items with a known expiration date are converted into
        inventory items for the inventory collaborator; the summary becomes
        read-only.

        Returns:
            Inventory items to add, in summary order.
        """
        summary = self._load_open(summary_id)
        today = today or date.today()

        inventory_items: list[InventoryItem] = []
        undated = 0
        for item in summary.items:
            if item.status not in PURCHASED_STATUSES:
                continue
            if item.expiration_date is None:
                undated += 1
                continue

            days_left = (item.expiration_date - today).days
            inventory_items.append(
                InventoryItem(
                    name=item.name,
                    category=item.category,
                    quantity=item.quantity,
                    unit=item.unit,
                    is_expired=days_left < 0,
                    days_until_expiry=days_left,
                    expiration_date=item.expiration_date,
                    image_uri=item.image_uri,
                    confidence=item.confidence,
                )
            )

        summary.completed_at = utcnow()
        self._refresh(summary)

        with LoggingContext(summary_id=summary.id, grocery_list_id=summary.grocery_list_id):
            logger.info(
                f"Completed shopping trip: {len(inventory_items)} items to inventory, "
                f"{undated} purchased items without expiration date, "
                f"efficiency {summary.efficiency:.2f}"
            )
        return inventory_items

    # =========================================================================
    # Internals
    # =========================================================================

    def _load_open(self, summary_id: str) -> PurchaseSummary:
        summary = self.repository.get(summary_id)
        if summary is None:
            raise SummaryNotFoundError(summary_id)
        if summary.is_completed:
            raise SummaryCompletedError(summary_id)
        return summary

    def _fold(
        self,
        summary: PurchaseSummary,
        observed: Sequence[PurchaseItem],
    ) -> ReconciliationResult:
        """Reconcile observed items against the still-open list items of a summary."""
        open_items = [
            item
            for item in summary.items
            if item.source == "grocery_list" and item.status in OPEN_STATUSES
        ]
        result = reconcile(open_items, observed)

        merged = {item.id: item for item in result.reconciled_items[: len(open_items)]}
        summary.items = [merged.get(item.id, item) for item in summary.items]
        summary.items.extend(result.reconciled_items[len(open_items) :])

        self._refresh(summary)
        return result

    def _refresh(self, summary: PurchaseSummary) -> None:
        """Recompute derived counters and persist."""
        counts = summarize_counts(summary.items)
        summary.total_items = counts.total_items
        summary.confirmed_items = counts.confirmed_items
        summary.not_purchased_items = counts.not_purchased_items
        summary.additional_items = counts.additional_items
        summary.efficiency = counts.efficiency
        summary.updated_at = utcnow()
        self.repository.save(summary)
