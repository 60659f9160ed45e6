"""Persistence of purchase summaries over an opaque key-value store."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from smarteat.logging_config import get_logger
from smarteat.schemas import PurchaseSummary

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Abstract string key-value store supplied by the host application."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; absent keys are ignored."""
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> Iterator[str]:
        """Iterate keys starting with the prefix."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and single-process use."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> Iterator[str]:
        return iter([key for key in self._data if key.startswith(prefix)])


class PurchaseSummaryRepository:
    """Stores each purchase summary as JSON under its own key."""

    KEY_PREFIX = "smarteat:post_shopping:"

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _key(self, summary_id: str) -> str:
        return f"{self.KEY_PREFIX}{summary_id}"

    def save(self, summary: PurchaseSummary) -> None:
        self.store.set(self._key(summary.id), summary.model_dump_json())

    def get(self, summary_id: str) -> PurchaseSummary | None:
        raw = self.store.get(self._key(summary_id))
        if raw is None:
            return None
        return PurchaseSummary.model_validate_json(raw)

    def delete(self, summary_id: str) -> None:
        self.store.delete(self._key(summary_id))

    def list_all(self) -> list[PurchaseSummary]:
        """All stored summaries, newest shopping date first."""
        summaries = []
        for key in self.store.keys(self.KEY_PREFIX):
            raw = self.store.get(key)
            if raw is not None:
                summaries.append(PurchaseSummary.model_validate_json(raw))
        summaries.sort(key=lambda s: s.shopping_date, reverse=True)
        logger.debug(f"Loaded {len(summaries)} purchase summaries")
        return summaries
