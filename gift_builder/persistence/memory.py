"""In-memory persistence adapter."""

from typing import Dict, Optional

from gift_builder.persistence.base import PersistenceAdapter
from gift_builder.settings import settings


class InMemoryAdapter(PersistenceAdapter):
    """Keeps documents in a dict; nothing survives the process.

    Several adapters may share one ``storage`` dict to simulate reopening.
    """

    def __init__(self, key: Optional[str] = None, storage: Optional[Dict[str, str]] = None) -> None:
        super().__init__(key or settings.storage_key)
        self.storage: Dict[str, str] = storage if storage is not None else {}
        self.save_count = 0

    def load(self) -> Optional[str]:
        return self.storage.get(self.key)

    def save(self, text: str) -> None:
        self.storage[self.key] = text
        self.save_count += 1

    @property
    def backup_key(self) -> str:
        return f"{self.key}.bak"

    def backup(self, text: str) -> None:
        self.storage[self.backup_key] = text

    def clear(self) -> None:
        self.storage.pop(self.key, None)
