"""Base persistence adapter."""

from abc import ABC, abstractmethod
from typing import Optional


class PersistenceAdapter(ABC):
    """Key/value storage holding the serialized document under one key.

    Subclasses raise :class:`~gift_builder.errors.PersistenceError` when the
    underlying storage cannot be read or written.
    """

    def __init__(self, key: str) -> None:
        self._key = key

    @property
    def key(self) -> str:
        """The fixed logical key the document is stored under."""
        return self._key

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored text, or None if nothing has been saved."""

    @abstractmethod
    def save(self, text: str) -> None:
        """Replace the stored text."""

    def backup(self, text: str) -> None:
        """Keep ``text`` next to the document without replacing it.

        Called with stored text that could not be decoded. Default
        implementation is a no-op.
        """

    def clear(self) -> None:
        """Remove the stored text. Default implementation is a no-op."""
