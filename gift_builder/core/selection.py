"""Selection of blocks marked for bulk actions."""

from typing import Callable, Iterable, Iterator, List, Set


class SelectionManager:
    """Tracks which block ids are marked for bulk action.

    The selection is always a subset of the ids currently in the document.
    ``block_ids`` is called whenever the manager needs the current ids, in
    render order.

    Parameters
    ----------
    block_ids : Callable[[], List[str]]
        Returns the ids of the blocks currently in the document.

    Examples
    --------
    >>> selection = SelectionManager(lambda: ["a", "b", "c"])
    >>> selection.toggle("a")
    >>> selection.select_all()
    >>> selection.ids
    ['a', 'b', 'c']
    """

    def __init__(self, block_ids: Callable[[], List[str]]) -> None:
        self._block_ids = block_ids
        self._selected: Set[str] = set()

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    @property
    def ids(self) -> List[str]:
        """Selected ids in render order."""
        return [bid for bid in self._block_ids() if bid in self._selected]

    def toggle(self, block_id: str) -> None:
        """Add ``block_id`` if absent, remove it if present."""
        if block_id in self._selected:
            self._selected.discard(block_id)
        elif block_id in self._block_ids():
            self._selected.add(block_id)

    def select_all(self) -> None:
        """Select every block, or clear if every block is already selected."""
        all_ids = self._block_ids()
        if len(self._selected) == len(all_ids):
            self._selected.clear()
        else:
            self._selected = set(all_ids)

    def clear(self) -> None:
        self._selected.clear()

    def replace(self, block_ids: Iterable[str]) -> None:
        """Set the selection to ``block_ids`` (restricted to present blocks)."""
        present = set(self._block_ids())
        self._selected = {bid for bid in block_ids if bid in present}

    def discard(self, block_id: str) -> None:
        self._selected.discard(block_id)

    def prune(self) -> None:
        """Drop ids that no longer reference a block."""
        self._selected.intersection_update(self._block_ids())
