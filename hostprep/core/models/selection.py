"""
SelectionSet — the menu's accumulator of chosen component keys.

Set semantics with insertion order preserved, so the install request
follows the order the user picked things in.
"""

from __future__ import annotations

from collections.abc import Iterator


class SelectionSet:
    """Ordered set of component keys chosen in a selection menu."""

    def __init__(self) -> None:
        self._keys: dict[str, None] = {}
        self._consumed = False

    def add(self, key: str) -> bool:
        """Add a key. Returns False if it was already selected."""
        if key in self._keys:
            return False
        self._keys[key] = None
        return True

    def consume(self) -> list[str]:
        """Hand the selection to a single install call.

        Raises:
            RuntimeError: If the selection was already consumed.
        """
        if self._consumed:
            raise RuntimeError("Selection already consumed")
        self._consumed = True
        return list(self._keys)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)
