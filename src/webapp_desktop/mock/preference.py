from __future__ import annotations


class MemoryFavoritesPreference:
    """In-process favorites list; counts writes so callers can assert on them."""

    def __init__(self, values: list[str] | None = None) -> None:
        self._values: list[str] = list(values or [])
        self.writes = 0

    def read(self) -> list[str]:
        return list(self._values)

    def write(self, values: list[str]) -> None:
        self._values = list(values)
        self.writes += 1
