from __future__ import annotations


class MockIconTheme:
    """Icon theme with a fixed name -> sizes table."""

    def __init__(self, sizes: dict[str, list[int]] | None = None) -> None:
        self.sizes: dict[str, list[int]] = dict(sizes or {})

    def icon_sizes(self, icon_name: str) -> list[int]:
        return list(self.sizes.get(icon_name, []))
