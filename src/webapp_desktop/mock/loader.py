from __future__ import annotations


class RecordingIconLoader:
    """Icon loader that remembers requested URLs instead of fetching."""

    def __init__(self) -> None:
        self.requests: list[str] = []

    def __call__(self, url: str) -> None:
        self.requests.append(url)
