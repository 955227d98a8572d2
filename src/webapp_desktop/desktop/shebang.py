"""Repair launcher files the browser writes without a newline after the shebang.

The browser sometimes emits ``#!/usr/bin/env xdg-open[Desktop Entry]...``:
the group header is glued to the interpreter line, which makes the whole
file unreadable as a key file. Splitting the two with a newline fixes it.
"""

from __future__ import annotations

from dataclasses import dataclass

SHEBANG = "#!/usr/bin/env xdg-open"


@dataclass(slots=True, frozen=True)
class RepairResult:
    needs_rewrite: bool
    fixed_text: str
    is_plain_launcher: bool


def repair(raw_text: str) -> RepairResult:
    if raw_text.startswith(SHEBANG):
        tail = raw_text[len(SHEBANG) :]
        if tail.startswith("["):
            return RepairResult(
                needs_rewrite=True,
                fixed_text=f"{SHEBANG}\n{tail}",
                is_plain_launcher=False,
            )
    return RepairResult(needs_rewrite=False, fixed_text=raw_text, is_plain_launcher=True)
