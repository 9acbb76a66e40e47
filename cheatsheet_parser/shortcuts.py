"""Read keyboard shortcut tables out of card content.

Shortcut cards hold a two-column pipe table::

    | Shortcut | Action |
    |----------|--------|
    | Cmd C    | Copy   |

Each data row becomes a :class:`~cheatsheet_parser.models.KeyboardShortcut`.
Key combinations are passed through untouched; validating them is up to the
renderer.
"""

from __future__ import annotations

from ._constants import SHORTCUTS_MARKER
from .models import KeyboardShortcut

HEADER_CELLS = ("shortcut", "action")


def _is_header(shortcut: str, action: str) -> bool:
    return (
        HEADER_CELLS[0] in shortcut.casefold() and HEADER_CELLS[1] in action.casefold()
    )


def _row_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def parse_shortcuts(content: str) -> tuple[KeyboardShortcut, ...]:
    """Return the shortcut rows of the first two columns of a pipe table.

    Blank lines, lines without ``|``, separator rows, rows with fewer than two
    non-empty cells, and the ``Shortcut | Action`` header row are skipped.
    Rows keep their table order.
    """
    if not content:
        return ()
    shortcuts: list[KeyboardShortcut] = []
    for raw_line in content.replace(SHORTCUTS_MARKER, "").splitlines():
        line = raw_line.strip()
        if not line or "|" not in line or "---" in line:
            continue
        cells = _row_cells(line)
        if len(cells) < 2:
            continue
        shortcut, action = cells[0], cells[1]
        if _is_header(shortcut, action):
            continue
        shortcuts.append(KeyboardShortcut(shortcut=shortcut, action=action))
    return tuple(shortcuts)


__all__ = ["parse_shortcuts"]
