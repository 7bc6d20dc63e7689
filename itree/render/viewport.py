"""Viewport selection around the cursor row."""

from __future__ import annotations


def viewport_bounds(count: int, focus: int, rows: int) -> tuple[int, int]:
    """Return ``[start, end)`` of at most ``rows`` lines around ``focus``.

    Half the rows go above the focus line and the rest below; space unused at
    one edge of the listing is handed to the other side.
    """
    if count <= 0:
        return 0, 0
    rows = max(1, rows)
    focus = max(0, min(focus, count - 1))
    space = rows // 2
    start = focus - space
    end = focus + space + rows % 2
    if start < 0:
        end -= start
        start = 0
    if end > count:
        start = max(0, start - (end - count))
        end = count
    return start, end


__all__ = ["viewport_bounds"]
