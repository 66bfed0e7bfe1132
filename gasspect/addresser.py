"""Call-tree addressing inferred from depth transitions."""

from __future__ import annotations

from typing import Iterable


class CallTreeAddresser:
    """Assigns each step a hierarchical call-tree address.

    The path holds one sibling counter per open level plus a trailing
    placeholder for the next child level. A step's address is the path
    without that placeholder, taken before the step's own depth is applied.
    """

    def __init__(self):
        self._path: list[int] = [0, -1]

    def address(self, depth: int) -> tuple[int, ...]:
        trace_address = tuple(self._path[:-1])

        if depth + 2 > len(self._path):
            self._path[-1] += 1
            self._path.append(-1)

        if depth + 2 < len(self._path):
            self._path.pop()

        return trace_address


def assign_trace_addresses(depths: Iterable[int]) -> list[tuple[int, ...]]:
    """Return the call-tree address of every step, given their depths."""
    addresser = CallTreeAddresser()
    return [addresser.address(depth) for depth in depths]
