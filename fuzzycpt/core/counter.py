"""
Mixed-radix state counter.

Enumerates every combination of parent state indices (i_0, ..., i_{k-1}) with
i_j in [0, max_states[j]). Position 0 is the fastest-changing digit, so the
linear index of a combination is

    increment = sum_j i_j * stride_j,   stride_j = prod_{l < j} max_states[l]

The enumeration order fixes the physical layout of inferred CPTs; consumers
of a CPT rely on it verbatim.
"""
from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from fuzzycpt.core.exceptions import PreconditionViolation


class StateCounter:
    """
    Odometer over heterogeneous per-position cardinalities.

    Starts at the all-zero combination. `count_up()` advances by one
    combination and returns False once the last combination (all positions
    at max - 1) has been reached, leaving the counter unchanged.

    Example:
        >>> c = StateCounter([2, 4])
        >>> c.get_count(), c.get_increment()
        ((0, 0), 0)
        >>> c.count_up()
        True
        >>> c.get_count(), c.get_increment()
        ((1, 0), 1)
    """

    def __init__(self, max_states: Sequence[int]):
        for pos, m in enumerate(max_states):
            if int(m) < 1:
                raise PreconditionViolation(f"Counter position {pos} has cardinality {m}, expected >= 1")
        self._max_states: Tuple[int, ...] = tuple(int(m) for m in max_states)
        self._count: List[int] = [0] * len(self._max_states)

        strides = []
        stride = 1
        for m in self._max_states:
            strides.append(stride)
            stride *= m
        self._strides: Tuple[int, ...] = tuple(strides)
        self._maximum_increment = stride

    @property
    def max_states(self) -> Tuple[int, ...]:
        return self._max_states

    def __len__(self) -> int:
        return len(self._max_states)

    def count_up(self) -> bool:
        """Advance to the next combination. Returns False when exhausted."""
        if self.is_last():
            return False
        for pos, m in enumerate(self._max_states):
            self._count[pos] += 1
            if self._count[pos] < m:
                break
            # carry into the next position
            self._count[pos] = 0
        return True

    def is_last(self) -> bool:
        return all(c == m - 1 for c, m in zip(self._count, self._max_states))

    def get_count(self) -> Tuple[int, ...]:
        return tuple(self._count)

    def get_increment(self) -> int:
        """Linear (digit-0-fastest) index of the current combination."""
        return sum(c * s for c, s in zip(self._count, self._strides))

    def get_maximum_increment(self) -> int:
        """Total number of combinations."""
        return self._maximum_increment

    def reset(self) -> None:
        self._count = [0] * len(self._max_states)

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        """
        Yield every combination from the current one until exhausted.

        The counter is positioned on the yielded combination while the caller
        handles it, so `get_increment()` can be read inside the loop.
        """
        while True:
            yield self.get_count()
            if not self.count_up():
                return


__all__ = ['StateCounter']
