"""
Conditional probability table container.

A CPT is a flat vector of probabilities addressed by linear index. Tables
inferred by the fuzzy controller are laid out child-state-major,
parent-combination-minor:

    index = child_state * nr_combinations + combination_increment
"""
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional
import numpy as np

from fuzzycpt.core.exceptions import StateIndexError


class CPT:
    """Dense probability vector backed by a numpy array."""

    def __init__(self, size_or_values: int | Iterable[float] = 0):
        if isinstance(size_or_values, (int, np.integer)):
            self._values = np.zeros(int(size_or_values), dtype=float)
        else:
            self._values = np.array(list(size_or_values), dtype=float)

    def size(self) -> int:
        return int(self._values.shape[0])

    def __len__(self) -> int:
        return self.size()

    def _check(self, index: int) -> None:
        if index < 0 or index >= self.size():
            raise StateIndexError(index, self.size(), name="CPT")

    def get(self, index: int) -> float:
        self._check(index)
        return float(self._values[index])

    def set(self, index: int, value: float) -> None:
        self._check(index)
        self._values[index] = value

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CPT):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"CPT({self.to_list()})"

    def to_list(self) -> List[float]:
        return [float(v) for v in self._values]

    def to_array(self) -> np.ndarray:
        """Return a copy of the underlying values."""
        return self._values.copy()

    def column(self, increment: int, nr_combinations: int, nr_states: Optional[int] = None) -> np.ndarray:
        """
        Return the child distribution stored for one parent combination.

        Args:
            increment: Linear index of the parent combination
            nr_combinations: Number of parent combinations (block stride)
            nr_states: Number of child states (defaults to size / nr_combinations)
        """
        if nr_states is None:
            nr_states = self.size() // nr_combinations
        return self._values[increment::nr_combinations][:nr_states].copy()


__all__ = ['CPT']
