"""
Fuzzy set: the membership functions covering all discrete states of one variable.
"""
from __future__ import annotations
from typing import List, Optional
import numpy as np

from fuzzycpt.core.exceptions import StateIndexError, UnassignedMembershipFunctionError
from fuzzycpt.fuzzy.membership import MembershipFunction


class FuzzySet:
    """
    Maps each state index of a variable to its membership function.

    Every state must have a membership function before the set is queried.
    `null_belief_tolerance` is stored for consumers (controller, sensor
    observation); the set itself never applies it.

    Attributes:
        name: Optional variable name, used in error messages
        null_belief_tolerance: Floor applied to beliefs by consumers
    """

    def __init__(self, nr_states: int, null_belief_tolerance: float = 0.0, name: Optional[str] = None):
        self.name = name
        self.null_belief_tolerance = null_belief_tolerance
        self._mf: List[Optional[MembershipFunction]] = [None] * nr_states

    def nr_states(self) -> int:
        return len(self._mf)

    def _check_index(self, state: int) -> None:
        if state < 0 or state >= len(self._mf):
            raise StateIndexError(state, len(self._mf), name=self.name)

    def set_membership_function(self, state: int, mf: MembershipFunction) -> None:
        self._check_index(state)
        self._mf[state] = mf

    def get_membership_function(self, state: int) -> Optional[MembershipFunction]:
        self._check_index(state)
        return self._mf[state]

    def _assigned(self, state: int) -> MembershipFunction:
        mf = self._mf[state]
        if mf is None:
            raise UnassignedMembershipFunctionError(state, name=self.name)
        return mf

    def require_complete(self) -> None:
        """Raise UnassignedMembershipFunctionError for the first state without a function."""
        for state in range(len(self._mf)):
            self._assigned(state)

    def is_complete(self) -> bool:
        return all(mf is not None for mf in self._mf)

    def get_strengths(self, x: float) -> np.ndarray:
        """Strength of every state for observed value `x`."""
        return np.array([self._assigned(state).fx(x) for state in range(len(self._mf))], dtype=float)

    def get_strength(self, x: float, state: int) -> float:
        self._check_index(state)
        return self._assigned(state).fx(x)

    def find_maximum(self, state: int) -> float:
        """Mode of the membership function of `state`."""
        self._check_index(state)
        return self._assigned(state).find_maximum()

    def copy(self) -> "FuzzySet":
        """
        Shallow copy. Membership functions are immutable and shared; later
        assignments on either set do not affect the other.
        """
        other = FuzzySet(len(self._mf), self.null_belief_tolerance, self.name)
        other._mf = list(self._mf)
        return other

    def __repr__(self) -> str:
        mfs = ", ".join(str(mf) if mf is not None else "None" for mf in self._mf)
        return f"FuzzySet(name={self.name!r}, states=[{mfs}])"


__all__ = ['FuzzySet']
