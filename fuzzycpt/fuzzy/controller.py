"""
Fuzzy controller: derives a CPT from parent fuzzy sets and a rule base.

For every combination of parent states (enumerated by StateCounter, first
parent fastest) the controller

1. takes the mode of each parent's membership function for its current state,
2. evaluates every rule with the product t-norm of the parent strengths at
   those modes,
3. truncates each firing strength to two decimals (toward zero),
4. aggregates rules concluding the same child state by maximum (Mamdani),
5. raises beliefs below the null-belief tolerance to the tolerance,
6. normalizes the beliefs to sum to 1,

and writes the result to slots `child_state * nr_combinations + increment`.

Usage:
    >>> ctrl = Controller([sprinkler, rainy], wet_grass_rules, tolerance=0.01)
    >>> cpt = ctrl.infer_cpt()
    >>> cpt.size()
    8
"""
from __future__ import annotations
import logging
from typing import Sequence, Tuple
import numpy as np

from fuzzycpt.core.counter import StateCounter
from fuzzycpt.core.cpt import CPT
from fuzzycpt.core.exceptions import CardinalityMismatchError, DegenerateInferenceError
from fuzzycpt.fuzzy.fuzzy_set import FuzzySet
from fuzzycpt.fuzzy.rules import RuleSet

logger = logging.getLogger(__name__)

TRUNCATE_FACTOR = 100


def truncate(value: float) -> float:
    """Truncate `value` to two decimals toward zero: 0.2399 -> 0.23."""
    return int(value * TRUNCATE_FACTOR) / float(TRUNCATE_FACTOR)


def apply_null_belief(beliefs: np.ndarray, tolerance: float) -> np.ndarray:
    """Raise every belief strictly below `tolerance` to exactly `tolerance`."""
    beliefs = beliefs.copy()
    beliefs[beliefs < tolerance] = tolerance
    return beliefs


def normalize(beliefs: np.ndarray, combination=None) -> np.ndarray:
    """
    Scale `beliefs` to sum to 1.

    Raises:
        DegenerateInferenceError: if the beliefs sum to zero
    """
    total = 0.0
    for b in beliefs:
        total += b
    if total == 0:
        raise DegenerateInferenceError(combination)
    return beliefs / total


class Controller:
    """
    Immutable fuzzy inference controller.

    The fuzzy sets and the rule set are copied on construction, so later
    changes to the caller's objects do not affect inference and repeated
    `infer_cpt()` calls return identical tables.

    Attributes:
        null_belief_tolerance: Floor applied to every inferred belief
    """

    def __init__(self, fuzzy_sets: Sequence[FuzzySet], rules: RuleSet, tolerance: float = 0.0):
        self._fuzzy_sets: Tuple[FuzzySet, ...] = tuple(fs.copy() for fs in fuzzy_sets)
        self._rules: RuleSet = rules.copy()
        self.null_belief_tolerance = tolerance

        # STEP 0: VALIDATION
        # Fails before any inference work on empty or inconsistent input
        first = self._rules.first()
        cardinalities = first.parent_cardinalities()

        if len(self._fuzzy_sets) != len(cardinalities):
            raise CardinalityMismatchError(
                f"Controller got {len(self._fuzzy_sets)} fuzzy sets for rules with {len(cardinalities)} parents"
            )

        for position, (fuzzy_set, nr_states) in enumerate(zip(self._fuzzy_sets, cardinalities)):
            if fuzzy_set.nr_states() != nr_states:
                raise CardinalityMismatchError(
                    f"Fuzzy set {position} ({fuzzy_set.name or 'unnamed'}) has {fuzzy_set.nr_states()} states, "
                    f"rules expect {nr_states}",
                    position=position,
                )
            fuzzy_set.require_complete()

        self._max_states = cardinalities
        self._nr_states = first.child_state.nr_states

    @property
    def fuzzy_sets(self) -> Tuple[FuzzySet, ...]:
        return self._fuzzy_sets

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def nr_child_states(self) -> int:
        return self._nr_states

    def infer_cpt(self) -> CPT:
        """
        Infer the complete CPT.

        Returns:
            CPT of size nr_child_states * prod(parent cardinalities), laid out
            child-state-major, parent-combination-minor

        Raises:
            DegenerateInferenceError: if a combination ends with all beliefs zero
                (only possible with a zero null-belief tolerance)
        """
        joint_states = self._rules.first().nr_joint_states()
        cpt = CPT(joint_states)

        counter = StateCounter(self._max_states)
        max_increment = counter.get_maximum_increment()

        # iterate over every parental state combination, starting with all-zero
        for combination in counter:
            inferred = self.infer(combination)
            increment = counter.get_increment()

            for child_state, belief in enumerate(inferred):
                cpt.set(child_state * max_increment + increment, belief)

        logger.info(
            f"[CPT] Inferred {cpt.size()} entries from {len(self._rules)} rules "
            f"over {max_increment} parent combinations (tolerance={self.null_belief_tolerance})"
        )
        return cpt

    def infer(self, combination: Sequence[int]) -> np.ndarray:
        """
        Infer the child distribution for one parent state combination.

        Args:
            combination: One state index per parent

        Returns:
            Normalized belief per child state
        """
        if len(combination) != len(self._fuzzy_sets):
            raise CardinalityMismatchError(
                f"Combination {tuple(combination)} has {len(combination)} states, "
                f"controller has {len(self._fuzzy_sets)} parents"
            )

        # Mode of each parent's current state
        modes = [
            fuzzy_set.find_maximum(state)
            for fuzzy_set, state in zip(self._fuzzy_sets, combination)
        ]

        beliefs = np.zeros(self._nr_states, dtype=float)

        for rule in self._rules:
            # Product t-norm over the parents
            t_norm = 1.0
            for fuzzy_set, mode, parent_state in zip(self._fuzzy_sets, modes, rule.parent_states):
                t_norm *= fuzzy_set.get_strength(mode, parent_state.state)

            t_norm = truncate(t_norm)

            # Max aggregation per child state
            child = rule.child_state.state
            if t_norm > beliefs[child]:
                beliefs[child] = t_norm

        beliefs = apply_null_belief(beliefs, self.null_belief_tolerance)
        beliefs = normalize(beliefs, combination)

        logger.debug(f"[CPT] combination={tuple(combination)} modes={modes} beliefs={beliefs.tolist()}")
        return beliefs


__all__ = ['Controller', 'truncate', 'apply_null_belief', 'normalize']
