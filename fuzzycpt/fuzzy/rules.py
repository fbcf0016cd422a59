"""
Fuzzy rules.

A rule is an implication from one state per parent variable to one child
state, e.g. (FALSE, TRUE) -> TRUE. A rule set is the collection of rules
defining one CPT; all its rules share the parent arity and the per-position
cardinalities (binary = 2, quaternary = 4).
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Iterable, Iterator, List, Sequence, Tuple

from fuzzycpt.core.exceptions import EmptyRuleSetError, RuleSetMismatchError
from fuzzycpt.fuzzy.types import RuleState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    parent_states: Tuple[RuleState, ...]
    child_state: RuleState

    def __init__(self, parent_states: Sequence[RuleState], child_state: RuleState):
        object.__setattr__(self, "parent_states", tuple(parent_states))
        object.__setattr__(self, "child_state", child_state)

    @property
    def arity(self) -> int:
        return len(self.parent_states)

    def parent_cardinalities(self) -> Tuple[int, ...]:
        return tuple(s.nr_states for s in self.parent_states)

    def nr_joint_states(self) -> int:
        """Product of all parent cardinalities and the child cardinality."""
        joint_states = self.child_state.nr_states
        for s in self.parent_states:
            joint_states *= s.nr_states
        return joint_states

    def __str__(self) -> str:
        parents = ", ".join(str(s) for s in self.parent_states)
        return f"({parents}) -> {self.child_state}"


class RuleSet:
    """
    Unordered collection of rules defining the logic of one CPT.

    Rules are validated against the first rule when added: same arity, same
    parent cardinalities and same child cardinality.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: List[Rule] = []
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        if self._rules:
            first = self._rules[0]
            expected = first.parent_cardinalities() + (first.child_state.nr_states,)
            got = rule.parent_cardinalities() + (rule.child_state.nr_states,)
            if expected != got:
                raise RuleSetMismatchError(len(self._rules), expected, got)
        self._rules.append(rule)
        logger.debug(f"[RULES] Added rule {len(self._rules) - 1}: {rule}")

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def first(self) -> Rule:
        if not self._rules:
            raise EmptyRuleSetError()
        return self._rules[0]

    def nr_joint_states(self) -> int:
        return len(self._rules) * self.first().nr_joint_states()

    def copy(self) -> "RuleSet":
        return RuleSet(self._rules)


__all__ = ['Rule', 'RuleSet']
