"""
State types for fuzzy rules.

Variables are either binary (FALSE/TRUE) or quaternary (GOOD, PROBABLY_GOOD,
PROBABLY_BAD, BAD). A RuleState names one state of one such variable; the six
possible rule states exist exactly once (QUATERNARY_RULE_STATES and
BINARY_RULE_STATES) and are shared between all rules.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Union

from fuzzycpt.core.exceptions import InvalidRuleStateError

BINARY_STATES = 2
QUATERNARY_STATES = 4


class State(IntEnum):
    """Quaternary belief states."""
    GOOD = 0
    PROBABLY_GOOD = 1
    PROBABLY_BAD = 2
    BAD = 3


class StateBinary(IntEnum):
    """Binary belief states."""
    FALSE = 0
    TRUE = 1


@dataclass(frozen=True)
class RuleState:
    """One discrete state of a binary or quaternary variable."""
    state: int
    binary: bool = False

    def __post_init__(self):
        if not 0 <= self.state < self.nr_states:
            raise InvalidRuleStateError(self.state)

    @property
    def nr_states(self) -> int:
        """Cardinality of the variable this state belongs to."""
        return BINARY_STATES if self.binary else QUATERNARY_STATES

    @property
    def name(self) -> str:
        return StateBinary(self.state).name if self.binary else State(self.state).name

    def __str__(self) -> str:
        return self.name


# State.GOOD == StateBinary.FALSE as ints, hence one table per enum
QUATERNARY_RULE_STATES = MappingProxyType({s: RuleState(s.value) for s in State})
BINARY_RULE_STATES = MappingProxyType({s: RuleState(s.value, binary=True) for s in StateBinary})


def get_rule_state(state: Union[State, StateBinary]) -> RuleState:
    """Return the shared RuleState instance for `state`."""
    if isinstance(state, StateBinary):
        return BINARY_RULE_STATES[state]
    if isinstance(state, State):
        return QUATERNARY_RULE_STATES[state]
    raise InvalidRuleStateError(state)


def _spellings(name: str) -> tuple:
    return (name.lower(), name.title(), name.upper())


def parse_state_name(name: str) -> Union[State, StateBinary]:
    """
    Parse a state name as written in model and rule files.

    Accepts the lower, title and upper case spelling of each state name,
    e.g. "probably_good", "Probably_Good" or "PROBABLY_GOOD".
    """
    for enum_type in (StateBinary, State):
        for member in enum_type:
            if name in _spellings(member.name):
                return member
    raise InvalidRuleStateError(name)


def rule_state_from_string(name: str) -> RuleState:
    return get_rule_state(parse_state_name(name))


__all__ = [
    'State', 'StateBinary', 'RuleState', 'QUATERNARY_RULE_STATES', 'BINARY_RULE_STATES',
    'get_rule_state', 'parse_state_name', 'rule_state_from_string',
    'BINARY_STATES', 'QUATERNARY_STATES',
]
