"""
Error taxonomy for fuzzy CPT inference.

Every error raised by the package derives from FuzzyCPTError:

- PreconditionViolation: malformed input (missing membership function,
  index out of bounds, empty or inconsistent rule base, ...)
- DegenerateInferenceError: a belief vector summed to zero before normalization
- MalformedMembershipFunctionSpec: textual membership function could not be parsed
- ModelFormatError: a network model file is malformed

Inference is deterministic, so none of these are transient: callers should fix
the authored input rather than retry.
"""
from __future__ import annotations
from typing import Optional, Sequence


class FuzzyCPTError(Exception):
    """Base class for all fuzzycpt errors."""
    pass


class PreconditionViolation(FuzzyCPTError):
    """Raised when an input contract of the inference core is violated."""
    pass


class UnassignedMembershipFunctionError(PreconditionViolation):
    """Raised when a fuzzy set state has no membership function."""

    def __init__(self, state: int, name: Optional[str] = None):
        self.state = state
        self.name = name
        where = f" of fuzzy set '{name}'" if name else ""
        super().__init__(f"Unassigned membership function for state {state}{where}")


class StateIndexError(PreconditionViolation, IndexError):
    """Raised when a state index is outside [0, size)."""

    def __init__(self, index: int, size: int, name: Optional[str] = None):
        self.index = index
        self.size = size
        self.name = name
        where = f" in '{name}'" if name else ""
        super().__init__(f"Index out of bounds: state {index} not in [0, {size}){where}")


class EmptyRuleSetError(PreconditionViolation):
    """Raised when a rule set without rules is used for inference."""

    def __init__(self):
        super().__init__("Empty rule set")


class RuleSetMismatchError(PreconditionViolation):
    """Raised when a rule does not share arity/cardinalities with the first rule of its set."""

    def __init__(self, position: int, expected: Sequence[int], got: Sequence[int]):
        self.position = position
        self.expected = tuple(expected)
        self.got = tuple(got)
        super().__init__(
            f"Rule {position} has parent cardinalities {self.got}, expected {self.expected}"
        )


class CardinalityMismatchError(PreconditionViolation):
    """Raised when the fuzzy sets handed to a controller do not line up with the rule parents."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        super().__init__(message)


class InvalidRuleStateError(PreconditionViolation):
    """Raised for an unknown state value or state name."""

    def __init__(self, state):
        self.state = state
        super().__init__(f"Invalid rule state: {state!r}")


class InvalidMembershipParameters(PreconditionViolation):
    """Raised when membership function parameters make the curve undefined."""
    pass


class DegenerateInferenceError(FuzzyCPTError):
    """Raised when a belief vector sums to zero and cannot be normalized."""

    def __init__(self, combination: Optional[Sequence[int]] = None):
        self.combination = tuple(combination) if combination is not None else None
        where = f" for parent combination {self.combination}" if self.combination is not None else ""
        super().__init__(f"Degenerate null inference{where}: all beliefs are zero")


class MalformedMembershipFunctionSpec(FuzzyCPTError, ValueError):
    """Raised when a membership function string cannot be parsed."""

    def __init__(self, spec: str, reason: str = ""):
        self.spec = spec
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Invalid membership function string: {spec!r}{detail}")


class ModelFormatError(FuzzyCPTError):
    """Raised when a network model file is malformed."""
    pass


__all__ = [
    'FuzzyCPTError', 'PreconditionViolation', 'UnassignedMembershipFunctionError',
    'StateIndexError', 'EmptyRuleSetError', 'RuleSetMismatchError',
    'CardinalityMismatchError', 'InvalidRuleStateError', 'InvalidMembershipParameters',
    'DegenerateInferenceError', 'MalformedMembershipFunctionSpec', 'ModelFormatError',
]
