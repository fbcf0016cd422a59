"""
Membership functions for fuzzy CPT inference.

A membership function maps a continuous value x to the strength in [0, 1]
with which x belongs to one discrete state, and knows the position of its
maximum (the mode). The controller characterizes every discrete parent state
by that mode, so `find_maximum()` is as much part of the contract as `fx()`.

Variants (textual tag -> parameters):
    "linear":    [min, max]                  ramp, reversed if min > max
    "triangle":  [begin, peak, end]
    "trapezoid": [x1, x2, x3, x4]            plateau between x2 and x3
    "sshape":    [a, b]                      quadratic smoothstep from a to b
    "zshape":    [a, b]                      1 - sshape(a, b)
    "pishape":   [a, b, c, d]                sshape(a, b) then zshape(c, d)
    "sigmoid":   [a, c]                      logistic, slope a, inflection c
    "bell":      [a, b, c]                   generalized bell
    "gaussian":  [mean, deviation]
    "gaussian2": [meanL, devL, meanR, devR]  plateau between two gaussian shoulders

Edge points use the inequalities of each shape exactly (`<=`/`>=` return the
asymptotic 0/1); for instance a shoulder triangle [0, 0, 40] evaluates to 0 at
x = 0.

`sample(universe)` renders a curve over a numpy universe with the matching
scikit-fuzzy generator. Shoulder triangles and trapezoids, where skfuzzy
disagrees with `fx` on the edge point, are sampled through `fx` instead.
Sampling is used for curve export only; inference always goes through `fx`.

Usage:
    >>> mf = membership_from_string('"gaussian": [0, 0.35]')
    >>> mf.fx(0.0), mf.find_maximum(), str(mf)
    (1.0, 0.0, '"gaussian": [0, 0.35]')
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
import math
import re
from typing import Dict, Tuple, Type
import numpy as np

from fuzzycpt.core.exceptions import InvalidMembershipParameters, MalformedMembershipFunctionSpec

# Dependency management
try:
    import skfuzzy as fuzz
except ImportError:
    raise ImportError(
        "scikit-fuzzy is not installed. Install with:\n"
        "    pip install scikit-fuzzy\n"
        "Documentation: https://pythonhosted.org/scikit-fuzzy/"
    )

# Sigmoid mode search: step width and convergence threshold
SIGMOID_STEP = 0.1
SIGMOID_TOLERANCE = 0.01


def _format_number(value: float) -> str:
    # 6 significant digits, no trailing zeros: 0.35 -> "0.35", 1.0 -> "1"
    return f"{value:g}"


class MembershipFunction(ABC):
    """Base class of all membership functions. Instances are immutable."""

    tag = ""

    @abstractmethod
    def fx(self, x: float) -> float:
        """Return the membership strength of `x`."""

    @abstractmethod
    def find_maximum(self) -> float:
        """Return the position of the function's maximum."""

    def parameters(self) -> Tuple[float, ...]:
        """Shape parameters in textual (constructor) order."""
        return tuple(getattr(self, f.name) for f in fields(self) if f.init)

    def to_string(self) -> str:
        values = ", ".join(_format_number(p) for p in self.parameters())
        return f'"{self.tag}": [{values}]'

    def __str__(self) -> str:
        return self.to_string()

    def sample(self, universe) -> np.ndarray:
        """Evaluate the curve over every point of `universe`."""
        universe = np.asarray(universe, dtype=float)
        return np.array([self.fx(float(x)) for x in universe], dtype=float)


@dataclass(frozen=True)
class Linear(MembershipFunction):
    fx_min: float
    fx_max: float

    tag = "linear"

    def fx(self, x: float) -> float:
        if self.fx_min < self.fx_max:
            if x <= self.fx_min:
                return 0.0
            if x >= self.fx_max:
                return 1.0
        else:
            if x <= self.fx_max:
                return 1.0
            if x >= self.fx_min:
                return 0.0

        # only reachable when fx_min != fx_max
        m = 1 / (self.fx_max - self.fx_min)
        return m * (x - self.fx_min)

    def find_maximum(self) -> float:
        return self.fx_max


@dataclass(frozen=True)
class Triangle(MembershipFunction):
    begin: float
    peak: float
    end: float
    _increasing: Linear = field(init=False, repr=False, compare=False)
    _decreasing: Linear = field(init=False, repr=False, compare=False)

    tag = "triangle"

    def __post_init__(self):
        if not self.begin <= self.peak <= self.end:
            raise InvalidMembershipParameters(
                f"triangle requires begin <= peak <= end, got {self.parameters()}"
            )
        object.__setattr__(self, "_increasing", Linear(self.begin, self.peak))
        object.__setattr__(self, "_decreasing", Linear(self.end, self.peak))

    def fx(self, x: float) -> float:
        if x <= self.begin or x >= self.end:
            return 0.0
        if self.begin < x < self.peak:
            return self._increasing.fx(x)
        if self.peak < x < self.end:
            return self._decreasing.fx(x)
        return 1.0

    def find_maximum(self) -> float:
        return self.peak

    def sample(self, universe) -> np.ndarray:
        if self.begin == self.peak or self.peak == self.end:
            # trimf puts 1 on a shoulder edge where fx gives 0
            return super().sample(universe)
        return fuzz.trimf(np.asarray(universe, dtype=float), [self.begin, self.peak, self.end])


@dataclass(frozen=True)
class Trapezoid(MembershipFunction):
    x1: float
    x2: float
    x3: float
    x4: float
    _increasing: Linear = field(init=False, repr=False, compare=False)
    _decreasing: Linear = field(init=False, repr=False, compare=False)

    tag = "trapezoid"

    def __post_init__(self):
        if not self.x1 <= self.x2 <= self.x3 <= self.x4:
            raise InvalidMembershipParameters(
                f"trapezoid requires x1 <= x2 <= x3 <= x4, got {self.parameters()}"
            )
        object.__setattr__(self, "_increasing", Linear(self.x1, self.x2))
        object.__setattr__(self, "_decreasing", Linear(self.x4, self.x3))

    def fx(self, x: float) -> float:
        if x <= self.x1 or x >= self.x4:
            return 0.0
        if self.x2 <= x <= self.x3:
            return 1.0
        if self.x1 < x < self.x2:
            return self._increasing.fx(x)
        return self._decreasing.fx(x)

    def find_maximum(self) -> float:
        # centre of the plateau
        return (self._increasing.find_maximum() + self._decreasing.find_maximum()) / 2

    def sample(self, universe) -> np.ndarray:
        if self.x1 == self.x2 or self.x3 == self.x4:
            # trapmf puts 1 on a shoulder edge where fx gives 0
            return super().sample(universe)
        return fuzz.trapmf(np.asarray(universe, dtype=float), [self.x1, self.x2, self.x3, self.x4])


@dataclass(frozen=True)
class SShape(MembershipFunction):
    a: float
    b: float

    tag = "sshape"

    def __post_init__(self):
        if not self.a < self.b:
            raise InvalidMembershipParameters(f"{self.tag} requires a < b, got {self.parameters()}")

    def fx(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x >= self.b:
            return 1.0
        if self.a < x <= (self.a + self.b) / 2:
            return 2 * ((x - self.a) / (self.b - self.a)) ** 2
        return 1 - 2 * ((x - self.b) / (self.b - self.a)) ** 2

    def find_maximum(self) -> float:
        return self.b

    def sample(self, universe) -> np.ndarray:
        return fuzz.smf(np.asarray(universe, dtype=float), self.a, self.b)


@dataclass(frozen=True)
class ZShape(MembershipFunction):
    a: float
    b: float
    _s_shape: SShape = field(init=False, repr=False, compare=False)

    tag = "zshape"

    def __post_init__(self):
        if not self.a < self.b:
            raise InvalidMembershipParameters(f"{self.tag} requires a < b, got {self.parameters()}")
        object.__setattr__(self, "_s_shape", SShape(self.a, self.b))

    def fx(self, x: float) -> float:
        return 1 - self._s_shape.fx(x)

    def find_maximum(self) -> float:
        return self.a

    def sample(self, universe) -> np.ndarray:
        return fuzz.zmf(np.asarray(universe, dtype=float), self.a, self.b)


@dataclass(frozen=True)
class PiShape(MembershipFunction):
    a: float
    b: float
    c: float
    d: float
    _s_shape: SShape = field(init=False, repr=False, compare=False)
    _z_shape: ZShape = field(init=False, repr=False, compare=False)

    tag = "pishape"

    def __post_init__(self):
        if not self.b <= self.c:
            raise InvalidMembershipParameters(f"pishape requires b <= c, got {self.parameters()}")
        object.__setattr__(self, "_s_shape", SShape(self.a, self.b))
        object.__setattr__(self, "_z_shape", ZShape(self.c, self.d))

    def fx(self, x: float) -> float:
        if x <= self._z_shape.find_maximum():
            return self._s_shape.fx(x)
        return self._z_shape.fx(x)

    def find_maximum(self) -> float:
        return (self._s_shape.find_maximum() + self._z_shape.find_maximum()) / 2

    def sample(self, universe) -> np.ndarray:
        return fuzz.pimf(np.asarray(universe, dtype=float), self.a, self.b, self.c, self.d)


@dataclass(frozen=True)
class Sigmoid(MembershipFunction):
    a: float
    c: float

    tag = "sigmoid"

    def fx(self, x: float) -> float:
        try:
            return 1 / (1 + math.exp(-1 * self.a * (x - self.c)))
        except OverflowError:
            # exp(...) -> inf
            return 0.0

    def find_maximum(self) -> float:
        """
        Step right from the inflection point until the curve flattens.

        The logistic curve has no finite maximum; the position where two
        consecutive evaluations differ by no more than SIGMOID_TOLERANCE is
        used as the mode. Inferred CPTs depend on this exact position.
        """
        pos = self.c
        val = self.fx(self.c)
        val_before = val - 1

        while abs(val - val_before) > SIGMOID_TOLERANCE:
            pos += SIGMOID_STEP
            val_before = val
            val = self.fx(pos)

        return pos

    def sample(self, universe) -> np.ndarray:
        return fuzz.sigmf(np.asarray(universe, dtype=float), self.c, self.a)


@dataclass(frozen=True)
class Bell(MembershipFunction):
    a: float
    b: float
    c: float

    tag = "bell"

    def __post_init__(self):
        if self.a == 0 or self.b <= 0:
            raise InvalidMembershipParameters(f"bell requires a != 0 and b > 0, got {self.parameters()}")

    def fx(self, x: float) -> float:
        try:
            return 1 / (1 + abs((x - self.c) / self.a) ** (2 * self.b))
        except OverflowError:
            return 0.0

    def find_maximum(self) -> float:
        return self.c

    def sample(self, universe) -> np.ndarray:
        return fuzz.gbellmf(np.asarray(universe, dtype=float), self.a, self.b, self.c)


@dataclass(frozen=True)
class Gaussian(MembershipFunction):
    mean: float
    deviation: float

    tag = "gaussian"

    def __post_init__(self):
        if self.deviation == 0:
            raise InvalidMembershipParameters(f"gaussian requires deviation != 0, got {self.parameters()}")

    def fx(self, x: float) -> float:
        try:
            return math.exp(-(x - self.mean) ** 2 / (2 * self.deviation ** 2))
        except OverflowError:
            # (x - mean) ** 2 -> inf
            return 0.0

    def find_maximum(self) -> float:
        return self.mean

    def sample(self, universe) -> np.ndarray:
        return fuzz.gaussmf(np.asarray(universe, dtype=float), self.mean, self.deviation)


@dataclass(frozen=True)
class Gaussian2(MembershipFunction):
    mean_left: float
    deviation_left: float
    mean_right: float
    deviation_right: float
    _left: Gaussian = field(init=False, repr=False, compare=False)
    _right: Gaussian = field(init=False, repr=False, compare=False)

    tag = "gaussian2"

    def __post_init__(self):
        if self.mean_left > self.mean_right:
            raise InvalidMembershipParameters(
                f"gaussian2 requires meanL <= meanR, got {self.parameters()}"
            )
        object.__setattr__(self, "_left", Gaussian(self.mean_left, self.deviation_left))
        object.__setattr__(self, "_right", Gaussian(self.mean_right, self.deviation_right))

    def fx(self, x: float) -> float:
        # each shoulder is clamped to 1 past its own mean
        left = 1.0 if x >= self.mean_left else self._left.fx(x)
        right = 1.0 if x <= self.mean_right else self._right.fx(x)
        return left * right

    def find_maximum(self) -> float:
        return (self.mean_left + self.mean_right) / 2

    def sample(self, universe) -> np.ndarray:
        return fuzz.gauss2mf(
            np.asarray(universe, dtype=float),
            self.mean_left, self.deviation_left, self.mean_right, self.deviation_right,
        )


# Recognized tags of the textual factory
MEMBERSHIP_FUNCTIONS: Dict[str, Type[MembershipFunction]] = {
    cls.tag: cls
    for cls in (Linear, Triangle, Trapezoid, SShape, ZShape, PiShape, Sigmoid, Bell, Gaussian, Gaussian2)
}

_SPEC_RE = re.compile(r'^\s*"([A-Za-z0-9_]+)"\s*:\s*\[(.*)\]\s*$')
_NUMBER_RE = re.compile(r'^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$')


def arity(cls: Type[MembershipFunction]) -> int:
    """Number of shape parameters of a membership function class."""
    return sum(1 for f in fields(cls) if f.init)


def membership_from_string(spec: str) -> MembershipFunction:
    """
    Build a membership function from its textual form.

    Args:
        spec: String like '"triangle": [0, 0.5, 1]'. Tag names are case-sensitive.

    Returns:
        MembershipFunction instance

    Raises:
        MalformedMembershipFunctionSpec: unknown tag, wrong number of parameters
            or a parameter that is not a finite decimal number
        InvalidMembershipParameters: parameters that make the curve undefined
    """
    match = _SPEC_RE.match(spec)
    if not match:
        raise MalformedMembershipFunctionSpec(spec, "expected '\"tag\": [values]'")

    tag, body = match.group(1), match.group(2)
    cls = MEMBERSHIP_FUNCTIONS.get(tag)
    if cls is None:
        raise MalformedMembershipFunctionSpec(spec, f"unknown tag '{tag}'")

    raw_values = [v.strip() for v in body.split(",")] if body.strip() else []
    for raw in raw_values:
        if not _NUMBER_RE.match(raw):
            raise MalformedMembershipFunctionSpec(spec, f"invalid number '{raw}'")
    values = [float(v) for v in raw_values]

    if len(values) != arity(cls):
        raise MalformedMembershipFunctionSpec(
            spec, f"'{tag}' takes {arity(cls)} parameters, got {len(values)}"
        )

    return cls(*values)


__all__ = [
    'MembershipFunction', 'Linear', 'Triangle', 'Trapezoid', 'SShape', 'ZShape',
    'PiShape', 'Sigmoid', 'Bell', 'Gaussian', 'Gaussian2',
    'MEMBERSHIP_FUNCTIONS', 'membership_from_string', 'arity',
]
