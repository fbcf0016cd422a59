import math
from dataclasses import FrozenInstanceError
import numpy as np
import pytest

from fuzzycpt.core.exceptions import (
    InvalidMembershipParameters, MalformedMembershipFunctionSpec, PreconditionViolation,
)
from fuzzycpt.fuzzy.membership import (
    Linear, Triangle, Trapezoid, SShape, ZShape, PiShape, Sigmoid, Bell, Gaussian, Gaussian2,
    membership_from_string, arity,
)


def test_linear_clamps_outside_range():
    mf = Linear(0, 1)
    assert mf.fx(-1) == 0.0
    assert mf.fx(2) == 1.0
    assert mf.fx(0.5) == pytest.approx(0.5)
    assert mf.find_maximum() == 1


def test_linear_reversed_ramp():
    mf = Linear(1, 0)
    assert mf.fx(-1) == 1.0
    assert mf.fx(2) == 0.0
    assert mf.fx(0.25) == pytest.approx(0.75)
    assert mf.find_maximum() == 0


def test_triangle_values_and_edges():
    mf = Triangle(0, 5, 10)
    assert mf.fx(2.5) == pytest.approx(0.5)
    assert mf.fx(7.5) == pytest.approx(0.5)
    assert mf.fx(5) == 1.0
    assert mf.fx(0) == 0.0
    assert mf.fx(10) == 0.0
    assert mf.find_maximum() == 5


def test_shoulder_triangle_is_zero_at_its_peak_edge():
    assert Triangle(0, 0, 40).fx(0) == 0.0


def test_triangle_rejects_unordered_points():
    with pytest.raises(InvalidMembershipParameters):
        Triangle(2, 1, 0)


def test_trapezoid_plateau_and_mode():
    mf = Trapezoid(0, 2, 4, 6)
    assert mf.fx(3) == 1.0
    assert mf.fx(1) == pytest.approx(0.5)
    assert mf.fx(5) == pytest.approx(0.5)
    assert mf.find_maximum() == pytest.approx(3)


def test_sshape_and_zshape_are_complementary():
    s, z = SShape(0, 10), ZShape(0, 10)
    assert s.fx(2.5) == pytest.approx(0.125)
    assert s.fx(5) == pytest.approx(0.5)
    assert s.fx(7.5) == pytest.approx(0.875)
    for x in (-1, 0, 2.5, 5, 7.5, 10, 11):
        assert z.fx(x) == pytest.approx(1 - s.fx(x))
    assert s.find_maximum() == 10
    assert z.find_maximum() == 0


def test_sshape_requires_increasing_bounds():
    with pytest.raises(InvalidMembershipParameters):
        SShape(1, 1)
    with pytest.raises(InvalidMembershipParameters):
        ZShape(2, 1)


def test_pishape_rises_then_falls():
    mf = PiShape(0, 2, 4, 6)
    assert mf.fx(1) == pytest.approx(0.5)
    assert mf.fx(3) == 1.0
    assert mf.fx(5) == pytest.approx(0.5)
    assert mf.fx(7) == 0.0
    assert mf.find_maximum() == pytest.approx(3)


def test_sigmoid_mode_search():
    mf = Sigmoid(10, 0)
    assert mf.fx(0) == pytest.approx(0.5)
    assert mf.find_maximum() == pytest.approx(0.6)
    assert mf.fx(mf.find_maximum()) > 0.99


def test_sigmoid_overflow_returns_zero():
    assert Sigmoid(10, 0).fx(-1e6) == 0.0


def test_gaussian_overflow_returns_zero():
    assert Gaussian(0, 1).fx(1e200) == 0.0
    assert Gaussian2(0, 1, 1, 1).fx(-1e200) == 0.0
    assert Gaussian2(0, 1, 1, 1).fx(1e200) == 0.0


def test_bell_values():
    mf = Bell(2, 4, 6)
    assert mf.fx(6) == 1.0
    assert mf.fx(8) == pytest.approx(0.5)
    assert mf.find_maximum() == 6


def test_gaussian_values():
    mf = Gaussian(0, 1)
    assert mf.fx(0) == 1.0
    assert mf.fx(1) == pytest.approx(math.exp(-0.5))
    with pytest.raises(InvalidMembershipParameters):
        Gaussian(0, 0)


def test_gaussian2_plateau_between_means():
    mf = Gaussian2(0, 1, 2, 1)
    assert mf.fx(1) == 1.0
    assert mf.fx(-1) == pytest.approx(math.exp(-0.5))
    assert mf.fx(3) == pytest.approx(math.exp(-0.5))
    assert mf.find_maximum() == pytest.approx(1)


def test_membership_functions_are_immutable():
    mf = Gaussian(0, 1)
    with pytest.raises(FrozenInstanceError):
        mf.mean = 3


def test_factory_builds_every_tag():
    assert membership_from_string('"linear": [0, 1]') == Linear(0, 1)
    assert membership_from_string('"triangle": [0, 0.5, 1]') == Triangle(0, 0.5, 1)
    assert membership_from_string('"trapezoid": [0, 1, 2, 3]') == Trapezoid(0, 1, 2, 3)
    assert membership_from_string('"sshape": [0, 1]') == SShape(0, 1)
    assert membership_from_string('"zshape": [0, 1]') == ZShape(0, 1)
    assert membership_from_string('"pishape": [0, 1, 2, 3]') == PiShape(0, 1, 2, 3)
    assert membership_from_string('"sigmoid": [2, 5]') == Sigmoid(2, 5)
    assert membership_from_string('"bell": [1, 2, 3]') == Bell(1, 2, 3)
    assert membership_from_string('"gaussian": [0, 0.35]') == Gaussian(0, 0.35)
    assert membership_from_string('"gaussian2": [0, 1, 2, 1]') == Gaussian2(0, 1, 2, 1)


def test_factory_accepts_signed_numbers_and_exponents():
    mf = membership_from_string('  "gaussian" : [ -1e-1, +2.5E0 ] ')
    assert mf == Gaussian(-0.1, 2.5)


@pytest.mark.parametrize("spec", [
    '"foo": [1, 2]',
    '"Gaussian": [0, 1]',
    '"gaussian": [1]',
    '"gaussian": [1, 2, 3]',
    '"gaussian": [1, x]',
    '"gaussian": [1, inf]',
    '"linear": []',
    'gaussian: [0, 1]',
    '"gaussian" [0, 1]',
    '',
])
def test_factory_rejects_malformed_specs(spec):
    with pytest.raises(MalformedMembershipFunctionSpec):
        membership_from_string(spec)


def test_factory_rejects_undefined_curves():
    with pytest.raises(PreconditionViolation):
        membership_from_string('"triangle": [2, 1, 0]')


def test_to_string_format():
    assert str(Gaussian(0, 0.35)) == '"gaussian": [0, 0.35]'
    assert str(ZShape(1, 2)) == '"zshape": [1, 2]'
    assert str(Bell(1, 2, 3)) == '"bell": [1, 2, 3]'


def test_to_string_parses_back():
    for mf in (Triangle(0, 0.5, 1), PiShape(0, 1, 2, 3), Sigmoid(-2, 0.25), Gaussian2(0, 1, 2, 1)):
        assert membership_from_string(mf.to_string()) == mf


def test_arity():
    assert arity(Linear) == 2
    assert arity(Triangle) == 3
    assert arity(Gaussian2) == 4


@pytest.mark.parametrize("mf", [
    Triangle(0, 5, 10),
    Trapezoid(0, 2, 4, 6),
    Bell(2, 4, 6),
    Gaussian(5, 1.5),
    Sigmoid(1.5, 5),
    Linear(2, 8),
])
def test_sample_matches_fx(mf):
    universe = np.linspace(-2, 12, 57)
    expected = [mf.fx(float(x)) for x in universe]
    assert np.allclose(mf.sample(universe), expected)


@pytest.mark.parametrize("mf", [
    Triangle(0, 0, 40),
    Triangle(0, 40, 40),
    Trapezoid(0, 0, 10, 20),
    Trapezoid(0, 10, 20, 20),
])
def test_sample_matches_fx_on_shoulders(mf):
    universe = np.linspace(0, 40, 41)
    expected = [mf.fx(float(x)) for x in universe]
    assert np.allclose(mf.sample(universe), expected)
    assert mf.sample(universe)[0] == 0.0
