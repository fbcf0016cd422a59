import pytest

from fuzzycpt.fuzzy.fuzzy_set import FuzzySet
from fuzzycpt.fuzzy.membership import Gaussian
from fuzzycpt.fuzzy.rules import Rule, RuleSet
from fuzzycpt.fuzzy.types import StateBinary, get_rule_state

F = get_rule_state(StateBinary.FALSE)
T = get_rule_state(StateBinary.TRUE)

# Sprinkler OR Rainy -> WetGrass with gaussian(0|1, 0.35) parents and tolerance 0.01
WET_GRASS_CPT = [1 / 1.01, .01 / 1.01, .01 / 1.01, .01 / 1.01, .01 / 1.01, 1 / 1.01, 1 / 1.01, 1 / 1.01]


def make_gaussian_set(name, tolerance=0.0):
    fs = FuzzySet(2, null_belief_tolerance=tolerance, name=name)
    fs.set_membership_function(StateBinary.FALSE, Gaussian(0, 0.35))
    fs.set_membership_function(StateBinary.TRUE, Gaussian(1, 0.35))
    return fs


@pytest.fixture
def parents():
    return [make_gaussian_set("Sprinkler"), make_gaussian_set("Rainy")]


@pytest.fixture
def or_rules():
    return RuleSet([
        Rule([F, F], F),
        Rule([F, T], T),
        Rule([T, F], T),
        Rule([T, T], T),
    ])


@pytest.fixture
def wet_grass_model():
    gaussians = {"FALSE": '"gaussian": [0, 0.35]', "TRUE": '"gaussian": [1, 0.35]'}
    return {
        "tolerance": 0.01,
        "nodes": [
            {"id": "Sprinkler", "binary": True, "membership": dict(gaussians)},
            {"id": "Rainy", "binary": True, "membership": dict(gaussians)},
            {"id": "WetGrass", "binary": True, "membership": dict(gaussians), "rules": [
                {"if": ["FALSE", "FALSE"], "then": "FALSE"},
                {"if": ["FALSE", "TRUE"], "then": "TRUE"},
                {"if": ["TRUE", "FALSE"], "then": "TRUE"},
                {"if": ["TRUE", "TRUE"], "then": "TRUE"},
            ]},
        ],
        # declared child-first to check that parent order follows node order
        "edges": [["Rainy", "WetGrass"], ["Sprinkler", "WetGrass"]],
    }
