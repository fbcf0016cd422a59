"""Top-level package exports for fuzzycpt.

Convenience re-exports so users can:

	from fuzzycpt import Controller, FuzzySet, Gaussian, Rule, RuleSet

Versioning kept simple (manual bump).
"""

__all__ = [
	'Controller', 'FuzzySet', 'Rule', 'RuleSet', 'CPT', 'StateCounter',
	'membership_from_string', 'get_rule_state', 'State', 'StateBinary',
	'Linear', 'Triangle', 'Trapezoid', 'SShape', 'ZShape', 'PiShape',
	'Sigmoid', 'Bell', 'Gaussian', 'Gaussian2', 'observe', 'VERSION',
]

from .core.counter import StateCounter
from .core.cpt import CPT
from .fuzzy.controller import Controller
from .fuzzy.fuzzy_set import FuzzySet
from .fuzzy.membership import (
	Linear, Triangle, Trapezoid, SShape, ZShape, PiShape,
	Sigmoid, Bell, Gaussian, Gaussian2, membership_from_string,
)
from .fuzzy.rules import Rule, RuleSet
from .fuzzy.sensor import observe
from .fuzzy.types import State, StateBinary, get_rule_state

VERSION = '0.1.0'
