from .types import State, StateBinary, RuleState, get_rule_state, parse_state_name, rule_state_from_string
from .membership import (
    MembershipFunction, Linear, Triangle, Trapezoid, SShape, ZShape, PiShape,
    Sigmoid, Bell, Gaussian, Gaussian2, membership_from_string,
)
from .fuzzy_set import FuzzySet
from .rules import Rule, RuleSet
from .controller import Controller, truncate
from .sensor import observe
from .config import InferenceConfig, load_config
from .log_utils import log_inferred_cpt
