"""Model-independent primitives: errors, state counter and CPT container."""
from .exceptions import *  # noqa: F401,F403
from .counter import StateCounter
from .cpt import CPT
