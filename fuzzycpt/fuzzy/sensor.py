"""
Sensor observation: map a continuous reading onto a discrete belief vector.

Sensor variables carry a fuzzy set. Observing a value x evaluates every
state's membership function at x, truncates the strengths the same way the
controller truncates rule firing strengths, applies the set's null-belief
floor and normalizes. The result is a single-slice CPT that can be handed to
the network as the sensor node's prior.
"""
from __future__ import annotations
import logging
import numpy as np

from fuzzycpt.core.cpt import CPT
from fuzzycpt.fuzzy.controller import apply_null_belief, normalize, truncate
from fuzzycpt.fuzzy.fuzzy_set import FuzzySet

logger = logging.getLogger(__name__)


def observe(fuzzy_set: FuzzySet, x: float) -> CPT:
    """
    Turn observation `x` into a normalized belief over the states of `fuzzy_set`.

    Raises:
        UnassignedMembershipFunctionError: if a state has no membership function
        DegenerateInferenceError: if no state has any strength at `x` and the
            set's null-belief tolerance is 0
    """
    strengths = fuzzy_set.get_strengths(x)
    beliefs = np.array([truncate(s) for s in strengths], dtype=float)
    beliefs = apply_null_belief(beliefs, fuzzy_set.null_belief_tolerance)
    beliefs = normalize(beliefs)

    logger.debug(f"[SENSOR] {fuzzy_set.name or 'sensor'} observed x={x}: {beliefs.tolist()}")
    return CPT(beliefs)


__all__ = ['observe']
