import os
import logging
from datetime import datetime
from typing import List, Optional, Sequence
import numpy as np
import pandas as pd

from fuzzycpt.core.counter import StateCounter
from fuzzycpt.core.cpt import CPT
from fuzzycpt.fuzzy.fuzzy_set import FuzzySet
from fuzzycpt.fuzzy.types import BINARY_STATES, State, StateBinary

logger = logging.getLogger(__name__)


def state_names(nr_states: int) -> List[str]:
    enum_type = StateBinary if nr_states == BINARY_STATES else State
    return [s.name for s in enum_type]


def cpt_to_frame(cpt: CPT, parent_cardinalities: Sequence[int], nr_child_states: int,
                 parent_names: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Tabulate a CPT: one row per parent combination (counter order), parent
    state columns followed by one probability column per child state.

    Args:
        cpt: CPT laid out child-state-major
        parent_cardinalities: Number of states of each parent, in parent order
        nr_child_states: Number of child states
        parent_names: Column names for the parents (defaults to parent_0, ...)
    """
    names = list(parent_names) if parent_names is not None else [f"parent_{i}" for i in range(len(parent_cardinalities))]
    child_names = state_names(nr_child_states)

    counter = StateCounter(parent_cardinalities)
    n = counter.get_maximum_increment()
    if cpt.size() != n * nr_child_states:
        raise ValueError(f"CPT of size {cpt.size()} does not match {n} combinations x {nr_child_states} states")

    rows = []
    for combination in counter:
        row = {
            name: state_names(card)[state]
            for name, card, state in zip(names, parent_cardinalities, combination)
        }
        column = cpt.column(counter.get_increment(), n, nr_child_states)
        for child_name, p in zip(child_names, column):
            row[child_name] = float(p)
        rows.append(row)

    return pd.DataFrame(rows, columns=names + child_names)


def save_cpt_csv(cpt: CPT, parent_cardinalities: Sequence[int], nr_child_states: int,
                 parent_names: Optional[Sequence[str]] = None, name="cpt", folder="results") -> str:
    """
    Save a CPT as CSV.

    Returns:
        Path of the written file
    """
    os.makedirs(folder, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    df = cpt_to_frame(cpt, parent_cardinalities, nr_child_states, parent_names)
    full_path = os.path.join(folder, f"cpt_{name}_{timestamp}.csv")
    df.to_csv(full_path, index=False)
    logger.info(f"[SAVE] CPT saved: {full_path}")
    return full_path


def save_membership_curves(fuzzy_set: FuzzySet, universe, name="curves", folder="results") -> str:
    """
    Sample every state's membership function over `universe` and save as CSV.

    Returns:
        Path of the written file
    """
    fuzzy_set.require_complete()
    universe = np.asarray(universe, dtype=float)
    data = {"x": universe}
    for state, state_name in enumerate(state_names(fuzzy_set.nr_states())):
        data[state_name] = fuzzy_set.get_membership_function(state).sample(universe)

    os.makedirs(folder, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    full_path = os.path.join(folder, f"curves_{name}_{timestamp}.csv")
    pd.DataFrame(data).to_csv(full_path, index=False)
    logger.info(f"[SAVE] Membership curves saved: {full_path}")
    return full_path
