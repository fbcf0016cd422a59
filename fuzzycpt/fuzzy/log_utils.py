"""
Logging utilities for inferred CPTs.
"""
import os
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence
import numpy as np

from fuzzycpt.core.cpt import CPT

CPT_LOG_PATH = os.path.join("results", "cpt_logs", "inferred.jsonl")


def append_jsonl(path: str, obj: dict) -> None:
    """Append a JSON object as a line in a .jsonl file, create folder if needed.
    Serializes Enum, numpy values and CPTs if needed."""
    def default(o):
        if isinstance(o, Enum):
            return o.name
        if isinstance(o, CPT):
            return o.to_list()
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.generic):
            return o.item()
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False, default=default) + "\n")


def log_inferred_cpt(node: str, parents: Sequence[str], tolerance: float, cpt: CPT,
                     path: str = CPT_LOG_PATH, timestamp: Optional[str] = None) -> dict:
    """Log an inferred CPT to the .jsonl file and return the written record."""
    record = {
        "node": node,
        "parents": list(parents),
        "tolerance": tolerance,
        "cpt": cpt.to_list(),
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
    }
    append_jsonl(path, record)
    return record


def read_jsonl(path: str) -> list:
    """Read back every record of a .jsonl file."""
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]
