"""
Load fuzzy CPT inference configuration.
"""
import json
import os
from dataclasses import dataclass
from typing import Any

CONFIG_PATH = os.path.join("data", "fuzzycpt", "config.json")


@dataclass
class InferenceConfig:
    null_belief_tolerance: float = 0.0
    cpt_log_path: str = os.path.join("results", "cpt_logs", "inferred.jsonl")
    curve_points: int = 101


def safe_get(d: dict, key: str, default: Any) -> Any:
    """Get dictionary value with default fallback."""
    return d[key] if key in d else default


def load_config(path: str | None = CONFIG_PATH) -> InferenceConfig:
    """Load inference configuration from JSON file, or return defaults."""
    defaults = InferenceConfig()
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return InferenceConfig(
            null_belief_tolerance=float(safe_get(data, "null_belief_tolerance", defaults.null_belief_tolerance)),
            cpt_log_path=safe_get(data, "cpt_log_path", defaults.cpt_log_path),
            curve_points=int(safe_get(data, "curve_points", defaults.curve_points)),
        )
    return defaults
