"""
Load fuzzy belief network models and infer their CPTs.

Model format (JSON):
    {"tolerance": 0.01,
     "nodes": [{"id": "Sprinkler", "binary": true,
                "membership": {"FALSE": "\\"gaussian\\": [0, 0.35]", "TRUE": "\\"gaussian\\": [1, 0.35]"}},
               {"id": "WetGrass", "binary": true,
                "rules": [{"if": ["FALSE", "FALSE"], "then": "FALSE"}, ...]}],
     "edges": [["Sprinkler", "WetGrass"], ...]}

Parents of a node are ordered by node declaration order; rule "if" lists
follow that order.
"""
from __future__ import annotations
import json
import logging
from typing import Dict, List, Optional
import networkx as nx

from fuzzycpt.core.cpt import CPT
from fuzzycpt.core.exceptions import FuzzyCPTError, ModelFormatError
from fuzzycpt.fuzzy.controller import Controller
from fuzzycpt.fuzzy.fuzzy_set import FuzzySet
from fuzzycpt.fuzzy.membership import membership_from_string
from fuzzycpt.fuzzy.rules import Rule, RuleSet
from fuzzycpt.fuzzy.types import (
    BINARY_STATES, QUATERNARY_STATES, StateBinary, parse_state_name, rule_state_from_string,
)

logger = logging.getLogger(__name__)


def _build_fuzzy_set(node_id: str, nr_states: int, membership: dict, tolerance: float) -> FuzzySet:
    fuzzy_set = FuzzySet(nr_states, null_belief_tolerance=tolerance, name=node_id)
    for state_name, spec in membership.items():
        state = parse_state_name(state_name)
        if (nr_states == BINARY_STATES) != isinstance(state, StateBinary):
            raise ModelFormatError(f"Node '{node_id}': state '{state_name}' does not match its arity")
        fuzzy_set.set_membership_function(int(state), membership_from_string(spec))
    return fuzzy_set


def _build_rules(node_id: str, rules: list) -> RuleSet:
    rule_set = RuleSet()
    for i, rule in enumerate(rules):
        try:
            parents = [rule_state_from_string(s) for s in rule["if"]]
            child = rule_state_from_string(rule["then"])
        except (KeyError, TypeError) as e:
            raise ModelFormatError(f"Node '{node_id}': rule {i} is malformed ({e})") from e
        rule_set.add_rule(Rule(parents, child))
    return rule_set


def load_model_from_dict(data: dict) -> nx.DiGraph:
    """
    Build the network graph from a parsed model.

    Returns:
        DiGraph with node attributes binary, nr_states, order, fuzzy_set, rules
        and graph attribute tolerance when the model declares one
    """
    if "nodes" not in data:
        raise ModelFormatError("Model has no 'nodes'")

    G = nx.DiGraph()
    if "tolerance" in data:
        G.graph["tolerance"] = float(data["tolerance"])
    tolerance = G.graph.get("tolerance", 0.0)

    for order, node in enumerate(data["nodes"]):
        if "id" not in node:
            raise ModelFormatError(f"Node {order} has no 'id'")
        node_id = node["id"]
        if node_id in G.nodes:
            raise ModelFormatError(f"Duplicate node '{node_id}'")

        binary = bool(node.get("binary", True))
        nr_states = BINARY_STATES if binary else QUATERNARY_STATES
        fuzzy_set = _build_fuzzy_set(node_id, nr_states, node.get("membership", {}), tolerance)
        rules = _build_rules(node_id, node["rules"]) if node.get("rules") else None
        if rules is not None and rules.first().child_state.nr_states != nr_states:
            raise ModelFormatError(
                f"Node '{node_id}' has {nr_states} states but its rules conclude "
                f"{rules.first().child_state.nr_states}-state values"
            )

        G.add_node(
            node_id,
            binary=binary,
            nr_states=nr_states,
            order=order,
            fuzzy_set=fuzzy_set,
            rules=rules,
        )
        logger.info(f"[MODEL] Node {node_id}: {nr_states} states, {len(rules) if rules else 0} rules")

    for edge in data.get("edges", []):
        if len(edge) != 2:
            raise ModelFormatError(f"Edge {edge!r} must have exactly two endpoints")
        u, v = edge
        for endpoint in (u, v):
            if endpoint not in G.nodes:
                raise ModelFormatError(f"Edge {edge!r} references unknown node '{endpoint}'")
        G.add_edge(u, v)

    if not nx.is_directed_acyclic_graph(G):
        raise ModelFormatError("Model graph contains a cycle")

    return G


def load_model_from_json(json_path: str) -> nx.DiGraph:
    """Load a fuzzy belief network model from a JSON file."""
    with open(json_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModelFormatError(f"{json_path}: invalid JSON ({e})") from e
    return load_model_from_dict(data)


def parents_of(G: nx.DiGraph, node: str) -> List[str]:
    """Parents of `node` in declaration order."""
    return sorted(G.predecessors(node), key=lambda n: G.nodes[n]["order"])


def infer_node_cpt(G: nx.DiGraph, node: str, tolerance: Optional[float] = None) -> CPT:
    """
    Infer the CPT of `node` from its rules and its parents' fuzzy sets.

    Args:
        G: Model graph from load_model_from_json
        node: Node id
        tolerance: Null-belief tolerance (defaults to the model tolerance)

    Raises:
        ModelFormatError: unknown node, node without rules, or a parent whose
            fuzzy set is incomplete
    """
    if node not in G.nodes:
        raise ModelFormatError(f"Unknown node '{node}'")
    rules = G.nodes[node]["rules"]
    if rules is None:
        raise ModelFormatError(f"Node '{node}' has no rules")

    parents = parents_of(G, node)
    if not parents:
        logger.warning(f"[MODEL] Node {node} has rules but no parents")

    fuzzy_sets = []
    for p in parents:
        fuzzy_set = G.nodes[p]["fuzzy_set"]
        try:
            fuzzy_set.require_complete()
        except FuzzyCPTError as e:
            raise ModelFormatError(f"Parent '{p}' of '{node}': {e}") from e
        fuzzy_sets.append(fuzzy_set)

    if tolerance is None:
        tolerance = G.graph.get("tolerance", 0.0)

    controller = Controller(fuzzy_sets, rules, tolerance)
    cpt = controller.infer_cpt()
    logger.info(f"[MODEL] Inferred CPT for {node} (parents={parents})")
    return cpt


def infer_network(G: nx.DiGraph, tolerance: Optional[float] = None) -> Dict[str, CPT]:
    """Infer the CPT of every node carrying rules, in topological order."""
    cpts = {}
    for node in nx.topological_sort(G):
        if G.nodes[node]["rules"] is not None:
            cpts[node] = infer_node_cpt(G, node, tolerance)
    return cpts


__all__ = [
    'load_model_from_dict', 'load_model_from_json', 'parents_of',
    'infer_node_cpt', 'infer_network',
]
