"""
Fuzzy CPT inference from a network model file.

Usage:
    python run_inference.py --model data/models/wet_grass.json
    python run_inference.py --model data/models/wet_grass.json --node WetGrass --tolerance 0.01
    python run_inference.py --model data/models/wet_grass.json --csv results/cpt --curves results/curves --log

Pipeline:
    1. Load configuration (data/fuzzycpt/config.json if present)
    2. Load the network model (nodes, membership functions, rules, edges)
    3. Infer the CPT of the selected node, or of every node carrying rules
    4. Optionally export CSV tables, membership curves and JSON-lines records
"""

import sys
import logging
import argparse
import numpy as np

from fuzzycpt.core.exceptions import FuzzyCPTError
from fuzzycpt.fuzzy.config import load_config, CONFIG_PATH
from fuzzycpt.fuzzy.log_utils import log_inferred_cpt
from fuzzycpt.utils.model_io import load_model_from_json, parents_of, infer_node_cpt, infer_network
from fuzzycpt.utils.save import save_cpt_csv, save_membership_curves, state_names

logger = logging.getLogger("run_inference")


def resolve_tolerance(cli_tolerance, G, config):
    """CLI flag > model file > config file > default."""
    if cli_tolerance is not None:
        return cli_tolerance
    if "tolerance" in G.graph:
        return G.graph["tolerance"]
    return config.null_belief_tolerance


def log_cpt_rows(G, node, cpt):
    parents = parents_of(G, node)
    cards = [G.nodes[p]["nr_states"] for p in parents]
    n_child = G.nodes[node]["nr_states"]
    n_comb = cpt.size() // n_child

    logger.info(f"\n{node} | parents: {', '.join(parents) or '-'}")
    for increment in range(n_comb):
        # decode the counter increment back into parent states (first parent fastest)
        rest, states = increment, []
        for card in cards:
            states.append(state_names(card)[rest % card])
            rest //= card
        column = cpt.column(increment, n_comb, n_child)
        probs = ", ".join(f"{name}={p:.6f}" for name, p in zip(state_names(n_child), column))
        logger.info(f"  [{', '.join(states)}] -> {probs}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Infer conditional probability tables with fuzzy rules")
    parser.add_argument('--model', type=str, required=True,
                        help='Path to the network model JSON file')
    parser.add_argument('--node', type=str, default=None,
                        help='Node to infer (default: every node carrying rules)')
    parser.add_argument('--tolerance', type=float, default=None,
                        help='Null belief tolerance (overrides model and config)')
    parser.add_argument('--config', type=str, default=CONFIG_PATH,
                        help='Path to the inference configuration JSON file')
    parser.add_argument('--csv', type=str, default=None,
                        help='Folder for CSV export of the inferred CPTs')
    parser.add_argument('--curves', type=str, default=None,
                        help='Folder for CSV export of the parents\' membership curves')
    parser.add_argument('--log', action='store_true',
                        help='Append inferred CPTs to the JSON-lines log')
    parser.add_argument('--quiet', action='store_true',
                        help='Only show warnings and errors')
    args = parser.parse_args(argv)

    if args.quiet:
        logging.basicConfig(level=logging.WARNING, format='%(message)s')
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')

    try:
        config = load_config(args.config)
        G = load_model_from_json(args.model)
        tolerance = resolve_tolerance(args.tolerance, G, config)
        logger.info(f"Loaded model {args.model}: {len(G.nodes)} nodes, {len(G.edges)} edges, tolerance={tolerance}")

        if args.node is not None:
            cpts = {args.node: infer_node_cpt(G, args.node, tolerance)}
        else:
            cpts = infer_network(G, tolerance)
    except FuzzyCPTError as e:
        logger.error(f"[ERROR] {e}")
        return 1

    for node, cpt in cpts.items():
        log_cpt_rows(G, node, cpt)
        parents = parents_of(G, node)
        cards = [G.nodes[p]["nr_states"] for p in parents]

        if args.csv:
            save_cpt_csv(cpt, cards, G.nodes[node]["nr_states"], parents, name=node, folder=args.csv)
        if args.curves:
            for p in parents:
                fuzzy_set = G.nodes[p]["fuzzy_set"]
                modes = [fuzzy_set.find_maximum(s) for s in range(fuzzy_set.nr_states())]
                span = max(modes) - min(modes) or 1.0
                universe = np.linspace(min(modes) - span, max(modes) + span, config.curve_points)
                save_membership_curves(fuzzy_set, universe, name=p, folder=args.curves)
        if args.log:
            log_inferred_cpt(node, parents, tolerance, cpt, path=config.cpt_log_path)

    logger.info(f"\nInferred {len(cpts)} CPT(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
