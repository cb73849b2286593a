"""
CLI Root Command

Compute the Merkle root of a leaf file.

Usage:
    arbor root leaves.txt [--format lines|json|hex] [--hash ALG] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from arbor.crypto.hashing import to_hex
from arbor.merkle import MerkleTree
from arbor_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, leaf_encoding, resolve_hash
from arbor_cli.leaves import LeafInputError, read_leaves


logger = logging.getLogger(__name__)


@dataclass
class RootSummary:
    """Summary of a root computation for CLI output."""
    source: str
    hash_algorithm: str
    leaf_count: int
    depth: int
    root: str


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    algorithm, hash_fn = resolve_hash(args)

    try:
        leaves = read_leaves(args.leaves, fmt=args.format, encoding=leaf_encoding(args))
    except LeafInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    tree = MerkleTree(leaves, hash_fn=hash_fn)
    summary = RootSummary(
        source=args.leaves,
        hash_algorithm=algorithm,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(tree.get_root()),
    )
    logger.info("Computed root over %d leaves", summary.leaf_count)

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print(f"leaves: {summary.leaf_count}")
        print(f"depth: {summary.depth}")
        print(f"hash: {summary.hash_algorithm}")
        print(f"root: {summary.root}")

    return EXIT_SUCCESS
