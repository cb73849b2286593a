"""
CLI Prove Command

Build an inclusion proof document for one leaf.

Usage:
    arbor prove leaves.txt --index N [--out proof.json] [--format ...] [--hash ALG]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from arbor.merkle import MerkleTree
from arbor.schemas.errors import IndexOutOfRangeException
from arbor_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, leaf_encoding, resolve_hash
from arbor_cli.leaves import LeafInputError, read_leaves


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Writes the InclusionProof JSON to --out, or to stdout.

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
    try:
        document = tree.get_inclusion_proof(args.index, hash_algorithm=algorithm)
    except IndexOutOfRangeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    payload = document.model_dump_json(indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
        logger.info("Wrote proof for leaf %d to %s", args.index, out_path)
        print(f"proof: {out_path}")
        print(f"root: {document.root}")
        print(f"steps: {len(document.steps)}")
    else:
        print(payload)

    return EXIT_SUCCESS
