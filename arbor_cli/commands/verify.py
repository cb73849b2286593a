"""
CLI Verify Command

Verify a leaf against an inclusion proof document offline:
- Fold the leaf with the proof steps
- Compare the result to a trusted root (or the document's own root)

Usage:
    arbor verify proof.json (--leaf TEXT | --leaf-hex 0x..) [--root 0x..] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from arbor.crypto.hashing import from_hex, get_hash_function, to_hex
from arbor.merkle import MerkleVerifier
from arbor.schemas.proof import InclusionProof
from arbor_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    leaf_encoding,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    hash_algorithm: str = ""
    leaf_index: int = 0
    expected_root: str = ""
    root_source: str = ""
    computed_root: str = ""
    leaf_hash_ok: bool = False
    valid: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def load_proof(path: Path) -> InclusionProof:
    """Load and validate an InclusionProof document."""
    return InclusionProof.model_validate_json(path.read_text(encoding="utf-8"))


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"leaf_index: {summary.leaf_index}")
    print(f"hash: {summary.hash_algorithm}")
    print(f"expected_root: {summary.expected_root} ({summary.root_source})")
    print(f"computed_root: {summary.computed_root}")
    print(f"leaf_hash_ok: {str(summary.leaf_hash_ok).lower()}")
    print(f"valid: {str(summary.valid).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 invalid, 1 on bad input)
    """
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_proof(proof_path)
    except ValidationError as e:
        print(f"Error: Invalid proof document: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        if args.leaf_hex is not None:
            leaf = from_hex(args.leaf_hex)
        else:
            leaf = args.leaf.encode(leaf_encoding(args))
        trusted_root = from_hex(args.root) if args.root else None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    hash_fn = get_hash_function(document.hash_algorithm)

    if trusted_root is None:
        logger.warning("No --root given; checking the proof against its own root")

    expected_root = trusted_root if trusted_root is not None else document.root_bytes
    computed_root = MerkleVerifier.compute_candidate_root(leaf, document, hash_fn)
    valid = computed_root == expected_root

    summary = VerifySummary(
        proof_path=str(proof_path),
        hash_algorithm=document.hash_algorithm,
        leaf_index=document.leaf_index,
        expected_root=to_hex(expected_root),
        root_source="argument" if trusted_root is not None else "document",
        computed_root=to_hex(computed_root),
        leaf_hash_ok=hash_fn(leaf) == document.leaf_hash_bytes,
        valid=valid,
    )
    if not summary.leaf_hash_ok:
        summary.errors.append("Leaf does not hash to the document's leaf_hash")
    if not valid:
        summary.errors.append("Computed root does not match the expected root")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
