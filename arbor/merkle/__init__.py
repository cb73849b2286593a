"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle root construction + proof generation/verification.

This module provides:
- MerkleTree: immutable tree over raw leaves (get_root, get_proof, verify)
- build_merkle_root: Compute root from leaf digests
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a leaf and proof against a root

Commitment Rules:
1. Leaf hashing: H(leaf_bytes), Keccak-256 by default
2. Parent hashing: H(left + right)
3. Odd levels: trailing node carried forward unchanged
4. Single leaf: root = H(leaf)
5. Empty tree: rejected

Usage:
    from arbor.merkle import MerkleTree

    tree = MerkleTree([b"A", b"B", b"C"])
    root = tree.get_root()
    proof = tree.get_proof(2)
    assert MerkleTree.verify(b"C", proof, root)
"""
from .merkle_tree import (
    merkle_parent,
    hash_leaves,
    reduce_level,
    build_merkle_root,
    build_merkle_proof,
    fold_proof,
    verify_leaf_hash,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleTree,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core functions
    "merkle_parent",
    "hash_leaves",
    "reduce_level",
    "build_merkle_root",
    "build_merkle_proof",
    "fold_proof",
    "verify_leaf_hash",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleTree",
    "MerkleProver",
    "MerkleVerifier",
]
