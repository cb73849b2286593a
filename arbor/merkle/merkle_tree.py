"""
Merkle - Tree Implementation
Deterministic root computation, proof generation and proof verification
over an ordered sequence of digests.

This module provides:
- Leaf hashing and pairwise level reduction (root computation)
- Inclusion proof generation for any leaf index
- Inclusion proof verification

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(raw_leaf_bytes)
2. Parent hashing: parent = H(left + right), order-sensitive
3. Odd levels: the trailing node is carried to the next level unchanged
   (no duplication, no self-merge)
4. Single node: root = that node
5. Empty leaves: rejected with EmptyTreeException

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaves are never sorted; input order is part of the tree's identity
- Levels are plain lists rebuilt per call, there are no node objects
"""
from __future__ import annotations

from typing import Iterable, Sequence

from arbor.crypto.hashing import HashFunction, keccak256
from arbor.schemas.errors import EmptyTreeException, IndexOutOfRangeException
from arbor.schemas.proof import ProofStep, Side


def merkle_parent(left: bytes, right: bytes, hash_fn: HashFunction = keccak256) -> bytes:
    """
    Compute the parent digest of two child nodes: H(left + right).

    Args:
        left: Left child digest
        right: Right child digest
        hash_fn: Hash function H

    Returns:
        Parent digest
    """
    return hash_fn(left + right)


def hash_leaves(leaves: Sequence[bytes], hash_fn: HashFunction = keccak256) -> list[bytes]:
    """Hash raw leaf values into level 0."""
    return [hash_fn(leaf) for leaf in leaves]


def reduce_level(level: Sequence[bytes], hash_fn: HashFunction = keccak256) -> list[bytes]:
    """
    Apply the pairwise-reduction rule once.

    Consecutive pairs are merged left to right; a trailing unpaired
    node is carried forward unchanged.

    Example: [a, b, c] -> [parent(a, b), c]
    """
    next_level: list[bytes] = []
    for i in range(0, len(level), 2):
        if i + 1 < len(level):
            next_level.append(merkle_parent(level[i], level[i + 1], hash_fn))
        else:
            next_level.append(level[i])
    return next_level


def build_merkle_root(level: Sequence[bytes], hash_fn: HashFunction = keccak256) -> bytes:
    """
    Collapse an ordered sequence of digests into the Merkle root.

    Algorithm:
    1. If a single digest remains, it is the root
    2. Otherwise reduce pairwise (carrying an odd trailing node)
       and repeat

    Example:
        [a, b, c] -> [ab, c] -> [abc]
        [a, b, c, d, e] -> [ab, cd, e] -> [abcd, e] -> [abcde]

    Args:
        level: Level-0 digests (already-hashed leaves). Order matters.
        hash_fn: Hash function used to merge pairs

    Returns:
        Root digest

    Raises:
        EmptyTreeException: If level is empty
    """
    if len(level) == 0:
        raise EmptyTreeException("Cannot compute Merkle root from empty level")

    current_level: list[bytes] = list(level)
    while len(current_level) > 1:
        current_level = reduce_level(current_level, hash_fn)

    return current_level[0]


def build_merkle_proof(
    index: int,
    level: Sequence[bytes],
    hash_fn: HashFunction = keccak256,
) -> list[ProofStep]:
    """
    Generate the inclusion proof for the node at ``index`` of ``level``.

    The walk mirrors build_merkle_root exactly. At every level the chunk
    containing the live index is found by comparing each chunk start
    against the index itself, so orphan carries at earlier levels never
    leave a stale left/right decision behind.

    Algorithm, per level:
    1. A level of one node is the root: stop
    2. For each full chunk (left, right) starting at c:
       - c == index: target is left, record (right, RIGHT)
       - c == max(index - 1, 0): target is right, record (left, LEFT)
    3. A trailing orphan records nothing
    4. Reduce the level, index = index // 2

    Args:
        index: 0-based position of the target node in ``level``
        level: Level-0 digests
        hash_fn: Hash function used to merge pairs

    Returns:
        Proof steps ordered leaf-ward first

    Raises:
        EmptyTreeException: If level is empty
        IndexOutOfRangeException: If index is outside [0, len(level))
    """
    if len(level) == 0:
        raise EmptyTreeException("Cannot generate proof for empty level")

    if index < 0 or index >= len(level):
        raise IndexOutOfRangeException(index=index, leaf_count=len(level))

    proof: list[ProofStep] = []
    current_level: list[bytes] = list(level)
    current_index = index

    while len(current_level) > 1:
        for chunk_start in range(0, len(current_level) - 1, 2):
            left = current_level[chunk_start]
            right = current_level[chunk_start + 1]
            if chunk_start == current_index:
                proof.append(ProofStep(sibling=right, side=Side.RIGHT))
                break
            if chunk_start == max(current_index - 1, 0):
                proof.append(ProofStep(sibling=left, side=Side.LEFT))
                break

        current_level = reduce_level(current_level, hash_fn)
        current_index = current_index // 2

    return proof


def fold_proof(
    leaf_hash: bytes,
    proof: Sequence[ProofStep],
    hash_fn: HashFunction = keccak256,
) -> bytes:
    """
    Recompute a candidate root from a leaf digest and its proof.

    LEFT steps compute parent(sibling, acc), RIGHT steps parent(acc, sibling).
    """
    acc = leaf_hash
    for step in proof:
        if step.side is Side.LEFT:
            acc = merkle_parent(step.sibling, acc, hash_fn)
        else:
            acc = merkle_parent(acc, step.sibling, hash_fn)
    return acc


def _is_well_formed(proof: Sequence[ProofStep]) -> bool:
    for step in proof:
        if not isinstance(step, ProofStep):
            return False
        if not isinstance(step.sibling, (bytes, bytearray)):
            return False
        if not isinstance(step.side, Side):
            return False
    return True


def verify_leaf_hash(
    leaf_hash: bytes,
    proof: Iterable[ProofStep],
    expected_root: bytes,
    hash_fn: HashFunction = keccak256,
) -> bool:
    """
    Verify a proof starting from an already-hashed leaf.

    Never raises; a malformed proof is simply not valid. ``proof`` may be
    any iterable, including a one-shot generator.
    """
    if not isinstance(leaf_hash, (bytes, bytearray)):
        return False
    if not isinstance(expected_root, (bytes, bytearray)):
        return False
    try:
        steps = tuple(proof)
    except TypeError:
        return False
    if not _is_well_formed(steps):
        return False
    return fold_proof(bytes(leaf_hash), steps, hash_fn) == bytes(expected_root)


def verify_merkle_proof(
    leaf: bytes,
    proof: Iterable[ProofStep],
    expected_root: bytes,
    hash_fn: HashFunction = keccak256,
) -> bool:
    """
    Verify that raw ``leaf`` is included under ``expected_root``.

    Algorithm:
    1. acc = H(leaf)
    2. Fold every step in order (see fold_proof)
    3. Compare acc to expected_root

    An empty proof verifies exactly when H(leaf) == expected_root,
    which is the single-leaf tree case.

    Args:
        leaf: Raw leaf bytes
        proof: Steps from build_merkle_proof
        expected_root: Known root digest
        hash_fn: Hash function the tree was built with

    Returns:
        True if the proof is valid, False otherwise
    """
    if not isinstance(leaf, (bytes, bytearray)):
        return False
    return verify_leaf_hash(hash_fn(bytes(leaf)), proof, expected_root, hash_fn)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with ``num_leaves`` leaves.

    Counts the leaf level and the root level. Each level has
    ceil(n / 2) nodes of the one below.

    Returns:
        0 for an empty tree, 1 for a single leaf, 3 for three leaves, ...
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "merkle_parent",
    "hash_leaves",
    "reduce_level",
    "build_merkle_root",
    "build_merkle_proof",
    "fold_proof",
    "verify_leaf_hash",
    "verify_merkle_proof",
    "compute_tree_depth",
]
