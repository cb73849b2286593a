"""
Merkle - Tree Facade and Proof Wrappers

This module provides class-based interfaces over merkle_tree.py:
- MerkleTree: immutable tree over an ordered sequence of raw leaves
- MerkleProver: generate roots and proofs without keeping a tree around
- MerkleVerifier: verify proofs and InclusionProof documents
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from arbor.crypto.hashing import HASH_FUNCTIONS, HashFunction, keccak256
from arbor.merkle.merkle_tree import (
    build_merkle_proof,
    build_merkle_root,
    compute_tree_depth,
    fold_proof,
    hash_leaves,
    verify_leaf_hash,
    verify_merkle_proof,
)
from arbor.schemas.canonical import encode_canonical
from arbor.schemas.errors import EmptyTreeException, MerkleVerificationException
from arbor.schemas.proof import InclusionProof, ProofStep


logger = logging.getLogger(__name__)


def _algorithm_name(hash_fn: HashFunction) -> str | None:
    for name, fn in HASH_FUNCTIONS.items():
        if fn is hash_fn:
            return name
    return None


class MerkleTree:
    """
    Binary Merkle tree over an ordered, non-empty sequence of raw leaves.

    The tree stores only its leaves. Every call to get_root or get_proof
    rehashes them and rebuilds the levels, so instances are immutable
    and safe to share between threads.

    Example:
        >>> tree = MerkleTree([b"A", b"B", b"C"])
        >>> proof = tree.get_proof(2)
        >>> MerkleTree.verify(b"C", proof, tree.get_root())
        True
    """

    def __init__(self, leaves: Iterable[bytes], hash_fn: HashFunction = keccak256) -> None:
        leaves = tuple(leaves)
        if not leaves:
            raise EmptyTreeException()
        for i, leaf in enumerate(leaves):
            if not isinstance(leaf, (bytes, bytearray)):
                raise TypeError(
                    f"Leaf {i} must be bytes, got {type(leaf).__name__}"
                )
        self._leaves: tuple[bytes, ...] = tuple(bytes(leaf) for leaf in leaves)
        self._hash_fn = hash_fn
        logger.debug("Built Merkle tree with %d leaves", len(self._leaves))

    @classmethod
    def from_strings(
        cls,
        values: Iterable[str],
        encoding: str = "utf-8",
        hash_fn: HashFunction = keccak256,
    ) -> "MerkleTree":
        """Build a tree whose leaves are the encoded strings."""
        return cls([v.encode(encoding) for v in values], hash_fn=hash_fn)

    @classmethod
    def from_objects(
        cls,
        objects: Iterable[Any],
        hash_fn: HashFunction = keccak256,
    ) -> "MerkleTree":
        """Build a tree whose leaves are the canonical JSON of each object."""
        return cls([encode_canonical(obj) for obj in objects], hash_fn=hash_fn)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._leaves

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def hash_fn(self) -> HashFunction:
        return self._hash_fn

    @property
    def depth(self) -> int:
        """Number of levels, leaf level and root level included."""
        return compute_tree_depth(len(self._leaves))

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        return f"MerkleTree(leaf_count={len(self._leaves)})"

    def get_root(self) -> bytes:
        """Hash every leaf and reduce to the root digest."""
        return build_merkle_root(hash_leaves(self._leaves, self._hash_fn), self._hash_fn)

    def get_proof(self, index: int) -> list[ProofStep]:
        """
        Build the inclusion proof for the leaf at ``index``.

        Raises:
            IndexOutOfRangeException: If index is outside [0, leaf_count)
        """
        proof = build_merkle_proof(
            index, hash_leaves(self._leaves, self._hash_fn), self._hash_fn
        )
        logger.debug("Built proof for leaf %d with %d steps", index, len(proof))
        return proof

    def get_inclusion_proof(
        self,
        index: int,
        hash_algorithm: str | None = None,
    ) -> InclusionProof:
        """
        Build the proof for ``index`` as a transport document.

        ``hash_algorithm`` defaults to the registry name of the tree's
        hash function.

        Raises:
            IndexOutOfRangeException: If index is outside [0, leaf_count)
            ValueError: If the hash function is not registered and no
                        name is given
        """
        algorithm = hash_algorithm or _algorithm_name(self._hash_fn)
        if algorithm is None:
            raise ValueError("hash_algorithm is required for unregistered hash functions")

        level = hash_leaves(self._leaves, self._hash_fn)
        steps = build_merkle_proof(index, level, self._hash_fn)
        return InclusionProof.from_steps(
            hash_algorithm=algorithm,
            leaf_index=index,
            leaf_count=len(level),
            leaf_hash=level[index],
            root=build_merkle_root(level, self._hash_fn),
            steps=steps,
        )

    @staticmethod
    def verify(
        leaf: bytes,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: HashFunction = keccak256,
    ) -> bool:
        """Check that ``leaf`` folds with ``proof`` to ``root``."""
        return verify_merkle_proof(leaf, proof, root, hash_fn)


class MerkleProver:
    """
    Convenience class for computing roots and proofs from raw leaves.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
    """

    @staticmethod
    def prove(
        leaves: Sequence[bytes],
        index: int,
        hash_fn: HashFunction = keccak256,
    ) -> list[ProofStep]:
        """
        Generate the proof for the leaf at the given index.

        Raises:
            EmptyTreeException: If leaves is empty
            IndexOutOfRangeException: If index is out of range
        """
        return MerkleTree(leaves, hash_fn).get_proof(index)

    @staticmethod
    def prove_object(
        objects: Sequence[Any],
        index: int,
        hash_fn: HashFunction = keccak256,
    ) -> list[ProofStep]:
        """Generate the proof for a canonically encoded object."""
        return MerkleTree.from_objects(objects, hash_fn).get_proof(index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes], hash_fn: HashFunction = keccak256) -> bytes:
        """Compute the Merkle root for raw leaves."""
        return MerkleTree(leaves, hash_fn).get_root()

    @staticmethod
    def compute_root_from_objects(
        objects: Sequence[Any],
        hash_fn: HashFunction = keccak256,
    ) -> bytes:
        """Compute the Merkle root for canonically encoded objects."""
        return MerkleTree.from_objects(objects, hash_fn).get_root()


class MerkleVerifier:
    """Convenience class for verifying proofs and proof documents."""

    @staticmethod
    def verify(
        leaf: bytes,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: HashFunction = keccak256,
    ) -> bool:
        return verify_merkle_proof(leaf, proof, root, hash_fn)

    @staticmethod
    def verify_leaf_hash(
        leaf_hash: bytes,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: HashFunction = keccak256,
    ) -> bool:
        return verify_leaf_hash(leaf_hash, proof, root, hash_fn)

    @staticmethod
    def compute_candidate_root(
        leaf: bytes,
        document: InclusionProof,
        hash_fn: HashFunction,
    ) -> bytes:
        """Fold ``leaf`` with the document's steps and return the result."""
        return fold_proof(hash_fn(leaf), document.to_steps(), hash_fn)

    @staticmethod
    def verify_inclusion_proof(
        leaf: bytes,
        document: InclusionProof,
        hash_fn: HashFunction,
        root: bytes | None = None,
    ) -> bool:
        """
        Verify ``leaf`` against an InclusionProof document.

        Args:
            leaf: Raw leaf bytes
            document: Proof document
            hash_fn: Hash function matching document.hash_algorithm
            root: Trusted root. When omitted the document's own root is
                  used, which only shows the document is self-consistent.

        Returns:
            True if the proof is valid, False otherwise
        """
        expected_root = root if root is not None else document.root_bytes
        return verify_merkle_proof(leaf, document.to_steps(), expected_root, hash_fn)

    @staticmethod
    def require_valid(
        leaf: bytes,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: HashFunction = keccak256,
        leaf_index: int | None = None,
    ) -> None:
        """
        Verify and raise instead of returning False.

        Raises:
            MerkleVerificationException: If the proof does not verify
        """
        if not verify_merkle_proof(leaf, proof, root, hash_fn):
            raise MerkleVerificationException(
                "Leaf is not included under the expected root",
                leaf_index=leaf_index,
                details={"proof_length": len(proof)},
            )


__all__ = [
    "MerkleTree",
    "MerkleProver",
    "MerkleVerifier",
]
