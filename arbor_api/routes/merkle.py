"""
Merkle Routes

Compute roots, build proofs and verify proofs over JSON.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from arbor.config.runtime import RuntimeConfig
from arbor.crypto.hashing import HashFunction, from_hex, get_hash_function, to_hex
from arbor.merkle import MerkleTree, MerkleVerifier
from arbor_api.deps import get_config
from arbor_api.errors import InvalidRequestError, TooManyLeavesError
from arbor_api.models.requests import LeavesRequest, ProofRequest, VerifyRequest
from arbor_api.models.responses import ProofResponse, RootResponse, VerifyResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/merkle", tags=["merkle"])


def decode_leaf(value: str, encoding: str, text_encoding: str) -> bytes:
    """Turn a request leaf into raw bytes."""
    if encoding == "hex":
        try:
            return from_hex(value)
        except ValueError as e:
            raise InvalidRequestError(str(e), details={"leaf": value[:32]}) from e
    try:
        return value.encode(text_encoding)
    except UnicodeEncodeError as e:
        raise InvalidRequestError(
            f"Leaf cannot be encoded as {text_encoding}: {e.reason}",
            details={"leaf": value[:32], "encoding": text_encoding},
        ) from e


def resolve_hash(name: str | None, config: RuntimeConfig) -> tuple[str, HashFunction]:
    algorithm = name or config.tree.hash_algorithm
    return algorithm, get_hash_function(algorithm)


def build_tree(request: LeavesRequest, config: RuntimeConfig) -> tuple[str, MerkleTree]:
    """Validate the request and build the tree it describes."""
    if len(request.leaves) > config.api.max_leaves:
        raise TooManyLeavesError(len(request.leaves), config.api.max_leaves)

    algorithm, hash_fn = resolve_hash(request.hash_algorithm, config)
    leaves = [
        decode_leaf(leaf, request.encoding, config.tree.leaf_encoding)
        for leaf in request.leaves
    ]
    return algorithm, MerkleTree(leaves, hash_fn=hash_fn)


@router.post("/root", response_model=RootResponse)
async def compute_root(
    request: LeavesRequest,
    config: RuntimeConfig = Depends(get_config),
) -> RootResponse:
    """Compute the Merkle root of the given leaves."""
    algorithm, tree = build_tree(request, config)
    logger.info("Computing root over %d leaves", tree.leaf_count)
    return RootResponse(
        hash_algorithm=algorithm,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        root=to_hex(tree.get_root()),
    )


@router.post("/proof", response_model=ProofResponse)
async def build_proof(
    request: ProofRequest,
    config: RuntimeConfig = Depends(get_config),
) -> ProofResponse:
    """Build the inclusion proof for the leaf at ``index``."""
    algorithm, tree = build_tree(request, config)
    logger.info("Building proof for leaf %d of %d", request.index, tree.leaf_count)
    return ProofResponse(proof=tree.get_inclusion_proof(request.index, hash_algorithm=algorithm))


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(
    request: VerifyRequest,
    config: RuntimeConfig = Depends(get_config),
) -> VerifyResponse:
    """
    Verify a leaf against a proof document.

    Without a trusted ``root`` the proof's own root is used, which only
    shows the document is internally consistent.
    """
    leaf = decode_leaf(request.leaf, request.encoding, config.tree.leaf_encoding)
    hash_fn = get_hash_function(request.proof.hash_algorithm)

    if request.root is not None:
        try:
            expected_root = from_hex(request.root)
        except ValueError as e:
            raise InvalidRequestError(str(e), details={"root": request.root[:32]}) from e
        root_source = "request"
    else:
        expected_root = request.proof.root_bytes
        root_source = "proof"

    computed_root = MerkleVerifier.compute_candidate_root(leaf, request.proof, hash_fn)
    valid = computed_root == expected_root
    logger.info("Verified leaf %d: valid=%s", request.proof.leaf_index, valid)

    return VerifyResponse(
        valid=valid,
        expected_root=to_hex(expected_root),
        computed_root=to_hex(computed_root),
        root_source=root_source,
    )
