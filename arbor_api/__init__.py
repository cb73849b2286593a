"""
Arbor HTTP API

FastAPI service exposing Merkle root computation, proof generation
and proof verification.

Usage:
    uvicorn arbor_api.app:app
"""

__version__ = "0.1.0"
