"""
Arbor CLI

Command-line interface for building Merkle roots and inclusion proofs.

Usage:
    python -m arbor_cli root leaves.txt
    python -m arbor_cli prove leaves.txt --index 3 --out proof.json
    python -m arbor_cli verify proof.json --leaf "D" --root 0x...
    python -m arbor_cli config --init
"""

__version__ = "0.1.0"
