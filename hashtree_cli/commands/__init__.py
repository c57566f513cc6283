"""
CLI command modules.
"""

from hashtree_cli.commands import build, proof, verify

__all__ = ["build", "proof", "verify"]
