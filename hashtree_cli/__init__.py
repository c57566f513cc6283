"""
hashtree CLI

Command-line interface and interactive console for the hash tree.

Usage:
    python -m hashtree_cli
    python -m hashtree_cli build --raw "Merkle Tree" "Ralph Merkle"
    python -m hashtree_cli proof --raw --index 1 a b c d
"""

__version__ = "0.1.0"
