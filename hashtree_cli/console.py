"""
Interactive Console

Line-oriented command dispatcher driving a HashTree.

Each line is split on whitespace; the first token selects the command.
The session owns a single tree value and threads it through every
command; ``build`` and ``build-raw`` replace it with a new one.

Usage:
    build <hash-1> <hash-2> ... <hash-n>
    build-raw <raw-text-1> <raw-text-2> ... <raw-text-n>
    add <hash>
    add-raw <raw-text>
    verify <proof-1> <proof-2> ... <proof-n> <leaf> <index>
    proof <index>
    root
    print

A blank line, end of input, ``exit`` or ``quit`` ends the session.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

from hashtree.crypto.hashing import is_hex_digest
from hashtree.merkle import HashTree
from hashtree.schemas.errors import (
    ArgumentCountError,
    HashTreeException,
    ParseError,
    UnknownCommandError,
)
from hashtree_cli.config import CLIConfig


logger = logging.getLogger(__name__)


BANNER = "Welcome to this Merkle Tree simulator. Type --help to list the available commands"

HELP_LINES = [
    "  build - Usage: build <hash-1> <hash-2> ... <hash-n>",
    "  build-raw - Usage: build-raw <raw-text-1> <raw-text-2> ... <raw-text-n>",
    "  add-raw - Usage: add-raw raw-text",
    "  add - Usage: add 32-bytes-hash",
    "  verify - Usage: verify proof1 proof2 ... proofN seed index",
    "  proof - Usage: proof index",
    "  root - Usage: root",
    "  print - Usage: print",
    "  exit - Usage: exit",
]

EXIT_COMMANDS = ("exit", "quit")


@dataclass
class CommandOutcome:
    """Result of dispatching one console line."""
    tree: HashTree
    lines: list[str] = field(default_factory=list)
    finished: bool = False


def parse_index(token: str) -> int:
    """Parse a leaf index argument."""
    try:
        value = int(token)
    except ValueError as e:
        raise ParseError(token) from e
    if value < 0:
        raise ParseError(token)
    return value


def _warn_if_not_digest(values: list[str], config: CLIConfig) -> None:
    if not config.warn_non_digest:
        return
    for value in values:
        if not is_hex_digest(value):
            logger.warning("Value %r is not a hex SHA-256 digest; storing it as given", value)


def _cmd_help(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    return CommandOutcome(tree=tree, lines=list(HELP_LINES))


def _cmd_build(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    _warn_if_not_digest(args, config)
    new_tree = HashTree.build(args)
    logger.info("Built tree from %d hashes", len(args))
    return CommandOutcome(tree=new_tree)


def _cmd_build_raw(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    new_tree = HashTree.build(args, raw=True)
    logger.info("Built tree from %d raw values", len(args))
    return CommandOutcome(tree=new_tree)


def _cmd_add(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    if not args:
        raise ArgumentCountError("add hash")
    _warn_if_not_digest(args[:1], config)
    tree.add(args[0])
    return CommandOutcome(tree=tree)


def _cmd_add_raw(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    if not args:
        raise ArgumentCountError("add-raw raw-text")
    tree.add_unhashed(args[0])
    return CommandOutcome(tree=tree)


def _cmd_verify(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    if len(args) < 3:
        raise ArgumentCountError("verify proof1 proof2 ... proofN seed index")

    *proof, leaf, index_token = args
    index = parse_index(index_token)
    verified = tree.verify(proof, leaf, index)

    if config.output_format == "json":
        line = json.dumps({"verified": verified, "index": index})
    elif verified:
        line = "Proof has been verified"
    else:
        line = "Proof has not been verified"
    return CommandOutcome(tree=tree, lines=[line])


def _cmd_proof(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    if not args:
        raise ArgumentCountError("proof <index>")

    index = parse_index(args[0])
    if config.output_format == "json":
        line = tree.prove(index).model_dump_json()
    else:
        line = " ".join(tree.generate_proof(index))
    return CommandOutcome(tree=tree, lines=[line])


def _cmd_root(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    root = tree.root
    if config.output_format == "json":
        line = json.dumps({
            "root": root,
            "depth": tree.depth,
            "leaves": tree.inserted_count,
        })
    else:
        line = root
    return CommandOutcome(tree=tree, lines=[line])


def _cmd_print(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    return CommandOutcome(tree=tree, lines=render_tree(tree, config.output_format))


def _cmd_exit(args: list[str], tree: HashTree, config: CLIConfig) -> CommandOutcome:
    return CommandOutcome(tree=tree, finished=True)


Handler = Callable[[list[str], HashTree, CLIConfig], CommandOutcome]

COMMANDS: dict[str, Handler] = {
    "--help": _cmd_help,
    "help": _cmd_help,
    "build": _cmd_build,
    "build-raw": _cmd_build_raw,
    "add": _cmd_add,
    "add-raw": _cmd_add_raw,
    "verify": _cmd_verify,
    "proof": _cmd_proof,
    "root": _cmd_root,
    "print": _cmd_print,
    "exit": _cmd_exit,
    "quit": _cmd_exit,
}


def render_tree(tree: HashTree, output_format: str = "human") -> list[str]:
    """Render a tree level by level, root first."""
    levels = tree.levels()
    if output_format == "json":
        return [json.dumps({
            "depth": tree.depth,
            "inserted_count": tree.inserted_count,
            "levels": levels,
        })]

    if not levels:
        return ["(empty tree)"]

    lines = [f"depth={tree.depth} leaves={tree.inserted_count} capacity={tree.capacity}"]
    for level, digests in enumerate(levels):
        label = "root" if level == 0 else f"level {level}"
        lines.append(f"{label}: {' '.join(digests)}")
    return lines


def process_command(line: str, tree: HashTree, config: CLIConfig | None = None) -> CommandOutcome:
    """
    Dispatch one console line against a tree.

    Args:
        line: Raw input line
        tree: The session's current tree
        config: Console configuration (defaults when omitted)

    Returns:
        Outcome carrying the tree to use for the next line and any output

    Raises:
        HashTreeException: On console usage errors or core failures
    """
    config = config or CLIConfig()
    tokens = line.split()
    if not tokens:
        return CommandOutcome(tree=tree, finished=True)

    command, args = tokens[0], tokens[1:]
    handler = COMMANDS.get(command)
    if handler is None:
        raise UnknownCommandError(command)

    logger.debug("Dispatching %s with %d arguments", command, len(args))
    return handler(args, tree, config)


def format_error(error: HashTreeException, output_format: str = "human") -> str:
    if output_format == "json":
        return error.to_error_model().model_dump_json()
    return error.message


def run_console(
    config: CLIConfig | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> HashTree:
    """
    Run an interactive session until a blank line, EOF or exit command.

    Errors are reported and the session continues with the same tree.

    Returns:
        The tree as it stood when the session ended
    """
    config = config or CLIConfig()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()

    tree = HashTree()

    if config.show_banner:
        print(file=stdout)
        print(BANNER, file=stdout)

    while True:
        if interactive:
            print(config.prompt, end="", file=stdout, flush=True)

        line = stdin.readline()
        if not line or not line.strip():
            break

        try:
            outcome = process_command(line, tree, config)
        except HashTreeException as e:
            logger.debug("Command failed: %r", e)
            print(format_error(e, config.output_format), file=stdout)
            continue

        tree = outcome.tree
        for output_line in outcome.lines:
            print(output_line, file=stdout)
        if outcome.finished:
            break

    logger.info("Session ended with %d leaves", tree.inserted_count)
    return tree
