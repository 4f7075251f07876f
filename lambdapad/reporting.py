"""Console reporting helpers shared by the loader and the CLI.

Everything lambdapad tells the user goes through ``print``: status lines to
stdout, errors and compiler diagnostics to stderr. Secondary ("level 2")
lines are indented under the message that introduced them so a failing
compile reads as one block.
"""

from __future__ import annotations

import sys

LEVEL2_INDENT = "  "


def print_info(message: str) -> None:
    """Print a status line to stdout."""
    print(message)


def print_separator() -> None:
    """Print the separator that precedes a block of compile diagnostics."""
    print("\n---", file=sys.stderr)


def print_error(message: str) -> None:
    """Print a top-level error line to stderr."""
    print(f"error: {message}", file=sys.stderr)


def print_level2_warn(
    filename: str, line: int | None, kind: str, description: str
) -> None:
    """Print one compiler warning as an indented secondary line."""
    location = filename if line is None else f"{filename}:{line}"
    print(f"{LEVEL2_INDENT}warning: {location}: {kind}: {description}", file=sys.stderr)


def print_level2_error(
    filename: str, row: int | None, col: int | None, kind: str, description: str
) -> None:
    """Print one compiler error diagnostic as an indented secondary line."""
    print(
        f"{LEVEL2_INDENT}{filename}:{row or 0}:{col or 0}: {kind}: {description}",
        file=sys.stderr,
    )


__all__ = [
    "LEVEL2_INDENT",
    "print_error",
    "print_info",
    "print_level2_error",
    "print_level2_warn",
    "print_separator",
]
