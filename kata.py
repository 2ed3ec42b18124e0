#!/usr/bin/env python3
"""
Kata - classic algorithm exercises.

Lists, arithmetic and binary trees, plus a compact parenthesized string
grammar for trees with a serializer and a recursive-descent parser.

Architecture: Functional Core, Imperative Shell
- Data: immutable dataclasses
- Computations: pure functions (no I/O, no printing)
- Renderers: pure functions (data → str)
- Actions: argv in, one print out, at the edge only
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field, replace
from itertools import groupby
from math import isqrt
from typing import Any, Generic, Iterable, Literal, Sequence, TypeVar, Union


T = TypeVar("T")


# =============================================================================
# DOMAIN TYPES (Data)
# =============================================================================


@dataclass(frozen=True)
class Empty:
    """The absence of a subtree."""


@dataclass(frozen=True)
class Node(Generic[T]):
    """A tree node holding one value and owning its two subtrees."""

    value: T
    left: Tree[T] = field(default_factory=Empty)
    right: Tree[T] = field(default_factory=Empty)


Tree = Union[Empty, Node[T]]


class MalformedTreeString(ValueError):
    """A tree string that does not follow the grammar."""

    def __init__(
        self,
        text: str,
        expected: str | None,
        offset: int,
        message: str | None = None,
    ) -> None:
        self.text = text
        self.expected = expected  # None means end of input
        self.offset = offset
        what = repr(expected) if expected is not None else "end of input"
        super().__init__(message or f"expected {what} at offset {offset} in {text!r}")


class TreeTooDeep(MalformedTreeString):
    """A tree string nested deeper than MAX_DEPTH groups."""

    def __init__(self, text: str, offset: int) -> None:
        super().__init__(
            text,
            None,
            offset,
            f"nesting deeper than {MAX_DEPTH} groups at offset {offset} in {text!r}",
        )


def _not_a_tree(tree: object) -> TypeError:
    return TypeError(f"not a tree: {tree!r}")


# =============================================================================
# PURE FUNCTIONS: Lists
# =============================================================================


def last(seq: Sequence[T]) -> T | None:
    """Last element, or None for an empty sequence."""
    return seq[-1] if seq else None


def penultimate(seq: Sequence[T]) -> T | None:
    """Second-to-last element, or None when there are fewer than two."""
    return seq[-2] if len(seq) >= 2 else None


def is_palindrome(seq: Iterable[T]) -> bool:
    items = list(seq)
    return items == items[::-1]


def run_length_encode(seq: Iterable[T]) -> tuple[tuple[int, T], ...]:
    """
    Collapse runs of equal consecutive elements into (count, value) pairs.

    Pure: "aaab" -> ((3, "a"), (1, "b"))
    """
    return tuple((len(list(run)), value) for value, run in groupby(seq))


def run_length_decode(pairs: Iterable[tuple[int, T]]) -> tuple[T, ...]:
    """Expand (count, value) pairs back into a flat sequence."""
    return tuple(value for count, value in pairs for _ in range(count))


# =============================================================================
# PURE FUNCTIONS: Arithmetic
# =============================================================================


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    return all(n % divisor for divisor in range(3, isqrt(n) + 1, 2))


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by Euclid's algorithm. Always non-negative."""
    while b != 0:
        a, b = b, a % b
    return abs(a)


def primes_in_range(lo: int, hi: int) -> tuple[int, ...]:
    """All primes p with lo <= p <= hi."""
    return tuple(n for n in range(lo, hi + 1) if is_prime(n))


# =============================================================================
# PURE FUNCTIONS: Trees
# =============================================================================


def is_leaf(tree: Tree[T]) -> bool:
    match tree:
        case Node(_, Empty(), Empty()):
            return True
        case _:
            return False


def bst_insert(tree: Tree[T], value: T) -> Tree[T]:
    """
    Insert value into a binary search tree, returning a new tree.

    Untouched subtrees are shared with the input. Inserting a value that is
    already present returns the input tree itself.

    Pure: (Tree, T) -> Tree
    """
    match tree:
        case Empty():
            return Node(value)
        case Node(current, left, _) if value < current:
            new_left = bst_insert(left, value)
            return tree if new_left is left else replace(tree, left=new_left)
        case Node(current, _, right) if current < value:
            new_right = bst_insert(right, value)
            return tree if new_right is right else replace(tree, right=new_right)
        case Node():
            return tree
        case _:
            raise _not_a_tree(tree)


def build_bst(values: Iterable[T]) -> Tree[T]:
    """Insert values one by one, in order, starting from an empty tree."""
    tree: Tree[T] = Empty()
    for value in values:
        tree = bst_insert(tree, value)
    return tree


def count_leaves(tree: Tree[T]) -> int:
    match tree:
        case Empty():
            return 0
        case Node(_, Empty(), Empty()):
            return 1
        case Node(_, left, right):
            return count_leaves(left) + count_leaves(right)
        case _:
            raise _not_a_tree(tree)


def leaf_values(tree: Tree[T]) -> tuple[T, ...]:
    """Values of all leaves, left to right."""
    match tree:
        case Empty():
            return ()
        case Node(value, Empty(), Empty()):
            return (value,)
        case Node(_, left, right):
            return leaf_values(left) + leaf_values(right)
        case _:
            raise _not_a_tree(tree)


# =============================================================================
# TREE STRING GRAMMAR
#
#   tree  ::= node | ""
#   node  ::= value ("(" tree "," tree ")")?
#   value ::= any run of characters excluding '(', ')', ','
# =============================================================================


DELIMITERS = frozenset("(),")

# Groups open at once; parsing and rendering recurse once per group.
MAX_DEPTH = 500


def serialize_tree(tree: Tree[Any]) -> str:
    """
    Render a tree in its canonical string form.

    Leaves are bare values; any other node is `value(left,right)`, with an
    empty side left blank. Empty renders as "".

    Pure: Tree -> str
    """
    match tree:
        case Empty():
            return ""
        case Node(value, Empty(), Empty()):
            return str(value)
        case Node(value, left, right):
            return f"{value}({serialize_tree(left)},{serialize_tree(right)})"
        case _:
            raise _not_a_tree(tree)


def _expect(text: str, cursor: int, token: str, strict: bool) -> int:
    if cursor < len(text) and text[cursor] == token:
        return cursor + 1
    if strict:
        raise MalformedTreeString(text, token, cursor)
    return cursor


def parse_node(
    text: str,
    position: int = 0,
    strict: bool = True,
    depth: int = 0,
) -> tuple[Tree[str], int]:
    """
    Parse one subtree starting at position.

    Reads a value up to the next delimiter. No value means Empty, and nothing
    else is consumed. A value followed by "(" opens a group holding the left
    subtree, ",", the right subtree and ")". Values are whitespace-trimmed.

    In strict mode a missing "," or ")" raises MalformedTreeString; otherwise
    the missing delimiter is skipped. Opening a group at depth MAX_DEPTH
    raises TreeTooDeep in either mode.

    Pure: (str, int) -> (Tree, int)
    """
    end = position
    while end < len(text) and text[end] not in DELIMITERS:
        end += 1

    value = text[position:end].strip()
    if not value:
        return (Empty(), end)

    if end >= len(text) or text[end] != "(":
        return (Node(value), end)

    if depth >= MAX_DEPTH:
        raise TreeTooDeep(text, end)

    left, cursor = parse_node(text, end + 1, strict, depth + 1)
    cursor = _expect(text, cursor, ",", strict)
    right, cursor = parse_node(text, cursor, strict, depth + 1)
    cursor = _expect(text, cursor, ")", strict)

    return (Node(value, left, right), cursor)


def parse_tree(text: str, strict: bool = True) -> Tree[str]:
    """
    Parse a whole tree string. Blank input is the empty tree.

    Strict mode also rejects anything but whitespace after the tree;
    lenient mode ignores it.

    Pure: str -> Tree
    """
    if not text.strip():
        return Empty()

    tree, cursor = parse_node(text, 0, strict)

    if strict and text[cursor:].strip():
        raise MalformedTreeString(text, None, cursor)

    return tree


# =============================================================================
# RENDERERS (Pure: Data -> str)
# =============================================================================


def render_tree_debug(tree: Tree[Any]) -> str:
    """Render as T(value left right), with "." for Empty. Pure: Tree -> str."""
    match tree:
        case Empty():
            return "."
        case Node(value, Empty(), Empty()):
            return f"T({value})"
        case Node(value, left, right):
            return f"T({value} {render_tree_debug(left)} {render_tree_debug(right)})"
        case _:
            raise _not_a_tree(tree)


def tree_to_data(tree: Tree[Any]) -> dict[str, Any] | None:
    """Nested dicts for JSON output. Pure: Tree -> dict | None."""
    match tree:
        case Empty():
            return None
        case Node(value, left, right):
            return {
                "value": value,
                "left": tree_to_data(left),
                "right": tree_to_data(right),
            }
        case _:
            raise _not_a_tree(tree)


def render_tree_json(tree: Tree[Any]) -> str:
    """Render tree as JSON. Pure: Tree -> str."""
    return json.dumps(tree_to_data(tree), indent=2)


def render_parse_text(text: str, tree: Tree[Any]) -> str:
    """Render a parse result as human-readable text. Pure: (str, Tree) -> str."""
    leaves = ", ".join(str(v) for v in leaf_values(tree))
    lines = [
        f"Input:      {text}",
        f"Canonical:  {serialize_tree(tree)}",
        f"Debug:      {render_tree_debug(tree)}",
        f"Leaves:     {count_leaves(tree)} ({leaves})",
    ]
    return "\n".join(lines)


def render_demo() -> str:
    """Walk through every exercise on the classic sample inputs. Pure: () -> str."""
    numbers = [1, 1, 2, 3, 5, 8]
    encoded = run_length_encode("aaaabccaadeeee")
    bst = build_bst([5, 3, 7, 4, 6])
    sample = "a(b(d,e),c(,f(g,)))"
    parsed = parse_tree(sample)

    lines = [
        "=== LISTS ===",
        f"1. Last element: {last(numbers)}",
        f"2. Penultimate element: {penultimate(numbers)}",
        f"3. Is palindrome: {is_palindrome([1, 2, 3, 2, 1])}",
        f"4. Encode: {list(encoded)}",
        f"5. Decode: {''.join(run_length_decode(encoded))}",
        "",
        "=== ARITHMETIC ===",
        f"6. 7 is prime: {is_prime(7)}",
        f"7. GCD(36, 63): {gcd(36, 63)}",
        f"8. Primes from 7 to 31: {list(primes_in_range(7, 31))}",
        "",
        "=== TREES ===",
        f"9. Binary search tree: {render_tree_debug(bst)}",
        f"10. Leaf count: {count_leaves(Node('x', Node('x')))}",
        f"11. Leaf values: {list(leaf_values(Node('a', Node('b'), Node('c', Node('d'), Node('e')))))}",
        f"12. Tree as string: {serialize_tree(parsed)}",
        f"13. String to tree: {render_tree_debug(parsed)}",
        f"    Round trip: {serialize_tree(parsed) == sample}",
    ]
    return "\n".join(lines)


def render_error(message: str) -> str:
    """Render an error message. Pure: str -> str."""
    return f"Error: {message}"


# =============================================================================
# MAIN (Orchestration) - Wiring only, single print at the end
# =============================================================================


def run_parse(
    text: str,
    strict: bool,
    output_format: Literal["text", "json"],
) -> tuple[int, str]:
    """Parse a tree string. Returns (exit_code, output_to_display)."""
    try:
        tree = parse_tree(text, strict=strict)
    except MalformedTreeString as exc:
        return (1, render_error(str(exc)))

    if output_format == "json":
        return (0, render_tree_json(tree))
    return (0, render_parse_text(text, tree))


def run_serialize(text: str, strict: bool) -> tuple[int, str]:
    """Normalize a tree string to its canonical form."""
    try:
        tree = parse_tree(text, strict=strict)
    except MalformedTreeString as exc:
        return (1, render_error(str(exc)))
    return (0, serialize_tree(tree))


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Parses args, runs a command, prints once, exits."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Classic algorithm exercises and the tree string grammar."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("demo", help="Run every exercise on sample inputs")

    parse_cmd = commands.add_parser("parse", help="Parse a tree string and describe it")
    parse_cmd.add_argument("text", help='Tree string, e.g. "a(b,c)"')
    parse_cmd.add_argument(
        "--lenient",
        action="store_true",
        help="Skip missing ',' / ')' and ignore trailing input instead of failing",
    )
    parse_cmd.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    serialize_cmd = commands.add_parser(
        "serialize", help="Print the canonical form of a tree string"
    )
    serialize_cmd.add_argument("text", help="Tree string")
    serialize_cmd.add_argument("--lenient", action="store_true")

    args = parser.parse_args(argv)

    if args.command == "demo":
        exit_code, output = 0, render_demo()
    elif args.command == "parse":
        exit_code, output = run_parse(
            text=args.text,
            strict=not args.lenient,
            output_format=args.format,
        )
    else:
        exit_code, output = run_serialize(args.text, strict=not args.lenient)

    # Single print at the edge
    print(output)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
