#!/usr/bin/env python3
"""
Regenerate test fixtures from current kata implementation.

Usage:
    python scripts/regenerate_fixtures.py [fixture_name]

If fixture_name is provided, only that fixture is regenerated.
Otherwise, all fixtures are regenerated.

A fixture whose input parses gets expected.txt (the debug rendering);
one that does not gets expected_error.txt (the error message).
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kata import MalformedTreeString, parse_tree, render_tree_debug


FIXTURES_DIR = Path(__file__).parent.parent / "test" / "fixtures"


def regenerate_fixture(fixture_dir: Path) -> None:
    """Regenerate one fixture (input.txt -> expected.txt | expected_error.txt)."""
    input_file = fixture_dir / "input.txt"

    if not input_file.exists():
        print(f"  Skipping {fixture_dir.name}: no input.txt")
        return

    text = input_file.read_text().rstrip("\n")

    for stale in ("expected.txt", "expected_error.txt"):
        (fixture_dir / stale).unlink(missing_ok=True)

    try:
        tree = parse_tree(text)
    except MalformedTreeString as exc:
        (fixture_dir / "expected_error.txt").write_text(f"{exc}\n")
        print(f"  {fixture_dir.name}: error at offset {exc.offset}")
        return

    (fixture_dir / "expected.txt").write_text(render_tree_debug(tree) + "\n")
    print(f"  {fixture_dir.name}: ok")


def main() -> int:
    """Main entry point."""
    target = sys.argv[1] if len(sys.argv) > 1 else None

    print("Regenerating fixtures...")

    for fixture_dir in sorted(FIXTURES_DIR.iterdir()):
        if not fixture_dir.is_dir():
            continue

        if target and fixture_dir.name != target:
            continue

        regenerate_fixture(fixture_dir)

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
