#!/usr/bin/env python3
"""Command line front end for the outline store.

Loads a Markdown outline into a DocumentStore and prints it back in
different shapes.

Usage:
    python -m outliner [command] [args...]

Commands:
    export FILE [--sep SEP]   Plain-text export (SEP defaults to OUTLINER_EXPORT_SEPARATOR)
    tree FILE [--json]        Show the block tree with ids
    markdown FILE             Re-render the outline as nested bullets
    demo                      Walk through insert / delete / move / duplicate / export
    help                      Show this help
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from .blocks import Block, DocumentStore, parse_outline, render_markdown
from .errors import OutlineError
from .logging_setup import configure_logging
from .settings import decode_escapes

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    if not args:
        print(__doc__)
        return 0

    command, rest = args[0], args[1:]

    try:
        if command == "export":
            if not rest:
                print("Usage: export FILE [--sep SEP]")
                return 1
            separator = None
            if "--sep" in rest:
                position = rest.index("--sep")
                if position + 1 >= len(rest):
                    print("Usage: export FILE [--sep SEP]")
                    return 1
                separator = decode_escapes(rest[position + 1])
            return cmd_export(rest[0], separator)
        elif command == "tree":
            if not rest:
                print("Usage: tree FILE [--json]")
                return 1
            return cmd_tree(rest[0], as_json="--json" in rest)
        elif command == "markdown":
            if not rest:
                print("Usage: markdown FILE")
                return 1
            return cmd_markdown(rest[0])
        elif command == "demo":
            return cmd_demo()
        elif command in ("-h", "--help", "help"):
            print(__doc__)
            return 0
        else:
            print(f"Unknown command: {command}")
            print(__doc__)
            return 1

    except (OutlineError, OSError) as e:
        logger.debug("Command %s failed", command, exc_info=True)
        print(f"Error: {e}")
        return 1


def load_store(path: str) -> DocumentStore:
    """Read a Markdown outline file into a new store."""
    text = Path(path).read_text(encoding="utf-8")
    store = DocumentStore()
    store.insert(parse_outline(text))
    return store


def cmd_export(path: str, separator: str | None = None) -> int:
    """Print the plain-text export of an outline file."""
    store = load_store(path)
    print(store.export(separator))
    return 0


def cmd_tree(path: str, as_json: bool = False) -> int:
    """Show the block tree of an outline file."""
    store = load_store(path)

    if as_json:
        print(json.dumps([b.to_dict(include_children=True) for b in store.fetch()], indent=2))
        return 0

    print(f"\n{'ID':<20} {'Depth':<6} Content")
    print("-" * 60)
    for block in store.walk():
        depth = store.get_depth(block)
        text = block.content.replace("\n", " ")
        text = text[:40] + ("..." if len(text) > 40 else "")
        print(f"{block.id:<20} {depth:<6} {'  ' * depth}{text or '(empty)'}")

    print(f"\nTotal: {len(store)} blocks, {len(store.fetch())} top-level")
    return 0


def cmd_markdown(path: str) -> int:
    """Re-render an outline file as nested bullets."""
    store = load_store(path)
    print(render_markdown(store.fetch()))
    return 0


def cmd_demo() -> int:
    """Run a demo of the store operations."""
    store = DocumentStore()

    def show(title: str) -> None:
        print(f"\n{title}")
        print("-" * 40)
        print(render_markdown(store.fetch()) or "(empty)")

    print("=" * 60)
    print("Outline Store Demo")
    print("=" * 60)

    first = Block("line 1")
    second = Block("line 2")
    store.insert([first, second])
    show("1. Inserted two top-level blocks")

    store.insert([Block("content")], parent_id=first.id)
    show("2. Inserted a child under 'line 1'")

    store.delete([second])
    show("3. Deleted 'line 2'")

    try:
        store.move(first, 0, first)
    except OutlineError as e:
        print(f"\n4. Moving 'line 1' under itself was rejected: {e}")

    copy = store.duplicate(first)
    show(f"5. Duplicated 'line 1' as {copy.id}")

    store.move(copy.children[0], 0)
    show("6. Moved the copied child to the top")

    print("\n7. Export:")
    print("-" * 40)
    print(store.export("\n"))

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
