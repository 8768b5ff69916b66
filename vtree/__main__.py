#!/usr/bin/env python3
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

import sys
import argparse

from vtree.core.errors import TreeError
from vtree.core.log import Log
from vtree.core.source import NestedTreeSource
from vtree.core.storage import load_tree_file
from vtree.ui.flat_tree import FlatTree
from vtree.ui.row import format_rows


def dump(path: str, open_all: bool = False) -> int:
    """Print the flattened rows of a tree file; no GUI needed."""
    tree = FlatTree(NestedTreeSource(load_tree_file(path)))
    tree.mount()
    if open_all:
        tree.expand_all()
    for line in format_rows(tree):
        print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vtree", description="Browse a JSON tree in a windowed tree view")
    parser.add_argument("path", help="JSON tree file ({\"roots\": [...]})")
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    parser.add_argument(
        "--stdexp",
        action="store_true",
        help="Use standard exception handling to stdout / stderr."
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the flattened rows instead of opening a window."
    )
    parser.add_argument(
        "--open-all",
        action="store_true",
        help="Expand every node before showing the tree."
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    Log.set_verbosity(args.verbosity)

    if args.dump:
        try:
            return dump(args.path, open_all=args.open_all)
        except (ValueError, TreeError) as e:
            print(f"vtree: {e}", file=sys.stderr)
            return 1

    from vtree.app import main as gui_main
    return gui_main(args.path, verbosity=args.verbosity, stdexp=args.stdexp, open_all=args.open_all)


if __name__ == "__main__":
    sys.exit(main())
