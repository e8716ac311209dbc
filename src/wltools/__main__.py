"""
Main entry point for wltools.
Usage: python -m wltools <tool> [arguments...]
"""

import sys
from typing import List, Optional

from .cli import TOOLS


def print_usage() -> None:
    print(f"usage: python -m wltools {{{','.join(TOOLS)}}} [arguments...]", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Dispatch to one of the tools."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or args[0] not in TOOLS:
        print_usage()
        return 1
    return TOOLS[args[0]](args[1:])


if __name__ == "__main__":
    sys.exit(main())
