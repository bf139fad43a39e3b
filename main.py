"""
Build scripts for the Pangea gallery site.

    python main.py gallery [options]   # src/thumbnail/index.md from the preview server
    python main.py search [options]    # combined search index of the documentation sites

Run `python main.py <command> --help` for the options of each command.
"""

import sys

from gallery import generate_index
from search_index import aggregator

COMMANDS = {
    "gallery": generate_index.main,
    "search": aggregator.main,
}


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        print(__doc__.strip(), file=sys.stderr)
        return 2
    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    sys.exit(main())
