"""Allow ``python -m nap_engine`` to run an audit."""
from __future__ import annotations

import sys

from . import cli


def main(argv: list[str] | None = None) -> int:
    # A bare invocation shows usage instead of an argparse error.
    arguments = sys.argv[1:] if argv is None else argv
    if arguments:
        return cli.main(arguments)

    cli.build_parser(prog="python -m nap_engine").print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
