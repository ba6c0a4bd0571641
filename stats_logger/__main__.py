"""Allow ``python -m stats_logger`` to run a simulated session."""

from __future__ import annotations

import sys


def main() -> None:
    from stats_logger import run
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
