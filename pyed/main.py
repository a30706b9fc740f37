from __future__ import annotations

import sys

from pyed.app import run_app


def main() -> int:
    """Module entrypoint for `python -m pyed.main` or `python -m pyed` (via __main__)."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
