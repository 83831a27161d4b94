"""Entry point for `python -m layoutconfig`."""

import sys


def main():
    from layoutconfig.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
