"""Module entry point for `python -m nx_test_executor`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
