"""Module entry point for `python -m qa_coverage_tracker`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
