"""CLI modules for solving gear phases.

Note: avoid importing submodules at import-time. This keeps `python -m gearphase.cli.<cmd>`
free of `runpy` warnings and avoids side effects from eager imports.
"""

from __future__ import annotations


def solve_main(argv: list[str] | None = None) -> int:
    """Lazy wrapper for `gearphase.cli.solve.main`."""

    from .solve import main

    return main(argv)


__all__ = ["solve_main"]
