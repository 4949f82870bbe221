"""
Main: entry point and logging setup.

Running ``affectfield`` (or ``python -m affectfield.main``) hands control to the
Click command group. Logging is configured once, by whichever entry point gets
there first; library code only ever calls ``structlog.get_logger``.
"""

from __future__ import annotations

import logging

import structlog

_logging_configured = False


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog and standard-library logging.

    Safe to call more than once; subsequent calls are no-ops.
    """
    global _logging_configured  # noqa: PLW0603
    if _logging_configured:
        return
    _logging_configured = True

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(message)s", level=level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def main() -> None:
    """Entry point for the affectfield command."""
    from affectfield.cli.app import cli

    cli()


if __name__ == "__main__":
    main()
