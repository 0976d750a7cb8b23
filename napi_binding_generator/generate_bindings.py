#!/usr/bin/env python3
"""
N-API binding snippet generator (console entrypoint)

This entrypoint wires together:
- Reading the whole annotated block from stdin
- The batch driver (parsing, emitting, aggregation)
- Writing the report, or the single failure diagnostic, to stdout

Input (example):
  // CLASS: QWidget
  // TODO: void setGeometry(const QRect &rect)
  // TODO: QMenu *menu()

Usage (example):
  pbpaste | python -m napi_binding_generator.generate_bindings

Notes:
- Logs go to stderr only; stdout carries nothing but generated text.
- Exit status is 0 on success, 1 when the input is rejected, 2 on internal errors.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO
import logging

logger = logging.getLogger(__name__)

# Local modules
from .batch_driver import BatchDriver
from .models import GenerationFailure
from .utils import TemplateRenderer, configure_logging


# --------------------------
# CLI
# --------------------------

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Expand annotated C++/Qt signatures (read from stdin) into N-API glue and TypeScript wrappers"
    )

    p.add_argument(
        "--templates-dir",
        default=None,
        help="Optional templates directory overriding the package templates.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)."
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease verbosity (-q for ERROR)."
    )
    p.add_argument(
        "--log-level",
        choices=["CRITICAL","ERROR","WARNING","INFO","DEBUG","NOTSET","critical","error","warning","info","debug","notset"],
        default=None,
        help="Explicit log level (overrides -v/-q)."
    )
    p.add_argument(
        "--log-format",
        default="%(levelname)s: %(message)s",
        help="Logging format string."
    )
    p.add_argument(
        "--log-file",
        default=None,
        help="Optional file to write logs to."
    )

    return p.parse_args(argv)


def resolve_log_level(ns: argparse.Namespace) -> int:
    if getattr(ns, "log_level", None):
        return getattr(logging, str(ns.log_level).upper(), logging.WARNING)
    if getattr(ns, "verbose", 0) >= 2:
        return logging.DEBUG
    if getattr(ns, "verbose", 0) == 1:
        return logging.INFO
    if getattr(ns, "quiet", 0) >= 1:
        return logging.ERROR
    return logging.WARNING


# --------------------------
# Main
# --------------------------

def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    ns = parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    configure_logging(
        level=resolve_log_level(ns),
        to_file=ns.log_file,
        fmt=getattr(ns, "log_format", "%(levelname)s: %(message)s"),
    )

    try:
        renderer = TemplateRenderer(Path(ns.templates_dir).resolve() if ns.templates_dir else None)
        driver = BatchDriver(renderer)
        result = driver.run(stdin.read())
        text = driver.render(result)
    except Exception:
        logger.exception("Failed to generate bindings")
        return 2

    stdout.write(text)
    return 1 if isinstance(result, GenerationFailure) else 0


if __name__ == "__main__":
    sys.exit(main())
