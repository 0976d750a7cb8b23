#!/usr/bin/env python3
"""
Utilities for logging, templating (Jinja2) and text handling for the N-API
binding snippet generator.

This module provides:
- Project-wide logging configuration (stderr by default, optional file output).
- A layered Jinja2 environment: user templates first, package templates next.
- Small naming helpers shared by the emitters.

The goal is to keep the rest of the codebase focused on parsing and emission logic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TextIO
import logging

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
)

logger = logging.getLogger(__name__)

PACKAGE_NAME = "napi_binding_generator"


def configure_logging(
    level: Optional[Union[int, str]] = None,
    *,
    to_file: Optional[Union[str, Path]] = None,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
    propagate_package_loggers: bool = True,
) -> None:
    """
    Configure project-wide logging with consistent formatting and optional file output.

    Parameters:
    - level: int or name (e.g., 'INFO', 'DEBUG'). Defaults to WARNING so that
      generated text on stdout is the only visible output of a normal run.
    - to_file: path to a log file; if provided, logs are also written there.
    - fmt: logging format string. Defaults to '%(levelname)s: %(message)s'.
    - stream: stream for console logs (defaults to sys.stderr).
    - propagate_package_loggers: whether the package logger propagates to root.
    """
    if level is None:
        resolved_level = logging.WARNING
    elif isinstance(level, str):
        resolved_level = getattr(logging, level.upper(), logging.WARNING)
    else:
        resolved_level = int(level)

    log_format = fmt or "%(levelname)s: %(message)s"
    stream = stream or sys.stderr

    # Reset root handlers for deterministic setup
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(resolved_level)

    handlers: List[logging.Handler] = []

    stream_handler = logging.StreamHandler(stream)
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(stream_handler)

    if to_file:
        file_handler = logging.FileHandler(str(to_file), mode="w")
        file_handler.setLevel(resolved_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    for h in handlers:
        root.addHandler(h)

    pkg_logger = logging.getLogger(PACKAGE_NAME)
    pkg_logger.setLevel(resolved_level)
    pkg_logger.propagate = propagate_package_loggers


# ----------------------------------------
# Naming helpers
# ----------------------------------------

def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


def strip_legacy_prefix(name: str, prefix: str = "gl") -> str:
    """
    Drop a flat C-style prefix such as 'gl' from 'glClearColor' -> 'clearColor'.
    Names without the prefix, or where it is not followed by an upper-case
    letter ('globalPos'), are returned verbatim.
    """
    if prefix and name.startswith(prefix) and name[len(prefix):len(prefix) + 1].isupper():
        return lower_first(name[len(prefix):])
    return name


def normalize_newlines(text: str) -> str:
    """
    Normalize to Unix newlines for reproducible output.
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


# ----------------------------------------
# Jinja environment helpers
# ----------------------------------------

class TemplateRenderer:
    """
    A thin wrapper over a Jinja2 Environment with layered loaders.
    - templates_dir: user-provided templates directory (highest precedence)
    - package templates: napi_binding_generator/templates
    """

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        loaders: List[Any] = []

        # 1) User-provided directory
        if templates_dir:
            p = Path(templates_dir)
            if p.is_dir():
                loaders.append(FileSystemLoader(str(p)))
            else:
                logger.warning("Templates directory not found, using package templates: %s", p)

        # 2) Package templates (installed alongside this module)
        try:
            loaders.append(PackageLoader(PACKAGE_NAME, "templates"))
        except Exception:
            pkg_templates_fs = Path(__file__).parent / "templates"
            loaders.append(FileSystemLoader(str(pkg_templates_fs)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise RuntimeError(f"Template not found: {template_name}") from e
        return template.render(**context)


__all__ = [
    "PACKAGE_NAME",
    "TemplateRenderer",
    "configure_logging",
    "lower_first",
    "strip_legacy_prefix",
    "normalize_newlines",
]
