#!/usr/bin/env python3
"""
Error taxonomy for signature generation.

The parser and the emitters raise these; the batch driver catches the first
one, turns it into a GenerationFailure and stops. The failure is rendered as a
single diagnostic line:

    <code>: <message> in line: <raw line>

Codes are a closed set:
- NoInput: the whole input block is empty
- MissingHeader: the first non-blank line is not a CLASS/PROP header
- GrammarMismatch: a line does not fit the signature grammar
- UnsupportedType: a type token is not in the registry, or cannot be used in
  the requested position
"""

from __future__ import annotations

from typing import Optional


VALID_ERROR_CODES = {
    "NoInput",
    "MissingHeader",
    "GrammarMismatch",
    "UnsupportedType",
}


class GenerationError(Exception):
    code = ""

    def __init__(self, message: str, line: str = "") -> None:
        if self.code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown generation error code: {self.code!r}")
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        return format_diagnostic(self.code, self.message, self.line)


class NoInput(GenerationError):
    code = "NoInput"

    def __init__(self) -> None:
        super().__init__("input is empty")


class GrammarMismatch(GenerationError):
    code = "GrammarMismatch"


class MissingHeader(GrammarMismatch):
    code = "MissingHeader"

    def __init__(self, line: str) -> None:
        super().__init__("expected a '// CLASS: <Name>' or '// PROP: <Name>' header", line)


class UnsupportedType(GenerationError):
    code = "UnsupportedType"

    def __init__(self, token: str, line: str = "", reason: Optional[str] = None) -> None:
        super().__init__(reason or f"unsupported type '{token}'", line)
        self.token = token


def format_diagnostic(code: str, message: str, line: str = "") -> str:
    """
    Render the single human-readable diagnostic line for a failed batch.
    """
    if line:
        return f"{code}: {message} in line: {line}"
    return f"{code}: {message}"


__all__ = [
    "VALID_ERROR_CODES",
    "GenerationError",
    "NoInput",
    "GrammarMismatch",
    "MissingHeader",
    "UnsupportedType",
    "format_diagnostic",
]
