#!/usr/bin/env python3
"""
Single-line signature parsing.

A signature line looks like:

    // TODO: [virtual] <ReturnType> [&|*]<methodName>(<ArgType> [&|*]<argName>, ...)

Only this one-line pattern is recognized; there is no attempt at parsing C++
declarations in general. Every type token is resolved against the TypeRegistry
and an unknown token fails the line.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple
import logging

from ..errors import GrammarMismatch, UnsupportedType
from ..models import Argument, MethodSignature
from ..type_registry import DEFAULT_REGISTRY, TypeRegistry

logger = logging.getLogger(__name__)


# Identifier, optionally '::'-qualified, with at most one template argument list.
_TYPE = r"[A-Za-z_][\w:]*(?:<[^<>()]*>)?"

_SIGNATURE_RE = re.compile(
    r"^//\s*TODO:\s*"
    r"(?P<virtual>virtual\s+)?"
    r"(?:const\s+)?"
    rf"(?P<return_type>{_TYPE})"
    r"(?:\s*(?P<modifier>[&*])\s*|\s+)"
    r"(?P<name>[A-Za-z_]\w*)"
    r"\s*\((?P<args>[^()]*)\)"
)

_ARGUMENT_RE = re.compile(
    r"^(?:const\s+)?"
    rf"(?P<type>{_TYPE})"
    r"(?:\s*(?:const\s*)?(?P<modifier>[&*]+)\s*|\s+)"
    r"(?P<name>\w*)$"
)


class SignatureParser:
    """
    Parse annotated signature lines into MethodSignature values.

    Usage:
        parser = SignatureParser(registry)
        sig = parser.parse("// TODO: int add(int a, int b)")
    """

    def __init__(self, registry: Optional[TypeRegistry] = None) -> None:
        self.registry = registry or DEFAULT_REGISTRY

    def parse(self, line: str) -> MethodSignature:
        raw = line.strip()
        found = _SIGNATURE_RE.match(raw)
        if not found:
            raise GrammarMismatch("line does not match the signature grammar", raw)

        return_token = found.group("return_type")
        return_type = self.registry.resolve_return_type(return_token)
        if return_type is None:
            raise UnsupportedType(return_token, raw)

        arguments = tuple(self._parse_arguments(found.group("args"), raw))
        sig = MethodSignature(
            name=found.group("name"),
            return_type=return_type,
            arguments=arguments,
            is_virtual=found.group("virtual") is not None,
            line=raw,
        )
        logger.debug("Parsed %s", sig.cpp_signature)
        return sig

    # ---- Internals ----

    def _parse_arguments(self, text: str, raw: str) -> List[Argument]:
        text = text.strip()
        if not text or text == "void":
            return []

        result: List[Argument] = []
        seen: set[str] = set()
        for part in text.split(","):
            parsed = self._split_argument(part, raw)
            if parsed is None:
                continue
            token, name = parsed
            spec = self.registry.resolve_argument_type(token)
            if spec is None:
                raise UnsupportedType(token, raw)
            # unnamed pointer/reference arguments are not forwarded
            if not name:
                continue
            if name in seen:
                raise GrammarMismatch(f"duplicate argument name '{name}'", raw)
            seen.add(name)
            result.append(Argument(type=spec, name=name))
        return result

    @staticmethod
    def _split_argument(part: str, raw: str) -> Optional[Tuple[str, str]]:
        """
        Split one argument into (type token, name). The name is empty for an
        unnamed pointer or reference argument; None is returned only for a
        bare 'void'.
        """
        decl = part.split("=", 1)[0].strip()
        if decl == "void":
            return None
        found = _ARGUMENT_RE.match(decl)
        if not found:
            if decl and " " not in decl:
                raise GrammarMismatch(f"argument '{decl}' has no name", raw)
            raise GrammarMismatch(f"malformed argument '{decl}'", raw)
        return found.group("type"), found.group("name")


def parse_signature(line: str, registry: Optional[TypeRegistry] = None) -> MethodSignature:
    return SignatureParser(registry).parse(line)


__all__ = [
    "SignatureParser",
    "parse_signature",
]
