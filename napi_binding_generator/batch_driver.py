#!/usr/bin/env python3
"""
Batch driver: turns one block of annotated lines into the aggregated report.

The block starts with a header selecting the mode and the target class:

    // CLASS: <ClassName>     operation mode (native glue + typed methods)
    // PROP: <ClassName>      property mode (typed property accessors only)

followed by one `// TODO: ...` signature per line. Processing is fail-fast:
the first failing line aborts the batch and the only output is its diagnostic.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional
import logging

from .emitters.native_emitter import NativeEmitter
from .emitters.registration_emitter import RegistrationEmitter
from .emitters.typed_api_emitter import TypedApiEmitter
from .errors import GenerationError, MissingHeader, NoInput, format_diagnostic
from .models import (
    BatchOutput,
    BatchResult,
    EmitterConfig,
    GenerationFailure,
    GenerationMode,
    GenerationResult,
    MethodFragments,
)
from .parsing.signature_parser import SignatureParser
from .type_registry import DEFAULT_REGISTRY, TypeRegistry
from .utils import TemplateRenderer, normalize_newlines

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^//\s*(?P<kind>CLASS|PROP):\s*(?P<name>[A-Za-z_]\w*)\s*$")

_HEADER_MODES: Dict[str, GenerationMode] = {
    "CLASS": GenerationMode.OPERATION,
    "PROP": GenerationMode.PROPERTY,
}


def _failure(error: GenerationError) -> GenerationFailure:
    return GenerationFailure(code=error.code, message=error.message, line=error.line)


class BatchDriver:
    """
    Parse, emit and aggregate a whole input block.

    Usage:
        driver = BatchDriver(TemplateRenderer())
        text = driver.process(sys.stdin.read())
    """

    def __init__(
        self,
        renderer: Optional[TemplateRenderer] = None,
        config: Optional[EmitterConfig] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        self.config = config or EmitterConfig()
        self.registry = registry or DEFAULT_REGISTRY
        self.renderer = renderer or TemplateRenderer()
        self.parser = SignatureParser(self.registry)
        self.native = NativeEmitter(self.renderer, config=self.config, registry=self.registry)
        self.registration = RegistrationEmitter(self.config)
        self.typed = TypedApiEmitter(self.config, registry=self.registry)

    # ---- Public API ----

    def process(self, text: str) -> str:
        return self.render(self.run(text))

    def run(self, text: str) -> BatchResult:
        lines = [line.strip() for line in normalize_newlines(text or "").split("\n")]
        body = [line for line in lines if line]
        if not body:
            return _failure(NoInput())

        header = _HEADER_RE.match(body[0])
        if not header:
            return _failure(MissingHeader(body[0]))

        output = BatchOutput(class_name=header.group("name"), mode=_HEADER_MODES[header.group("kind")])
        logger.debug("Header: %s (%s mode)", output.class_name, output.mode.name.lower())

        for line in body[1:]:
            result = self.generate(output.class_name, output.mode, line)
            if isinstance(result, GenerationFailure):
                logger.warning("Aborting batch: %s", format_diagnostic(result.code, result.message, result.line))
                return result
            output.add(result)

        logger.info("Generated %d method(s) for %s", output.method_count, output.class_name)
        return output

    def generate(self, class_name: str, mode: GenerationMode, line: str) -> GenerationResult:
        """
        Generate all fragments for one signature line, or the failure for it.
        """
        try:
            return self.expand(class_name, mode, line)
        except GenerationError as err:
            return _failure(err)

    def expand(self, class_name: str, mode: GenerationMode, line: str) -> MethodFragments:
        sig = self.parser.parse(line)
        if mode == GenerationMode.PROPERTY:
            return MethodFragments(typed_api=self.typed.emit_property(sig))
        return MethodFragments(
            declaration=self.native.emit_declaration(sig),
            registration=self.registration.emit(class_name, sig),
            native_body=self.native.emit_body(class_name, sig),
            typed_api=self.typed.emit_method(sig),
        )

    def render(self, result: BatchResult) -> str:
        if isinstance(result, GenerationFailure):
            return format_diagnostic(result.code, result.message, result.line) + "\n"

        collections: List[List[str]] = [
            result.declarations,
            result.registrations,
            result.native_bodies,
            result.typed_api,
        ]
        sections = [
            {"label": label, "body": "\n".join(fragments).rstrip("\n")}
            for label, fragments in zip(self.config.section_labels, collections)
            if fragments
        ]
        return self.renderer.render(self.config.report_template, {"sections": sections})


def generate_report(text: str, renderer: Optional[TemplateRenderer] = None) -> str:
    """
    Convenience wrapper: full input block in, full report (or diagnostic) out.
    """
    return BatchDriver(renderer).process(text)


__all__ = [
    "BatchDriver",
    "generate_report",
]
