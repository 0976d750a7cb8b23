#!/usr/bin/env python3
"""
Native (C++ / node-addon-api) emitter.

For one parsed signature this emitter renders:
- the member declaration placed in the wrapper class header
- the method body: argument extraction from Napi::CallbackInfo, the call on
  the wrapped native instance, and the packing of the result into a Napi value

Extraction and packing are table-driven: each TypeSpec category maps to one
extraction handler and each result packing to one packing handler, so a new
registry entry never needs a new branch here unless it brings a new category.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional
import logging

from ..models import (
    Argument,
    EmitterConfig,
    MethodSignature,
    ResultPacking,
    TypeCategory,
    TypeSpec,
)
from ..type_registry import DEFAULT_REGISTRY, TypeRegistry
from ..utils import TemplateRenderer

logger = logging.getLogger(__name__)


# --------------------------
# Argument extraction
# --------------------------

def _extract_boolean(arg: Argument, index: int) -> List[str]:
    return [f"{arg.type.native_spelling} {arg.name} = info[{index}].As<Napi::Boolean>().Value();"]


def _extract_number(arg: Argument, index: int) -> List[str]:
    return [
        f"{arg.type.native_spelling} {arg.name} = "
        f"info[{index}].As<Napi::Number>().{arg.type.number_accessor}();"
    ]


def _extract_string(arg: Argument, index: int) -> List[str]:
    return [
        f"std::string {arg.name}NapiText = info[{index}].As<Napi::String>().Utf8Value();",
        f"{arg.type.native_spelling} {arg.name} = {arg.type.native_spelling}::fromStdString({arg.name}NapiText);",
    ]


def _extract_enum(arg: Argument, index: int) -> List[str]:
    native = arg.type.native_spelling
    return [
        f"{native} {arg.name} = "
        f"static_cast<{native}>(info[{index}].As<Napi::Number>().{arg.type.number_accessor}());"
    ]


def _extract_object(arg: Argument, index: int) -> List[str]:
    wrap = arg.type.wrap_class
    return [
        f"Napi::Object {arg.name}Object = info[{index}].As<Napi::Object>();",
        f"{wrap}* {arg.name}Wrap = Napi::ObjectWrap<{wrap}>::Unwrap({arg.name}Object);",
        f"{arg.type.base_native}* {arg.name} = {arg.name}Wrap->getInternalInstance();",
    ]


_EXTRACTORS: Dict[TypeCategory, Callable[[Argument, int], List[str]]] = {
    TypeCategory.BOOLEAN: _extract_boolean,
    TypeCategory.SIGNED_INTEGER: _extract_number,
    TypeCategory.UNSIGNED_INTEGER: _extract_number,
    TypeCategory.FLOATING_POINT: _extract_number,
    TypeCategory.STRING: _extract_string,
    TypeCategory.ENUM: _extract_enum,
    TypeCategory.OBJECT: _extract_object,
}


def call_argument(arg: Argument) -> str:
    """
    Expression passed to the native method for one argument.
    """
    return f"*{arg.name}" if arg.type.needs_dereference else arg.name


# --------------------------
# Emitter
# --------------------------

class NativeEmitter:
    """
    Render native declaration and body fragments.

    Usage:
        emitter = NativeEmitter(renderer, config=config)
        decl = emitter.emit_declaration(sig)
        body = emitter.emit_body("QWidget", sig)
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        config: Optional[EmitterConfig] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        self.renderer = renderer
        self.config = config or EmitterConfig()
        self.registry = registry or DEFAULT_REGISTRY
        self._packers: Dict[ResultPacking, Callable[[TypeSpec], List[str]]] = {
            ResultPacking.NONE: self._pack_void,
            ResultPacking.NUMERIC: self._pack_numeric,
            ResultPacking.BOOLEAN: self._pack_boolean,
            ResultPacking.STRING: self._pack_string,
            ResultPacking.OWNED_OBJECT: self._pack_owned_object,
            ResultPacking.OBJECT_LIST: self._pack_object_list,
            ResultPacking.PASS_THROUGH_OBJECT: self._pack_pass_through,
        }

    # ---- Public API ----

    def emit_declaration(self, sig: MethodSignature) -> str:
        return f"  Napi::Value {sig.name}(const Napi::CallbackInfo& info);"

    def emit_body(self, class_name: str, sig: MethodSignature) -> str:
        extraction: List[str] = []
        for index, arg in enumerate(sig.arguments):
            extraction.extend(_EXTRACTORS[arg.type.category](arg, index))

        context = {
            "wrapper": self.config.wrapper_name(class_name),
            "name": sig.name,
            "argc": len(sig.arguments),
            "extraction": extraction,
            "invocation": self.invocation(sig),
            "packing": self._packers[sig.return_type.packing](sig.return_type),
        }
        logger.debug("Rendering native body for %s::%s", class_name, sig.name)
        return self.renderer.render(self.config.native_body_template, context)

    def invocation(self, sig: MethodSignature) -> str:
        """
        Statement calling the wrapped instance, assigning 'result' when non-void.
        """
        args = ", ".join(call_argument(a) for a in sig.arguments)
        call = f"{self.config.native_instance}->{sig.name}({args});"
        if sig.has_result:
            return f"{sig.return_type.native_spelling} result = {call}"
        return call

    # ---- Result packing ----

    def _pack_void(self, spec: TypeSpec) -> List[str]:
        return ["return env.Null();"]

    def _pack_numeric(self, spec: TypeSpec) -> List[str]:
        value = "static_cast<uint>(result)" if spec.bit_flags else "result"
        return [f"return Napi::Number::New(env, {value});"]

    def _pack_boolean(self, spec: TypeSpec) -> List[str]:
        return ["return Napi::Boolean::New(env, result);"]

    def _pack_string(self, spec: TypeSpec) -> List[str]:
        return ["return Napi::String::New(env, result.toStdString());"]

    def _pack_owned_object(self, spec: TypeSpec) -> List[str]:
        return [
            f"auto resultInstance = {self._new_wrapper(spec, 'result')};",
            "return resultInstance;",
        ]

    def _pack_object_list(self, spec: TypeSpec) -> List[str]:
        element = self.registry.element_type(spec)
        if element is None:
            raise RuntimeError(f"List type {spec.name} has no registered element type")
        return [
            "Napi::Array resultArrayNapi = Napi::Array::New(env, result.size());",
            "for (uint32_t i = 0; i < static_cast<uint32_t>(result.size()); i++) {",
            f"  resultArrayNapi[i] = {self._new_wrapper(element, 'result[i]')};",
            "}",
            "return resultArrayNapi;",
        ]

    def _pack_pass_through(self, spec: TypeSpec) -> List[str]:
        lookup = self.config.wrapper_cache.native_lookup
        return [
            "if (result) {",
            f"  return {lookup}(env, static_cast<QObject*>(result));",
            "}",
            "return env.Null();",
        ]

    @staticmethod
    def _new_wrapper(spec: TypeSpec, expr: str) -> str:
        """
        Heap-copy `expr` and construct a fresh companion wrapper around it.
        """
        native = spec.base_native
        return f"{spec.wrap_class}::constructor.New({{Napi::External<{native}>::New(env, new {native}({expr}))}})"


__all__ = [
    "NativeEmitter",
    "call_argument",
]
