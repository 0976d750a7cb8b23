#!/usr/bin/env python3
"""
Typed API (TypeScript) emitter.

Two call conventions are supported:

- Method mode: a typed method forwarding to the same-named method on the
  native object, unwrapping object arguments to their native handles and
  re-wrapping the result (numbers, booleans and strings pass straight through,
  value objects get a new typed object, lists are mapped element-wise, and
  long-lived objects are looked up in the wrapper cache).
- Property mode: setters forward to the generic set-property call under a key
  derived from the setter name; getters read the generic property value and
  convert it to the typed surface type.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence
import logging

from ..errors import GrammarMismatch, UnsupportedType
from ..models import Argument, EmitterConfig, MethodSignature, ResultPacking, TypeSpec
from ..type_registry import DEFAULT_REGISTRY, TypeRegistry
from ..utils import lower_first, strip_legacy_prefix

logger = logging.getLogger(__name__)

_INDENT = "    "
_BODY_INDENT = _INDENT * 2

# Length of the 'set' prefix; the character after it is lower-cased
_SETTER_PREFIX_LENGTH = 3


def setter_property_key(method_name: str) -> str:
    """
    Property key for a setter: drop 'set', lower-case the next character.
    Names shorter than five characters are not validated.
    """
    return lower_first(method_name[_SETTER_PREFIX_LENGTH:])


def getter_property_key(method_name: str) -> str:
    """
    Property key for a getter: 'isEnabled' -> 'enabled', 'getTitle' -> 'title',
    any other name is the key itself ('windowTitle').
    """
    for prefix in ("is", "get"):
        rest = method_name[len(prefix):]
        if method_name.startswith(prefix) and rest[:1].isupper():
            return lower_first(rest)
    return method_name


class TypedApiEmitter:
    """
    Render typed wrapper methods and property accessors.

    Usage:
        emitter = TypedApiEmitter(config=config)
        ts = emitter.emit_method(sig)
        ts = emitter.emit_property(sig)
    """

    def __init__(self, config: Optional[EmitterConfig] = None, registry: Optional[TypeRegistry] = None) -> None:
        self.config = config or EmitterConfig()
        self.registry = registry or DEFAULT_REGISTRY
        self._wrappers: Dict[ResultPacking, Callable[[TypeSpec, str], str]] = {
            ResultPacking.NONE: lambda spec, call: f"{call};",
            ResultPacking.NUMERIC: lambda spec, call: f"return {call};",
            ResultPacking.BOOLEAN: lambda spec, call: f"return {call};",
            ResultPacking.STRING: lambda spec, call: f"return {call};",
            ResultPacking.OWNED_OBJECT: lambda spec, call: f"return new {spec.typed_name}({call});",
            ResultPacking.OBJECT_LIST: self._wrap_list,
            ResultPacking.PASS_THROUGH_OBJECT: self._wrap_cached,
        }

    # ---- Public API ----

    def typed_name(self, method_name: str) -> str:
        return strip_legacy_prefix(method_name, self.config.legacy_prefix)

    def unwrap(self, arg: Argument) -> str:
        """
        Expression handed to the native layer for one typed argument.
        """
        if arg.type.needs_native_unwrap:
            return f"{arg.name}.{self.config.native_field}"
        return arg.name

    def emit_method(self, sig: MethodSignature) -> str:
        call_args = ", ".join(self.unwrap(a) for a in sig.arguments)
        call = f"{self.config.typed_native}.{sig.name}({call_args})"
        statement = self._wrappers[sig.return_type.packing](sig.return_type, call)
        return self._render(self.typed_name(sig.name), sig.arguments, sig.return_type.typed_name, [statement])

    def emit_property(self, sig: MethodSignature) -> str:
        if sig.return_type.is_void:
            return self._emit_setter(sig)
        return self._emit_getter(sig)

    # ---- Internals ----

    def _emit_setter(self, sig: MethodSignature) -> str:
        if len(sig.arguments) != 1:
            raise GrammarMismatch(
                f"property setter '{sig.name}' must take exactly one argument", sig.line
            )
        key = setter_property_key(sig.name)
        value = self.unwrap(sig.arguments[0])
        statement = f"{self.config.property_setter}('{key}', {value});"
        logger.debug("Property setter %s -> key '%s'", sig.name, key)
        return self._render(self.typed_name(sig.name), sig.arguments, "void", [statement])

    def _emit_getter(self, sig: MethodSignature) -> str:
        if sig.arguments:
            raise GrammarMismatch(f"property getter '{sig.name}' must not take arguments", sig.line)
        spec = sig.return_type
        if spec.property_getter is None:
            raise UnsupportedType(
                spec.name, sig.line, reason=f"type '{spec.name}' cannot be read as a property"
            )
        key = getter_property_key(sig.name)
        value = f"{self.config.property_getter}('{key}')"
        conversion = spec.property_getter.format(
            value=value,
            typed=spec.typed_name,
            from_generic=self.config.generic_value_constructor,
        )
        logger.debug("Property getter %s -> key '%s'", sig.name, key)
        return self._render(self.typed_name(sig.name), (), spec.typed_name, [f"return {conversion};"])

    def _wrap_list(self, spec: TypeSpec, call: str) -> str:
        element = self.registry.element_type(spec)
        if element is None:
            raise RuntimeError(f"List type {spec.name} has no registered element type")
        return f"return {call}.map((item: any) => new {element.typed_name}(item));"

    def _wrap_cached(self, spec: TypeSpec, call: str) -> str:
        return f"return {self.config.wrapper_cache.typed_lookup}({call}) as {spec.typed_name};"

    @staticmethod
    def _render(name: str, arguments: Sequence[Argument], return_name: str, statements: List[str]) -> str:
        params = ", ".join(f"{a.name}: {a.type.typed_name}" for a in arguments)
        lines = [f"{_INDENT}{name}({params}): {return_name} {{"]
        lines.extend(f"{_BODY_INDENT}{s}" for s in statements)
        lines.append(f"{_INDENT}}}")
        lines.append("")
        return "\n".join(lines)


__all__ = [
    "TypedApiEmitter",
    "setter_property_key",
    "getter_property_key",
]
