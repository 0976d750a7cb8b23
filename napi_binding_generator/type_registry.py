#!/usr/bin/env python3
"""
Closed type registry for N-API binding snippets.

This module catalogues every type token the generator understands and records,
for each one, how the emitters must treat it:

- Scalars (booleans, 32-bit integers, floats) read straight from Napi values
- QString, converted through UTF-8 std::string
- Enumerations, read as 32-bit integers and cast to the named enum type
- Object handles, unwrapped from their companion ObjectWrap instance
  (value types are dereferenced at the call site and copied into a new
  wrapper on return; long-lived pointers go through the wrapper cache)
- Lists of value objects (return only)

Typical usage:

    from .type_registry import DEFAULT_REGISTRY

    spec = DEFAULT_REGISTRY.resolve_argument_type("QRect")
    if spec is None:
        ...  # not part of the vocabulary

Design notes:
- The registry is intentionally closed. An unknown token is a hard failure for
  the caller, never a best-effort guess, because the emitters are table-driven.
- Adding a type is one entry in `default_type_specs()`; the emitters dispatch on
  the entry's category and result packing.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .models import ResultPacking, TypeCategory, TypeSpec


# --------------------------
# Helpers
# --------------------------

def normalize_token(spelling: str) -> str:
    """
    Normalize a type spelling to its registry key:
    - Remove a leading 'const'
    - Remove pointer/reference markers outside template brackets
    - Collapse whitespace

    Example:
      'const QString &' -> 'QString'
      'QList<QModelIndex>' -> 'QList<QModelIndex>'
    """
    s = (spelling or "").strip()
    if s.startswith("const "):
        s = s[len("const "):].lstrip()
    while s and s[-1] in "&*":
        s = s[:-1].rstrip()
    return " ".join(s.split())


# Property getter conversions; '{value}' is the generic property value,
# '{typed}' and '{from_generic}' are filled in by the typed emitter.
_BOOL_GETTER = "{value}.toBool()"
_STRING_GETTER = "{value}.toString()"
_INT_GETTER = "{value}.toInt()"
_DOUBLE_GETTER = "{value}.toDouble()"
_VALUE_OBJECT_GETTER = "{typed}.{from_generic}({value})"


# --------------------------
# Entry builders
# --------------------------

def _void() -> TypeSpec:
    return TypeSpec(
        name="void",
        category=TypeCategory.VOID,
        native_spelling="void",
        typed_name="void",
        packing=ResultPacking.NONE,
    )


def _boolean(name: str) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.BOOLEAN,
        native_spelling=name,
        typed_name="boolean",
        packing=ResultPacking.BOOLEAN,
        property_getter=_BOOL_GETTER,
    )


def _signed(name: str) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.SIGNED_INTEGER,
        native_spelling=name,
        typed_name="number",
        packing=ResultPacking.NUMERIC,
        number_accessor="Int32Value",
        property_getter=_INT_GETTER,
    )


def _unsigned(name: str) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.UNSIGNED_INTEGER,
        native_spelling=name,
        typed_name="number",
        packing=ResultPacking.NUMERIC,
        number_accessor="Uint32Value",
        property_getter=_INT_GETTER,
    )


def _floating(name: str, accessor: str = "FloatValue") -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.FLOATING_POINT,
        native_spelling=name,
        typed_name="number",
        packing=ResultPacking.NUMERIC,
        number_accessor=accessor,
        property_getter=_DOUBLE_GETTER,
    )


def _string(name: str) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.STRING,
        native_spelling=name,
        typed_name="string",
        packing=ResultPacking.STRING,
        property_getter=_STRING_GETTER,
    )


def _enum(name: str, typed_name: str, bit_flags: bool = False) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.ENUM,
        native_spelling=name,
        typed_name=typed_name,
        packing=ResultPacking.NUMERIC,
        number_accessor="Int32Value",
        bit_flags=bit_flags,
        property_getter=_INT_GETTER,
    )


def _value_object(name: str, needs_native_unwrap: bool = True) -> TypeSpec:
    """
    Value type held by the companion wrapper; copied into a new wrapper on return.
    """
    return TypeSpec(
        name=name,
        category=TypeCategory.OBJECT,
        native_spelling=name,
        typed_name=name,
        packing=ResultPacking.OWNED_OBJECT,
        needs_dereference=True,
        needs_native_unwrap=needs_native_unwrap,
        wrap_class=f"{name}Wrap",
        property_getter=_VALUE_OBJECT_GETTER,
    )


def _pointer_object(name: str) -> TypeSpec:
    """
    Long-lived native object passed around by pointer; results reuse cached wrappers.
    """
    return TypeSpec(
        name=name,
        category=TypeCategory.OBJECT,
        native_spelling=f"{name}*",
        typed_name=name,
        packing=ResultPacking.PASS_THROUGH_OBJECT,
        needs_dereference=False,
        needs_native_unwrap=True,
        wrap_class=f"{name}Wrap",
    )


def _object_list(name: str, element: TypeSpec) -> TypeSpec:
    return TypeSpec(
        name=name,
        category=TypeCategory.OBJECT,
        native_spelling=name,
        typed_name=f"{element.typed_name}[]",
        packing=ResultPacking.OBJECT_LIST,
        wrap_class=element.wrap_class,
        element=element.name,
    )


# --------------------------
# Default vocabulary
# --------------------------

_VALUE_OBJECTS = (
    "QRect", "QRectF", "QSize", "QPoint", "QPointF", "QModelIndex",
    "QColor", "QFont", "QIcon", "QVariant", "QKeySequence",
)

_POINTER_OBJECTS = (
    "QWidget", "QMenu", "QAction", "QObject", "QAbstractItemModel", "QScreen",
)


def default_type_specs() -> List[TypeSpec]:
    specs: List[TypeSpec] = [
        _boolean("bool"),
        _boolean("GLboolean"),
        _signed("int"),
        _signed("qint32"),
        _signed("GLint"),
        _signed("GLsizei"),
        _signed("GLenum"),
        _unsigned("uint"),
        _unsigned("quint32"),
        _unsigned("GLuint"),
        _floating("float"),
        _floating("GLfloat"),
        _floating("GLclampf"),
        _floating("double", accessor="DoubleValue"),
        _floating("qreal", accessor="DoubleValue"),
        _string("QString"),
        _enum("Qt::Alignment", "AlignmentFlag", bit_flags=True),
        _enum("Qt::Orientations", "Orientation", bit_flags=True),
        _enum("Qt::ItemFlags", "ItemFlag", bit_flags=True),
        _enum("Qt::WindowFlags", "WindowType", bit_flags=True),
        _enum("Qt::Orientation", "Orientation"),
        _enum("Qt::FocusPolicy", "FocusPolicy"),
        _enum("Qt::TextFormat", "TextFormat"),
        _enum("Qt::CheckState", "CheckState"),
        _enum("Qt::ContextMenuPolicy", "ContextMenuPolicy"),
    ]
    values = {name: _value_object(name) for name in _VALUE_OBJECTS}
    specs.extend(values.values())
    specs.extend(_pointer_object(name) for name in _POINTER_OBJECTS)
    specs.append(_object_list("QModelIndexList", values["QModelIndex"]))
    specs.append(_object_list("QList<QModelIndex>", values["QModelIndex"]))
    specs.append(_object_list("QList<QRect>", values["QRect"]))
    return specs


# --------------------------
# Registry
# --------------------------

class TypeRegistry:
    """
    Read-only catalogue of argument and return types.

    `void` and list types are only valid as return types; every other entry is
    valid on both sides.
    """

    def __init__(self, specs: Optional[Iterable[TypeSpec]] = None) -> None:
        all_specs = list(specs) if specs is not None else default_type_specs()
        self._returns: Dict[str, TypeSpec] = {"void": _void()}
        self._arguments: Dict[str, TypeSpec] = {}
        for spec in all_specs:
            self._returns[spec.name] = spec
            if spec.is_void or spec.packing == ResultPacking.OBJECT_LIST:
                continue
            self._arguments[spec.name] = spec

    @staticmethod
    def with_extra(extra: Sequence[TypeSpec]) -> "TypeRegistry":
        """
        Build a registry holding the default vocabulary plus `extra` entries
        (entries with an existing name replace the default).
        """
        merged: Dict[str, TypeSpec] = {s.name: s for s in default_type_specs()}
        for spec in extra:
            merged[spec.name] = spec
        return TypeRegistry(merged.values())

    # ---- Public API ----

    def resolve_argument_type(self, token: str) -> Optional[TypeSpec]:
        return self._arguments.get(normalize_token(token))

    def resolve_return_type(self, token: str) -> Optional[TypeSpec]:
        return self._returns.get(normalize_token(token))

    def element_type(self, spec: TypeSpec) -> Optional[TypeSpec]:
        """
        Element entry of a list type, or None for non-list types.
        """
        if spec.element is None:
            return None
        return self._returns.get(spec.element)

    @property
    def argument_tokens(self) -> List[str]:
        return sorted(self._arguments)

    @property
    def return_tokens(self) -> List[str]:
        return sorted(self._returns)


DEFAULT_REGISTRY = TypeRegistry()


__all__ = [
    "normalize_token",
    "default_type_specs",
    "TypeRegistry",
    "DEFAULT_REGISTRY",
]
