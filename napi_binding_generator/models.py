#!/usr/bin/env python3
"""
Data models for the N-API binding snippet generator.

This module provides small, strongly-typed structures to describe:
- Recognized types (category, call-site and wrapper-layer rules, result packing)
- Parsed method signatures (return type, name, ordered arguments)
- Generation results (fragments for one signature, or a failure)
- Generation options shared by the emitters and the batch driver

The models are consumed by:
- The parsing layer (to populate MethodSignature instances)
- The emitters (to render native glue, registration lines and typed wrappers)
- The batch driver (to aggregate fragments into the final report)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple, Union


# --------------------------
# Type model
# --------------------------

class TypeCategory(Enum):
    VOID = auto()
    BOOLEAN = auto()
    SIGNED_INTEGER = auto()
    UNSIGNED_INTEGER = auto()
    FLOATING_POINT = auto()
    STRING = auto()
    ENUM = auto()
    OBJECT = auto()


class ResultPacking(Enum):
    """
    How a native result is handed back to the wrapper language.
    """
    NONE = auto()
    NUMERIC = auto()
    BOOLEAN = auto()
    STRING = auto()
    OWNED_OBJECT = auto()
    OBJECT_LIST = auto()
    PASS_THROUGH_OBJECT = auto()


@dataclass(frozen=True)
class TypeSpec:
    """
    Registry entry for one recognized type token.

    - native_spelling: C++ spelling used for local declarations (e.g. 'QWidget*')
    - typed_name: the wrapper-language (TypeScript) spelling
    - needs_dereference: the native call site passes '*value'
    - needs_native_unwrap: the typed layer passes 'value.native'
    - number_accessor: Napi::Number accessor for numeric extraction
    - wrap_class: companion ObjectWrap class for object handles
    - element: for list results, the registry name of the element type
    - property_getter: conversion applied to a generic property value, with a
      '{value}' placeholder; None when the type cannot be a property
    """
    name: str
    category: TypeCategory
    native_spelling: str
    typed_name: str
    packing: ResultPacking = ResultPacking.NONE
    needs_dereference: bool = False
    needs_native_unwrap: bool = False
    number_accessor: Optional[str] = None
    wrap_class: Optional[str] = None
    element: Optional[str] = None
    bit_flags: bool = False
    property_getter: Optional[str] = None

    @property
    def is_void(self) -> bool:
        return self.category == TypeCategory.VOID

    @property
    def base_native(self) -> str:
        """
        Native spelling without a trailing pointer marker ('QWidget*' -> 'QWidget').
        """
        return self.native_spelling.rstrip("*").strip()


# --------------------------
# Signature models
# --------------------------

@dataclass(frozen=True)
class Argument:
    type: TypeSpec
    name: str


@dataclass(frozen=True)
class MethodSignature:
    """
    Canonical parsed form of one signature line. Argument order is preserved
    identically across every emitted artifact.
    """
    name: str
    return_type: TypeSpec
    arguments: Tuple[Argument, ...] = ()
    is_virtual: bool = False
    line: str = ""

    @property
    def argument_names(self) -> List[str]:
        return [a.name for a in self.arguments]

    @property
    def has_result(self) -> bool:
        return not self.return_type.is_void

    @property
    def cpp_signature(self) -> str:
        """
        Human-friendly signature string used in diagnostics and logs.
        """
        params = ", ".join(f"{a.type.name} {a.name}" for a in self.arguments)
        return f"{self.name}({params}) -> {self.return_type.name}"


# --------------------------
# Generation results
# --------------------------

class GenerationMode(Enum):
    OPERATION = auto()
    PROPERTY = auto()


@dataclass(frozen=True)
class MethodFragments:
    """
    Successful generation for one signature. Property mode only fills typed_api.
    """
    typed_api: str
    declaration: Optional[str] = None
    registration: Optional[str] = None
    native_body: Optional[str] = None


@dataclass(frozen=True)
class GenerationFailure:
    code: str
    message: str
    line: str


GenerationResult = Union[MethodFragments, GenerationFailure]


@dataclass
class BatchOutput:
    """
    Aggregated fragments of a successful batch, one list per output section.
    """
    class_name: str
    mode: GenerationMode
    declarations: List[str] = field(default_factory=list)
    registrations: List[str] = field(default_factory=list)
    native_bodies: List[str] = field(default_factory=list)
    typed_api: List[str] = field(default_factory=list)

    def add(self, fragments: MethodFragments) -> None:
        if fragments.declaration is not None:
            self.declarations.append(fragments.declaration)
        if fragments.registration is not None:
            self.registrations.append(fragments.registration)
        if fragments.native_body is not None:
            self.native_bodies.append(fragments.native_body)
        self.typed_api.append(fragments.typed_api)

    @property
    def method_count(self) -> int:
        return len(self.typed_api)


BatchResult = Union[BatchOutput, GenerationFailure]


# --------------------------
# Generation options
# --------------------------

@dataclass(frozen=True)
class WrapperCacheRef:
    """
    Identity-keyed wrapper cache used for pass-through object results.

    The first wrapper created for a native pointer is reused for the object's
    lifetime; the generated code reaches the cache through these expressions.
    - native_lookup: called as '<native_lookup>(env, object)'
    - typed_lookup: called as '<typed_lookup>(nativeObject)'
    """
    native_lookup: str = "WrapperCache::instance.getWrapper"
    typed_lookup: str = "wrapperCache.getWrapper"


@dataclass(frozen=True)
class EmitterConfig:
    """
    Options shared by the emitters and the batch driver.
    """
    wrapper_suffix: str = "Wrap"
    native_instance: str = "this->instance"
    native_field: str = "native"
    wrapper_cache: WrapperCacheRef = field(default_factory=WrapperCacheRef)
    property_getter: str = "this.property"
    property_setter: str = "this.setProperty"
    generic_value_constructor: str = "fromQVariant"
    legacy_prefix: str = "gl"
    native_body_template: str = "native_body.cpp.j2"
    report_template: str = "report.txt.j2"
    section_labels: Tuple[str, str, str, str] = (
        "C++ declaration",
        "Napi declaration",
        "C++ body",
        "TS body",
    )

    @property
    def typed_native(self) -> str:
        return f"this.{self.native_field}"

    def wrapper_name(self, class_name: str) -> str:
        return f"{class_name}{self.wrapper_suffix}"


__all__ = [
    "TypeCategory",
    "ResultPacking",
    "TypeSpec",
    "Argument",
    "MethodSignature",
    "GenerationMode",
    "MethodFragments",
    "GenerationFailure",
    "GenerationResult",
    "BatchOutput",
    "BatchResult",
    "WrapperCacheRef",
    "EmitterConfig",
]
