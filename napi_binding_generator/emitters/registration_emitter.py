#!/usr/bin/env python3
"""
Registration emitter.

Renders the entry that exposes one method in the wrapper class' method table,
the list handed to `DefineClass` when the class is initialized:

    InstanceMethod("setGeometry", &QWidgetWrap::setGeometry),

The wrapper class name is the target class plus the configured suffix.
"""

from __future__ import annotations

from typing import Optional

from ..models import EmitterConfig, MethodSignature


class RegistrationEmitter:
    """
    Render exposed-method table entries.

    Usage:
        emitter = RegistrationEmitter(config)
        line = emitter.emit("QWidget", sig)
    """

    def __init__(self, config: Optional[EmitterConfig] = None) -> None:
        self.config = config or EmitterConfig()

    def emit(self, class_name: str, sig: MethodSignature) -> str:
        wrapper = self.config.wrapper_name(class_name)
        return f'    InstanceMethod("{sig.name}", &{wrapper}::{sig.name}),'


__all__ = ["RegistrationEmitter"]
