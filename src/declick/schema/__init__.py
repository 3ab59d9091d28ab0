"""Schema compiler and value binder."""

from .binder import bind, coerce
from .compiler import (
    argument_required,
    argument_variadic,
    compile_definition,
    infer_option_mode,
    split_shortcut,
)
from .introspection import FieldBinding, collect_questions, iter_field_bindings
from .normalize import normalize_default
from .types import TypeMapper

__all__ = [
    "FieldBinding",
    "TypeMapper",
    "argument_required",
    "argument_variadic",
    "bind",
    "coerce",
    "collect_questions",
    "compile_definition",
    "infer_option_mode",
    "iter_field_bindings",
    "normalize_default",
    "split_shortcut",
]
