"""
fluent-rules: Fluent composition of validation rule lists

This library builds, field by field, the ordered rule lists a validation
executor consumes:
- Built-in directive methods (required, string, min, max, in_, unique, ...)
- Conditional branches with when() / unless()
- Reusable fragments with with_()
- Process-wide extension methods (macros)
- Rule objects passed through untouched

Example:
    from fluent_rules import RuleBuilder

    RuleBuilder().required().string().max(255).flatten()
    # ["required", "string", "max:255"]
"""

from .api import compile_rules, configure, has_macro, macro, register_macro, rules
from .builder import RuleBuilder
from .config_loader import ConfigLoader
from .contracts import ValidationRule
from .directives import Literal, Opaque, Tag
from .exceptions import (
    ConfigError,
    InvalidMacroNameError,
    RuleBuilderError,
    UnknownMethodError,
    UnsupportedFragmentShapeError,
)
from .flattener import (
    ParameterFormatting,
    flatten,
    get_default_formatting,
    set_default_formatting,
)
from .macro_registry import MacroRegistry, get_registry, reset_registry

__version__ = "0.1.0"
__all__ = [
    "RuleBuilder",
    "rules",
    "compile_rules",
    "configure",
    "register_macro",
    "has_macro",
    "macro",
    "MacroRegistry",
    "get_registry",
    "reset_registry",
    "ConfigLoader",
    "ParameterFormatting",
    "flatten",
    "get_default_formatting",
    "set_default_formatting",
    "Tag",
    "Literal",
    "Opaque",
    "ValidationRule",
    "RuleBuilderError",
    "UnknownMethodError",
    "InvalidMacroNameError",
    "UnsupportedFragmentShapeError",
    "ConfigError",
]
