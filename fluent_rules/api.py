"""
Public API for fluent-rules

This is the "front door": builder construction, macro registration and
compilation of whole field maps for a validation executor.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .builder import RuleBuilder
from .config_loader import ConfigLoader
from .flattener import ParameterFormatting, set_default_formatting
from .macro_registry import MacroRegistry, get_registry

logger = logging.getLogger(__name__)


def rules(*initial) -> RuleBuilder:
    """
    Create a builder, optionally seeded with rules.

    Example:
        rules("required", "string").max(255).flatten()
        # ["required", "string", "max:255"]
    """
    builder = RuleBuilder()
    for value in initial:
        builder.rule(value)
    return builder


def register_macro(name: str, function: Callable) -> None:
    """Register a macro on the process-wide registry."""
    get_registry().register(name, function)


def has_macro(name: str) -> bool:
    return get_registry().has(name)


def macro(name: Optional[str] = None) -> Callable:
    """
    Decorator registering a function as a macro on the process-wide registry.

    Example:
        @macro()
        def password(builder, length=12):
            builder.string().min(length).confirmed()

        rules().required().password(16).flatten()
    """
    return get_registry().macro(name)


def compile_rules(field_rules: Mapping[str, Any],
                  formatting: Optional[ParameterFormatting] = None) -> Dict[str, list]:
    """
    Flatten the rules for every field.

    Args:
        field_rules: Field name -> builder, rule string, rule object, or list
        formatting: Parameter rendering (defaults to each builder's own,
            then the process-wide default)

    Returns:
        Field name -> ordered list of rule strings and rule objects, in the
        same field order as the input

    Example:
        compile_rules({
            "email": rules().required().email(),
            "nickname": ["nullable", "string"],
        })
        # {"email": ["required", "email"], "nickname": ["nullable", "string"]}
    """
    compiled = {}
    for field, value in field_rules.items():
        builder = value if isinstance(value, RuleBuilder) else RuleBuilder().rule(value)
        compiled[field] = builder.flatten(formatting)
    logger.debug("Compiled field rules", extra={'fields': list(compiled)})
    return compiled


def configure(config_path: Optional[str] = None,
              registry: Optional[MacroRegistry] = None) -> ConfigLoader:
    """
    Load configuration, register the macros it declares and make its
    parameter formatting the process-wide default.

    Builders created afterwards render parameters with the configured
    tokens unless they, or flatten(), are given their own formatting.

    Args:
        config_path: Optional user YAML config overriding the bundled defaults
        registry: Registry to populate (defaults to the process-wide one)

    Returns:
        The ConfigLoader

    Raises:
        ConfigError: If the config is invalid or a macro cannot be imported
    """
    loader = ConfigLoader(config_path)
    loader.load_macros(registry)
    set_default_formatting(loader.get_formatting())
    return loader
