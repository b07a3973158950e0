"""
Flattening of accumulated directives into the final rule list.

Flattening is a pure structural lowering: it keeps insertion order, never
deduplicates, and never converts Literal or Opaque entries. Only Tag
directives are rendered, to ``name`` or ``name:param1,param2``.
"""

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from .directives import Literal, Opaque, Tag


@dataclass(frozen=True)
class ParameterFormatting:
    """Tokens used when rendering Tag parameters to strings."""

    true: str = "true"
    false: str = "false"
    null: str = "NULL"
    date_format: str = "%Y-%m-%d"
    datetime_format: str = "%Y-%m-%d %H:%M:%S"


DEFAULT_FORMATTING = ParameterFormatting()

_default_formatting: ParameterFormatting = DEFAULT_FORMATTING


def get_default_formatting() -> ParameterFormatting:
    """Formatting used when neither flatten() nor the builder supplies one."""
    return _default_formatting


def set_default_formatting(formatting: Optional[ParameterFormatting]) -> None:
    """Replace the process-wide default formatting (None restores the built-in one)."""
    global _default_formatting
    _default_formatting = formatting if formatting is not None else DEFAULT_FORMATTING


def render_param(value: Any, formatting: ParameterFormatting = DEFAULT_FORMATTING) -> str:
    """Render a single Tag parameter."""
    if value is True:
        return formatting.true
    if value is False:
        return formatting.false
    if value is None:
        return formatting.null
    if isinstance(value, enum.Enum):
        return render_param(value.value, formatting)
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return value.strftime(formatting.datetime_format)
    if isinstance(value, date):
        return value.strftime(formatting.date_format)
    return str(value)


def render_tag(tag: Tag, formatting: ParameterFormatting = DEFAULT_FORMATTING) -> str:
    """Render a Tag to its canonical string form."""
    if not tag.params:
        return tag.name
    return f"{tag.name}:" + ",".join(render_param(p, formatting) for p in tag.params)


def flatten(directives: Iterable[Any], formatting: Optional[ParameterFormatting] = None) -> List[Any]:
    """
    Lower a directive sequence to the list consumed by the validation executor.

    Args:
        directives: Tag, Literal and Opaque directives in insertion order
        formatting: Parameter rendering tokens (defaults to get_default_formatting())

    Returns:
        New list of rule strings and rule objects, same length and order
    """
    formatting = formatting or _default_formatting
    result = []
    for directive in directives:
        if isinstance(directive, Tag):
            result.append(render_tag(directive, formatting))
        elif isinstance(directive, Literal):
            result.append(directive.text)
        elif isinstance(directive, Opaque):
            result.append(directive.value)
        else:
            raise TypeError(f"Not a directive: {directive!r}")
    return result
