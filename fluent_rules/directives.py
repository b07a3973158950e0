"""
Directive representation and normalization.

A directive is one unit of a field's final rule list. There are three kinds:

- Tag: a directive name plus ordered parameters, owned and rendered by this
  library (``min`` with ``(3,)`` becomes ``"min:3"``)
- Literal: a fully-formed string supplied by the caller, emitted verbatim
- Opaque: any other object (typically a rule object understood by the
  validation executor), emitted untouched

Anything a caller hands to ``append``, ``rule`` or a ``when`` branch goes
through ``normalize()``, which picks one conversion per input shape.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Tuple


@dataclass(frozen=True)
class Tag:
    """A named directive with ordered parameters."""

    name: str
    params: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Literal:
    """A caller-supplied rule string, never parsed."""

    text: str


@dataclass(frozen=True, eq=False)
class Opaque:
    """An external rule object; compared and emitted by identity."""

    value: Any


Directive = (Tag, Literal, Opaque)


class DirectiveSource(ABC):
    """Anything that can be absorbed into a builder as a directive sequence."""

    @abstractmethod
    def directives(self) -> Tuple[Any, ...]:
        """Return a snapshot of the accumulated directives, in order."""


def _from_directive(value) -> List[Any]:
    return [value]


def _from_string(value: str) -> List[Any]:
    return [Literal(value)]


def _from_source(value: DirectiveSource) -> List[Any]:
    # Snapshot so later chaining on the source cannot leak into the absorber
    return list(value.directives())


def _from_sequence(value) -> List[Any]:
    result = []
    for item in value:
        result.extend(normalize(item))
    return result


def _from_object(value) -> List[Any]:
    return [Opaque(value)]


def normalize(value) -> List[Any]:
    """
    Convert any accepted input into a list of directives.

    Args:
        value: None, a directive, a rule string, a builder, a list/tuple of
            any of these, or an arbitrary rule object

    Returns:
        New list of directives in input order (empty for None or [])
    """
    if value is None:
        return []
    if isinstance(value, Directive):
        return _from_directive(value)
    if isinstance(value, str):
        return _from_string(value)
    if isinstance(value, DirectiveSource):
        return _from_source(value)
    if isinstance(value, (list, tuple)):
        return _from_sequence(value)
    return _from_object(value)
