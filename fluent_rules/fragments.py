"""Fragment resolution for RuleBuilder.with_()."""

import enum
import inspect
from typing import Any, Optional, Tuple

from .exceptions import UnsupportedFragmentShapeError

# Objects exposing this method are treated as fragments
COMPOSE_METHOD = "compose"


class FragmentShape(enum.Enum):
    ZERO_ARG = "zero_arg"    # fragment()
    ONE_ARG = "one_arg"      # fragment(builder)
    COMPOSER = "composer"    # fragment.compose(builder)


def _positional_arity(function) -> Optional[Tuple[int, Optional[int]]]:
    """Return (required, accepted) positional parameter counts; accepted is None for *args."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return None

    required = 0
    accepted = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return required, None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            accepted += 1
            if param.default is param.empty:
                required += 1
        elif param.kind == param.KEYWORD_ONLY and param.default is param.empty:
            # Required keyword-only args can never be satisfied by with_()
            return -1, 0
    return required, accepted


def resolve_shape(fragment: Any) -> FragmentShape:
    """
    Classify a fragment without invoking it.

    Args:
        fragment: Candidate passed to with_()

    Returns:
        The FragmentShape to invoke it with

    Raises:
        UnsupportedFragmentShapeError: If fragment fits none of the shapes
    """
    if isinstance(fragment, type):
        raise UnsupportedFragmentShapeError(fragment, "classes are not fragments, pass an instance")

    compose = getattr(fragment, COMPOSE_METHOD, None)
    if compose is not None and callable(compose):
        if not _accepts_builder(fragment, compose, f"{COMPOSE_METHOD}()"):
            raise UnsupportedFragmentShapeError(
                fragment, f"{COMPOSE_METHOD}() must take the builder as its one argument"
            )
        return FragmentShape.COMPOSER

    if not callable(fragment):
        raise UnsupportedFragmentShapeError(fragment, "object is not callable")

    if _accepts_builder(fragment, fragment, "fragment"):
        return FragmentShape.ONE_ARG
    return FragmentShape.ZERO_ARG


def _accepts_builder(fragment: Any, function, label: str) -> bool:
    """Return True if function can be called with the builder, False if with nothing."""
    arity = _positional_arity(function)
    if arity is None:
        raise UnsupportedFragmentShapeError(fragment, f"{label} signature cannot be inspected")

    required, accepted = arity
    if required < 0:
        raise UnsupportedFragmentShapeError(fragment, f"{label} requires keyword-only arguments")
    if required > 1:
        raise UnsupportedFragmentShapeError(fragment, f"{label} requires {required} arguments")
    return required == 1 or accepted is None or accepted >= 1


def invoke(fragment: Any, builder) -> None:
    """Resolve fragment's shape and run it against builder."""
    shape = resolve_shape(fragment)
    if shape is FragmentShape.COMPOSER:
        getattr(fragment, COMPOSE_METHOD)(builder)
    elif shape is FragmentShape.ONE_ARG:
        fragment(builder)
    else:
        fragment()
