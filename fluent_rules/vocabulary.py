"""
Built-in directive vocabulary.

This is the closed set of directive methods every builder exposes. Each entry
maps a builder method name to the directive tag it appends and the order of
its parameters. The table drives three things:

1. Method generation on RuleBuilder (one method per entry)
2. Argument checking and ordering when a built-in is called
3. The reserved namespace macros may not claim

## Parameter shapes

- ``params``: required positional parameters, rendered in this order
- ``optional``: trailing parameters that may be omitted; omitted ones
  are not rendered
- ``variadic``: name of a rest parameter collecting any further arguments;
  a single list/tuple passed in this position is spread
  (``in_(["a", "b"])`` is the same as ``in_("a", "b")``)

Example:
    min(3)                        -> Tag("min", (3,))           -> "min:3"
    between(1, 10)                -> Tag("between", (1, 10))    -> "between:1,10"
    exists("users")               -> Tag("exists", ("users",))  -> "exists:users"
    in_("draft", "published")     -> Tag("in", ("draft", "published"))
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .directives import Tag


@dataclass(frozen=True)
class DirectiveSpec:
    """Parameter layout of one built-in directive."""

    tag: str
    params: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    variadic: Optional[str] = None
    variadic_min: int = 0

    def signature(self) -> str:
        parts = list(self.params)
        parts.extend(f"{name}=None" for name in self.optional)
        if self.variadic:
            parts.append(f"*{self.variadic}")
        return ", ".join(parts)


def _spec(tag, *params, optional=(), variadic=None, variadic_min=0):
    return DirectiveSpec(tag, tuple(params), tuple(optional), variadic, variadic_min)


# method name -> spec. Method names differ from tags only for Python keywords.
BUILTIN_DIRECTIVES: Dict[str, DirectiveSpec] = {
    "accepted": _spec("accepted"),
    "accepted_if": _spec("accepted_if", "field", variadic="values", variadic_min=1),
    "active_url": _spec("active_url"),
    "after": _spec("after", "date"),
    "after_or_equal": _spec("after_or_equal", "date"),
    "alpha": _spec("alpha"),
    "alpha_dash": _spec("alpha_dash"),
    "alpha_num": _spec("alpha_num"),
    "array": _spec("array", variadic="keys"),
    "ascii": _spec("ascii"),
    "bail": _spec("bail"),
    "before": _spec("before", "date"),
    "before_or_equal": _spec("before_or_equal", "date"),
    "between": _spec("between", "min", "max"),
    "boolean": _spec("boolean"),
    "confirmed": _spec("confirmed"),
    "current_password": _spec("current_password", optional=("guard",)),
    "date": _spec("date"),
    "date_equals": _spec("date_equals", "date"),
    "date_format": _spec("date_format", variadic="formats", variadic_min=1),
    "decimal": _spec("decimal", "min", optional=("max",)),
    "declined": _spec("declined"),
    "declined_if": _spec("declined_if", "field", variadic="values", variadic_min=1),
    "different": _spec("different", "field"),
    "digits": _spec("digits", "value"),
    "digits_between": _spec("digits_between", "min", "max"),
    "dimensions": _spec("dimensions", variadic="constraints"),
    "distinct": _spec("distinct", variadic="modes"),
    "doesnt_end_with": _spec("doesnt_end_with", variadic="values", variadic_min=1),
    "doesnt_start_with": _spec("doesnt_start_with", variadic="values", variadic_min=1),
    "email": _spec("email", variadic="validations"),
    "ends_with": _spec("ends_with", variadic="values", variadic_min=1),
    "exclude": _spec("exclude"),
    "exclude_if": _spec("exclude_if", "field", variadic="values", variadic_min=1),
    "exclude_unless": _spec("exclude_unless", "field", variadic="values", variadic_min=1),
    "exclude_with": _spec("exclude_with", "field"),
    "exclude_without": _spec("exclude_without", "field"),
    "exists": _spec("exists", "table", optional=("column",)),
    "extensions": _spec("extensions", variadic="extensions", variadic_min=1),
    "file": _spec("file"),
    "filled": _spec("filled"),
    "gt": _spec("gt", "field"),
    "gte": _spec("gte", "field"),
    "hex_color": _spec("hex_color"),
    "image": _spec("image"),
    "in_": _spec("in", variadic="values", variadic_min=1),
    "in_array": _spec("in_array", "field"),
    "integer": _spec("integer"),
    "ip": _spec("ip"),
    "ipv4": _spec("ipv4"),
    "ipv6": _spec("ipv6"),
    "json": _spec("json"),
    "list": _spec("list"),
    "lowercase": _spec("lowercase"),
    "lt": _spec("lt", "field"),
    "lte": _spec("lte", "field"),
    "mac_address": _spec("mac_address"),
    "max": _spec("max", "value"),
    "max_digits": _spec("max_digits", "value"),
    "mimes": _spec("mimes", variadic="extensions", variadic_min=1),
    "mimetypes": _spec("mimetypes", variadic="types", variadic_min=1),
    "min": _spec("min", "value"),
    "min_digits": _spec("min_digits", "value"),
    "missing": _spec("missing"),
    "multiple_of": _spec("multiple_of", "value"),
    "not_in": _spec("not_in", variadic="values", variadic_min=1),
    "not_regex": _spec("not_regex", "pattern"),
    "nullable": _spec("nullable"),
    "numeric": _spec("numeric"),
    "present": _spec("present"),
    "prohibited": _spec("prohibited"),
    "prohibited_if": _spec("prohibited_if", "field", variadic="values", variadic_min=1),
    "prohibited_unless": _spec("prohibited_unless", "field", variadic="values", variadic_min=1),
    "prohibits": _spec("prohibits", variadic="fields", variadic_min=1),
    "regex": _spec("regex", "pattern"),
    "required": _spec("required"),
    "required_array_keys": _spec("required_array_keys", variadic="keys", variadic_min=1),
    "required_if": _spec("required_if", "field", variadic="values", variadic_min=1),
    "required_unless": _spec("required_unless", "field", variadic="values", variadic_min=1),
    "required_with": _spec("required_with", variadic="fields", variadic_min=1),
    "required_with_all": _spec("required_with_all", variadic="fields", variadic_min=1),
    "required_without": _spec("required_without", variadic="fields", variadic_min=1),
    "required_without_all": _spec("required_without_all", variadic="fields", variadic_min=1),
    "same": _spec("same", "field"),
    "size": _spec("size", "value"),
    "sometimes": _spec("sometimes"),
    "starts_with": _spec("starts_with", variadic="values", variadic_min=1),
    "string": _spec("string"),
    "timezone": _spec("timezone", variadic="options"),
    "ulid": _spec("ulid"),
    "unique": _spec("unique", "table", optional=("column", "ignore", "id_column")),
    "uppercase": _spec("uppercase"),
    "url": _spec("url", variadic="protocols"),
    "uuid": _spec("uuid", optional=("version",)),
}

# Non-directive names macros may not claim: builder methods plus the
# fragment hook with_() looks for (fragments.COMPOSE_METHOD)
CORE_METHODS = frozenset({
    "append", "call", "compose", "copy", "directives", "flatten", "registry", "rule",
    "unless", "when", "with_",
})

RESERVED_NAMES = frozenset(
    set(BUILTIN_DIRECTIVES)
    | {spec.tag for spec in BUILTIN_DIRECTIVES.values()}
    | CORE_METHODS
)


# tag -> method name, for tags that are Python keywords ("in" -> "in_")
TAG_ALIASES: Dict[str, str] = {
    spec.tag: method for method, spec in BUILTIN_DIRECTIVES.items() if spec.tag != method
}


def is_builtin(name: str) -> bool:
    """Return True if name is a built-in directive method or its tag alias."""
    return name in BUILTIN_DIRECTIVES or name in TAG_ALIASES


def build_tag(method_name: str, args: Tuple[Any, ...]) -> Tag:
    """
    Build the Tag a built-in directive method appends.

    Args:
        method_name: Built-in method name (e.g. "min", "in_")
        args: Positional arguments the method was called with

    Returns:
        Tag with parameters in declared order

    Raises:
        KeyError: If method_name is not a built-in
        TypeError: If the arguments do not fit the directive's parameters
    """
    method_name = TAG_ALIASES.get(method_name, method_name)
    spec = BUILTIN_DIRECTIVES[method_name]
    required = len(spec.params)
    fixed = required + len(spec.optional)

    if len(args) < required:
        raise TypeError(
            f"{method_name}({spec.signature()}) missing required argument(s): "
            f"{', '.join(spec.params[len(args):])}"
        )

    head = list(args[:fixed])
    rest = list(args[fixed:])

    if rest and not spec.variadic:
        raise TypeError(
            f"{method_name}({spec.signature()}) takes at most {fixed} "
            f"argument(s) ({len(args)} given)"
        )

    if spec.variadic:
        if len(rest) == 1 and isinstance(rest[0], (list, tuple)):
            rest = list(rest[0])
        if len(rest) < spec.variadic_min:
            raise TypeError(
                f"{method_name}({spec.signature()}) requires at least "
                f"{spec.variadic_min} value(s) for '{spec.variadic}'"
            )

    # Omitted optionals are dropped from the right so positions stay stable
    while len(head) > required and head[-1] is None:
        head.pop()

    return Tag(spec.tag, tuple(head + rest))
