"""Exception hierarchy for fluent-rules.

Every error is raised synchronously at the offending call, before anything
is appended, so a builder is never left half-updated.
"""


class RuleBuilderError(Exception):
    """Base class for all fluent-rules errors."""


class UnknownMethodError(RuleBuilderError, AttributeError):
    """A chained call matched neither a built-in directive nor a macro."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unknown rule method '{name}': not a built-in directive "
            f"and no macro is registered under that name"
        )


class InvalidMacroNameError(RuleBuilderError, ValueError):
    """Macro registration attempted under a reserved or malformed name."""

    def __init__(self, name, reason: str):
        self.name = name
        super().__init__(f"Cannot register macro {name!r}: {reason}")


class UnsupportedFragmentShapeError(RuleBuilderError, TypeError):
    """with_() received something that is not a usable fragment."""

    def __init__(self, fragment, reason: str):
        self.fragment = fragment
        super().__init__(
            f"Unsupported fragment {fragment!r}: {reason}. Expected a callable "
            f"taking zero or one argument, or an object with a compose(builder) method"
        )


class ConfigError(RuleBuilderError):
    """Configuration could not be loaded, validated or applied."""
