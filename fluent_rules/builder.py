"""
Rule Builder - Fluent Directive Accumulator

A RuleBuilder collects the validation directives for one field through method
chaining and hands them to the validation executor via flatten().

```python
from fluent_rules import RuleBuilder

rules = (
    RuleBuilder()
    .required()
    .string()
    .when(is_admin, "max:255", "max:64")
    .with_(common_text_rules)
    .rule(MyRuleObject())
    .flatten()
)
```

## Method resolution

Every chained name resolves in a fixed order:

1. Core methods (append, rule, when, unless, with_, flatten, ...)
2. Built-in directives from ``vocabulary.BUILTIN_DIRECTIVES``, generated as
   real methods below the class
3. Macros in the MacroRegistry, looked up when the method is called
4. Otherwise ``UnknownMethodError``

``call(name, *args)`` performs steps 2-4 explicitly; attribute access only
delegates to it for macro names. All mutating methods return the builder
itself; flatten() is the only terminal call.
"""

import contextlib
import functools
from typing import Any, List, Optional, Tuple

from . import conditional, fragments
from .directives import DirectiveSource, normalize
from .exceptions import UnknownMethodError
from .flattener import ParameterFormatting, flatten
from .macro_registry import MacroRegistry, get_registry
from .vocabulary import BUILTIN_DIRECTIVES, build_tag, is_builtin


class RuleBuilder(DirectiveSource):
    """Ordered directive accumulator for a single field."""

    def __init__(self, registry: Optional[MacroRegistry] = None,
                 formatting: Optional[ParameterFormatting] = None):
        """
        Initialize an empty builder.

        Args:
            registry: Macro registry to dispatch against (defaults to the
                process-wide registry, resolved on every call)
            formatting: Parameter rendering used by flatten()
        """
        self._directives: List[Any] = []
        self._registry = registry
        self._formatting = formatting

    @property
    def registry(self) -> MacroRegistry:
        return self._registry if self._registry is not None else get_registry()

    def append(self, directive_or_directives) -> "RuleBuilder":
        """Normalize and append directives in order. Empty input is a no-op."""
        self._directives.extend(normalize(directive_or_directives))
        return self

    def rule(self, value) -> "RuleBuilder":
        """
        Append a rule string, list of rules, rule object or nested builder.

        Rule objects are appended as opaque directives and come out of
        flatten() unchanged. Nested builders are absorbed by copying their
        current directives.
        """
        return self.append(value)

    def when(self, condition, true_branch=None, false_branch=None) -> "RuleBuilder":
        """
        Append true_branch if condition holds, otherwise false_branch.

        The condition is evaluated once, now. The branch that is not taken
        is ignored entirely.
        """
        self._directives.extend(conditional.resolve(condition, true_branch, false_branch))
        return self

    def unless(self, condition, true_branch=None, false_branch=None) -> "RuleBuilder":
        """Inverse of when(): append true_branch if condition does not hold."""
        self._directives.extend(
            conditional.resolve(not conditional.evaluate(condition), true_branch, false_branch)
        )
        return self

    def with_(self, fragment) -> "RuleBuilder":
        """
        Run a reusable fragment against this builder.

        Args:
            fragment: zero-argument callable, callable taking the builder,
                or object with a compose(builder) method

        Raises:
            UnsupportedFragmentShapeError: If fragment fits none of the shapes
        """
        with self._rollback_on_error():
            fragments.invoke(fragment, self)
        return self

    def call(self, name: str, *args, **kwargs) -> "RuleBuilder":
        """
        Dispatch a directive or macro by name.

        Raises:
            UnknownMethodError: If name is neither built-in nor a registered macro
        """
        if is_builtin(name):
            if kwargs:
                raise TypeError(f"{name}() does not take keyword arguments")
            return self.append(build_tag(name, args))

        macro = self.registry.get(name)
        if macro is None:
            raise UnknownMethodError(name)
        with self._rollback_on_error():
            macro(self, *args, **kwargs)
        return self

    @contextlib.contextmanager
    def _rollback_on_error(self):
        # A macro or fragment that fails partway leaves nothing behind
        mark = len(self._directives)
        try:
            yield
        except Exception:
            del self._directives[mark:]
            raise

    def __getattr__(self, name: str):
        # Only reached for names that are not real attributes
        if name.startswith("_"):
            raise AttributeError(name)
        if not self.registry.has(name):
            raise UnknownMethodError(name)
        return functools.partial(self.call, name)

    def directives(self) -> Tuple[Any, ...]:
        return tuple(self._directives)

    def copy(self) -> "RuleBuilder":
        """Return an independent builder with the same directives."""
        clone = RuleBuilder(self._registry, self._formatting)
        clone._directives = list(self._directives)
        return clone

    def flatten(self, formatting: Optional[ParameterFormatting] = None) -> List[Any]:
        """Return the final ordered rule list for this field."""
        return flatten(self._directives, formatting or self._formatting)

    def __iter__(self):
        return iter(self.flatten())

    def __len__(self) -> int:
        return len(self._directives)

    def __bool__(self) -> bool:
        # An empty builder is still a builder
        return True

    def __repr__(self) -> str:
        return f"RuleBuilder({self.flatten()!r})"


def _directive_method(method_name: str):
    spec = BUILTIN_DIRECTIVES[method_name]

    def method(self, *args):
        return self.append(build_tag(method_name, args))

    method.__name__ = method_name
    method.__qualname__ = f"RuleBuilder.{method_name}"
    method.__doc__ = f"Append the '{spec.tag}' directive: {method_name}({spec.signature()})."
    return method


for _name in BUILTIN_DIRECTIVES:
    setattr(RuleBuilder, _name, _directive_method(_name))
del _name
