"""
Macro Registry - Process-wide Builder Extensions

Lets callers add chainable methods to every RuleBuilder without touching the
builder class. A macro is a plain function that receives the builder as its
first argument, followed by whatever the caller passed:

```python
from fluent_rules import register_macro, RuleBuilder

def slug(builder, max_length=64):
    builder.string().regex("/^[a-z0-9-]+$/").max(max_length)

register_macro("slug", slug)

RuleBuilder().required().slug(32).flatten()
# ["required", "string", "regex:/^[a-z0-9-]+$/", "max:32"]
```

## Rules

- Names are case-sensitive and must be valid identifiers not starting with "_"
- Built-in directive names and core builder methods are reserved and can
  never be registered (``register("required", f)`` always fails)
- Re-registering a macro name replaces the previous function (last write wins)
- There is no removal; ``reset_registry()`` exists only to isolate tests

## Concurrency

The registry is shared by every builder in the process. All reads and writes
take the same lock, so registering from one thread while another thread is
chaining never observes a half-written table.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from .exceptions import InvalidMacroNameError
from .vocabulary import RESERVED_NAMES

logger = logging.getLogger(__name__)


class MacroRegistry:
    """Maps macro names to extension functions."""

    def __init__(self):
        self._macros: Dict[str, Callable] = {}
        self._lock = threading.RLock()

    def register(self, name: str, function: Callable) -> None:
        """
        Register (or replace) a macro.

        Args:
            name: Method name the macro will be reachable under
            function: Callable invoked as function(builder, *args, **kwargs)

        Raises:
            InvalidMacroNameError: If name is reserved or not a usable identifier
            TypeError: If function is not callable
        """
        self.register_all({name: function})

    def register_all(self, macros: Dict[str, Callable]) -> None:
        """
        Register several macros at once, all or nothing.

        Every name and function is checked before the first one is stored,
        so a bad entry leaves the registry as it was.

        Args:
            macros: Mapping of name -> function

        Raises:
            InvalidMacroNameError: If any name is reserved or not a usable identifier
            TypeError: If any function is not callable
        """
        for name, function in macros.items():
            self._check_name(name)
            if not callable(function):
                raise TypeError(f"Macro {name!r} must be callable, got {type(function).__name__}")

        with self._lock:
            for name, function in macros.items():
                if name in self._macros:
                    logger.warning(
                        "Macro re-registered, replacing previous definition",
                        extra={'macro': name}
                    )
                else:
                    logger.debug("Macro registered", extra={'macro': name})
                self._macros[name] = function

    def macro(self, name: Optional[str] = None) -> Callable:
        """
        Decorator form of register().

        Example:
            @registry.macro()
            def slug(builder):
                builder.string().alpha_dash()
        """
        def decorator(function: Callable) -> Callable:
            self.register(name or function.__name__, function)
            return function
        return decorator

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._macros

    def get(self, name: str) -> Optional[Callable]:
        """Return the function registered under name, or None."""
        with self._lock:
            return self._macros.get(name)

    def names(self) -> List[str]:
        """Return registered macro names in registration order."""
        with self._lock:
            return list(self._macros)

    def __contains__(self, name) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._macros)

    @staticmethod
    def _check_name(name) -> None:
        if not isinstance(name, str) or not name.isidentifier():
            raise InvalidMacroNameError(name, "macro names must be valid Python identifiers")
        if name.startswith("_"):
            raise InvalidMacroNameError(name, "macro names must not start with an underscore")
        if name in RESERVED_NAMES:
            raise InvalidMacroNameError(name, "name is reserved by a built-in rule method")


_registry: Optional[MacroRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> MacroRegistry:
    """Get or lazily create the process-wide MacroRegistry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = MacroRegistry()
    return _registry


def reset_registry():
    """Drop the singleton registry (for testing)."""
    global _registry
    with _registry_lock:
        _registry = None
