"""Conditional branch resolution for RuleBuilder.when() and unless()."""

from typing import Any, List

from .directives import normalize


def evaluate(condition) -> bool:
    """
    Evaluate a condition exactly once.

    A callable condition is called immediately with no arguments; any other
    value is tested for truthiness.
    """
    if callable(condition):
        condition = condition()
    return bool(condition)


def resolve(condition, true_branch=None, false_branch=None) -> List[Any]:
    """
    Pick one branch and normalize it.

    Only the selected branch is normalized; the other one is never touched,
    so an untaken builder or rule object is not even inspected.

    Args:
        condition: Boolean, truthy value, or zero-argument callable
        true_branch: Builder, rule string, or sequence used when condition holds
        false_branch: Same shapes, used otherwise

    Returns:
        Directives of the selected branch (empty if that branch is None)
    """
    if evaluate(condition):
        return normalize(true_branch)
    return normalize(false_branch)
