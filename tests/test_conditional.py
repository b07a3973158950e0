"""
Tests for when() and unless()
"""
import pytest

from fluent_rules import RuleBuilder
from fluent_rules.directives import DirectiveSource


class ExplodingSource(DirectiveSource):
    """Branch that fails if it is ever normalized."""

    def directives(self):
        raise AssertionError("untaken branch was evaluated")


class TestWhen:
    """Test when() branch selection."""

    def test_true_branch(self):
        """Test the documented true-branch scenario."""
        result = RuleBuilder().when(True, "required", "sometimes").string().flatten()
        assert result == ["required", "string"]

    def test_false_branch(self):
        result = RuleBuilder().when(False, "required", "sometimes").string().flatten()
        assert result == ["sometimes", "string"]

    def test_true_matches_direct_append(self):
        branch = RuleBuilder().min(2).max(8)
        via_when = RuleBuilder().string().when(True, branch, ["nullable"])
        direct = RuleBuilder().string().rule(branch)
        assert via_when.flatten() == direct.flatten()

    def test_false_matches_direct_append(self):
        branch = RuleBuilder().min(2)
        via_when = RuleBuilder().string().when(False, branch, ["nullable", "alpha"])
        direct = RuleBuilder().string().rule(["nullable", "alpha"])
        assert via_when.flatten() == direct.flatten()

    def test_untaken_branch_not_evaluated(self):
        """Test that the untaken branch is never normalized."""
        assert RuleBuilder().when(True, "required", ExplodingSource()).flatten() == ["required"]
        assert RuleBuilder().when(False, ExplodingSource(), "nullable").flatten() == ["nullable"]

    def test_missing_branches(self):
        assert RuleBuilder().when(True).flatten() == []
        assert RuleBuilder().when(False, "required").flatten() == []

    def test_truthy_values(self):
        assert RuleBuilder().when("yes", "required").flatten() == ["required"]
        assert RuleBuilder().when(0, "required", "nullable").flatten() == ["nullable"]
        assert RuleBuilder().when([], "required").flatten() == []

    def test_callable_condition_evaluated_once(self):
        """Test that a callable condition is called exactly once, immediately."""
        calls = []

        def is_admin():
            calls.append(1)
            return True

        builder = RuleBuilder().when(is_admin, "max:255", "max:64")
        assert calls == [1]
        assert builder.flatten() == ["max:255"]

    def test_branch_builder_stays_independent(self):
        """Test that chaining on a branch builder after when() does not leak."""
        branch = RuleBuilder().required()
        parent = RuleBuilder().when(True, branch)
        branch.string()
        assert parent.flatten() == ["required"]
        assert branch.flatten() == ["required", "string"]

    def test_nested_when(self):
        inner = RuleBuilder().when(False, "a", "b")
        assert RuleBuilder().when(True, inner).flatten() == ["b"]


class TestUnless:
    """Test unless() as the inverse of when()."""

    def test_falsy_condition_takes_first_branch(self):
        assert RuleBuilder().unless(False, "required", "nullable").flatten() == ["required"]

    def test_truthy_condition_takes_second_branch(self):
        assert RuleBuilder().unless(True, "required", "nullable").flatten() == ["nullable"]

    def test_callable_condition(self):
        assert RuleBuilder().unless(lambda: False, ["string", "max:5"]).flatten() == [
            "string", "max:5"
        ]

    @pytest.mark.parametrize("condition", [True, False])
    def test_unless_mirrors_when(self, condition):
        when = RuleBuilder().when(not condition, "a", "b").flatten()
        unless = RuleBuilder().unless(condition, "a", "b").flatten()
        assert when == unless
