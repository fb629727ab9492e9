"""
Tests for the baseline mutation policy.
"""

from lintratchet.core.relationship import Regression, Relationship, Verdict, compare
from lintratchet.core.updater import BaselineUpdater, grow_around, shrink_around


class TestShrink:
    """Tests for tightening the baseline after an improvement."""

    def test_counts_drop_to_observed(self):
        baseline = {"a.src": {"deprecated": 5}}

        shrink_around(baseline, {"a.src": {"deprecated": 2}}, ["a.src"])

        assert baseline == {"a.src": {"deprecated": 2}}

    def test_missing_lints_are_removed(self):
        """A lint observed at 0 leaves the baseline."""
        baseline = {"a.src": {"dead_code": 2, "unused": 1}}

        shrink_around(baseline, {"a.src": {"dead_code": 2}}, ["a.src"])

        assert baseline == {"a.src": {"dead_code": 2}}

    def test_files_without_lints_are_removed(self):
        baseline = {"a.src": {"unused": 1}, "b.src": {"dead_code": 1}}

        shrink_around(baseline, {"a.src": {}}, ["a.src"])

        assert baseline == {"b.src": {"dead_code": 1}}

    def test_unexamined_files_are_untouched(self):
        """Files outside the run keep their counts, whatever they are."""
        baseline = {"a.src": {"dead_code": 4}, "b.src": {"unused": 9}}

        shrink_around(baseline, {"a.src": {"dead_code": 1}, "b.src": {"unused": 1}}, ["a.src"])

        assert baseline == {"a.src": {"dead_code": 1}, "b.src": {"unused": 9}}

    def test_shrink_never_raises_a_count(self):
        baseline = {"a.src": {"dead_code": 2, "unused": 5}}

        shrink_around(baseline, {"a.src": {"dead_code": 7, "unused": 5, "new": 3}}, ["a.src"])

        assert baseline == {"a.src": {"dead_code": 2, "unused": 5}}


class TestGrow:
    """Tests for growing the baseline under the override."""

    def test_counts_rise_to_observed(self):
        baseline = {"a.src": {"dead_code": 2}}

        grow_around(baseline, {"a.src": {"dead_code": 3}})

        assert baseline == {"a.src": {"dead_code": 3}}

    def test_new_entries_are_inserted(self):
        baseline = {"a.src": {"dead_code": 2}}

        grow_around(baseline, {"a.src": {"unused": 1}, "b.src": {"deprecated": 4}})

        assert baseline == {
            "a.src": {"dead_code": 2, "unused": 1},
            "b.src": {"deprecated": 4},
        }

    def test_grow_never_lowers_a_count(self):
        baseline = {"a.src": {"dead_code": 6}, "b.src": {"unused": 1}}

        grow_around(baseline, {"a.src": {"dead_code": 1}})

        assert baseline == {"a.src": {"dead_code": 6}, "b.src": {"unused": 1}}

    def test_zero_counts_are_not_inserted(self):
        baseline = {}

        grow_around(baseline, {"a.src": {}, "b.src": {"unused": 0}})

        assert baseline == {}


class TestBaselineUpdater:
    """Tests for applying a verdict."""

    def test_expected_changes_nothing(self):
        baseline = {"a.src": {"dead_code": 1}}

        outcome = BaselineUpdater().apply(
            Verdict(Relationship.EXPECTED), baseline, {"a.src": {"dead_code": 1}}, ["a.src"]
        )

        assert not outcome.changed
        assert baseline == {"a.src": {"dead_code": 1}}

    def test_proper_subset_shrinks(self):
        baseline = {"a.src": {"deprecated": 5}}
        observed = {"a.src": {"deprecated": 2}}
        verdict = compare(observed, baseline, ["a.src"])

        outcome = BaselineUpdater().apply(verdict, baseline, observed, ["a.src"])

        assert outcome.changed
        assert not outcome.grown
        assert baseline == {"a.src": {"deprecated": 2}}

    def test_regression_without_override_changes_nothing(self):
        baseline = {"a.src": {"dead_code": 2}}
        verdict = Verdict(
            Relationship.NOT_A_SUBSET,
            regression=Regression("a.src", "dead_code", 3, baseline=2),
        )

        outcome = BaselineUpdater(allow_growth=False).apply(
            verdict, baseline, {"a.src": {"dead_code": 3}}, ["a.src"]
        )

        assert not outcome.changed
        assert baseline == {"a.src": {"dead_code": 2}}

    def test_regression_with_override_grows(self):
        baseline = {"a.src": {"dead_code": 2}, "b.src": {"unused": 1}}
        observed = {"a.src": {"dead_code": 3}}
        verdict = compare(observed, baseline, ["a.src"])

        outcome = BaselineUpdater(allow_growth=True).apply(verdict, baseline, observed, ["a.src"])

        assert outcome.changed
        assert outcome.grown
        assert baseline == {"a.src": {"dead_code": 3}, "b.src": {"unused": 1}}

    def test_override_does_not_grow_on_improvement(self):
        """With an improvement the override still only shrinks."""
        baseline = {"a.src": {"dead_code": 4}}
        observed = {"a.src": {"dead_code": 1}}
        verdict = compare(observed, baseline, ["a.src"])

        outcome = BaselineUpdater(allow_growth=True).apply(verdict, baseline, observed, ["a.src"])

        assert not outcome.grown
        assert baseline == {"a.src": {"dead_code": 1}}

    def test_shrunk_baseline_compares_as_expected(self):
        """After a click, the same files compare as Expected."""
        baseline = {"a.src": {"dead_code": 4, "unused": 2}}
        observed = {"a.src": {"dead_code": 1}}
        verdict = compare(observed, baseline, ["a.src"])
        BaselineUpdater().apply(verdict, baseline, observed, ["a.src"])

        assert compare(observed, baseline, ["a.src"]).relationship is Relationship.EXPECTED
