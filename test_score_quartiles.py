"""
Tests for the quartile helpers: run detection, bound computation and the
contiguity-preserving toggle policy.
"""
import pytest

from regionkit.domain.models.score_quartiles import selection_run, quartile_bounds, toggle_quartile


SCORES = [5, 1, 8, 3, 7, 2, 6, 4]


class TestSelectionRun:

    def test_contiguous_run(self):
        assert selection_run([0, 1, 1, 0]) == (1, 2)

    def test_nothing_selected(self):
        assert selection_run([0, 0, 0, 0]) == (-1, 0)

    def test_non_contiguous_counts_every_flag(self):
        assert selection_run([1, 0, 1, 0]) == (0, 2)


class TestQuartileBounds:

    @pytest.mark.parametrize("selected_q, expected", [
        ([1, 0, 0, 0], (1, 2)),
        ([0, 1, 0, 0], (3, 4)),
        ([0, 0, 0, 1], (7, 8)),
        ([0, 1, 1, 0], (3, 6)),
        ([1, 1, 1, 1], (1, 8)),
    ])
    def test_bounds_for_eight_scores(self, selected_q, expected):
        assert quartile_bounds(SCORES, selected_q) == expected

    def test_nothing_selected_puts_lower_above_max(self):
        lower, upper = quartile_bounds(SCORES, [0, 0, 0, 0])

        assert lower > max(SCORES)

    def test_non_contiguous_selection_terminates(self):
        lower, upper = quartile_bounds(SCORES, [1, 0, 1, 0])

        assert lower == 1
        assert upper == 4

    def test_single_score_any_quartile(self):
        assert quartile_bounds([0.5], [0, 0, 0, 1]) == (0.5, 0.5)
        assert quartile_bounds([0.5], [1, 0, 0, 0]) == (0.5, 0.5)

    def test_uneven_count(self):
        # n = 5: Q1 covers sorted[0:2]
        assert quartile_bounds([0.1, 0.2, 0.3, 0.4, 0.5], [1, 0, 0, 0]) == (0.1, 0.2)

    def test_empty_scores_rejected(self):
        with pytest.raises(ValueError):
            quartile_bounds([], [1, 1, 1, 1])


class TestToggleQuartile:

    @pytest.mark.parametrize("before, ind, after", [
        # deselect an end quartile
        ([1, 1, 1, 1], 0, [0, 1, 1, 1]),
        ([1, 1, 1, 1], 3, [1, 1, 1, 0]),
        # deselect the interior of a block clears the rest of it
        ([1, 1, 1, 1], 1, [1, 0, 0, 0]),
        ([0, 1, 1, 1], 2, [0, 1, 0, 0]),
        # deselect an interior quartile at the edge of its block
        ([1, 1, 0, 0], 1, [1, 0, 0, 0]),
        # select next to the block extends it
        ([1, 1, 0, 0], 2, [1, 1, 1, 0]),
        ([0, 0, 1, 0], 3, [0, 0, 1, 1]),
        # select away from the block starts a new one
        ([1, 1, 0, 0], 3, [0, 0, 0, 1]),
        ([0, 0, 1, 1], 0, [1, 0, 0, 0]),
        ([1, 0, 0, 0], 2, [0, 0, 1, 0]),
        # select into an empty selection
        ([0, 0, 0, 0], 2, [0, 0, 1, 0]),
    ])
    def test_toggle(self, before, ind, after):
        assert toggle_quartile(before, ind) == after

    def test_input_is_not_modified(self):
        before = [1, 1, 1, 1]
        toggle_quartile(before, 1)

        assert before == [1, 1, 1, 1]

    def test_never_produces_two_runs(self):
        states = [[a, b, c, d] for a in (0, 1) for b in (0, 1) for c in (0, 1) for d in (0, 1)]
        contiguous = [s for s in states if "0" not in "".join(map(str, s)).strip("0")]

        for state in contiguous:
            for ind in range(4):
                result = "".join(map(str, toggle_quartile(state, ind))).strip("0")
                assert "0" not in result, (state, ind)

    def test_out_of_range_index(self):
        with pytest.raises(ValueError):
            toggle_quartile([1, 1, 1, 1], 4)
