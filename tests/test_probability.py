"""Tests for the probability allocator."""

import pytest

from surveysync_core.models import Option
from surveysync_core.probability import allocate_dropdown, allocate_grid_row, allocate_independent


def _options(n, selected=()):
    return [Option(value=str(i), text=f"opt{i}", is_selected=i in selected) for i in range(n)]


class TestIndependentAllocation:
    def test_nothing_selected_three_options(self):
        result = allocate_independent(_options(3))
        assert [o.probability for o in result] == [34, 33, 33]

    def test_last_option_selected_of_three(self):
        result = allocate_independent(_options(3, selected={2}))
        assert [o.probability for o in result] == [10, 10, 80]

    def test_two_selected_split_eighty(self):
        result = allocate_independent(_options(4, selected={0, 2}))
        assert [o.probability for o in result] == [40, 10, 40, 10]

    def test_selected_remainder_goes_to_first_selected(self):
        result = allocate_independent(_options(5, selected={1, 2, 4}))
        # 80 / 3 -> 27, 27, 26 ; 20 / 2 -> 10, 10
        assert [o.probability for o in result] == [10, 27, 27, 10, 26]

    def test_unselected_remainder_goes_to_first_unselected(self):
        result = allocate_independent(_options(4, selected={3}))
        # 20 / 3 -> 7, 7, 6
        assert [o.probability for o in result] == [7, 7, 6, 80]

    def test_all_selected_final_correction_on_last(self):
        result = allocate_independent(_options(3, selected={0, 1, 2}))
        # 80 / 3 -> 27, 27, 26, then the missing 20 lands on the last option
        assert [o.probability for o in result] == [27, 27, 46]
        assert sum(o.probability for o in result) == 100

    def test_single_option_unselected(self):
        assert [o.probability for o in allocate_independent(_options(1))] == [100]

    def test_empty_list_is_left_alone(self):
        assert allocate_independent([]) == []

    @pytest.mark.parametrize("n", [1, 2, 3, 6, 7, 11, 30, 101, 150])
    def test_sum_is_exactly_100_for_every_selected_count(self, n):
        for k in range(n + 1):
            result = allocate_independent(_options(n, selected=set(range(k))))
            assert sum(o.probability for o in result) == 100
            assert all(o.probability >= 0 for o in result)
            assert all(isinstance(o.probability, int) for o in result)


class TestGridRowAllocation:
    def test_one_selected_of_four(self):
        result = allocate_grid_row(_options(4, selected={1}))
        probs = [o.probability for o in result]
        assert probs[1] == 80
        assert probs[0] == pytest.approx(20 / 3)
        assert probs[2] == pytest.approx(20 / 3)
        assert probs[3] == pytest.approx(20 / 3)
        assert sum(probs) == pytest.approx(100)

    def test_no_selection_keeps_zero(self):
        result = allocate_grid_row(_options(4))
        assert [o.probability for o in result] == [0, 0, 0, 0]

    def test_multiple_selected_each_get_flat_eighty(self):
        result = allocate_grid_row(_options(4, selected={0, 3}))
        assert [o.probability for o in result] == [80, 10.0, 10.0, 80]
        assert sum(o.probability for o in result) == 180

    def test_all_selected(self):
        result = allocate_grid_row(_options(2, selected={0, 1}))
        assert [o.probability for o in result] == [80, 80]

    def test_normalized_rows_use_independent_rule(self):
        result = allocate_grid_row(_options(4, selected={0, 3}), normalize=True)
        assert [o.probability for o in result] == [40, 10, 10, 40]


class TestDropdownAllocation:
    def test_selected_gets_everything(self):
        result = allocate_dropdown(_options(3, selected={1}))
        assert [o.probability for o in result] == [0, 100, 0]
