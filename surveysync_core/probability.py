"""
Probability Allocator - per-option selection likelihoods

Two allocation rules are in use:

    allocate_independent  choice questions. Selected options share 80,
                          unselected share 20, nothing selected means a
                          uniform 100. Integer weights, always summing to 100.
    allocate_grid_row     one grid row. Each selected cell gets a flat 80,
                          unselected cells split 20 as floats. A row with no
                          selection stays all zero. The sum is only 100 when
                          exactly one cell is selected.

Usage:
    from surveysync_core.probability import allocate_independent

    allocate_independent(question.options)
    [o.probability for o in question.options]   # e.g. [34, 33, 33]
"""

from typing import List

from .models import Option

TOTAL = 100
SELECTED_SHARE = 80
UNSELECTED_SHARE = TOTAL - SELECTED_SHARE


def _spread(options: List[Option], budget: int) -> None:
    """Floor split of ``budget``; the first ``budget % n`` options get one extra point."""
    per_option, remainder = divmod(budget, len(options))
    for i, option in enumerate(options):
        option.probability = per_option + (1 if i < remainder else 0)


def allocate_independent(options: List[Option]) -> List[Option]:
    if not options:
        return options

    selected = [o for o in options if o.is_selected]
    unselected = [o for o in options if not o.is_selected]

    if selected:
        _spread(selected, SELECTED_SHARE)
        if unselected:
            _spread(unselected, UNSELECTED_SHARE)
    else:
        _spread(options, TOTAL)

    total = sum(o.probability for o in options)
    if total != TOTAL:
        options[-1].probability += TOTAL - total
    return options


def allocate_grid_row(options: List[Option], normalize: bool = False) -> List[Option]:
    if normalize:
        return allocate_independent(options)

    selected = [o for o in options if o.is_selected]
    if not selected:
        for option in options:
            option.probability = 0
        return options

    unselected = [o for o in options if not o.is_selected]
    share = UNSELECTED_SHARE / len(unselected) if unselected else 0
    for option in options:
        option.probability = SELECTED_SHARE if option.is_selected else share
    return options


def allocate_dropdown(options: List[Option]) -> List[Option]:
    for option in options:
        option.probability = TOTAL if option.is_selected else 0
    return options
