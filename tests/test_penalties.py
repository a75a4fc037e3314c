# -*- coding: utf-8 -*-
from qrstudio.penalties import (
    compute_mask_penalty, penalty_breakdown, penalty_N1, penalty_N2, penalty_N3, penalty_N4,
)


def _checkerboard(n):
    return [[(r + c) % 2 == 0 for c in range(n)] for r in range(n)]


def test_n1_runs():
    assert penalty_N1([[True] * 4 + [False] * 2]) == 0
    assert penalty_N1([[True] * 5 + [False]]) == 3
    assert penalty_N1([[False] * 7]) == 5


def test_n1_counts_columns():
    column = [[True] for _ in range(6)]
    assert penalty_N1(column) == 4


def test_n2_blocks():
    assert penalty_N2([[True, True], [True, True]]) == 3
    assert penalty_N2([[True, True, True], [True, True, True]]) == 6
    assert penalty_N2(_checkerboard(4)) == 0


def test_n3_finder_like_pattern():
    pattern = [True, False, True, True, True, False, True]
    # light quiet zone on both sides matches both orientations
    assert penalty_N3([pattern]) == 80
    assert penalty_N3([[False] * 4 + pattern]) == 80
    assert penalty_N3([[True] * 4 + pattern + [True] * 4]) == 0


def test_n4_balance():
    assert penalty_N4(_checkerboard(4)) == 0
    assert penalty_N4([[True, True, True, False]]) == 50
    assert penalty_N4([[True] * 10]) == 100


def test_total_is_sum_of_rules():
    matrix = [[(r * c) % 3 == 0 for c in range(21)] for r in range(21)]
    parts = penalty_breakdown(matrix)
    assert set(parts) == {'N1', 'N2', 'N3', 'N4'}
    assert compute_mask_penalty(matrix) == sum(parts.values())


def test_checkerboard_scores_zero():
    assert compute_mask_penalty(_checkerboard(21)) == 0
