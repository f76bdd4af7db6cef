from functools import lru_cache
from typing import List

from hypothesis import given, settings, strategies as st

from ttt_engine.board import EMPTY, Mark, empty_cells, is_valid_state, serialize_board, side_to_move
from ttt_engine.evaluator import Outcome, evaluate
from ttt_engine.reachable import solve_all_reachable
from ttt_engine.search import search


@lru_cache(maxsize=None)
def _solved():
    return solve_all_reachable(include_terminal=True)


def _play_prefix(order: List[int], n: int) -> List[int]:
    b = [EMPTY] * 9
    side = Mark.X
    for mv in order[:n]:
        if evaluate(b).is_terminal:
            break
        b[mv] = side
        side = side.other
    return b


@settings(max_examples=200, deadline=None)
@given(st.permutations(list(range(9))), st.integers(min_value=0, max_value=9))
def test_random_playouts_reach_valid_states_and_search_is_pure(order, n):
    b = _play_prefix(order, n)
    assert is_valid_state(b)
    before = list(b)
    outcome = evaluate(b)
    side = side_to_move(b) if not outcome.is_terminal else Mark.X
    res = search(b, side)
    assert b == before
    assert res.score == _solved()[serialize_board(b)].score
    if outcome.is_terminal:
        assert res.move is None
    else:
        assert res.move in empty_cells(b)


@settings(max_examples=50, deadline=None)
@given(st.randoms(use_true_random=False), st.sampled_from([Mark.X, Mark.O]))
def test_engine_never_loses_to_random_play(rnd, engine_side):
    b = [EMPTY] * 9
    side = Mark.X
    while not evaluate(b).is_terminal:
        if side is engine_side:
            mv = search(b, side).move
        else:
            mv = rnd.choice(empty_cells(b))
        b[mv] = side
        side = side.other
    loss = Outcome.WIN_O if engine_side is Mark.X else Outcome.WIN_X
    assert evaluate(b) is not loss


@given(st.lists(st.integers(min_value=0, max_value=2), min_size=9, max_size=9))
def test_evaluate_is_total_on_arbitrary_cells(board: List[int]):
    outcome = evaluate(board)
    if outcome is Outcome.DRAW:
        assert EMPTY not in board
    if outcome is Outcome.IN_PROGRESS:
        assert EMPTY in board
