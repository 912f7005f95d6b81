import pytest

from tictactotal.rules import Action, successor
from tictactotal.search import Score, choose, evaluate
from tictactotal.tactics import immediate_wins
from tictactotal.total import (
    WIN_TARGET,
    TotalState,
    empty_board,
    get_numeral_counts,
    is_valid_state,
    line_totals,
    numerals,
    parse_state,
)


def test_numerals_by_side():
    assert numerals(True) == (1, 3, 5)
    assert numerals(False) == (2, 4, 6)


def test_empty_board_transitions_order():
    pairs = empty_board().transitions()
    assert len(pairs) == 27
    acts = [a for a, _ in pairs]
    assert acts[:4] == [Action(0, 0, 1), Action(0, 0, 3), Action(0, 0, 5), Action(0, 1, 1)]
    assert acts == sorted(acts)
    assert all(not child.odd_turn for _, child in pairs)


def test_win_needs_a_full_line_summing_to_target():
    assert WIN_TARGET == 13
    assert TotalState.from_string("661000000").is_win()
    assert not TotalState.from_string("660000000").is_win()
    assert not TotalState.from_string("651000000").is_win()  # full line, sum 12
    assert TotalState.from_string("600500200").is_win()  # column
    assert TotalState.from_string("500040004").is_win()  # diagonal


def test_tie_is_full_board_without_target_line():
    full = TotalState.from_string("121212121")
    assert full.is_tie() and not full.is_win()
    assert full.transitions() == []
    assert line_totals(full.cells)[0] == 4


def test_side_to_move_inferred_from_filled_cells():
    assert TotalState.from_string("000000000").odd_turn
    assert not TotalState.from_string("100000000").odd_turn
    assert not TotalState.from_string("000000000", odd_turn=False).odd_turn


def test_illegal_numeral_for_side_is_rejected():
    state = empty_board()
    with pytest.raises(ValueError):
        successor(state, Action(0, 0, 2))
    child = successor(state, Action(0, 0, 5))
    assert child.serialize() == "500000000"
    assert not child.odd_turn


@pytest.mark.parametrize("bad", ["", "7000000000", "00000000", "0000000x0"])
def test_malformed_boards_raise(bad):
    with pytest.raises(ValueError):
        TotalState.from_string(bad)


def test_only_winning_numeral_is_chosen():
    # 6 6 .
    # 1 1 3
    # 2 . .   odd to move; writing 1 at (2,0) wins, (1,2) lets even write 6 at (2,2)
    state = parse_state("660113200")
    assert state.odd_turn
    assert immediate_wins(state) == [Action(2, 0, 1)]
    assert choose(state) == Action(2, 0, 1)
    assert evaluate(state).score is Score.WIN


def test_terminal_total_board():
    won = TotalState.from_string("661000000")
    assert evaluate(won).score is Score.LOSS
    assert won.transitions() == []


def test_render_total():
    assert TotalState.from_string("160000000").render() == "1 6 .\n. . .\n. . ."


def test_numeral_counts():
    assert get_numeral_counts((6, 6, 0, 1, 1, 3, 2, 0, 0)) == (3, 3)


@pytest.mark.parametrize(
    "board,odd_turn",
    [
        ("000000000", True),
        ("100000000", False),
        ("660113200", True),
        ("661300000", True),  # even just completed the top row
    ],
)
def test_reachable_boards(board, odd_turn):
    assert is_valid_state(TotalState.from_string(board).cells, odd_turn)
    assert parse_state(board).odd_turn is odd_turn


@pytest.mark.parametrize(
    "board,odd_turn",
    [
        ("222000000", None),  # only the even player has moved
        ("246000000", None),
        ("000000000", False),  # even cannot open
        ("100000000", True),  # odd cannot move twice in a row
        ("553246000", None),  # odd-only winning row, but even moved last
    ],
)
def test_unreachable_boards_raise(board, odd_turn):
    state = TotalState.from_string(board, odd_turn)
    assert not is_valid_state(state.cells, state.odd_turn)
    with pytest.raises(ValueError):
        parse_state(board, odd_turn)
