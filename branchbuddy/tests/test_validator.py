import chess
import pytest

from branchbuddy.errors import IllegalMoveFault
from branchbuddy.tests import get_boards_after_moves
from branchbuddy.tree import Position
from branchbuddy.validator import MoveValidator


def position_after(moves: str) -> Position:
    board = chess.Board()
    for san in moves.split():
        board.push_san(san)
    return Position(board.fen())


def test_apply_returns_new_position_and_canonical_san(validator):
    start = Position.initial()
    after, san = validator.apply(start, "e4")

    boards = get_boards_after_moves("e4")
    assert san == "e4"
    assert after.fen == boards["e4"][0].fen()
    assert start.fen == chess.STARTING_FEN  # untouched
    assert not after.white_to_move


def test_apply_keeps_check_marks_from_the_board(validator):
    position = position_after("e4 e5 Bc4 Nc6 Qh5 Nf6")
    _, san = validator.apply(position, "Qxf7")  # written without the #
    assert san == "Qxf7#"


def test_apply_illegal_move_raises_with_board_context(validator):
    position = position_after("e4 e5 Qh5")
    with pytest.raises(IllegalMoveFault) as e:
        validator.apply(position, "Qxe4")

    fault = e.value
    assert fault.san == "Qxe4"
    assert fault.fen == position.fen
    assert fault.ply == 3
    assert fault.move_number == 2
    assert "Nc6" in fault.legal_moves
    assert "Qxe4" not in fault.legal_moves
    assert "Illegal SAN detected: Qxe4" in str(fault)


def test_apply_ambiguous_move_is_rejected_not_guessed(validator):
    # knights on b1 and f3 can both get to d2
    position = position_after("d4 d5 Nf3 Nf6")
    with pytest.raises(IllegalMoveFault):
        validator.apply(position, "Nd2")

    _, san = validator.apply(position, "Nbd2")
    assert san == "Nbd2"


@pytest.mark.parametrize("san", ["Ngf3", "Ng1f3", "e2e4"])
def test_apply_strict_rejects_non_canonical_san(validator, san):
    with pytest.raises(IllegalMoveFault) as e:
        validator.apply(Position.initial(), san)
    assert e.value.san == san


def test_apply_lenient_accepts_over_disambiguation():
    lenient = MoveValidator(strict=False)
    _, san = lenient.apply(Position.initial(), "Ngf3")
    assert san == "Nf3"


def test_is_legal(validator):
    assert validator.is_legal(Position.initial(), "Nf3")
    assert not validator.is_legal(Position.initial(), "Nf4")
    assert not validator.is_legal(Position.initial(), "not a move")


def test_replay(validator):
    positions = validator.replay(["e4", "e5", "Nf3"])
    boards = get_boards_after_moves("e4 e5 Nf3")
    assert [p.fen for p in positions] == [
        boards["e4"][0].fen(),
        boards["e5"][0].fen(),
        boards["Nf3"][0].fen(),
    ]


def test_replay_stops_at_first_illegal_move(validator):
    with pytest.raises(IllegalMoveFault) as e:
        validator.replay(["e4", "e5", "Qh5", "Qxe4", "Qxf7#"])
    assert e.value.san == "Qxe4"
