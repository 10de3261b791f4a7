import pytest

from branchbuddy import util
from branchbuddy.tests import get_node
from branchbuddy.tree import Position

BLACK_TO_MOVE = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"


@pytest.mark.parametrize(
    "fen, force_number, expected",
    [
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", False, "1.e4"),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", True, "1.e4"),
        (BLACK_TO_MOVE, False, "e4"),
        (BLACK_TO_MOVE, True, "1...e4"),
    ],
)
def test_move_label(fen, force_number, expected):
    assert util.move_label(Position(fen), "e4", force_number) == expected


def test_get_mainline_moves_str(nested_root):
    c5 = get_node(nested_root, "e4", "c5")
    line = [c5, *c5.mainline()]
    assert util.get_mainline_moves_str(line) == "1...c5 2.Nf3 d6"
    assert util.get_mainline_moves_str(line[1:]) == "2.Nf3 d6"
    assert util.get_mainline_moves_str([]) == ""


@pytest.mark.parametrize(
    "san, expected",
    [("Qxf7#", "Qxf7"), ("O-O+", "O-O"), ("e8=Q+", "e8=Q"), ("Nf3", "Nf3")],
)
def test_strip_check_suffix(san, expected):
    assert util.strip_check_suffix(san) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.e4 e5", "1.e4 e5"),
        ("<div>1.e4 <i>e5</i></div>", "1.e4 e5"),
        ('<a href="https://example.com">2.Nf3</a>', "2.Nf3"),
        ("<style>p { color: red }</style>1.d4", "1.d4"),
    ],
)
def test_strip_all_html(text, expected):
    assert util.strip_all_html(text) == expected
