import pytest

from branchbuddy.service import parse_game
from branchbuddy.tests import BRANCH_EXAMPLE, NESTED_EXAMPLE
from branchbuddy.validator import MoveValidator


@pytest.fixture()
def validator():
    return MoveValidator()


@pytest.fixture()
def branch_root():
    return parse_game(BRANCH_EXAMPLE)


@pytest.fixture()
def nested_root():
    return parse_game(NESTED_EXAMPLE)


@pytest.fixture()
def pgn_file(tmp_path):
    def write(text, name="game.pgn"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return write
