from branchbuddy.errors import (  # noqa: F401
    EmptyGameFault,
    FormatFault,
    IllegalMoveFault,
    PgnError,
)
from branchbuddy.flattener import Variation, flatten  # noqa: F401
from branchbuddy.service import ParsedGame, parse_game, parse_pgn  # noqa: F401
from branchbuddy.training import create_training_positions  # noqa: F401
from branchbuddy.tree import Node, Position  # noqa: F401
