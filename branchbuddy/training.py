from dataclasses import asdict, dataclass
from typing import Optional

from branchbuddy import util
from branchbuddy.flattener import Variation
from branchbuddy.tree import Position
from branchbuddy.validator import MoveValidator


@dataclass
class TrainingPosition:
    id: str  # noqa: A003
    variation_id: str
    fen: str  # before move_to_make
    move_to_make: str
    response_move: Optional[str]
    move_number: int
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


def create_training_positions(
    variation: Variation,
    color: str,
    validator: Optional[MoveValidator] = None,
) -> list[TrainingPosition]:
    """
    One position per move the trainee has to find, with the opponent's
    reply (if the line goes on). The board is replayed for real, so the
    side to move comes from the position and not from counting plies.
    """
    color = color.strip().lower()
    if color not in util.COLORS:
        raise ValueError("Color must be set as 'white' or 'black'")

    validator = validator or MoveValidator()
    user_is_white = color == "white"
    positions = []
    position = Position.initial()

    for i, san in enumerate(variation.moves):
        if position.white_to_move == user_is_white:
            response = variation.moves[i + 1] if i + 1 < len(variation.moves) else None
            dots = "" if user_is_white else "..."
            positions.append(
                TrainingPosition(
                    id=f"{variation.id}-{position.ply}",
                    variation_id=variation.id,
                    fen=position.fen,
                    move_to_make=san,
                    response_move=response,
                    move_number=position.fullmove_number,
                    description=f"Move {position.fullmove_number}{dots}: Play {san}",
                )
            )

        position, _ = validator.apply(position, san)

    return positions
