from collections import namedtuple
from typing import Iterable, Optional

import chess

from branchbuddy import util
from branchbuddy.errors import IllegalMoveFault
from branchbuddy.tree import Position

AppliedMove = namedtuple("AppliedMove", ["position", "san"])


class MoveValidator:
    """
    Plays SAN against a position with python-chess.

    In strict mode, the SAN has to be *the* SAN python-chess would write
    for that move (ignoring check/mate marks), so we reject rather than
    guess at things like Nge2 when only one knight can get there, Qh4xe1
    long-ish forms, e8q, or plain ambiguity (Nd2 with two knights that can).
    """

    def __init__(self, strict: bool = True):
        self.strict = strict

    def apply(self, position: Position, san: str) -> AppliedMove:
        board = position.board()

        try:
            move_obj = board.parse_san(san)
        except ValueError as e:  # invalid, illegal, or ambiguous
            raise self.fault(position, san, board, str(e)) from e

        canonical = board.san(move_obj)
        if self.strict and util.strip_check_suffix(san) != util.strip_check_suffix(
            canonical
        ):
            raise self.fault(position, san, board, f"not strict SAN, use {canonical}")

        board.push(move_obj)
        return AppliedMove(Position(board.fen()), canonical)

    def is_legal(self, position: Position, san: str) -> bool:
        try:
            self.apply(position, san)
        except IllegalMoveFault:
            return False
        return True

    def replay(
        self, moves: Iterable[str], start: Optional[Position] = None
    ) -> list[Position]:
        """Positions *after* each move; raises on the first bad one."""
        position = start or Position.initial()
        positions = []
        for san in moves:
            position, _ = self.apply(position, san)
            positions.append(position)
        return positions

    @staticmethod
    def legal_sans(board: chess.Board) -> list[str]:
        return sorted(board.san(move) for move in board.legal_moves)

    def fault(self, position, san, board, reason) -> IllegalMoveFault:
        return IllegalMoveFault(
            san=san,
            fen=position.fen,
            ply=position.ply,
            reason=reason,
            legal_moves=self.legal_sans(board),
        )
