from typing import Optional


class PgnError(ValueError):
    """Base for everything the PGN parser raises."""

    code = "pgn_error"

    def to_dict(self) -> dict:
        return {"error": self.code, "message": str(self)}


class FormatFault(PgnError):
    """
    Something in the movetext we couldn't make sense of: an unrecognized
    character run, a stray paren, a variation with nothing to branch from.

    These are absorbed by the tokenizer and tree builder (recorded in
    ParseStats.faults) and never reach callers of the service.
    """

    code = "format_fault"

    def __init__(self, message: str, index: Optional[int] = None, text: str = ""):
        super().__init__(message)
        self.index = index
        self.text = text

    def __str__(self):
        where = f" at index {self.index}" if self.index is not None else ""
        what = f" ➤ {self.text!r}" if self.text else ""
        return f"{self.args[0]}{where}{what}"


class IllegalMoveFault(PgnError):
    """
    The move validator rejected a move: it isn't legal (or isn't proper
    SAN, in strict mode) from the board state reached by its predecessors.
    Fatal for the strict parse.
    """

    code = "illegal_move"

    def __init__(
        self,
        san: str,
        fen: str,
        ply: Optional[int] = None,
        reason: str = "",
        legal_moves: Optional[list[str]] = None,
    ):
        self.san = san
        self.fen = fen
        self.ply = ply
        self.reason = reason
        self.legal_moves = legal_moves or []
        super().__init__(f"Illegal SAN detected: {san}")

    def __str__(self):
        message = f"Illegal SAN detected: {self.san} in {self.fen}"
        if self.reason:
            message += f" ({self.reason})"
        return message

    @property
    def move_number(self) -> Optional[int]:
        return None if self.ply is None else self.ply // 2 + 1

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": str(self),
            "san": self.san,
            "fen": self.fen,
            "ply": self.ply,
            "move_number": self.move_number,
            "reason": self.reason,
            "legal_moves": self.legal_moves,
        }


class EmptyGameFault(PgnError):
    code = "empty_game"

    def __init__(self, message: str = "No playable content: no moves found in PGN"):
        super().__init__(message)
