"""
The validated game tree: immutable board snapshots and the nodes that
link them together.

    root (move="", position_before=start position)
     ├── e4          children[0] is always the main line
     │    ├── c5
     │    └── e5     any other child is an alternative from the same position
     └── d4

Nodes only hold the position *before* their move; the tree builder and
anything else that walks the tree carries the position after a move along
with it (see MoveValidator.apply).
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

import chess


@dataclass(frozen=True)
class Position:
    """A full board snapshot, stored as FEN. Never mutated in place."""

    fen: str

    @classmethod
    def initial(cls) -> "Position":
        return cls(chess.STARTING_FEN)

    @property
    def _fields(self) -> list[str]:
        return self.fen.strip().split()

    def board(self) -> chess.Board:
        """A fresh board for this position; changing it doesn't touch us."""
        return chess.Board(self.fen)

    @property
    def white_to_move(self) -> bool:
        return self._fields[1] == "w"

    @property
    def fullmove_number(self) -> int:
        return int(self._fields[5])

    @property
    def ply(self) -> int:
        """Zero-based; 1.e4 is played at ply 0 and 1...e5 at ply 1."""
        return (self.fullmove_number - 1) * 2 + (0 if self.white_to_move else 1)


@dataclass
class Node:
    position_before: Position
    move: str = ""  # empty for the root sentinel
    children: list["Node"] = field(default_factory=list)

    @property
    def fen(self) -> str:
        return self.position_before.fen

    @property
    def is_root(self) -> bool:
        return self.move == ""

    @property
    def main_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    @property
    def alternatives(self) -> list["Node"]:
        return self.children[1:]

    def mainline(self) -> Iterator["Node"]:
        """Follow children[0] from here to the end, not including self."""
        node = self.main_child
        while node is not None:
            yield node
            node = node.main_child

    def mainline_moves(self) -> list[str]:
        return [node.move for node in self.mainline()]

    def walk(self) -> Iterator["Node"]:
        """Pre-order, left to right, without recursion (lines can be long)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count_nodes(self) -> int:
        return sum(1 for _ in self.walk())

    def to_dict(self) -> dict:
        result = {"fen": self.fen, "move": self.move, "children": []}
        stack = [(self, result)]
        while stack:
            node, data = stack.pop()
            for child in node.children:
                child_data = {"fen": child.fen, "move": child.move, "children": []}
                data["children"].append(child_data)
                stack.append((child, child_data))
        return result
