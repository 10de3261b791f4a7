import chess

from branchbuddy.sanitizer import clean_pgn
from branchbuddy.tokenizer import tokenize
from branchbuddy.tree import Node

# the one from the docs, and from every bug report about branch points
BRANCH_EXAMPLE = "1.e4 (1.d4 d5 2.c4) 1...c5 (1...e5 2.Nf3 Nc6)"

# a variation inside a variation, with the main line going on afterward
NESTED_EXAMPLE = "1.e4 e5 (1...c5 2.Nf3 (2.Nc3 Nc6) 2...d6) 2.Nf3 Nc6"

PGN_RUY = """\
[Event "Repertoire"]
[Site "?"]
[White "Ruy Lopez"]
[Black ""]
[Result "*"]

1.e4 e5 2.Nf3 Nc6 3.Bb5 {The Spanish.} 3...a6 $1 (3...Nf6 {Berlin} 4.O-O Nxe4
(4...Bc5 5.c3) 5.d4) 4.Ba4 Nf6 5.O-O Be7 (5...b5 6.Bb3 Bb7) 6.Re1 b5 7.Bb3 d6 *
"""


def tree_shape(node: Node):
    """
    Compact (move, [children]) tuples to compare trees by moves only, e.g.
    ("", [("e4", [("e5", [])])]) for 1.e4 e5. Test trees are small enough
    for recursion.
    """
    return (node.move, [tree_shape(child) for child in node.children])


def get_node(root: Node, *sans: str) -> Node:
    """Walk down by SAN, taking whichever child has it."""
    node = root
    for san in sans:
        matches = [child for child in node.children if child.move == san]
        assert matches, f"No child {san} under {node.move or 'root'}"
        node = matches[0]
    return node


def depth_zero_move_count(pgn: str) -> int:
    depth = 0
    count = 0
    for token in tokenize(clean_pgn(pgn)):
        if token.type_ == "open":
            depth += 1
        elif token.type_ == "close":
            depth -= 1
        elif depth == 0:
            count += 1
    return count


def get_boards_after_moves(moves: str):
    board = chess.Board()
    index = {}
    for san in moves.split():
        board.push_san(san)
        index.setdefault(san, []).append(board.copy())
    return index


KNIGHT_SHUFFLE = ["Nf3", "Nf6", "Ng1", "Ng8"]


def deep_variation_pgn(levels: int) -> str:
    """
    Every variation replaces the last move of the one around it and goes one
    move further, so the tree nests ``levels`` deep:
    Nf3 Nf6 ( Nf6 Ng1 ( Ng1 Ng8 ( ... ) ) )
    """
    sans = [KNIGHT_SHUFFLE[i % 4] for i in range(levels + 2)]
    parts = sans[:2]
    for level in range(1, levels + 1):
        parts += ["(", sans[level], sans[level + 1]]
    parts += [")"] * levels
    return " ".join(parts)
