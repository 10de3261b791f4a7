from dataclasses import asdict, dataclass

from branchbuddy import util
from branchbuddy.conf import DEFAULT_DISPLAY_NAME_MOVES
from branchbuddy.tree import Node

MAINLINE_ID = "main"
MAINLINE_NAME = "Main Line"


@dataclass
class Variation:
    id: str  # noqa: A003
    display_name: str
    moves: list[str]
    is_mainline: bool
    # 1-based ply of the variation's first move of its own; 0 for the main line
    branch_ply: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def get_line(start: Node) -> list[Node]:
    """start and its children[0] chain"""
    return [start, *start.mainline()]


def get_display_name(line: list[Node], name_moves: int) -> str:
    name = util.get_mainline_moves_str(line[:name_moves])
    return f"{name} …" if len(line) > name_moves else name


def flatten(
    root: Node, name_moves: int = DEFAULT_DISPLAY_NAME_MOVES
) -> list[Variation]:
    """
    Every path worth training, main line first, then each alternative in
    depth-first order: an alternative's own sub-alternatives come before
    its next sibling.

    Alternative ids are built from the branch path that leads to them,
    e.g. "var-2.1" is the first alternative to the 2nd ply of the main
    line, "var-2.1-5.2" the second alternative to the 5th ply of that one.
    Nothing is counted outside this call, so ids only depend on the tree.
    """
    variations = []

    mainline_moves = root.mainline_moves()
    if mainline_moves:
        variations.append(
            Variation(
                id=MAINLINE_ID,
                display_name=MAINLINE_NAME,
                moves=mainline_moves,
                is_mainline=True,
            )
        )

    collect_alternatives(root, variations, name_moves)
    return variations


def collect_alternatives(root: Node, variations: list[Variation], name_moves: int):
    """
    Depth first over an explicit stack; neither line length nor nesting
    depth touches the call stack.

    Each entry is a line to walk: its first node, the moves up to and
    including that node, the branch path, and the branch ply when the node
    is an alternative that still has to be reported. For a line with
    alternatives, the rest of the line is pushed first and the
    alternatives in reverse on top of it, so each alternative (and
    everything under it) comes out before its next sibling.
    """
    stack = [(root, [], (), None)]

    while stack:
        node, moves, path, branch_ply = stack.pop()

        if branch_ply is not None:
            line = get_line(node)
            variations.append(
                Variation(
                    id="var-" + "-".join(path),
                    display_name=get_display_name(line, name_moves),
                    moves=moves + [n.move for n in line[1:]],
                    is_mainline=False,
                    branch_ply=branch_ply,
                )
            )

        while node.children:
            main, *alternatives = node.children
            if alternatives:
                ply = len(moves) + 1
                stack.append((main, moves + [main.move], path, None))
                for index in range(len(alternatives), 0, -1):
                    alternative = alternatives[index - 1]
                    stack.append(
                        (
                            alternative,
                            moves + [alternative.move],
                            path + (f"{ply}.{index}",),
                            ply,
                        )
                    )
                break

            moves.append(main.move)
            node = main
