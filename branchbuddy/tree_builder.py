"""
Turns the token stream into a validated Node tree.

Variations follow standard RAV semantics: a parenthesized line is an
alternative to the move just played, so it branches from the position
*before* that move, e.g.

    1.e4 (1.d4 d5) 1...c5 (1...e5 2.Nf3)

    root ─┬─ e4 ─┬─ c5
          │      └─ e5 ── Nf3
          └─ d4 ── d5

Move numbers in the text don't decide anything here; the board does.
We only compare them afterward for the stats. (Working out branch points
from move number arithmetic gets fooled by the usual garbage in the
wild, e.g. "6.Nc3 6...Nxc3" or white moves written as 6...Qa5.)

Nesting is handled with an explicit stack of frames, one per open
variation, instead of recursion, and has a hard depth limit.
"""

from dataclasses import dataclass
from typing import Optional

from branchbuddy.conf import DEFAULT_MAX_VARIATION_DEPTH
from branchbuddy.errors import EmptyGameFault, FormatFault
from branchbuddy.stats import ParseStats
from branchbuddy.tokenizer import Token
from branchbuddy.tree import Node, Position
from branchbuddy.validator import MoveValidator

AMBIGUOUS = -1


def get_move_number_distance(token: Token, position: Position) -> int:
    """
    Returns:
        -1 if we don't know (no move number on the token)
         0 if the move number and dots agree with the board
        >0 ply distance otherwise

    Dot types:
        "."   → white to move = ply = (move num - 1) * 2
        "..." → black to move = ply = (move num - 1) * 2 + 1
    """
    if token.move_num is None:
        return AMBIGUOUS

    hinted_ply = (token.move_num - 1) * 2 + (1 if token.black_hint else 0)
    return abs(position.ply - hinted_ply)


@dataclass
class StackFrame:
    # where the next move at this level gets attached, and the board there
    parent: Node
    position: Position
    depth: int = 0
    # what the most recent move at this level was played from; a variation
    # opened now is a sibling of that move, so it branches from here
    anchor: Optional[Node] = None
    anchor_position: Optional[Position] = None
    move_counter: int = 0


class TreeBuilder:
    def __init__(
        self,
        tokens: list[Token],
        root_position: Optional[Position] = None,
        validator: Optional[MoveValidator] = None,
        max_depth: int = DEFAULT_MAX_VARIATION_DEPTH,
        stats: Optional[ParseStats] = None,
    ):
        self.tokens = tokens
        self.validator = validator or MoveValidator()
        self.max_depth = max_depth
        self.stats = stats if stats is not None else ParseStats()

        self.root = Node(position_before=root_position or Position.initial())
        self.stack = [StackFrame(parent=self.root, position=self.root.position_before)]

        # > 0 while we're throwing away a variation we can't attach
        self.skip_depth = 0
        self.index = 0

    @property
    def current(self) -> StackFrame:
        return self.stack[-1]

    def build(self) -> Node:
        while self.index < len(self.tokens):
            token = self.tokens[self.index]

            if self.skip_depth:
                self.skip_token(token)
                self.index += 1
                continue

            try:
                if token.type_ == "move":
                    self.handle_move(token)
                elif token.type_ == "open":
                    self.handle_open(token)
                else:
                    assert token.type_ == "close", f"Unexpected token: {token.type_}"
                    self.handle_close(token)
            except FormatFault as fault:
                self.stats.absorb(fault)

            self.index += 1

        self.finish()
        return self.root

    def handle_move(self, token: Token):
        """IllegalMoveFault from the validator ends the whole parse."""
        frame = self.current
        frame.move_counter += 1

        position_after, san = self.validator.apply(frame.position, token.san)

        distance = get_move_number_distance(token, frame.position)
        self.stats.move_number_distances[distance] += 1
        if distance > 0:
            ply = frame.position.ply
            self.stats.log.append(f"🔢 {token.raw} off by {distance}, played as ply {ply}")

        # each node gets its own position; nothing is shared between nodes
        node = Node(position_before=Position(frame.position.fen), move=san)
        frame.parent.children.append(node)
        if len(frame.parent.children) > 1:
            self.stats.sundry["alternatives attached"] += 1

        frame.anchor, frame.anchor_position = frame.parent, frame.position
        frame.parent, frame.position = node, position_after
        self.stats.sundry["moves resolved"] += 1

    def handle_open(self, token: Token):
        frame = self.current
        depth = frame.depth + 1

        if frame.anchor is None:
            self.skip_depth = 1
            raise FormatFault("variation with no move to branch from", token.index)

        if depth > self.max_depth:
            self.skip_depth = 1
            raise FormatFault(
                f"variation nested deeper than {self.max_depth}", token.index
            )

        assert frame.anchor_position is not None  # set along with anchor
        self.stack.append(
            StackFrame(parent=frame.anchor, position=frame.anchor_position, depth=depth)
        )
        self.stats.sundry["variations"] += 1
        self.stats.variation_depths[depth] += 1

        branch_from = frame.anchor.move or "start"
        self.stats.log.append(f"🌳 variation {depth} branches from {branch_from}")

    def handle_close(self, token: Token):
        if len(self.stack) == 1:
            raise FormatFault("unmatched closing paren", token.index, ")")

        frame = self.stack.pop()
        self.stats.log.append(
            f"🍂 variation {frame.depth} ends after {frame.move_counter} moves"
        )

    def skip_token(self, token: Token):
        if token.type_ == "open":
            self.skip_depth += 1
        elif token.type_ == "close":
            self.skip_depth -= 1
        else:
            self.stats.sundry["moves skipped"] += 1

    def finish(self):
        if self.skip_depth:
            self.stats.absorb(FormatFault("unclosed skipped variation"))

        while len(self.stack) > 1:
            frame = self.stack.pop()
            self.stats.absorb(FormatFault(f"unclosed variation at depth {frame.depth}"))

        if not self.root.children:
            raise EmptyGameFault()


def build_tree(
    tokens: list[Token],
    validator: Optional[MoveValidator] = None,
    max_depth: int = DEFAULT_MAX_VARIATION_DEPTH,
    stats: Optional[ParseStats] = None,
) -> Node:
    builder = TreeBuilder(tokens, validator=validator, max_depth=max_depth, stats=stats)
    return builder.build()
