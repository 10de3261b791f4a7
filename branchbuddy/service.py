"""
One call from raw PGN text to a validated tree:

    sanitize ➤ tokenize ➤ build (every move checked on a real board)

    from branchbuddy import parse_game, flatten

    root = parse_game(pgn_text)
    for variation in flatten(root):
        ...

Each call owns everything it creates; there's no module state, so
separate parses can run side by side.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from branchbuddy.conf import ParserConfig
from branchbuddy.errors import IllegalMoveFault
from branchbuddy.fallback import UnvalidatedLine, extract_moves_best_effort
from branchbuddy.flattener import Variation, flatten
from branchbuddy.sanitizer import clean_pgn
from branchbuddy.stats import ParseStats
from branchbuddy.tokenizer import tokenize
from branchbuddy.tree import Node
from branchbuddy.tree_builder import TreeBuilder
from branchbuddy.validator import MoveValidator

logger = logging.getLogger(__name__)


@dataclass
class ParsedGame:
    root: Node
    stats: ParseStats = field(default_factory=ParseStats)
    config: ParserConfig = field(default_factory=ParserConfig)
    validated: Literal[True] = True

    def variations(self) -> list[Variation]:
        return flatten(self.root, name_moves=self.config.display_name_moves)

    def to_dict(self) -> dict:
        return {
            "validated": self.validated,
            "tree": self.root.to_dict(),
            "variations": [v.to_dict() for v in self.variations()],
            "stats": self.stats.to_dict(),
        }


def build_from_sanitized(
    sanitized: str, config: ParserConfig, stats: ParseStats
) -> Node:
    tokens = tokenize(sanitized, stats)
    builder = TreeBuilder(
        tokens,
        validator=MoveValidator(strict=config.strict),
        max_depth=config.max_depth,
        stats=stats,
    )
    return builder.build()


def parse_game(
    pgn: str,
    config: Optional[ParserConfig] = None,
    stats: Optional[ParseStats] = None,
) -> Node:
    """
    Parse the first game in `pgn` and return the root of its move tree.

    Raises IllegalMoveFault for the first move that isn't legal where it's
    played, and EmptyGameFault if there are no moves at all.
    """
    config = config or ParserConfig()
    stats = stats if stats is not None else ParseStats()
    sanitized = clean_pgn(pgn)

    try:
        return build_from_sanitized(sanitized, config, stats)
    except IllegalMoveFault as e:
        logger.warning("🚨 PGN parse error ➤ %s", e)
        logger.debug("Sanitized PGN start ➤ %s…", sanitized[:400])
        raise


def parse_pgn(
    pgn: str,
    config: Optional[ParserConfig] = None,
    allow_fallback: Optional[bool] = None,
) -> Union[ParsedGame, UnvalidatedLine]:
    """
    Like parse_game but with stats, and, only if asked for (argument, or
    config.allow_fallback when the argument is left out), an unvalidated
    best effort move list instead of an IllegalMoveFault.

    EmptyGameFault is raised either way; there's nothing to fall back on.
    """
    config = config or ParserConfig()
    if allow_fallback is None:
        allow_fallback = config.allow_fallback

    stats = ParseStats()
    sanitized = clean_pgn(pgn)

    try:
        root = build_from_sanitized(sanitized, config, stats)
    except IllegalMoveFault as e:
        if not allow_fallback:
            logger.warning("🚨 PGN parse error ➤ %s", e)
            raise
        logger.info("🩹 Falling back to unvalidated moves after ➤ %s", e)
        return UnvalidatedLine(
            moves=extract_moves_best_effort(sanitized), error=e, stats=stats
        )

    return ParsedGame(root=root, stats=stats, config=config)
