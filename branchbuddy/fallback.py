"""
Best effort, unvalidated move extraction for when strict parsing fails.

Only ever used when a caller asks for it. The result is deliberately a
different type than a parsed game, with no Variations to hand to the
trainer, so nobody mistakes these moves for legal ones.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

from branchbuddy.errors import IllegalMoveFault
from branchbuddy.stats import ParseStats
from branchbuddy.tokenizer import tokenize


@dataclass
class UnvalidatedLine:
    moves: list[str]
    error: Optional[IllegalMoveFault] = None
    stats: ParseStats = field(default_factory=ParseStats)
    validated: Literal[False] = False
    confidence: Literal["low"] = "low"

    def to_dict(self) -> dict:
        return {
            "validated": self.validated,
            "confidence": self.confidence,
            "moves": self.moves,
            "error": self.error.to_dict() if self.error else None,
        }


def extract_moves_best_effort(sanitized: str) -> list[str]:
    """Every move-like token in document order, parens ignored."""
    return [t.san for t in tokenize(sanitized) if t.type_ == "move"]
