import re
from dataclasses import dataclass
from typing import Literal, Optional

from branchbuddy.errors import FormatFault
from branchbuddy.stats import ParseStats

MOVE_TOKEN_REGEX = re.compile(
    r"""(?x)                                # verbose 💬
    (?<![A-Za-z])                           # not in the middle of a word
    (?:
        (?P<num>\d+)                        # optional move number
        (?P<dots>\.{1,3})                   # and its dots, "." or "..."
        \s*
    )?
    (?P<san>
        [O0]-[O0](?:-[O0])?                 # castles, O-O-O or O-O
        |
        [KQRBN][a-h]?[1-8]?x?[a-h][1-8]     # pieces, maybe disambiguated
        |
        [a-h](?:x[a-h])?[1-8](?:=[QRBN])?   # pawns
    )
    (?P<check>[+\#]?)                       # check/mate
    """
)


@dataclass
class Token:
    type_: Literal["move", "open", "close"]
    san: str = ""
    # advisory only, board state decides whose move it really is
    move_num: Optional[int] = None
    black_hint: Optional[bool] = None
    raw: str = ""
    index: int = 0

    def __str__(self):
        if self.type_ == "open":
            return "("
        elif self.type_ == "close":
            return ")"
        return self.raw


def get_move_token(text: str, index: int) -> Token:
    match = MOVE_TOKEN_REGEX.match(text, index)
    if not match:
        raise FormatFault("unrecognized text", index, text[index])

    san = match.group("san")
    if san[0] == "0":  # 0-0 ➤ O-O
        san = san.replace("0", "O")
    san += match.group("check")

    num = match.group("num")
    dots = match.group("dots")
    return Token(
        type_="move",
        san=san,
        move_num=int(num) if num else None,
        black_hint=len(dots) > 1 if dots else None,
        raw=match.group(0),
        index=index,
    )


def tokenize(text: str, stats: Optional[ParseStats] = None) -> list[Token]:
    """
    Anything that isn't a paren or a move gets skipped a character at a
    time; consecutive skipped characters are reported as one FormatFault.
    """
    stats = stats if stats is not None else ParseStats()
    tokens = []
    skipped_from = None
    i = 0

    def flush_skipped():
        nonlocal skipped_from
        if skipped_from is not None:
            stats.absorb(
                FormatFault("unrecognized text", skipped_from, text[skipped_from:i])
            )
            skipped_from = None

    while i < len(text):
        c = text[i]

        if c.isspace():
            flush_skipped()
            i += 1
            continue

        if c in "()":
            flush_skipped()
            tokens.append(Token(type_="open" if c == "(" else "close", raw=c, index=i))
            i += 1
            continue

        try:
            token = get_move_token(text, i)
        except FormatFault:
            if skipped_from is None:
                skipped_from = i
            i += 1
            continue

        flush_skipped()
        tokens.append(token)
        stats.sundry["tokens: moves"] += 1
        i += len(token.raw)

    flush_skipped()
    return tokens
