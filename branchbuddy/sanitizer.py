"""
Get raw PGN text into a shape the tokenizer can walk through: no headers,
no comments, no NAGs, one game, tidy whitespace.

Broken input is the normal case here (exports from courses and studies
with half-closed comments, "5....." continuation numbers, etc.), so
nothing in this module raises.
"""

import re

from branchbuddy import util

# [Event "Casual game"] and friends; %-directives like [%clk] aren't headers
HEADER_RE = re.compile(r'\[\s*[A-Za-z0-9_]+\s+"(?:[^"\\]|\\.)*"\s*\]')
COMMENT_RE = re.compile(r"\{[^}]*\}")
LINE_COMMENT_RE = re.compile(r";[^\n]*")
NAG_RE = re.compile(r"\$\d+")
MOVE_NUMBER_RE = re.compile(r"\b\d+\.(?:\.\.)?")
DOT_RUN_RE = re.compile(r"\.{4,}")
RESULT_RE = re.compile(
    r"(?<!\S)(?:"
    + "|".join(re.escape(result) for result in util.GAME_RESULTS)
    + r")(?!\S)"
)
WHITESPACE_RE = re.compile(r"\s+")


def strip_headers(text: str) -> str:
    return HEADER_RE.sub(" ", text)


def strip_comments(text: str) -> str:
    """Well-formed {...} and ; comments, and $n NAGs."""
    text = COMMENT_RE.sub(" ", text)
    text = LINE_COMMENT_RE.sub(" ", text)
    return NAG_RE.sub(" ", text)


def repair_unterminated_comments(text: str) -> str:
    """
    Call after strip_comments; any "{" still around has no closing brace.

    e.g. 1.e4 {broken comment 1... e5 2.Nf3

    Everything from the brace to the next move number goes; the move
    number and what follows it stay, because the comment probably
    ended there. If there's no move number, the rest of the text goes.
    """
    while (start := text.find("{")) != -1:
        if match := MOVE_NUMBER_RE.search(text, start + 1):
            text = text[:start] + " " + text[match.start() :]  # noqa: E203
        else:
            text = text[:start]

    # closing braces without an opener are just noise
    return text.replace("}", " ")


def collapse_dots(text: str) -> str:
    """5..... ➤ 5... and the unicode ellipsis 5… ➤ 5..."""
    text = text.replace("…", "...")
    return DOT_RUN_RE.sub("...", text)


def drop_later_games(text: str) -> str:
    """
    Cut at the first header block that comes after some movetext, for when
    the first game has no result marker to stop at:

    [Event "A"] 1.e4 e5 [Event "B"] 1.d4 d5 * ➤ [Event "A"] 1.e4 e5
    """
    end = 0
    for match in HEADER_RE.finditer(text):
        if strip_comments(text[end : match.start()]).strip():  # noqa: E203
            return text[: match.start()]
        end = match.end()
    return text


def first_game_only(text: str) -> str:
    """Drop the result marker and anything after it (i.e. later games)."""
    if match := RESULT_RE.search(text):
        return text[: match.start()]
    return text


def normalize_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def clean_pgn(raw: str) -> str:
    if not raw:
        return ""

    text = raw
    if "<" in text:  # pasted from a web page
        text = util.strip_all_html(text)

    text = drop_later_games(text)
    text = strip_headers(text)
    text = strip_comments(text)
    text = repair_unterminated_comments(text)
    text = collapse_dots(text)
    text = first_game_only(text)
    return normalize_whitespace(text)
