import nh3

GAME_RESULTS = ("1-0", "0-1", "1/2-1/2", "½-½", "*")

COLORS = ("white", "black")


def strip_all_html(text: str) -> str:
    return nh3.clean(text, tags=set(), attributes={})


def strip_check_suffix(san: str) -> str:
    return san.rstrip("+#")


def move_label(position, san: str, force_number: bool = False) -> str:
    """
    Label a move with its number, as played from `position`.

    White moves always get a number, e.g. 3.Bb5
    Black moves only get "..." if forced, e.g. at the start of a line: 3...a6
    """
    if position.white_to_move:
        return f"{position.fullmove_number}.{san}"

    if force_number:
        return f"{position.fullmove_number}...{san}"

    return san


def get_mainline_moves_str(nodes) -> str:
    """1.e4 e5 2.Nf3 for a run of nodes; the first black move gets its dots."""
    labels = []
    for i, node in enumerate(nodes):
        labels.append(move_label(node.position_before, node.move, force_number=i == 0))
    return " ".join(labels)
