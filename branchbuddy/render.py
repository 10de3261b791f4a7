from branchbuddy import util
from branchbuddy.tree import Node


def render_movetext(root: Node) -> str:
    """
    Normalized PGN movetext for a whole tree, e.g.

        1.e4 (1.d4 d5 2.c4) 1...c5 (1...e5 2.Nf3 Nc6)

    Parsing this again gives back the same tree.
    """
    return render_from(root, force_number=True)


def render_from(start: Node, force_number: bool = False) -> str:
    """
    Render everything after `start`, keeping the important ordering:
      - print the main reply
      - then the sibling alternatives to that reply, in parens
      - then continue down the main line

    Black moves get "..." at the start and after a variation.

    Works off an explicit stack: plain strings are output as is, tuples
    are lines still to render.
    """
    parts: list[str] = []
    stack: list = [(start, force_number)]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        node, force = item
        if not node.children:
            continue

        main, *alternatives = node.children
        parts.append(util.move_label(main.position_before, main.move, force))

        # variation break resets numbering
        stack.append((main, bool(alternatives)))
        for alternative in reversed(alternatives):
            stack.append(")")
            stack.append((alternative, False))
            stack.append(
                util.move_label(
                    alternative.position_before, alternative.move, force_number=True
                )
            )
            stack.append("(")

    return " ".join(parts).replace("( ", "(").replace(" )", ")")


def render_variation_line(start: Node) -> str:
    first = util.move_label(start.position_before, start.move, force_number=True)
    return f"{first} {render_from(start)}".strip()
