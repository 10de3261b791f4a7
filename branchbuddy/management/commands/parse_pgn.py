import json
import os
from datetime import datetime

from django.core.management.base import BaseCommand, CommandError

from branchbuddy.conf import ParserConfig
from branchbuddy.errors import PgnError
from branchbuddy.render import render_movetext
from branchbuddy.service import parse_pgn


class Command(BaseCommand):
    help = "Parse a PGN file into a variation tree and list its variations."  # noqa: A003

    def add_arguments(self, parser):
        parser.add_argument("pgn_file", type=str, help="Path to a .pgn file")
        parser.add_argument(
            "--tree",
            action="store_true",
            help="Print the move tree, one node per line.",
        )
        parser.add_argument(
            "--pgn",
            action="store_true",
            help="Print normalized movetext rendered back from the tree.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the whole result as JSON instead.",
        )
        parser.add_argument(
            "--stats",
            action="store_true",
            help="Print parsing stats and the parse log.",
        )
        parser.add_argument(
            "--fallback",
            action="store_true",
            help="On an illegal move, print an unvalidated move list instead.",
        )
        parser.add_argument(
            "--lenient",
            action="store_true",
            help="Accept SAN that python-chess understands but wouldn't write.",
        )
        parser.add_argument(
            "--max-depth",
            type=int,
            help="Skip variations nested deeper than this.",
        )

    def handle(self, *args, **options):
        file_path = options["pgn_file"]
        if not os.path.exists(file_path):
            raise CommandError(f"File does not exist: {file_path}")

        with open(file_path, "r", encoding="utf-8") as file:
            pgn_text = file.read()

        config = ParserConfig.from_settings(
            max_depth=options.get("max_depth"),
            strict=False if options["lenient"] else None,
        )

        start = datetime.now()
        try:
            result = parse_pgn(
                pgn_text, config=config, allow_fallback=options["fallback"]
            )
        except PgnError as e:
            raise CommandError(str(e))
        duration = (datetime.now() - start).total_seconds()

        if options["json"]:
            self.stdout.write(json.dumps(result.to_dict(), indent=2))
            return

        if not result.validated:
            self.stderr.write(f"🚨 {result.error}")
            self.stdout.write("⚠️  Unvalidated moves (low confidence):")
            self.stdout.write(" ".join(result.moves))
            return

        variations = result.variations()
        self.stdout.write(f"🌳 {len(variations)} variations")
        for variation in variations:
            self.stdout.write(
                f"{variation.id:<16} {variation.display_name:<28} "
                f"{len(variation.moves):>3} plies"
            )

        if options["tree"]:
            self.write_tree(result.root)

        if options["pgn"]:
            self.stdout.write(render_movetext(result.root))

        if options["stats"]:
            result.stats.print_stats(out=self.stdout, verbose=True)
            self.stdout.write(f"⏱️  Duration: {duration:.3f} seconds")

    def write_tree(self, root):
        """
        Main reply, then its alternatives indented one more, then on down
        the main line; same order as the movetext. No recursion, since a
        main line is as deep as the game is long.
        """
        stack = [("continue", root, 0)]
        while stack:
            action, node, indent = stack.pop()

            if action in ("say", "branch"):
                marker = "└─" if action == "branch" else "  "
                self.stdout.write(f"{'  ' * indent}{marker} {node.move}")
                if action == "branch":
                    stack.append(("continue", node, indent))
                continue

            if node.children:
                main, *alternatives = node.children
                stack.append(("continue", main, indent))
                for alternative in reversed(alternatives):
                    stack.append(("branch", alternative, indent + 1))
                stack.append(("say", main, indent))
