from dataclasses import dataclass

DEFAULT_MAX_VARIATION_DEPTH = 64
# the web and command surfaces never go past this, whatever is configured;
# the tree comes back as nested JSON
MAX_VARIATION_DEPTH_CEILING = 256
DEFAULT_DISPLAY_NAME_MOVES = 3
DEFAULT_DECK_NAME = "Untitled Deck"


@dataclass(frozen=True)
class ParserConfig:
    max_depth: int = DEFAULT_MAX_VARIATION_DEPTH
    strict: bool = True
    allow_fallback: bool = False
    display_name_moves: int = DEFAULT_DISPLAY_NAME_MOVES

    @classmethod
    def from_settings(cls, **overrides) -> "ParserConfig":
        """Build from Django settings; only the web/command side needs this."""
        from django.conf import settings

        values = {
            "max_depth": getattr(
                settings, "BRANCHBUDDY_MAX_VARIATION_DEPTH", DEFAULT_MAX_VARIATION_DEPTH
            ),
            "strict": getattr(settings, "BRANCHBUDDY_STRICT_SAN", True),
            "allow_fallback": getattr(settings, "BRANCHBUDDY_ALLOW_FALLBACK", False),
            "display_name_moves": getattr(
                settings, "BRANCHBUDDY_DISPLAY_NAME_MOVES", DEFAULT_DISPLAY_NAME_MOVES
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        values["max_depth"] = min(
            max(values["max_depth"], 0), MAX_VARIATION_DEPTH_CEILING
        )
        return cls(**values)


def get_default_deck_name() -> str:
    from django.conf import settings

    return getattr(settings, "BRANCHBUDDY_DEFAULT_DECK_NAME", DEFAULT_DECK_NAME)
