import sys
from collections import defaultdict
from dataclasses import dataclass, field

from branchbuddy.errors import FormatFault


@dataclass
class ParseStats:
    # ad hoc stats, just needs a unique label to count
    sundry: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    # how far a move number hint was from where the board says we are:
    # no hint (-1), explicit match (0), or how far off (1+)
    move_number_distances: defaultdict[int, int] = field(
        default_factory=lambda: defaultdict(int)
    )
    variation_depths: defaultdict[int, int] = field(
        default_factory=lambda: defaultdict(int)
    )
    # absorbed problems, in the order we ran into them
    faults: list[FormatFault] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    def absorb(self, fault: FormatFault):
        self.faults.append(fault)
        self.sundry[f"faults: {fault.args[0]}"] += 1
        self.log.append(f"⚠️  {fault}")

    @property
    def max_variation_depth(self) -> int:
        return max(self.variation_depths, default=0)

    def to_dict(self) -> dict:
        return {
            "sundry": dict(sorted(self.sundry.items())),
            "move_number_distances": dict(sorted(self.move_number_distances.items())),
            "variation_depths": dict(sorted(self.variation_depths.items())),
            "faults": [str(fault) for fault in self.faults],
        }

    def print_stats(self, out=None, verbose=False):
        out = out or sys.stdout
        out.write("\nParsing Stats Summary:\n\n")
        for sun in sorted(self.sundry.keys()):
            out.write(f"{sun}: {self.sundry[sun]}\n")

        depths = str(dict(sorted(self.variation_depths.items())))
        out.write(f"variation depths: {depths}\n")

        distances = str(dict(sorted(self.move_number_distances.items())))
        out.write(f"move number distances: {distances}\n")

        if verbose and self.log:
            out.write("\n🪵 Parse Log:\n")
            for line in self.log:
                out.write(f"    {line}\n")

        out.write("\n")
