"""
Tactical insights attached to lineup suggestions.

Insights are structured values so callers can filter or render them as
they like; format_insight gives the standard one-line prose.
"""

from dataclasses import dataclass, field
from enum import StrEnum

# Players named per insight line
MAX_NAMED_PLAYERS = 3


class InsightKind(StrEnum):
    IN_FORM = "in_form"
    OUT_OF_FORM = "out_of_form"
    SET_BIAS = "set_bias"          # Opponent stronger in Set 1
    H2H_EDGE = "h2h_edge"
    EXCLUDED = "excluded"          # Too few games to score
    UNPROVEN = "unproven"          # Rostered, no games for the team this season


@dataclass
class InsightEntry:
    """A player mentioned by an insight."""

    player: str
    value: float | None = None      # Form % or net H2H wins
    reference: float | None = None  # Season % for form insights
    label: str = ""                 # Form window, "L5" or "L8"


@dataclass
class Insight:
    kind: InsightKind
    entries: list[InsightEntry] = field(default_factory=list)
    value: float | None = None  # Set bias in percentage points

    @property
    def players(self) -> list[str]:
        return [e.player for e in self.entries]


def _form_entry(e: InsightEntry) -> str:
    if e.value is None:
        return e.player
    text = f"{e.player} ({e.label}: {round(e.value)}%"
    if e.reference is not None:
        text += f" vs {round(e.reference)}% season"
    return text + ")"


def format_insight(insight: Insight) -> str:
    """One-line prose for an insight."""
    match insight.kind:
        case InsightKind.IN_FORM:
            return "In form: " + ", ".join(_form_entry(e) for e in insight.entries)
        case InsightKind.OUT_OF_FORM:
            return "Out of form: " + ", ".join(_form_entry(e) for e in insight.entries)
        case InsightKind.SET_BIAS:
            bias = f" (+{insight.value:.0f} pts)" if insight.value is not None else ""
            return f"Opponent is stronger in Set 1{bias}; consider saving best players for Set 2"
        case InsightKind.H2H_EDGE:
            return "H2H advantage: " + ", ".join(
                f"{e.player} (+{e.value:.0f})" for e in insight.entries
            )
        case InsightKind.EXCLUDED:
            return "Excluded (<5 games): " + ", ".join(insight.players)
        case InsightKind.UNPROVEN:
            return "No games for the team this season: " + ", ".join(insight.players)
    raise ValueError(f"Unknown insight kind: {insight.kind}")


def format_insights(insights: list[Insight]) -> list[str]:
    return [format_insight(i) for i in insights]
