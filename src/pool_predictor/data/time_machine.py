"""
Point-in-time league snapshots.

Rebuilds the league as it stood on a given date so every prediction can be
replayed historically: results and frames after the cutoff are dropped and
current-season player stats are reconstructed from the remaining frames
(cumulative stats in the store are not date-stamped).
"""

import logging
from dataclasses import dataclass
from datetime import date

from .models import (
    DataSources,
    Fixture,
    FrameWinner,
    MatchFrames,
    MatchResult,
    PlayerData2526,
    PlayerTeamStats2526,
    SeasonTotal,
    parse_date,
)

logger = logging.getLogger(__name__)


@dataclass
class _Tally:
    team: str
    division: str
    played: int = 0
    won: int = 0
    bd_for: int = 0
    bd_against: int = 0
    forfeits: int = 0


def _pct(won: int, played: int) -> float:
    return won / played * 100 if played > 0 else 0.0


def reconstruct_player_stats(
    frames: list[MatchFrames],
    cutoff: date | str,
) -> dict[str, PlayerData2526]:
    """
    Rebuild current-season per-player, per-team stats from frames.

    Args:
        frames: Frame history
        cutoff: Last date to include (inclusive)

    Returns:
        Map of player name -> PlayerData2526
    """
    cutoff = parse_date(cutoff)
    tallies: dict[str, dict[str, _Tally]] = {}

    for match in frames:
        if match.date > cutoff:
            continue
        for f in match.frames:
            for player, team, side in (
                (f.home_player, match.home, FrameWinner.HOME),
                (f.away_player, match.away, FrameWinner.AWAY),
            ):
                per_team = tallies.setdefault(player, {})
                tally = per_team.setdefault(team, _Tally(team=team, division=match.division))
                tally.played += 1
                won = f.winner == side
                if won:
                    tally.won += 1
                if f.break_dish:
                    if won:
                        tally.bd_for += 1
                    else:
                        tally.bd_against += 1
                if f.forfeit:
                    tally.forfeits += 1

    result: dict[str, PlayerData2526] = {}
    for name, per_team in tallies.items():
        teams = [
            PlayerTeamStats2526(
                team=t.team,
                division=t.division,
                played=t.played,
                won=t.won,
                pct=_pct(t.won, t.played),
                bd_for=t.bd_for,
                bd_against=t.bd_against,
                forfeits=t.forfeits,
            )
            for t in per_team.values()
        ]
        total_p = sum(t.played for t in teams)
        total_w = sum(t.won for t in teams)
        result[name] = PlayerData2526(
            teams=teams,
            total=SeasonTotal(played=total_p, won=total_w, pct=_pct(total_w, total_p)),
        )

    return result


def create_snapshot_as_of(
    ds: DataSources,
    cutoff: date | str,
    frames: list[MatchFrames] | None = None,
) -> DataSources:
    """
    Filter a snapshot to reflect the league as of ``cutoff``.

    Previous-season players and rosters are static and carried over.
    Results after the cutoff become fixtures again, so the season left to
    play at the cutoff is complete.

    Args:
        ds: Full snapshot
        cutoff: Last date to include (inclusive)
        frames: Frame history to use (defaults to ``ds.frames``)

    Returns:
        New DataSources with filtered results/frames and rebuilt player stats
    """
    cutoff = parse_date(cutoff)
    source_frames = ds.frames if frames is None else frames

    filtered_results = [r for r in ds.results if r.date <= cutoff]
    replayed = [
        Fixture(date=r.date, home=r.home, away=r.away, division=r.division)
        for r in ds.results
        if r.date > cutoff
    ]
    filtered_frames = [f for f in source_frames if f.date <= cutoff]

    logger.debug(
        f"Time machine {cutoff}: kept {len(filtered_results)}/{len(ds.results)} results, "
        f"{len(filtered_frames)}/{len(source_frames)} matches with frames"
    )

    return ds.model_copy(
        update={
            "results": filtered_results,
            "fixtures": sorted(replayed + list(ds.fixtures), key=lambda f: f.date),
            "frames": filtered_frames,
            "players2526": reconstruct_player_stats(filtered_frames, cutoff),
        }
    )


def get_available_match_dates(results: list[MatchResult]) -> list[date]:
    """Sorted unique match dates, for picking a cutoff."""
    return sorted({r.date for r in results})
