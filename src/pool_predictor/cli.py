"""
Pool Predictor Command Line Interface.

Built with Typer for a modern, type-safe CLI experience. Every command
reads a league snapshot JSON (``--data``, default from settings).
"""

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import get_settings
from .data import (
    DataSources,
    LockedPosition,
    SquadOverride,
    SquadOverrides,
    WhatIfResult,
    load_data_sources,
)

app = typer.Typer(
    name="pool-predictor",
    help="Pool League Predictor - ratings, simulations and lineups for 10-frame pool leagues",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()

DATA_OPTION_HELP = "League snapshot JSON (defaults to DATA_FILE setting)"


def load_snapshot(data: Path | None) -> DataSources:
    """Load the snapshot or exit with an error message."""
    path = data or get_settings().app.data_file
    try:
        return load_data_sources(path)
    except FileNotFoundError:
        console.print(f"[red]Snapshot not found: {path}[/red]")
        raise typer.Exit(1)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid snapshot {path}: {e}[/red]")
        raise typer.Exit(1)


def parse_what_if(text: str) -> WhatIfResult:
    """
    Parse ``HOME:AWAY:H-A`` into a WhatIfResult.

    Raises:
        ValueError: On a malformed string or out-of-range score
    """
    parts = text.split(":")
    if len(parts) != 3:
        raise ValueError(f"Expected HOME:AWAY:H-A, got {text!r}")
    home, away, score = (p.strip() for p in parts)
    try:
        home_score, away_score = (int(s) for s in score.split("-"))
    except ValueError:
        raise ValueError(f"Bad score {score!r} in {text!r}") from None
    try:
        return WhatIfResult(home=home, away=away, home_score=home_score, away_score=away_score)
    except ValidationError as e:
        raise ValueError(f"Bad what-if {text!r}: {e.errors()[0]['msg']}") from None


def parse_squad_overrides(added: list[str], removed: list[str]) -> SquadOverrides:
    """
    Build squad overrides from ``TEAM:PLAYER`` strings.

    Raises:
        ValueError: If an entry has no ``:`` separator
    """
    changes: dict[str, dict[str, list[str]]] = {}
    for kind, entries in (("added", added), ("removed", removed)):
        for text in entries:
            team, sep, player = text.partition(":")
            if not sep or not team.strip() or not player.strip():
                raise ValueError(f"Expected TEAM:PLAYER, got {text!r}")
            team_changes = changes.setdefault(team.strip(), {"added": [], "removed": []})
            team_changes[kind].append(player.strip())
    return {team: SquadOverride(**c) for team, c in changes.items()}


def parse_lock(text: str) -> LockedPosition:
    """
    Parse ``SET:POSITION:PLAYER`` into a LockedPosition.

    Raises:
        ValueError: On a malformed string or out-of-range slot
    """
    parts = text.split(":", 2)
    if len(parts) != 3 or not parts[2].strip():
        raise ValueError(f"Expected SET:POSITION:PLAYER, got {text!r}")
    try:
        set_number, position = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Bad set or position in {text!r}") from None
    try:
        return LockedPosition(player=parts[2].strip(), set_number=set_number, position=position)
    except ValidationError as e:
        raise ValueError(f"Bad lock {text!r}: {e.errors()[0]['msg']}") from None


def _simulator(seed: int | None, iterations: int | None, season: bool):
    from .predictions import MonteCarloSimulator

    sim_settings = get_settings().simulation
    if iterations is not None:
        if iterations < 1:
            console.print("[red]Iterations must be at least 1[/red]")
            raise typer.Exit(1)
        key = "season_iterations" if season else "match_iterations"
        sim_settings = sim_settings.model_copy(update={key: iterations})
    return MonteCarloSimulator(seed=seed, settings=sim_settings)


def _pct(value: float) -> str:
    return f"{value:.1f}%"


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Pool League Predictor.

    Standings, team strengths, match and season simulations, lineup
    suggestions and player analytics from a league snapshot.
    """
    level = "DEBUG" if verbose else get_settings().app.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@app.command()
def standings(
    division: str = typer.Argument(..., help="Division code"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show the league table for a division."""
    from .predictions import calc_standings

    ds = load_snapshot(data)
    table_rows = calc_standings(division, ds)
    if not table_rows:
        console.print(f"[yellow]No teams in division {division}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"{ds.divisions[division].name} Standings")
    table.add_column("#", style="dim")
    table.add_column("Team", style="white")
    for col in ("P", "W", "D", "L", "F", "A", "Diff"):
        table.add_column(col, justify="right")
    table.add_column("Pts", style="green", justify="right")

    for pos, s in enumerate(table_rows, 1):
        table.add_row(
            str(pos), s.team, str(s.played), str(s.won), str(s.drawn), str(s.lost),
            str(s.frames_for), str(s.frames_against), f"{s.diff:+d}", str(s.points),
        )
    console.print(table)


@app.command()
def strengths(
    division: str = typer.Argument(..., help="Division code"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show team strengths for a division."""
    from .predictions import calc_team_strength

    ds = load_snapshot(data)
    values = calc_team_strength(division, ds)
    if not values:
        console.print(f"[yellow]No teams in division {division}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Team Strength: {division}")
    table.add_column("Team", style="white")
    table.add_column("Strength", style="cyan", justify="right")
    for team, value in sorted(values.items(), key=lambda kv: kv[1], reverse=True):
        table.add_row(team, f"{value:+.3f}")
    console.print(table)


@app.command()
def predict(
    home: str = typer.Argument(..., help="Home team"),
    away: str = typer.Argument(..., help="Away team"),
    iterations: int = typer.Option(None, "--iterations", "-n", help="Matches to simulate"),
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Predict a single fixture."""
    ds = load_snapshot(data)
    sim = _simulator(seed, iterations, season=False)
    result = sim.predict_fixture(home, away, ds)

    console.print(Panel(f"[bold]{home}[/bold] v [bold]{away}[/bold]", style="blue"))
    summary = Table(show_header=False)
    summary.add_column("Item", style="cyan")
    summary.add_column("Value", style="white")
    summary.add_row("Home win", _pct(result.p_home_win))
    summary.add_row("Draw", _pct(result.p_draw))
    summary.add_row("Away win", _pct(result.p_away_win))
    summary.add_row("Expected frames", f"{result.expected_home:.1f} - {result.expected_away:.1f}")
    console.print(summary)

    scores = Table(title="Most likely scores")
    scores.add_column("Score", style="white")
    scores.add_column("Chance", style="green", justify="right")
    for s in result.top_scores:
        scores.add_row(s.score, _pct(s.pct))
    console.print(scores)


@app.command()
def simulate(
    division: str = typer.Argument(..., help="Division code"),
    iterations: int = typer.Option(None, "--iterations", "-n", help="Season replays"),
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed"),
    what_if: list[str] = typer.Option(
        None, "--what-if", "-w", help="Locked result HOME:AWAY:H-A (repeatable)"
    ),
    add: list[str] = typer.Option(None, "--add", help="Add a player to a squad, TEAM:PLAYER (repeatable)"),
    remove: list[str] = typer.Option(
        None, "--remove", help="Remove a player from a squad, TEAM:PLAYER (repeatable)"
    ),
    top_n: int = typer.Option(None, "--top-n", help="Rate squad changes on each team's top N players"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Simulate the rest of a division's season."""
    ds = load_snapshot(data)
    try:
        what_ifs = [parse_what_if(w) for w in what_if or []]
        overrides = parse_squad_overrides(add or [], remove or [])
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    sim = _simulator(seed, iterations, season=True)
    projections = sim.simulate_season(
        division, ds, squad_overrides=overrides, squad_top_n=top_n, what_if_results=what_ifs
    )
    if not projections:
        console.print(f"[yellow]No teams in division {division}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Season Projection: {division} ({sim.settings.season_iterations} runs)")
    table.add_column("Team", style="white")
    table.add_column("Pts", justify="right")
    table.add_column("Avg Pts", style="cyan", justify="right")
    table.add_column("Title", style="green", justify="right")
    table.add_column("Top 2", style="green", justify="right")
    table.add_column("Bottom 2", style="red", justify="right")
    for p in projections:
        table.add_row(
            p.team, str(p.current_pts), f"{p.avg_pts:.1f}",
            _pct(p.p_title), _pct(p.p_top2), _pct(p.p_bot2),
        )
    console.print(table)


@app.command()
def importance(
    division: str = typer.Argument(..., help="Division code"),
    team: str = typer.Argument(..., help="Team to evaluate"),
    iterations: int = typer.Option(None, "--iterations", "-n", help="Season replays per scenario"),
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Rank a team's remaining fixtures by their effect on a top-2 finish."""
    from .analysis import calc_fixture_importance

    ds = load_snapshot(data)
    sim = _simulator(seed, iterations, season=True)
    ranked = calc_fixture_importance(
        division, team, None, None, [], ds,
        iterations=sim.settings.season_iterations, rng=sim.rng,
    )
    if not ranked:
        console.print(f"[yellow]No remaining fixtures for {team}[/yellow]")
        return

    table = Table(title=f"Fixture Importance: {team}")
    table.add_column("Date", style="dim")
    table.add_column("Fixture", style="white")
    table.add_column("Top 2 if win", style="green", justify="right")
    table.add_column("Top 2 if loss", style="red", justify="right")
    table.add_column("Swing", style="cyan", justify="right")
    for fi in ranked:
        table.add_row(
            fi.date.isoformat(), f"{fi.home} v {fi.away}",
            _pct(fi.p_top2_if_win), _pct(fi.p_top2_if_loss), f"{fi.importance:.1f}",
        )
    console.print(table)


@app.command()
def lineup(
    team: str = typer.Argument(..., help="Your team"),
    opponent: str = typer.Argument(..., help="Opposing team"),
    away: bool = typer.Option(False, "--away", help="Playing away"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Suggest Set 1 and Set 2 lineups against an opponent."""
    from .optimizer import format_insights, suggest_lineup

    ds = load_snapshot(data)
    suggestion = suggest_lineup(team, opponent, not away, ds.frames, ds.players2526, ds.rosters)

    for label, players in (("Set 1", suggestion.set1), ("Set 2", suggestion.set2)):
        table = Table(title=label)
        table.add_column("Player", style="white")
        table.add_column("Score", style="cyan", justify="right")
        table.add_column("Adj %", justify="right")
        table.add_column("Form %", justify="right")
        table.add_column("H2H", justify="right")
        for s in players:
            table.add_row(
                s.name, f"{s.score:.1f}", f"{s.adj_pct:.1f}",
                f"{s.form_pct:.0f}" if s.form_pct is not None else "-",
                f"{s.h2h_advantage:+d}",
            )
        console.print(table)

    for line in format_insights(suggestion.insights):
        console.print(f"[yellow]•[/yellow] {line}")


@app.command()
def optimize(
    team: str = typer.Argument(..., help="Your team"),
    opponent: str = typer.Argument(..., help="Opposing team"),
    away: bool = typer.Option(False, "--away", help="Playing away"),
    unavailable: list[str] = typer.Option(None, "--unavailable", "-u", help="Unavailable player (repeatable)"),
    lock: list[str] = typer.Option(None, "--lock", "-l", help="Locked slot SET:POSITION:PLAYER (repeatable)"),
    alternatives: int = typer.Option(0, "--alternatives", "-a", help="Near-optimal lineups to show"),
    iterations: int = typer.Option(None, "--iterations", "-n", help="Matches simulated per lineup"),
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Build a full lineup around availability and locked positions."""
    from .data import PlayerAvailability
    from .optimizer import generate_alternative_lineups, optimize_lineup_with_locks
    from .predictions import get_team_players

    ds = load_snapshot(data)
    try:
        locks = [parse_lock(text) for text in lock or []]
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    availability = None
    if unavailable:
        out = set(unavailable)
        availability = [
            PlayerAvailability(name=p.name, available=p.name not in out) for p in get_team_players(team, ds)
        ]

    sim = _simulator(seed, iterations, season=False)
    kwargs = dict(
        availability=availability, locks=locks,
        iterations=sim.settings.match_iterations, rng=sim.rng,
    )
    best = optimize_lineup_with_locks(team, opponent, not away, ds, **kwargs)
    if best is None:
        console.print(f"[yellow]Not enough available rated players to fill a lineup for {team}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Optimised lineup: {team} v {opponent}")
    table.add_column("Slot", style="dim")
    table.add_column("Set 1", style="white")
    table.add_column("Set 2", style="white")
    for i, (p1, p2) in enumerate(zip(best.set1, best.set2), 1):
        table.add_row(str(i), p1, p2)
    console.print(table)

    wp = best.win_probability
    console.print(
        f"Win {_pct(wp.p_win)}  Draw {_pct(wp.p_draw)}  Loss {_pct(wp.p_loss)}  "
        f"Expected {wp.expected_for:.1f} - {wp.expected_against:.1f}"
    )

    if alternatives > 0:
        alts = generate_alternative_lineups(best, team, opponent, not away, ds, n=alternatives, **kwargs)
        alt_table = Table(title="Alternatives")
        alt_table.add_column("#", style="dim")
        alt_table.add_column("Swap", style="white")
        alt_table.add_column("Win", style="green", justify="right")
        alt_table.add_column("Diff", style="red", justify="right")
        for alt in alts:
            incoming = next(n for n in alt.lineup.players if n not in best.players)
            outgoing = next(n for n in best.players if n not in alt.lineup.players)
            alt_table.add_row(
                str(alt.rank), f"{incoming} for {outgoing}",
                _pct(alt.lineup.win_probability.p_win), f"{-alt.probability_diff:+.1f}",
            )
        console.print(alt_table)


@app.command()
def schedule(
    division: str = typer.Argument(..., help="Division code"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Rank a division's teams by strength of schedule."""
    from .analysis import calc_all_schedule_strengths

    ds = load_snapshot(data)
    schedules = calc_all_schedule_strengths(division, ds)
    if not schedules:
        console.print(f"[yellow]No teams in division {division}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Strength of Schedule: {division}")
    table.add_column("#", style="dim")
    table.add_column("Team", style="white")
    table.add_column("Played", justify="right")
    table.add_column("Remaining", style="cyan", justify="right")
    table.add_column("Combined", justify="right")
    for s in schedules:
        table.add_row(
            str(s.rank), s.team, f"{s.completed:+.3f}", f"{s.remaining:+.3f}", f"{s.combined:+.3f}"
        )
    console.print(table)


@app.command()
def form(
    player: str = typer.Argument(..., help="Player name"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show a player's recent form."""
    from .analysis import calc_player_form

    ds = load_snapshot(data)
    fa = calc_player_form(player, ds.frames)
    if not fa.has_games:
        console.print(f"[yellow]No frames found for {player}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Form: {player}", show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="white")
    for label, window in (("Last 5", fa.last5), ("Last 8", fa.last8), ("Last 10", fa.last10)):
        if window is not None:
            table.add_row(label, f"{window.won}/{window.played} ({window.pct:.0f}%)")
    table.add_row("Season", f"{fa.season_pct:.0f}%")
    table.add_row("Trend", str(fa.trend))
    table.add_row("Streak", f"{fa.streak.count} {fa.streak.type}")
    table.add_row("Momentum", f"{fa.momentum:+.2f}")
    console.print(table)


@app.command()
def h2h(
    player_a: str = typer.Argument(..., help="First player"),
    player_b: str = typer.Argument(..., help="Second player"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show the head-to-head record between two players."""
    from .analysis import analyze_h2h

    ds = load_snapshot(data)
    analysis = analyze_h2h(player_a, player_b, ds.frames)
    if analysis is None:
        console.print(f"[yellow]{player_a} and {player_b} have not met[/yellow]")
        return

    rec = analysis.record
    console.print(Panel(f"[bold]{player_a}[/bold] {rec.wins} - {rec.losses} [bold]{player_b}[/bold]"))
    console.print(f"[cyan]Advantage:[/cyan] {analysis.advantage} ({analysis.win_pct:.0f}%)")
    console.print(f"[cyan]Confidence:[/cyan] {analysis.confidence:.0%}")
    recent = " ".join("W" if won else "L" for _, won in analysis.recent_form)
    console.print(f"[cyan]Recent:[/cyan] {recent}")


@app.command()
def bd(
    player: str = typer.Argument(..., help="Player name"),
    division: str = typer.Option(None, "--division", help="Only count this division"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show a player's break-and-dish profile."""
    from .analysis import calc_bd_stats

    ds = load_snapshot(data)
    if player not in ds.players2526:
        console.print(f"[red]Player not found: {player}[/red]")
        raise typer.Exit(1)
    stats = calc_bd_stats(ds.players2526, player=player, division=division)

    table = Table(title=f"Break and Dish: {player}", show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Frames", str(stats.games))
    table.add_row("BD for", f"{stats.bd_for} ({stats.bd_for_rate:.2f}/frame)")
    table.add_row("BD against", f"{stats.bd_against} ({stats.bd_against_rate:.2f}/frame)")
    table.add_row("Net", f"{stats.net:+d}")
    table.add_row("Efficiency", f"{stats.efficiency:.0%}" if stats.efficiency is not None else "n/a")
    table.add_row("Forfeit rate", f"{stats.forfeit_rate:.0%}")
    console.print(table)


@app.command()
def scout(
    team: str = typer.Argument(..., help="Team to scout"),
    data: Path = typer.Option(None, "--data", "-d", help=DATA_OPTION_HELP),
) -> None:
    """Show a scouting report on a team."""
    from .analysis.scouting import generate_scouting_report

    ds = load_snapshot(data)
    report = generate_scouting_report(team, ds)

    console.print(Panel(f"[bold]Scouting: {team}[/bold] ({report.division or 'no division'})", style="blue"))
    console.print(f"[cyan]Form:[/cyan] {' '.join(report.team_form) or '-'}")
    ha = report.home_away
    console.print(
        f"[cyan]Home:[/cyan] {ha.home.won}/{ha.home.played} won   "
        f"[cyan]Away:[/cyan] {ha.away.won}/{ha.away.played} won"
    )
    if report.set_performance is not None:
        sp = report.set_performance
        console.print(
            f"[cyan]Sets:[/cyan] Set 1 {sp.set1.pct:.0f}%, Set 2 {sp.set2.pct:.0f}% (bias {sp.bias:+.0f})"
        )
    console.print(f"[cyan]Forfeit rate:[/cyan] {report.forfeit_rate:.0%}")

    table = Table(title="Key players")
    table.add_column("", style="dim")
    table.add_column("Player", style="white")
    table.add_column("Adj %", justify="right")
    table.add_column("Frames", justify="right")
    for label, group in (("Strong", report.strongest_players), ("Weak", report.weakest_players)):
        for p in group:
            table.add_row(label, p.name, f"{p.adj_pct:.1f}", str(p.played))
    console.print(table)

    likely = report.predicted_lineup.likely_players
    console.print(f"[cyan]Likely lineup:[/cyan] {', '.join(likely) or '-'}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pool Predictor[/bold] v{__version__}")
    console.print("League predictions and lineup suggestions for 10-frame pool leagues")


if __name__ == "__main__":
    app()
