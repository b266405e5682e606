"""
Data Processors for league snapshots.

Transforms a raw JSON document (as exported by the data-loading layer) into a
validated, immutable DataSources model.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .models import DataSources, MatchResult

logger = logging.getLogger(__name__)


def process_data_sources(raw: dict[str, Any]) -> DataSources:
    """
    Validate an already-parsed snapshot document.

    Rosters keyed ``"DIV:Team"`` (the upstream format) are re-keyed by
    team name. Results without an explicit division inherit the division of
    their home team.

    Args:
        raw: Dictionary with DataSources keys

    Returns:
        DataSources model

    Raises:
        pydantic.ValidationError: If any record is malformed
    """
    data = dict(raw)

    rosters: dict[str, list[str]] = {}
    for key, names in (data.get("rosters") or {}).items():
        team = key.split(":", 1)[1] if ":" in key else key
        rosters.setdefault(team, [])
        for name in names:
            if name not in rosters[team]:
                rosters[team].append(name)
    data["rosters"] = rosters

    ds = DataSources.model_validate(data)

    team_division = {
        team: code for code, div in ds.divisions.items() for team in div.teams
    }
    if any(not r.division for r in ds.results):
        results = [
            r if r.division else r.model_copy(update={"division": team_division.get(r.home, "")})
            for r in ds.results
        ]
        ds = ds.model_copy(update={"results": results})

    logger.info(
        f"Loaded snapshot: {len(ds.divisions)} divisions, {len(ds.results)} results, "
        f"{len(ds.fixtures)} fixtures, {len(ds.players2526)} current-season players"
    )
    return ds


def load_data_sources(path: Path | str) -> DataSources:
    """
    Load a snapshot JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If any record is malformed
    """
    path = Path(path)
    logger.debug(f"Reading snapshot from {path}")
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    return process_data_sources(raw)


def results_for_division(ds: DataSources, division: str) -> list[MatchResult]:
    """Results whose home team belongs to the division."""
    teams = set(ds.division_teams(division))
    return [r for r in ds.results if r.home in teams]
