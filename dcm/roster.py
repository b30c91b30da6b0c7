"""Roster files: participant rows read from YAML/JSON, results written back out.

A roster file looks like:

    winning_side: "YES"      # optional
    participants:
      - {name: A, stake: 100, confidence: 80, side: "YES"}
      - {name: B, stake: 100, confidence: 30, side: "YES"}
      - {name: C, stake: 100, confidence: 60, side: "NO"}
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from dcm.engine import Participant, PayoutReport, Side, coerce_participants
from dcm.exceptions import RosterError

logger = logging.getLogger(__name__)

OutputFormat = Literal["table", "json", "yaml"]

SAMPLE_PARTICIPANTS: list[dict[str, Any]] = [
    {"name": "A", "stake": 100, "confidence": 80, "side": "YES"},
    {"name": "B", "stake": 100, "confidence": 30, "side": "YES"},
    {"name": "C", "stake": 100, "confidence": 60, "side": "NO"},
]


class Roster(BaseModel):
    """Participants plus an optional declared winner."""

    participants: list[Participant] = Field(default_factory=list)
    winning_side: Side | None = None


def _yaml_side(value: Any) -> Any:
    # YAML 1.1 reads unquoted yes/no as booleans
    if value is True:
        return "YES"
    if value is False:
        return "NO"
    return value


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise RosterError(f"Roster file not found: {path}", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RosterError(f"Failed to read roster {path}: {e}", path=str(path)) from e

    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RosterError(f"Failed to parse roster {path}: {e}", path=str(path)) from e


def parse_roster(data: Any, source: str = "<roster>") -> Roster:
    """Build a Roster from an already-decoded document."""
    if isinstance(data, list):
        data = {"participants": data}
    if not isinstance(data, dict):
        raise RosterError(f"Roster {source} must be a mapping or a list", path=source)

    rows = data.get("participants") or []
    if not isinstance(rows, list):
        raise RosterError(f"Roster {source}: 'participants' must be a list", path=source)

    normalized = []
    for row in rows:
        if isinstance(row, dict) and "side" in row:
            row = {**row, "side": _yaml_side(row["side"])}
        normalized.append(row)

    winning_side = _yaml_side(data.get("winning_side"))
    if winning_side is not None and winning_side not in ("YES", "NO"):
        raise RosterError(
            f"Roster {source}: winning_side must be YES or NO, got {winning_side!r}",
            path=source,
        )

    return Roster(
        participants=coerce_participants(normalized),
        winning_side=winning_side,
    )


def load_roster(path: Path) -> Roster:
    """Load a roster from a .yaml/.yml or .json file."""
    path = Path(path)
    roster = parse_roster(_read_document(path), source=str(path))
    logger.info(f"Loaded {len(roster.participants)} participants from {path}")
    return roster


def write_sample_roster(path: Path) -> Path:
    """Write the three-participant sample roster."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "# DCM Roster",
        "# One entry per participant. Quote YES/NO so YAML keeps them as strings.",
        "",
        'winning_side: "YES"',
        "",
        "participants:",
    ]
    for p in SAMPLE_PARTICIPANTS:
        lines.append(
            f'  - {{name: {p["name"]}, stake: {p["stake"]}, '
            f'confidence: {p["confidence"]}, side: "{p["side"]}"}}'
        )
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# ============================================================================
# Result export
# ============================================================================


def results_to_rows(report: PayoutReport, decimals: int | None = None) -> list[dict[str, Any]]:
    """Flatten results into plain dicts, optionally rounding numbers."""
    rows = []
    for result in report.results:
        row = result.model_dump()
        if decimals is not None:
            for key in ("stake", "confidence", "multiplier", "weight", "payout", "profit"):
                row[key] = round(row[key], decimals)
        rows.append(row)
    return rows


def dump_results(report: PayoutReport, fmt: OutputFormat = "json") -> str:
    """Serialize a full report as JSON or YAML."""
    data = report.model_dump(mode="json")
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=2)
