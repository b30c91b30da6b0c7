"""Integration tests for the command line interface."""

import json

import pytest

from dcm.__main__ import main


@pytest.fixture
def initialized(tmp_path) -> None:
    assert main(["init", "--data-dir", str(tmp_path / "data")]) == 0


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_init_creates_files(tmp_path, initialized) -> None:
    assert (tmp_path / "data" / "config.yaml").exists()
    assert (tmp_path / "data" / "roster.yaml").exists()


def test_init_is_idempotent(tmp_path, initialized) -> None:
    roster = tmp_path / "data" / "roster.yaml"
    roster.write_text("participants: []\n")

    assert main(["init", "--data-dir", str(tmp_path / "data")]) == 0
    assert roster.read_text() == "participants: []\n"


def test_config_command(capsys) -> None:
    assert main(["config"]) == 0
    assert "Leverage Bound: 5x" in capsys.readouterr().out


def test_calculate_table(initialized, capsys) -> None:
    capsys.readouterr()
    assert main(["calculate"]) == 0

    out = capsys.readouterr().out
    assert "YES wins" in out
    assert "165.6" in out
    assert "134.3" in out
    assert "Losing Pool: $100.00" in out
    assert "Unclaimed" not in out


def test_calculate_json_with_overrides(initialized, capsys) -> None:
    capsys.readouterr()
    assert main(["calculate", "--winner", "no", "--leverage", "3", "--format", "json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["winning_side"] == "NO"
    assert data["leverage_bound"] == 3
    assert data["results"][2]["payout"] == pytest.approx(300)


def test_calculate_reports_unclaimed_pool(tmp_path, capsys) -> None:
    roster = tmp_path / "solo.yaml"
    roster.write_text('participants:\n  - {name: solo, stake: 100, confidence: 80, side: "YES"}\n')

    assert main(["calculate", "--roster", str(roster), "--winner", "NO"]) == 0
    assert "Unclaimed: $100.00" in capsys.readouterr().out


def test_calculate_negative_stake(tmp_path, capsys) -> None:
    roster = tmp_path / "bad.yaml"
    roster.write_text(
        "participants:\n"
        '  - {name: A, stake: 10, confidence: 50, side: "YES"}\n'
        '  - {name: B, stake: -4, confidence: 50, side: "NO"}\n'
    )

    assert main(["calculate", "--roster", str(roster)]) == 1
    out = capsys.readouterr().out
    assert "Participant #1 ('B')" in out
    assert "'stake'" in out


def test_calculate_bad_leverage(initialized, capsys) -> None:
    assert main(["calculate", "--leverage", "0.5"]) == 1
    assert "Leverage bound" in capsys.readouterr().out


def test_calculate_missing_roster(capsys) -> None:
    assert main(["calculate", "--roster", "missing.yaml"]) == 1
    assert "Roster file not found" in capsys.readouterr().out


def test_calculate_undecodable_roster(tmp_path, capsys) -> None:
    roster = tmp_path / "binary.yaml"
    roster.write_bytes(b"participants: []\n# \xff\xfe\n")

    assert main(["calculate", "--roster", str(roster)]) == 1
    assert "Failed to read roster" in capsys.readouterr().out
