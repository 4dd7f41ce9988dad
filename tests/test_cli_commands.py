from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from rrstore import __version__, cli


def test_cli_describe_from_config_with_overrides(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "store.yml"
    config_path.write_text("store:\n  num_levels: 3\n  data_points_in_last_level: 3\n  reducing_factor: 3\n", encoding="utf-8")

    cli.main(["describe", "--config", str(config_path), "--reducer", "min", "--json"])

    layout = json.loads(capsys.readouterr().out)
    assert layout["capacity_samples"] == 81
    assert layout["capacity_data_points"] == 39
    assert layout["config"]["reducer"] == "min"


def test_cli_describe_plain_text(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["describe", "--levels", "2", "--size", "2", "--factor", "2"])

    out = capsys.readouterr().out
    assert "2 levels" in out
    assert "level 1: 2 data points x 2 raw each" in out


def test_cli_replay_emits_samples_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    samples_path = tmp_path / "samples.json"
    samples_path.write_text(json.dumps(list(range(12))), encoding="utf-8")

    cli.main(
        [
            "replay",
            str(samples_path),
            "--levels",
            "2",
            "--size",
            "2",
            "--factor",
            "2",
            "--reducer",
            "max",
            "--json",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert payload["pushed"] == 12
    assert [row["value"] for row in payload["rows"]] == [11.0, 10.0, 9.0, 8.0, 7.0, 7.0, 5.0, 5.0]


def test_cli_replay_writes_data_points(tmp_path: Path) -> None:
    samples_path = tmp_path / "samples.csv"
    pd.DataFrame({"reading": [float(i) for i in range(81)]}).to_csv(samples_path, index=False)
    output_path = tmp_path / "out" / "points.csv"

    cli.main(
        [
            "replay",
            str(samples_path),
            "--value-column",
            "reading",
            "--levels",
            "3",
            "--size",
            "3",
            "--factor",
            "3",
            "--data-points",
            "--output",
            str(output_path),
        ]
    )

    frame = pd.read_csv(output_path)
    assert len(frame) == 39
    assert frame["value"].iloc[0] == pytest.approx(80.0)
    assert frame["value"].iloc[-3:].tolist() == pytest.approx([22.0, 13.0, 4.0])


def test_cli_reducers_and_version(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["reducers", "--json"])
    assert "mean" in json.loads(capsys.readouterr().out)

    cli.main(["version"])
    assert capsys.readouterr().out.strip() == __version__


def test_cli_reports_invalid_layout(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["describe", "--levels", "2", "--size", "5", "--factor", "2"])

    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_overrides_apply_inside_store_section(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "store.json"
    config_path.write_text(
        json.dumps({"store": {"num_levels": 2, "data_points_in_last_level": 4, "reducing_factor": 2}}),
        encoding="utf-8",
    )

    cli.main(["describe", "--config", str(config_path), "--levels", "3", "--json"])

    layout = json.loads(capsys.readouterr().out)
    assert layout["num_levels"] == 3
    assert layout["config"]["data_points_in_last_level"] == 4


def test_cli_rejects_store_section_that_is_not_a_mapping(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "store.yml"
    config_path.write_text("store: 3\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["describe", "--config", str(config_path), "--levels", "2"])

    assert excinfo.value.code == 1
    assert "'store' section must be a mapping" in capsys.readouterr().err
