# tests/unit/test_cli.py

from __future__ import annotations
import sys
from pathlib import Path
import polars as pl
from typer.testing import CliRunner

# Ensure "src" is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import resas.api.client as rc  # type: ignore
from resas.cli import app  # Typer app

from fakes import FakeResponse, FakeSession


def _patch(monkeypatch, responses):
    session = FakeSession(responses)
    monkeypatch.setattr(rc, "Session", lambda: session, raising=True)
    monkeypatch.setattr("resas.downloader.time.sleep", lambda *_: None)
    monkeypatch.setattr("resas.api.client.time.sleep", lambda *_: None)
    return session


def test_cli_downloads_to_parquet(tmp_path: Path, monkeypatch):
    session = _patch(monkeypatch, [
        FakeResponse(200, {"result": [{"prefCode": 13, "prefName": "Tokyo"}]}),
        FakeResponse(200, {"result": [
            {"prefCode": 13, "cityCode": "13101", "cityName": "Chiyoda", "bigCityFlag": "0"},
        ]}),
    ])
    out = tmp_path / "cities.parquet"

    result = CliRunner().invoke(app, ["tok", str(out)], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Fetched prefecture: Tokyo" in result.output
    assert "Saved to" in result.output
    assert pl.read_parquet(out)["city_code"].to_list() == ["13101"]
    assert all(c["headers"] == {"X-API-KEY": "tok"} for c in session.calls)
    assert session.closed


def test_cli_exits_nonzero_on_fatal(tmp_path: Path, monkeypatch):
    _patch(monkeypatch, [FakeResponse(200, {"statusCode": "403", "message": "Forbidden."})])
    out = tmp_path / "cities.parquet"

    result = CliRunner().invoke(app, ["bad", str(out)])

    assert result.exit_code == 1
    assert not out.exists()


def test_cli_bad_config(tmp_path: Path, monkeypatch):
    _patch(monkeypatch, [])
    cfg = tmp_path / "c.yaml"
    cfg.write_text("retry: { attempts: nope }\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["tok", str(tmp_path / "o.parquet"), "--config", str(cfg)])

    assert result.exit_code == 1


def test_cli_invalid_configs_exit_cleanly(tmp_path: Path, monkeypatch):
    bodies = [
        "retry: { interval: -1 }\n",
        "retry: [unclosed\n",
        "downloader: { interval_millis: -200 }\n",
    ]
    for i, body in enumerate(bodies):
        session = _patch(monkeypatch, [])
        cfg = tmp_path / f"c{i}.yaml"
        cfg.write_text(body, encoding="utf-8")

        result = CliRunner().invoke(app, ["tok", str(tmp_path / "o.parquet"), "--config", str(cfg)])

        assert result.exit_code == 1, body
        assert result.exception is None or isinstance(result.exception, SystemExit), body
        assert session.calls == []
