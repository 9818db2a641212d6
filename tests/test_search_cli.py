import argparse
import json

import pytest

from foodtrucks.core import config
from foodtrucks.jobs import search_cli


class DummySettings:
    def __init__(self, data_path="Mobile_Food_Facility_Permit.csv"):
        self.google_maps_api_key = "abc"
        self.data_path = data_path
        self.strict_load = False
        self.lookup_workers = 1
        self.lookup_timeout = 10.0


@pytest.fixture(autouse=True)
def settings(monkeypatch, fixture_csv):
    dummy = DummySettings(data_path=str(fixture_csv))
    monkeypatch.setattr(search_cli, "get_settings", lambda: dummy)
    return dummy


def test_build_parser_defaults(fixture_csv):
    parser = search_cli.build_parser()
    args = parser.parse_args([])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.keyword is None
    assert args.newest is False
    assert args.data_path == str(fixture_csv)


def test_main_prints_json(capsys):
    search_cli.main(["--search", "pretzel", "--newest"])
    results = json.loads(capsys.readouterr().out)
    assert len(results) == 4
    assert results[0]["received"] >= results[-1]["received"]


def test_main_uses_retriever_for_location(monkeypatch, capsys, retriever):
    monkeypatch.setattr(search_cli, "default_retriever_factory", lambda: retriever)
    search_cli.main(["--lat", "37.7921505484", "--lon", "-122.393999"])
    assert len(json.loads(capsys.readouterr().out)) == 6


def test_main_rejects_lone_coordinate():
    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--lat", "37.79"])
    assert excinfo.value.code == 2


def test_main_exits_on_missing_api_key(monkeypatch):
    def missing_key():
        raise config.ConfigError("GOOGLE_MAPS_API_KEY must be set")

    monkeypatch.setattr(search_cli, "default_retriever_factory", missing_key)
    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--lat", "37.79", "--lon", "-122.39"])
    assert excinfo.value.code == 2


def test_main_exits_on_missing_dataset(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--data", str(tmp_path / "missing.csv")])
    assert excinfo.value.code == 1


@pytest.mark.parametrize("coordinate", ["nan", "inf"])
def test_main_rejects_non_finite_coordinates(monkeypatch, retriever, coordinate):
    monkeypatch.setattr(search_cli, "default_retriever_factory", lambda: retriever)
    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--lat", coordinate, "--lon", "-122.39"])
    assert excinfo.value.code == 2
    assert retriever.calls == []
