import json

import pytest

from suitematch.scripts import run_matching


@pytest.fixture
def input_files(tmp_path):
    profile = {
        "minBudget": 600,
        "maxBudget": 1200,
        "preferredCity": "Oakland",
        "preferredLatitude": 37.80,
        "preferredLongitude": -122.27,
    }
    listings = [
        {"id": "near", "price": 900, "city": "Oakland", "latitude": 37.80, "longitude": -122.27},
        {"id": "cheap", "price": 700, "city": "Oakland"},
        {"id": "far", "price": 900, "latitude": 34.05, "longitude": -118.24},
    ]
    profile_path = tmp_path / "profile.json"
    listings_path = tmp_path / "listings.json"
    profile_path.write_text(json.dumps(profile), encoding="utf-8")
    listings_path.write_text(json.dumps(listings), encoding="utf-8")
    return str(profile_path), str(listings_path)


def test_build_config_reads_weights_file(tmp_path):
    weights_path = tmp_path / "weights.json"
    weights_path.write_text(json.dumps({"price": 1, "city": 9}), encoding="utf-8")

    config = run_matching.build_config(str(weights_path), top_n=2, max_distance_km=10)

    assert config.weights.price == 1
    assert config.weights.city == 9
    assert config.weights.distance == 3.0
    assert config.top_n == 2
    assert config.max_distance_km == 10


def test_run_prints_json_ranking(input_files, capsys):
    profile_path, listings_path = input_files
    config = run_matching.build_config(max_distance_km=50)

    assert run_matching.run(profile_path, listings_path, config, as_json=True) == 0

    output = json.loads(capsys.readouterr().out)
    assert [item["id"] for item in output] == ["near", "cheap"]
    assert output[0]["reasons"][0] == "precio dentro del presupuesto: $900"


def test_run_sharded_matches_sequential(input_files, capsys):
    profile_path, listings_path = input_files
    config = run_matching.build_config()

    run_matching.run(profile_path, listings_path, config, as_json=True)
    sequential = [item["id"] for item in json.loads(capsys.readouterr().out)]
    run_matching.run(profile_path, listings_path, config, shards=2, as_json=True)
    sharded = [item["id"] for item in json.loads(capsys.readouterr().out)]

    assert sharded == sequential


def test_run_prints_text_ranking(input_files, capsys):
    profile_path, listings_path = input_files
    run_matching.run(profile_path, listings_path, run_matching.build_config(top_n=1))

    out = capsys.readouterr().out
    assert "1. near" in out
    assert "misma ciudad: oakland" in out
    assert "cheap" not in out


def test_main_exits_1_on_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(
        "sys.argv",
        ["run_matching", "--profile", str(tmp_path / "nope.json"), "--listings", str(tmp_path / "nope.json")],
    )
    with pytest.raises(SystemExit) as exc:
        run_matching.main()
    assert exc.value.code == 1


def test_main_exits_1_on_invalid_profile(input_files, tmp_path, monkeypatch):
    _, listings_path = input_files
    bad_profile = tmp_path / "bad.json"
    bad_profile.write_text("[1, 2, 3]", encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["run_matching", "--profile", str(bad_profile), "--listings", listings_path])
    with pytest.raises(SystemExit) as exc:
        run_matching.main()
    assert exc.value.code == 1


def test_main_exits_0(input_files, monkeypatch, capsys):
    profile_path, listings_path = input_files
    monkeypatch.setattr("sys.argv", ["run_matching", "--profile", profile_path, "--listings", listings_path, "--json"])
    with pytest.raises(SystemExit) as exc:
        run_matching.main()
    assert exc.value.code == 0
    assert len(json.loads(capsys.readouterr().out)) == 3
