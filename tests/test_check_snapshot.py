import json

import pytest

from ops.check_snapshot import main, shape_problems


def _good():
    def scope(top):
        return {
            "layer7": {"timeseries": {}, "summary": {}, top: []},
            "layer3": {"timeseries": {}, "protocol": {}},
            "bot": {"class": {}},
        }

    return {"timestamp": "2026-01-05T00:05:03.456Z", "updated": "2026/1/5 9:05:03",
            "global": scope("locations"), "japan": scope("sources")}


def test_good_snapshot_has_no_problems():
    assert shape_problems(_good()) == []


def test_swapped_top_key_is_reported():
    snap = _good()
    snap["japan"]["layer7"]["locations"] = snap["japan"]["layer7"].pop("sources")
    problems = shape_problems(snap)
    assert any("japan.layer7: missing ['sources']" in p for p in problems)
    assert any("japan.layer7: unexpected ['locations']" in p for p in problems)


def test_missing_scope_is_reported():
    snap = _good()
    del snap["japan"]
    assert shape_problems(snap) == ["snapshot: missing ['japan']"]


def test_main_writes_status(tmp_path):
    snap_path = tmp_path / "latest.json"
    snap_path.write_text(json.dumps(_good(), indent=2), encoding="utf-8")

    rc = main(["--snapshot", str(snap_path), "--status-dir", str(tmp_path / "live")])

    status = json.loads((tmp_path / "live" / "snapshot_status.json").read_text(encoding="utf-8"))
    assert rc == 0
    assert status["problems"] == []
    assert status["timestamp"] == "2026-01-05T00:05:03.456Z"
    assert len(status["snapshot_sha256"]) == 64


def test_main_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit):
        main(["--snapshot", str(tmp_path / "nope.json"), "--status-dir", str(tmp_path)])


def test_null_scope_is_reported():
    snap = _good()
    snap["global"] = None
    assert shape_problems(snap) == ["global: expected object, got NoneType"]


def test_main_undecodable_file_exits(tmp_path):
    snap_path = tmp_path / "latest.json"
    snap_path.write_bytes(b'{"timestamp": "\xff\xfe"}')

    with pytest.raises(SystemExit) as exc:
        main(["--snapshot", str(snap_path), "--status-dir", str(tmp_path / "live")])

    assert "unreadable" in str(exc.value)
    assert not (tmp_path / "live" / "snapshot_status.json").exists()
