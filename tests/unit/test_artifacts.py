# tests/unit/test_artifacts.py
import importlib
import json

import numpy as np
import pytest

art = importlib.import_module("ssimgrey.io.artifacts")


def test_write_json_round_trip(tmp_path):
    p = art.write_json(tmp_path / "sub" / "r.json", {"mssim": 0.5})
    assert json.loads(p.read_text(encoding="utf-8")) == {"mssim": 0.5}
    assert sorted(x.name for x in p.parent.iterdir()) == ["r.json"]


def test_failed_write_leaves_no_temp_file(tmp_path, monkeypatch):
    def _boom(fd):
        raise OSError("disk full")

    monkeypatch.setattr(art.os, "fsync", _boom)
    target = tmp_path / "out.json"
    with pytest.raises(OSError):
        art.write_json(target, {"a": 1})
    assert list(tmp_path.iterdir()) == []


def test_failed_write_keeps_previous_file(tmp_path, monkeypatch):
    target = art.write_json(tmp_path / "out.json", {"v": 1})

    def _boom(fd):
        raise OSError("io")

    monkeypatch.setattr(art.os, "fsync", _boom)
    with pytest.raises(OSError):
        art.write_json(target, {"v": 2})
    assert json.loads(target.read_text(encoding="utf-8")) == {"v": 1}
    assert [x.name for x in tmp_path.iterdir()] == ["out.json"]


def test_load_samples_raw_and_npy(tmp_path):
    a = np.arange(12, dtype="<u2")
    a.tofile(tmp_path / "a.raw")
    np.save(tmp_path / "a.npy", a.reshape(3, 4))
    np.testing.assert_array_equal(art.load_samples(tmp_path / "a.raw", dtype="u16"), a)
    assert art.load_samples(tmp_path / "a.npy").shape == (3, 4)


def test_load_samples_unknown_dtype(tmp_path):
    with pytest.raises(ValueError):
        art.load_samples(tmp_path / "a.raw", dtype="f32")
