"""Test atomic filesystem operations.

Tests for inkflow.utils.fs:
    - Atomic writes leave no tmp file behind
    - YAML roundtrip preserves structure and key order
    - Image export accepts uint8 and float arrays, rejects bad shapes
    - ensure_dir creates parents

Run:
    pytest tests/test_fs.py -v
"""

import numpy as np
import pytest
import yaml
from PIL import Image

from inkflow.utils import fs


def test_ensure_dir(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    result = fs.ensure_dir(target)
    assert result == target
    assert target.is_dir()
    # Idempotent
    fs.ensure_dir(target)


def test_atomic_write_bytes(tmp_path):
    path = tmp_path / "sub" / "data.bin"
    fs.atomic_write_bytes(path, b"abc")
    assert path.read_bytes() == b"abc"
    assert [p.name for p in (tmp_path / "sub").iterdir()] == ["data.bin"]

    fs.atomic_write_bytes(path, b"replaced")
    assert path.read_bytes() == b"replaced"


def test_atomic_write_text(tmp_path):
    path = tmp_path / "note.svg"
    fs.atomic_write_text(path, "<svg/>")
    assert path.read_text(encoding="utf-8") == "<svg/>"


def test_atomic_write_failure_raises(tmp_path):
    # Target is an existing directory: rename must fail
    target = tmp_path / "taken"
    target.mkdir()
    (target / "child").write_text("x")
    with pytest.raises(RuntimeError, match="atomically"):
        fs.atomic_write_bytes(target, b"data")
    assert not (tmp_path / "taken.tmp").exists()


def test_yaml_roundtrip(tmp_path):
    payload = {"schema": "x.v1", "items": [{"b": 1, "a": 2.5}], "flag": True}
    path = tmp_path / "doc.yaml"
    fs.atomic_yaml_dump(payload, path)

    assert fs.load_yaml(path) == payload
    text = path.read_text(encoding="utf-8")
    assert text.index("schema") < text.index("items")


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "nope.yaml")


def test_load_yaml_invalid(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        fs.load_yaml(path)


def test_atomic_save_image_uint8(tmp_path):
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    img[..., 0] = 200
    path = tmp_path / "out" / "img.png"
    fs.atomic_save_image(img, path)

    with Image.open(path) as loaded:
        assert loaded.size == (6, 4)
        assert loaded.mode == "RGB"
        assert np.asarray(loaded)[0, 0, 0] == 200
    assert list((tmp_path / "out").iterdir()) == [path]


def test_atomic_save_image_float_rgba(tmp_path):
    img = np.ones((3, 3, 4), dtype=np.float32)
    img[..., 3] = 0.5
    path = tmp_path / "img.png"
    fs.atomic_save_image(img, path)

    with Image.open(path) as loaded:
        assert loaded.mode == "RGBA"
        assert np.asarray(loaded)[1, 1, 3] == 128


def test_atomic_save_image_bad_shape(tmp_path):
    with pytest.raises(ValueError, match="Expected"):
        fs.atomic_save_image(np.zeros((4, 4)), tmp_path / "x.png")
