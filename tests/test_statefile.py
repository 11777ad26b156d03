from pathlib import Path

import yaml

from mkinc.state import UpdateState
from mkinc.statefile import load_state, obj_to_state, save_state, state_to_obj
from mkinc.target import Deep, Shallow


def test_save_and_load_state(tmp_path):
    state = UpdateState(
        {
            Shallow(Path("build")): 1_700_000_000_123_456_789,
            Deep(Path("build")): 1_700_000_000_987_654_321,
            Shallow(Path("in.txt")): 42,
        }
    )
    filepath = tmp_path / ".mkstate.yaml"
    save_state(state, filepath)
    loaded = load_state(filepath)
    assert loaded == state, f"{loaded=}"


def test_state_to_obj_is_sorted():
    state = UpdateState({Shallow(Path("b")): 2, Deep(Path("a")): 1})
    obj = state_to_obj(state)
    assert obj == {
        "version": 1,
        "targets": [
            {"kind": "deep", "path": "a", "mtime_ns": 1},
            {"kind": "shallow", "path": "b", "mtime_ns": 2},
        ],
    }, f"{obj=}"


def test_obj_to_state_without_targets():
    state = obj_to_state({"version": 1, "targets": None})
    assert state == UpdateState(), f"{state=}"


def test_load_state_missing_file(tmp_path):
    state = load_state(tmp_path / "nothing.yaml")
    assert state == UpdateState(), f"{state=}"


def test_load_state_invalid_yaml(tmp_path):
    filepath = tmp_path / "state.yaml"
    filepath.write_text("targets: [unclosed\n")
    state = load_state(filepath)
    assert state == UpdateState(), f"{state=}"


def test_load_state_unexpected_shape(tmp_path):
    filepath = tmp_path / "state.yaml"
    for document in [
        "just a string\n",
        "version: 99\ntargets: []\n",
        "version: 1\ntargets:\n- kind: weird\n  path: a\n  mtime_ns: 1\n",
        "version: 1\ntargets:\n- kind: shallow\n  path: a\n  mtime_ns: soon\n",
        "version: 1\ntargets:\n- kind: shallow\n  path: a\n",
    ]:
        filepath.write_text(document)
        state = load_state(filepath)
        assert state == UpdateState(), f"{document=} {state=}"


def test_load_state_directory(tmp_path):
    state = load_state(tmp_path)
    assert state == UpdateState(), f"{state=}"


def test_saved_state_is_yaml(tmp_path):
    filepath = tmp_path / "state.yaml"
    save_state(UpdateState({Deep(Path("assets")): 7}), filepath)
    with open(filepath) as f:
        data = yaml.safe_load(f)
    assert data["targets"] == [{"kind": "deep", "path": "assets", "mtime_ns": 7}]
