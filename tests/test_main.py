import json

import pytest

from CheckTree import main as cli


TREE = [
    {"id": "A", "name": "Animals", "children": [
        {"id": "B", "name": "Bee"},
        {"id": "C", "name": "Cats", "children": [
            {"id": "D", "name": "Dog"},
            {"id": "E", "name": "Eel", "disabled": True},
        ]},
    ]},
]


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setenv("CHECKTREE_LOG", str(tmp_path / "checktree.log"))


def _write(tmp_path, payload) -> str:
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_cli_any_node_selection_and_query(tmp_path, capsys):
    path = _write(tmp_path, TREE)
    rc = cli.main([path, "--granularity", "any-node", "--select", "A", "--query", "d"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["selected"] == ["A", "B", "C", "D"]
    assert out["expanded"] == ["A", "C"]
    assert out["no_matches"] is False
    assert out["visible"][0]["id"] == "A"
    assert [c["id"] for c in out["visible"][0]["children"]] == ["C"]


def test_cli_accepts_items_wrapper_and_qualified_ids(tmp_path, capsys):
    path = _write(tmp_path, {"items": TREE})
    rc = cli.main([path, "--qualify-ids", "--select", "A.C", "--expand-all"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["selected"] == ["A.C.D"]
    assert out["expanded"] == ["A", "A.C"]
    assert out["granularity"] == "leaf-only"


def test_cli_rejects_duplicate_ids(tmp_path, capsys):
    path = _write(tmp_path, [{"id": "A", "name": "a"}, {"id": "A", "name": "again"}])
    assert cli.main([path]) == 2
    assert "Duplicate node id" in capsys.readouterr().err


def test_cli_reports_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.json")]) == 2
    assert "cannot load" in capsys.readouterr().err


def test_cli_rejects_wrongly_shaped_items(tmp_path, capsys):
    path = _write(tmp_path, {"items": {"id": "A"}})
    assert cli.main([path]) == 2
    assert "cannot load" in capsys.readouterr().err


def test_cli_rejects_string_children(tmp_path, capsys):
    path = _write(tmp_path, [{"id": "A", "name": "a", "children": "xy"}])
    assert cli.main([path]) == 2
    assert "cannot load" in capsys.readouterr().err
