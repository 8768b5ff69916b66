"""Tests for the command line entry point (dump mode only; no GUI)."""
import json

import vtree.__main__ as vtree_main
import vtree.ui.flat_tree as flat_tree_module
from conftest import node
from vtree.__main__ import build_parser, main
from vtree.core.errors import ProtocolViolation
from vtree.core.storage import save_tree_file


def _write(tmp_path):
    path = tmp_path / "tree.json"
    save_tree_file(str(path), [node("Root", node("Child"))])
    return str(path)


def test_dump_prints_closed_tree(tmp_path, capsys):
    assert main([_write(tmp_path), "--dump"]) == 0
    assert capsys.readouterr().out == "▶ Root\n"


def test_dump_open_all(tmp_path, capsys):
    assert main([_write(tmp_path), "--dump", "--open-all"]) == 0
    assert capsys.readouterr().out == "▼ Root\n  • Child\n"


def test_dump_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json"), "--dump"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("vtree: tree file not found")


def test_parser_defaults():
    args = build_parser().parse_args(["t.json"])
    assert args.verbosity == 0
    assert not args.stdexp
    assert not args.dump
    assert not args.open_all


def test_dump_rejects_repeated_ids(tmp_path, capsys):
    path = tmp_path / "dupes.json"
    path.write_text(json.dumps({"roots": [node("R", node("X"), node("X"))]}), encoding="utf-8")
    assert main([str(path), "--dump", "--open-all"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "duplicate id 'X'" in captured.err


def test_dump_reports_tree_errors(tmp_path, capsys, monkeypatch):
    def broken_load(path):
        return [node("R", open=True)]

    def broken_flatten(source, registry, refresh=False, ignore_inner_state=False):
        raise ProtocolViolation("identity reference to unregistered node 'Z'")

    monkeypatch.setattr(vtree_main, "load_tree_file", broken_load)
    monkeypatch.setattr(flat_tree_module, "flatten_tree", broken_flatten)
    assert main([str(tmp_path / "t.json"), "--dump"]) == 1
    assert capsys.readouterr().err == "vtree: identity reference to unregistered node 'Z'\n"
