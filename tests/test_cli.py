"""Tests for the command-line entry point."""

import json

import pytest

from famtree_layout.cli import main


@pytest.fixture
def tree_file(tree_document, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FAMTREE_LAYOUT_MAX_LAYERS_UP", raising=False)
    monkeypatch.delenv("FAMTREE_LAYOUT_MAX_LAYERS_DOWN", raising=False)
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(tree_document))
    return path


class TestMain:
    """Tests for famtree-layout."""

    def test_prints_layout_json(self, tree_file, capsys):
        assert main([str(tree_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["focusedNode"]["person"]["id"] == "john"
        assert {n["person"]["id"] for n in data["nodes"]} == {"henry", "eleanor", "john", "emma"}

    def test_progress_on_stderr(self, tree_file, capsys):
        main([str(tree_file)])
        err = capsys.readouterr().err
        assert "Found 4 people" in err
        assert "Laid out 4 people" in err

    def test_focus_option(self, tree_file, capsys):
        assert main([str(tree_file), "--focus", "emma"]) == 0
        data = json.loads(capsys.readouterr().out)
        generations = {n["person"]["id"]: n["generation"] for n in data["nodes"]}
        assert generations == {"emma": 0, "john": -1, "henry": -2, "eleanor": -2}

    def test_max_up(self, tree_file, capsys):
        assert main([str(tree_file), "--focus", "emma", "--max-up", "1"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert {n["person"]["id"] for n in data["nodes"]} == {"emma", "john"}

    def test_unknown_focus(self, tree_file, capsys):
        assert main([str(tree_file), "--focus", "nobody"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Could not load tree" in capsys.readouterr().err

    def test_output_file(self, tree_file, tmp_path, capsys):
        out = tmp_path / "layout.dot"
        assert main([str(tree_file), "-o", str(out)]) == 0
        assert out.read_text().startswith("digraph")
        assert "Layout saved" in capsys.readouterr().out

    def test_unsupported_output(self, tree_file, tmp_path):
        assert main([str(tree_file), "-o", str(tmp_path / "layout.png")]) == 1

    def test_validate(self, tree_file, capsys):
        main([str(tree_file), "--validate", "-o", str(tree_file.with_name("out.json"))])
        assert "No validation issues found" in capsys.readouterr().out

    def test_invalid_env_config(self, tree_file, monkeypatch, capsys):
        monkeypatch.setenv("FAMTREE_LAYOUT_MAX_LAYERS_UP", "many")
        assert main([str(tree_file)]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_gedcom_input(self, sample_gedcom, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main([str(sample_gedcom), "--focus", "I3"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert {n["person"]["id"] for n in data["nodes"]} == {"I1", "I2", "I3"}
