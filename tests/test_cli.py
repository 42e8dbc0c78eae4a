"""Tests for the graphview CLI."""

import json

import pytest

from graphview.cli import main


@pytest.fixture
def graph_file(tmp_path, people_graph):
    path = tmp_path / "people.json"
    path.write_text(json.dumps(people_graph), encoding="utf-8")
    return path


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


def test_no_command_prints_help(capsys):
    assert _run([]) == 1
    assert "usage" in capsys.readouterr().out


def test_render_writes_html(graph_file, tmp_path, capsys):
    out = tmp_path / "site" / "graph.html"
    assert _run(["render", str(graph_file), "--out", str(out)]) == 0
    assert out.exists()
    assert "alice" in out.read_text(encoding="utf-8")
    stdout = capsys.readouterr().out
    assert "[OK] Render complete" in stdout
    assert "Nodes: 5  Edges: 3" in stdout


def test_render_with_filters(graph_file, tmp_path, capsys):
    out = tmp_path / "graph.html"
    code = _run(["render", str(graph_file), "--out", str(out), "--filter", "Person", "--filter", "Location"])
    assert code == 0
    assert "Nodes: 3  Edges: 1" in capsys.readouterr().out


def test_render_quiet(graph_file, tmp_path, capsys):
    out = tmp_path / "graph.html"
    assert _run(["render", str(graph_file), "--out", str(out), "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_render_lists_exclusions(tmp_path, capsys):
    graph = tmp_path / "bad.json"
    graph.write_text(json.dumps({"nodes": [{"id": "a"}], "links": [{"source": "a", "target": "b"}]}), encoding="utf-8")
    assert _run(["render", str(graph), "--out", str(tmp_path / "out.html")]) == 0
    stdout = capsys.readouterr().out
    assert "Excluded: 1" in stdout
    assert "DANGLING_EDGE" in stdout


def test_render_with_config(graph_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"palette": ["#0f0f0f"]}), encoding="utf-8")
    out = tmp_path / "graph.html"
    assert _run(["render", str(graph_file), "--out", str(out), "--config", str(config)]) == 0
    assert "#0f0f0f" in out.read_text(encoding="utf-8")


def test_render_missing_graph(tmp_path, capsys):
    assert _run(["render", str(tmp_path / "nope.json"), "--out", str(tmp_path / "o.html")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_render_bad_config(graph_file, tmp_path, capsys):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"palette": []}), encoding="utf-8")
    assert _run(["render", str(graph_file), "--out", str(tmp_path / "o.html"), "--config", str(config)]) == 1
    assert "Invalid config" in capsys.readouterr().err


def test_legend_text(graph_file, capsys):
    assert _run(["legend", str(graph_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Nodes: 5 | Edges: 3"
    assert lines[1].endswith("Location (1)")
    assert lines[2].endswith("Organization (1)")
    assert lines[3].endswith("Person (2)")
    assert len(lines) == 4


def test_legend_json(graph_file, capsys):
    assert _run(["legend", str(graph_file), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["node_count"] == 5
    assert payload["summary"]["types"] == ["Default", "Location", "Organization", "Person"]
    assert [e["type"] for e in payload["legend"]] == ["Location", "Organization", "Person"]


def test_list(tmp_path, graph_file, capsys):
    (tmp_path / "other.json").write_text("{}", encoding="utf-8")
    assert _run(["list", str(tmp_path)]) == 0
    assert capsys.readouterr().out.splitlines() == ["other.json", "people.json"]


def test_list_not_a_directory(tmp_path, capsys):
    assert _run(["list", str(tmp_path / "missing")]) == 1
    assert "Not a directory" in capsys.readouterr().err
