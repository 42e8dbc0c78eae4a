"""Tests for graph document loading."""

import json

import pytest

from graphview.errors import DatasetLoadError
from graphview._internal.io.dataset_file import GraphDirectory, load_dataset


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_node_link_document(tmp_path, people_graph):
    dataset = load_dataset(_write(tmp_path / "people.json", people_graph))
    assert [n.id for n in dataset.nodes] == ["alice", "bob", "acme", "paris", "orphan"]
    assert len(dataset.edges) == 3
    assert dataset.edges[0].label == "knows"


def test_load_edges_spelling(tmp_path):
    path = _write(tmp_path / "g.json", {"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"from": "a", "to": "b"}]})
    dataset = load_dataset(path)
    assert (dataset.edges[0].source, dataset.edges[0].target) == ("a", "b")


def test_nodes_without_edges(tmp_path):
    dataset = load_dataset(_write(tmp_path / "g.json", {"nodes": [{"id": "a"}]}))
    assert dataset.edges == []


def test_missing_file(tmp_path):
    with pytest.raises(DatasetLoadError, match="not found"):
        load_dataset(tmp_path / "missing.json")


def test_bad_json(tmp_path):
    path = tmp_path / "g.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(DatasetLoadError, match="not valid JSON"):
        load_dataset(path)


def test_document_without_nodes(tmp_path):
    with pytest.raises(DatasetLoadError, match="no 'nodes'"):
        load_dataset(_write(tmp_path / "g.json", {"links": []}))


def test_non_object_document(tmp_path):
    with pytest.raises(DatasetLoadError):
        load_dataset(_write(tmp_path / "g.json", [1, 2, 3]))


def test_invalid_structure(tmp_path):
    with pytest.raises(DatasetLoadError, match="failed validation"):
        load_dataset(_write(tmp_path / "g.json", {"nodes": "not-a-list"}))


def test_load_error_is_value_error(tmp_path):
    with pytest.raises(ValueError):
        load_dataset(tmp_path / "missing.json")


class TestGraphDirectory:
    def test_list_graphs_sorted(self, tmp_path):
        _write(tmp_path / "b.json", {"nodes": []})
        _write(tmp_path / "a.json", {"nodes": []})
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
        (tmp_path / "sub.json").mkdir()
        assert GraphDirectory(tmp_path).list_graphs() == ["a.json", "b.json"]

    def test_list_missing_directory(self, tmp_path):
        assert GraphDirectory(tmp_path / "nowhere").list_graphs() == []

    def test_no_selection_is_none(self, tmp_path):
        assert GraphDirectory(tmp_path).load(None) is None

    def test_empty_graph_is_not_none(self, tmp_path):
        _write(tmp_path / "empty.json", {"nodes": [], "links": []})
        dataset = GraphDirectory(tmp_path).load("empty.json")
        assert dataset is not None
        assert dataset.nodes == []

    def test_rejects_paths(self, tmp_path):
        with pytest.raises(DatasetLoadError, match="bare file name"):
            GraphDirectory(tmp_path).load("../outside.json")
