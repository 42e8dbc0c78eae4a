"""Tests for the pyvis-backed view."""

import pytest

from graphview.config import RenderConfig
from graphview.errors import GraphViewError
from graphview.kernel.colors import assign_colors
from graphview.kernel.render_plan import build_render_plan
from graphview.network import NetworkView

from conftest import make_dataset


def _view(dataset, active=None, config=None, size=(640, 480)):
    config = config or RenderConfig()
    color_map = assign_colors(dataset.nodes, config.palette, config.default_color)
    plan = build_render_plan(dataset, active, color_map, config.style)
    return NetworkView(plan, config, size)


def test_view_holds_plan_nodes_and_edges(dataset):
    view = _view(dataset)
    assert view.alive
    assert view.node_ids() == ["alice", "bob", "acme", "paris", "orphan"]
    assert view.edge_pairs() == [("alice", "bob"), ("alice", "acme"), ("acme", "paris")]


def test_filtered_view(dataset):
    view = _view(dataset, {"Person", "Location"})
    assert view.node_ids() == ["alice", "bob", "paris"]
    assert view.edge_pairs() == [("alice", "bob")]


def test_html_is_standalone_document(dataset):
    html = _view(dataset).html()
    assert "<html>" in html
    assert "vis-network" in html
    assert "alice" in html
    assert "knows" in html
    assert "640px" in html
    assert "480px" in html


def test_node_colors_reach_document():
    dataset = make_dataset([{"id": "a", "type": "T"}])
    config = RenderConfig(palette=("#010203",))
    html = _view(dataset, config=config).html()
    assert "#010203" in html


def test_grouped_node_keeps_color():
    dataset = make_dataset([{"id": "a", "type": "T", "group": "g1"}])
    config = RenderConfig(palette=("#0a0b0c",))
    view = _view(dataset, config=config)
    assert "#0a0b0c" in view.html()


def test_integer_ids():
    dataset = make_dataset([{"id": 1}, {"id": 2}], [{"source": 1, "target": 2}])
    view = _view(dataset)
    assert view.node_ids() == [1, 2]
    assert view.edge_pairs() == [(1, 2)]


def test_empty_plan_builds():
    view = _view(make_dataset([]))
    assert view.node_ids() == []
    assert "<html>" in view.html()


def test_fit_updates_size(dataset):
    view = _view(dataset)
    view.fit(1024, 768)
    assert view.size == (1024, 768)
    assert view.fit_count == 1
    assert "1024px" in view.html()


def test_destroyed_view_refuses_use(dataset):
    view = _view(dataset)
    view.destroy()
    view.destroy()
    assert not view.alive
    with pytest.raises(GraphViewError):
        view.html()
    with pytest.raises(GraphViewError):
        view.fit(1, 1)


@pytest.mark.parametrize("attribute", ["font_color", "group", "n_id", "shape", "title"])
def test_node_attribute_never_breaks_construction(attribute):
    dataset = make_dataset([{"id": "a", attribute: "#000"}, {"id": "b"}], [{"source": "a", "target": "b"}])
    view = _view(dataset)
    assert view.node_ids() == ["a", "b"]
    assert view.edge_pairs() == [("a", "b")]


def test_node_attributes_reach_vis_node():
    dataset = make_dataset([{"id": "a", "font_color": "#000", "title": "hover", "shape": "box"}])
    view = _view(dataset)
    node = view._network().get_node("a")
    assert node["font_color"] == "#000"
    assert node["title"] == "hover"
    assert node["shape"] == "box"
    assert node["font"]["face"] == "Vazirmatn, Arial"
