"""Tests for DOT and Mermaid rendering of package graphs."""

import pytest

from packviz.graph import (
    DotRenderer,
    GraphBuilder,
    GraphExporter,
    MermaidRenderer,
    default_exporter,
)
from packviz.presenters import Package


def unquote(value: str) -> str:
    return value.strip('"')


@pytest.fixture
def spec():
    """Graph with a root package, a cluster and a cross-cluster edge."""
    packages = [
        Package(name="core", color="#2FA36B"),
        Package(name="billing/invoices", color="#3E8EEF", dependencies=frozenset({"core"})),
        Package(name="billing/payments", color="#3E8EEF", package_todos=frozenset({"billing/invoices"})),
    ]
    return GraphBuilder(packages).build()


class TestDotRenderer:
    """Test pydot based DOT rendering."""

    def test_renderer_metadata(self):
        renderer = DotRenderer()
        assert renderer.format_name == "dot"
        assert renderer.get_file_extension() == ".dot"

    def test_graph_attributes(self, spec):
        dot = DotRenderer().to_pydot(spec)

        assert dot.obj_dict["strict"] is True
        assert dot.get_type() == "digraph"
        assert unquote(dot.get("layout")) == "dot"
        assert unquote(dot.get("compound")) == "true"
        assert unquote(dot.get("splines")) == "true"

    def test_clusters_hold_their_nodes(self, spec):
        dot = DotRenderer().to_pydot(spec)

        subgraphs = dot.get_subgraphs()
        assert [unquote(s.get_name()) for s in subgraphs] == ["cluster_billing"]
        cluster_nodes = {unquote(n.get_name()) for n in subgraphs[0].get_nodes()}
        assert cluster_nodes == {"billing/invoices", "billing/payments"}

        # set_node_defaults registers a node named "node"
        root_nodes = {unquote(n.get_name()) for n in dot.get_nodes()} - {"node", "edge", "graph"}
        assert root_nodes == {".", "core"}

    def test_edges_carry_routing(self, spec):
        dot = DotRenderer().to_pydot(spec)

        edges = {
            (unquote(e.get_source()), unquote(e.get_destination())): e
            for e in dot.get_edges()
        }
        cross = edges[("billing/invoices", "core")]
        assert unquote(cross.get("ltail")) == "cluster_billing"
        assert cross.get("lhead") is None
        assert unquote(cross.get("color")) == "#3E8EEF"

        inner = edges[("billing/payments", "billing/invoices")]
        assert inner.get("ltail") is None
        assert inner.get("lhead") is None
        assert unquote(inner.get("color")) == "red"

    def test_render_text(self, spec):
        text = DotRenderer().render(spec)

        assert text.startswith("strict digraph")
        assert "cluster_billing" in text
        assert "ltail" in text
        assert "Application" in text

    def test_keyword_package_names_are_node_statements(self):
        """Test packages named after DOT keywords stay nodes, not default statements."""
        packages = [
            Package(name="node", color="red"),
            Package(name="strict", color="#2FA36B", deprecated_references=frozenset({"edge"})),
        ]
        text = DotRenderer().render(GraphBuilder(packages).build())
        lines = [line.strip() for line in text.splitlines()]

        assert any(line.startswith('"node" [') for line in lines)
        assert not any(line.startswith("node [label") for line in lines)
        assert not any(line.startswith("edge [label") for line in lines)
        assert '"strict" -> "edge"' in text


class TestMermaidRenderer:
    """Test Mermaid flowchart rendering."""

    def test_renderer_metadata(self):
        renderer = MermaidRenderer()
        assert renderer.format_name == "mermaid"
        assert renderer.get_file_extension() == ".mmd"

    def test_render_structure(self, spec):
        text = MermaidRenderer().render(spec)
        lines = [line.strip() for line in text.splitlines()]

        assert lines[0] == "flowchart LR"
        assert 'application{{"Application"}}' in lines
        assert 'pkg_core("core")' in lines
        assert 'subgraph cluster_billing["billing"]' in lines
        assert 'pkg_billing_invoices("invoices")' in lines
        assert "end" in lines

    def test_cross_cluster_edge_uses_subgraph(self, spec):
        text = MermaidRenderer().render(spec)
        lines = [line.strip() for line in text.splitlines()]

        assert "cluster_billing --> pkg_core" in lines
        assert "pkg_billing_payments --> pkg_billing_invoices" in lines

    def test_link_styles_follow_edge_colors(self, spec):
        text = MermaidRenderer().render(spec)

        assert "linkStyle 0 stroke:#3E8EEF" in text
        assert "linkStyle 1 stroke:red" in text
        assert "classDef app fill:#333333,color:white" in text
        assert "style pkg_core stroke:#2FA36B" in text

    def test_collapsed_edges_drawn_once(self):
        packages = [
            Package(name="core", color="#2FA36B"),
            Package(name="a/x", color="#3E8EEF", dependencies=frozenset({"core"})),
            Package(name="a/y", color="#3E8EEF", dependencies=frozenset({"core"})),
        ]
        text = MermaidRenderer().render(GraphBuilder(packages).build())

        assert text.count("cluster_a --> pkg_core") == 1

    def test_application_package_does_not_merge_with_root(self):
        spec = GraphBuilder([Package(name="application", color="#2FA36B")]).build()
        lines = [line.strip() for line in MermaidRenderer().render(spec).splitlines()]

        assert 'application{{"Application"}}' in lines
        assert 'pkg_application("application")' in lines

    def test_escape_label(self):
        renderer = MermaidRenderer()
        assert renderer._escape_label('say "hi" [x] {y} |z|') == "say 'hi' (x) (y) :z:"
        assert renderer._escape_label("") == ""


class TestGraphExporter:
    """Test renderer registry."""

    def test_default_exporter_formats(self):
        exporter = default_exporter()
        assert set(exporter.renderers) == {"dot", "mermaid"}

    def test_render_by_format(self, spec):
        exporter = default_exporter()
        assert exporter.render(spec, "mermaid").startswith("flowchart LR")

    def test_unknown_format(self, spec):
        with pytest.raises(ValueError, match="Unknown format 'svg'"):
            GraphExporter([DotRenderer()]).render(spec, "svg")
