"""Graphviz DOT renderer backed by pydot."""

import logging

import pydot

from .framework import GraphRenderer
from .models import GraphSpec, NodeSpec

logger = logging.getLogger(__name__)

GRAPH_NAME = "packages"


def _quote(node_id: str) -> str:
    # Package names such as "node" or "edge" are DOT keywords when bare
    return '"' + node_id.replace('"', '\\"') + '"'


def _node(node: NodeSpec) -> pydot.Node:
    return pydot.Node(_quote(node.id), **{"label": node.label, **node.attributes})


class DotRenderer(GraphRenderer):
    """Renders package graphs as Graphviz DOT source."""

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def to_pydot(self, spec: GraphSpec) -> pydot.Dot:
        """Convert the graph specification into a pydot graph."""
        dot = pydot.Dot(GRAPH_NAME, graph_type="digraph", strict=spec.strict)
        dot.set("layout", spec.layout)
        if spec.compound:
            dot.set("compound", "true")
        for key, value in spec.graph_attributes.items():
            dot.set(key, value)
        if spec.node_defaults:
            dot.set_node_defaults(**spec.node_defaults)
        if spec.edge_defaults:
            dot.set_edge_defaults(**spec.edge_defaults)

        for node in spec.root_nodes():
            dot.add_node(_node(node))

        for cluster in spec.clusters.values():
            # pydot prefixes the subgraph name with "cluster_"
            subgraph = pydot.Cluster(cluster.namespace, **cluster.attributes)
            for node_id in cluster.nodes:
                subgraph.add_node(_node(spec.nodes[node_id]))
            dot.add_subgraph(subgraph)

        for edge in spec.edges.values():
            dot.add_edge(pydot.Edge(_quote(edge.source), _quote(edge.destination), **edge.attributes()))

        return dot

    def render(self, spec: GraphSpec) -> str:
        """Render graph specification as DOT source."""
        logger.debug(f"Rendering {len(spec.nodes)} nodes as DOT")
        return self.to_pydot(spec).to_string()
