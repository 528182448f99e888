"""Package graph construction and rendering.

The builder produces a renderer-independent ``GraphSpec``; renderers turn it
into Graphviz DOT (via pydot) or Mermaid source.
"""

from .builder import APPLICATION_LABEL, GraphBuilder, namespace_of
from .dot import DotRenderer
from .framework import GraphExporter, GraphRenderer
from .mermaid import MermaidRenderer
from .models import ClusterSpec, EdgeSpec, GraphSpec, NodeSpec


def default_exporter() -> GraphExporter:
    """Exporter with every built-in renderer registered."""
    return GraphExporter([DotRenderer(), MermaidRenderer()])


__all__ = [
    "APPLICATION_LABEL",
    "GraphBuilder",
    "namespace_of",
    "GraphRenderer",
    "GraphExporter",
    "DotRenderer",
    "MermaidRenderer",
    "default_exporter",
    "GraphSpec",
    "NodeSpec",
    "EdgeSpec",
    "ClusterSpec",
]
