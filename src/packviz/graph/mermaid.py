"""Mermaid flowchart renderer for package graphs."""

import logging

from ..models.package import ROOT_PACKAGE_NAME
from .framework import GraphRenderer
from .models import GraphSpec, NodeSpec, safe_id

logger = logging.getLogger(__name__)

APPLICATION_ID = "application"
# Package ids are prefixed so they never collide with the application or a subgraph
PACKAGE_ID_PREFIX = "pkg_"


class MermaidRenderer(GraphRenderer):
    """Mermaid diagram renderer for package graphs.

    Mermaid has no ltail/lhead; edges routed to a cluster boundary are drawn
    to the subgraph itself instead.
    """

    @property
    def format_name(self) -> str:
        return "mermaid"

    def get_file_extension(self) -> str:
        return ".mmd"

    def render(self, spec: GraphSpec) -> str:
        """Render graph specification as Mermaid flowchart."""
        lines = ["flowchart LR", ""]

        lines.append("    %% Nodes")
        for node in spec.root_nodes():
            lines.append(f"    {self._render_node(node)}")
        lines.append("")

        for cluster in spec.clusters.values():
            lines.append(f'    subgraph {safe_id(cluster.id)}["{self._escape_label(cluster.label)}"]')
            for node_id in cluster.nodes:
                lines.append(f"        {self._render_node(spec.nodes[node_id])}")
            lines.append("    end")
            lines.append("")

        link_styles = []
        drawn = set()
        if spec.edges:
            lines.append("    %% Edges")
            for edge in spec.edges.values():
                source = safe_id(edge.ltail) if edge.ltail else self._get_safe_id(edge.source)
                destination = safe_id(edge.lhead) if edge.lhead else self._get_safe_id(edge.destination)
                if (source, destination) in drawn:
                    continue
                drawn.add((source, destination))
                link_styles.append(f"    linkStyle {len(drawn) - 1} stroke:{edge.color}")
                lines.append(f"    {source} --> {destination}")
            lines.append("")

        lines.extend(link_styles)
        lines.extend(self._render_styling(spec))

        return "\n".join(lines)

    def _render_node(self, node: NodeSpec) -> str:
        """Render a single node."""
        label = self._escape_label(node.label)
        if node.id == ROOT_PACKAGE_NAME:
            return f'{APPLICATION_ID}{{{{"{label}"}}}}'
        return f'{self._get_safe_id(node.id)}("{label}")'

    def _render_styling(self, spec: GraphSpec) -> list:
        """Render application class and per-node stroke colors."""
        lines = []

        application = spec.nodes.get(ROOT_PACKAGE_NAME)
        if application is not None:
            fill = application.attributes.get("fillcolor", "#333333")
            font = application.attributes.get("fontcolor", "white")
            lines.append(f"    classDef app fill:{fill},color:{font}")
            lines.append(f"    class {APPLICATION_ID} app")

        for node in spec.nodes.values():
            color = node.attributes.get("color")
            if color and node.id != ROOT_PACKAGE_NAME:
                lines.append(f"    style {self._get_safe_id(node.id)} stroke:{color}")

        return lines

    def _escape_label(self, label: str) -> str:
        """Escape label for Mermaid rendering."""
        if not label:
            return ""

        label = label.replace('"', "'")
        label = label.replace("[", "(")
        label = label.replace("]", ")")
        label = label.replace("{", "(")
        label = label.replace("}", ")")
        label = label.replace("|", ":")

        return label

    def _get_safe_id(self, node_id: str) -> str:
        """Get safe ID for node reference."""
        if node_id == ROOT_PACKAGE_NAME:
            return APPLICATION_ID
        return PACKAGE_ID_PREFIX + safe_id(node_id)
