"""Graph data models produced by the graph builder."""

import re
from dataclasses import dataclass, field


def safe_id(value: str) -> str:
    """Get ID safe for diagram rendering (alphanumeric + underscore)."""
    return re.sub(r"[^a-zA-Z0-9_]", "_", value)


@dataclass
class ClusterSpec:
    """A namespace cluster grouping the packages that share a prefix."""
    id: str  # Graphviz subgraph name, e.g. cluster_billing
    namespace: str  # Namespace key, e.g. billing
    label: str
    attributes: dict[str, str] = field(default_factory=dict)
    nodes: list[str] = field(default_factory=list)  # Node keys in insertion order


@dataclass
class NodeSpec:
    """A package node, or the synthetic application node."""
    id: str  # Full package name
    label: str
    attributes: dict[str, str] = field(default_factory=dict)
    cluster: str | None = None  # Namespace key, None for the graph root


@dataclass
class EdgeSpec:
    """A directed, colored edge between two nodes."""
    source: str
    destination: str
    color: str
    ltail: str | None = None  # Source cluster id for cross-cluster routing
    lhead: str | None = None  # Destination cluster id for cross-cluster routing

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.destination)

    def attributes(self) -> dict[str, str]:
        """Graphviz attributes of the edge."""
        attributes = {"color": self.color}
        if self.ltail is not None:
            attributes["ltail"] = self.ltail
        if self.lhead is not None:
            attributes["lhead"] = self.lhead
        return attributes

    def merge(self, other: "EdgeSpec") -> None:
        """Apply the attributes of a repeated edge, later values win."""
        self.color = other.color
        self.ltail = other.ltail
        self.lhead = other.lhead


@dataclass
class GraphSpec:
    """Complete strict directed graph ready for rendering.

    Edges are keyed by their ordered endpoint pair, so adding the same edge
    twice merges attributes instead of drawing a parallel edge.
    """
    layout: str = "dot"
    strict: bool = True
    compound: bool = True
    graph_attributes: dict[str, str] = field(default_factory=dict)
    node_defaults: dict[str, str] = field(default_factory=dict)
    edge_defaults: dict[str, str] = field(default_factory=dict)
    nodes: dict[str, NodeSpec] = field(default_factory=dict)
    clusters: dict[str, ClusterSpec] = field(default_factory=dict)  # Keyed by namespace
    edges: dict[tuple[str, str], EdgeSpec] = field(default_factory=dict)

    def add_node(self, node: NodeSpec) -> None:
        """Add a node to the graph and to its cluster."""
        if node.id in self.nodes:
            raise ValueError(f"Node '{node.id}' already exists")
        self.nodes[node.id] = node

        if node.cluster is not None:
            self.clusters[node.cluster].nodes.append(node.id)

    def add_cluster(self, cluster: ClusterSpec) -> None:
        """Register a cluster under its namespace key."""
        if cluster.namespace in self.clusters:
            raise ValueError(f"Cluster '{cluster.namespace}' already exists")
        self.clusters[cluster.namespace] = cluster

    def add_edge(self, edge: EdgeSpec) -> EdgeSpec:
        """Add an edge, merging into an existing edge with the same endpoints."""
        existing = self.edges.get(edge.key)
        if existing is not None:
            existing.merge(edge)
            return existing
        self.edges[edge.key] = edge
        return edge

    def get_edge(self, source: str, destination: str) -> EdgeSpec | None:
        return self.edges.get((source, destination))

    def cluster_of(self, node_id: str) -> ClusterSpec | None:
        """Cluster containing a node, None when it sits in the graph root."""
        node = self.nodes[node_id]
        if node.cluster is None:
            return None
        return self.clusters[node.cluster]

    def root_nodes(self) -> list[NodeSpec]:
        """Nodes that belong to no cluster."""
        return [node for node in self.nodes.values() if node.cluster is None]
