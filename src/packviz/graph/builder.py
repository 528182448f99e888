"""Package graph construction.

Turns presented packages into a strict, compound ``GraphSpec``: one cluster
per namespace prefix, one node per package plus the application node, and
colored edges for dependencies, deprecated references and package todos.
Edges between different clusters are clipped at the cluster boundaries.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..config import StyleOptions, merge_style_options
from ..errors import MissingNodeError
from ..models.package import NAMESPACE_SEPARATOR, ROOT_PACKAGE_NAME, PackageRecord
from ..presenters import Package, present
from .models import ClusterSpec, EdgeSpec, GraphSpec, NodeSpec

logger = logging.getLogger(__name__)

APPLICATION_LABEL = "Application"


def namespace_of(package_name: str) -> str:
    """Namespace key of a package name, empty for rootless packages."""
    return NAMESPACE_SEPARATOR.join(package_name.split(NAMESPACE_SEPARATOR)[:-1])


def simple_name(package_name: str) -> str:
    return package_name.split(NAMESPACE_SEPARATOR)[-1]


class GraphBuilder:
    """Builds the package graph for a set of packages.

    A builder owns the graph it is building until ``build`` returns it. Each
    call to ``build`` starts from an empty graph, so builders are reusable
    but must not be shared between threads.
    """

    def __init__(
        self,
        packages: Iterable[Package | PackageRecord],
        options: StyleOptions | Mapping[str, Any] | None = None,
        root_path: Path | None = None,
    ):
        self.root_path = root_path if root_path is not None else Path.cwd()
        self.options = merge_style_options(options)
        self.packages = [
            present(package, self.root_path) if isinstance(package, PackageRecord) else package
            for package in packages
        ]
        self._graph: GraphSpec | None = None
        self._clusters: dict[str, ClusterSpec] = {}
        self._declared: set[str] = set()

    def build(self) -> GraphSpec:
        """Build the graph.

        Returns:
            GraphSpec: The complete graph

        Raises:
            MissingNodeError: If a dependency names a package that is not in
                the package set. No graph is returned in that case.
        """
        logger.info(f"Building package graph for {len(self.packages)} packages")

        self._setup_graph()
        self._add_packages_to_graph()
        self._add_package_dependencies_to_graph()

        graph = self._graph
        logger.info(
            f"Built package graph with {len(graph.nodes)} nodes, "
            f"{len(graph.clusters)} clusters and {len(graph.edges)} edges"
        )
        return graph

    def cluster_for(self, package_name: str) -> ClusterSpec | None:
        """Resolve the cluster for a package name, creating it on first use.

        Returns None for packages without a namespace, which live in the
        graph root.
        """
        namespace = namespace_of(package_name)
        if not namespace:
            return None

        cluster = self._clusters.get(namespace)
        if cluster is None:
            cluster = ClusterSpec(
                id=f"cluster_{namespace}",
                namespace=namespace,
                label=namespace,
                attributes={**self.options.cluster.to_attributes(), "label": namespace},
            )
            self._graph.add_cluster(cluster)
            self._clusters[namespace] = cluster
            logger.debug(f"Created cluster {cluster.id}")
        return cluster

    def _setup_graph(self) -> None:
        self._clusters = {}
        self._declared = {package.name for package in self.packages} | {ROOT_PACKAGE_NAME}
        self._graph = GraphSpec(
            layout=self.options.layout.value,
            strict=True,
            compound=True,
            graph_attributes=self.options.graph.to_attributes(),
            node_defaults=self.options.node.to_attributes(),
            edge_defaults=self.options.edge.to_attributes(),
        )
        self._graph.add_node(
            NodeSpec(
                id=ROOT_PACKAGE_NAME,
                label=APPLICATION_LABEL,
                attributes=self.options.application.to_attributes(),
            )
        )

    def _add_packages_to_graph(self) -> None:
        for package in self.packages:
            cluster = self.cluster_for(package.name)
            self._graph.add_node(
                NodeSpec(
                    id=package.name,
                    label=simple_name(package.name),
                    attributes={"color": package.color},
                    cluster=cluster.namespace if cluster else None,
                )
            )

    def _add_package_dependencies_to_graph(self) -> None:
        for package in self.packages:
            self._draw_dependencies(package)
            self._draw_deprecated_references(package)
            self._draw_package_todos(package)

    def _draw_dependencies(self, package: Package) -> None:
        for dependency in sorted(package.dependencies):
            if dependency not in self._declared:
                raise MissingNodeError(package.name, dependency)
            self._add_edge(package.name, dependency, package.color)

    def _draw_deprecated_references(self, package: Package) -> None:
        for reference in sorted(package.deprecated_references):
            self._add_edge(package.name, reference, self.options.deprecated_references_color)

    def _draw_package_todos(self, package: Package) -> None:
        for todo in sorted(package.package_todos):
            self._add_edge(package.name, todo, self.options.package_todo_color)

    def _add_edge(self, source: str, destination: str, color: str) -> None:
        source_cluster = self.cluster_for(source)
        destination_cluster = self.cluster_for(destination)

        if destination not in self._graph.nodes:
            # Only deprecated references and todos get here
            logger.warning(f"Edge `{source}`->`{destination}` points at an undeclared package")
            self._graph.add_node(
                NodeSpec(
                    id=destination,
                    label=simple_name(destination),
                    cluster=destination_cluster.namespace if destination_cluster else None,
                )
            )

        edge = EdgeSpec(source=source, destination=destination, color=color)
        if source_cluster is not destination_cluster:
            if source_cluster is not None:
                edge.ltail = source_cluster.id
            if destination_cluster is not None:
                edge.lhead = destination_cluster.id
        self._graph.add_edge(edge)
