"""Renderer framework for package graphs."""

import logging
from abc import ABC, abstractmethod

from .models import GraphSpec

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, spec: GraphSpec) -> str:
        """Render graph specification to string format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class GraphExporter:
    """Registry of renderers keyed by output format."""

    def __init__(self, renderers: list[GraphRenderer] | None = None):
        self.renderers: dict[str, GraphRenderer] = {}
        for renderer in renderers or []:
            self.add_renderer(renderer)

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def get_renderer(self, format_name: str) -> GraphRenderer:
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")
        return self.renderers[format_name]

    def render(self, spec: GraphSpec, format_name: str = "dot") -> str:
        """Render graph specification to string.

        Args:
            spec: Graph specification to render
            format_name: Output format ('dot', 'mermaid')

        Returns:
            Rendered graph as string
        """
        renderer = self.get_renderer(format_name)
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(spec)
