"""packviz - Package dependency graphs for modularized codebases.

packviz turns a set of package records (dependencies, deprecated references
and package todos) into a clustered Graphviz graph for documentation and
migration tracking.
"""

__version__ = "0.1.0"
__author__ = "packviz contributors"
__description__ = "Package dependency graphs for modularized codebases"

from packviz.config import PackvizConfig, StyleOptions

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "PackvizConfig",
    "StyleOptions",
]
