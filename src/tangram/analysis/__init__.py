"""Static analysis over loaded templates: article queries and dependencies."""

from tangram.analysis.articles import filter_articles, query_articles, sort_articles
from tangram.analysis.dependencies import (
    DependencyWalker,
    compute_all_dependencies,
    compute_dependencies,
)

__all__ = [
    "DependencyWalker",
    "compute_all_dependencies",
    "compute_dependencies",
    "filter_articles",
    "query_articles",
    "sort_articles",
]
