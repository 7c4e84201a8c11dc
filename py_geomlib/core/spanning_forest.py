"""Kruskal-style spanning forest over a Graph or a subset of its vertices."""

from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import structlog

from .graph import Graph, GraphVertex
from .union_find import UnionFind

logger = structlog.get_logger()

# vertex key -> {tree neighbor key: weight of the tree edge}
SpanningForest = Dict[Hashable, Dict[Hashable, float]]


def _subset_keys(graph: Graph, vertices: Optional[Iterable]) -> List[Hashable]:
    if vertices is None:
        return list(graph.vertices)
    keys = []
    seen = set()
    for v in vertices:
        key = v.key if isinstance(v, GraphVertex) else v
        if key not in graph.vertices or key in seen:
            continue
        seen.add(key)
        keys.append(key)
    return keys


def build_spanning_forest(graph: Graph, vertices: Optional[Iterable] = None,
                          weighted: bool = True) -> SpanningForest:
    """
    Build a spanning forest covering `vertices`.

    Edges are taken in ascending weight order when `weighted` (a stable sort,
    so equal weights keep insertion order), otherwise in insertion order.
    An edge joins the forest when both endpoints are in the subset and not
    yet connected. The result holds one tree per connected component of the
    subgraph induced by the subset.

    Args:
        graph: Graph to span
        vertices: Keys or GraphVertex objects to cover, in visitation order.
            Defaults to every vertex of the graph. Unknown keys are ignored.
        weighted: Minimize total edge weight

    Returns:
        Mapping of vertex key to its tree neighbors and tree edge weights
    """
    keys = _subset_keys(graph, vertices)
    forest: SpanningForest = {key: {} for key in keys}
    if not keys:
        return forest

    edges = graph.all_edges()
    if weighted:
        edges = sorted(edges, key=lambda e: e.weight)

    uf = UnionFind(keys)
    tree_edges = 0
    for edge in edges:
        if edge.a not in forest or edge.b not in forest:
            continue
        if uf.union(edge.a, edge.b):
            forest[edge.a][edge.b] = edge.weight
            forest[edge.b][edge.a] = edge.weight
            tree_edges += 1
            if uf.count == 1:
                break  # every covered vertex is connected

    logger.debug("Spanning forest built",
                 vertices=len(keys), tree_edges=tree_edges,
                 components=uf.count, weighted=weighted)
    return forest


def forest_edges(forest: SpanningForest) -> List[Tuple[Hashable, Hashable, float]]:
    """Each tree edge once, as (key, neighbor key, weight)."""
    out = []
    seen = set()
    for key, neighbors in forest.items():
        for other, weight in neighbors.items():
            if other in seen:
                continue
            out.append((key, other, weight))
        seen.add(key)
    return out


def forest_weight(forest: SpanningForest) -> float:
    return sum(weight for _, _, weight in forest_edges(forest))


def describe_forest(forest: SpanningForest) -> str:
    """One line per vertex: `key --> tree neighbor, tree neighbor`."""
    lines = []
    for key, neighbors in forest.items():
        lines.append(f"{key} --> {', '.join(str(n) for n in neighbors)}")
    return "\n".join(lines)
