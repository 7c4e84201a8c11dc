"""
Cycle basis extraction for undirected graphs.

Builds a spanning forest, collects the edges the forest rejected and closes
each of them with the unique tree path between its endpoints. One cycle per
rejected edge gives E - V + C cycles for the covered subgraph.

Typical use is recovering enclosed regions from a wall network: each cycle
is a list of vertex keys that the caller maps back to polygon coordinates.
"""

from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import structlog

from ..config import settings
from .graph import EdgeKey, Graph, VertexSort, edge_key
from .spanning_forest import SpanningForest, build_spanning_forest

logger = structlog.get_logger()

Cycle = List[Hashable]


def rejected_edges(graph: Graph, forest: SpanningForest) -> Dict[EdgeKey, Tuple[Hashable, Hashable]]:
    """
    Graph edges between covered vertices that are not part of the forest.

    Vertices are scanned in graph insertion order, skipping those outside
    the forest. Each edge is reached from both of its endpoints; only the
    first direction seen is kept.

    Returns:
        Ordered mapping of canonical edge key to (start key, end key)
    """
    rejected = {}
    for key, vertex in graph.vertices.items():
        if key not in forest:
            continue
        tree_neighbors = forest[key]
        for ek in vertex.edge_keys:
            other = ek[1] if ek[0] == key else ek[0]
            if other in tree_neighbors or other not in forest:
                continue
            if ek not in rejected:
                rejected[ek] = (key, other)
    return rejected


def find_tree_path(forest: SpanningForest, start: Hashable, end: Hashable) -> List[Hashable]:
    """
    Path from `start` to `end` through the forest, found depth-first.

    Neighbors are explored in forest insertion order using an explicit
    stack, so long chains do not hit the recursion limit.

    Returns:
        [start, ..., end], or an empty list if `end` is unreachable
    """
    if start not in forest:
        return []
    if start == end:
        return [start]

    explored = {start}
    path = [start]
    stack = [iter(forest[start])]
    while stack:
        for nxt in stack[-1]:
            if nxt in explored:
                continue
            explored.add(nxt)
            path.append(nxt)
            if nxt == end:
                return path
            stack.append(iter(forest.get(nxt, ())))
            break
        else:
            stack.pop()
            path.pop()
    return []


def cycles_for_forest(graph: Graph, forest: SpanningForest) -> List[Cycle]:
    """
    One cycle per rejected edge of `forest`.

    The closing edge back to the first key is implicit. Degenerate results
    (two vertices or fewer) are dropped.
    """
    cycles = []
    rejected = rejected_edges(graph, forest)
    for start, end in rejected.values():
        cycle = find_tree_path(forest, start, end)
        if len(cycle) > 2:
            cycles.append(cycle)

    logger.info("Cycles extracted",
                vertices=len(forest), rejected_edges=len(rejected),
                cycles=len(cycles))
    return cycles


def find_all_cycles(graph: Graph, sort_type: Optional[VertexSort] = None,
                    weighted: Optional[bool] = None) -> List[Cycle]:
    """
    Cycle basis for the whole graph.

    The visitation order only sets the key order of the spanning forest.
    Edge order alone decides the tree, and rejected edges are scanned in
    graph insertion order, so the cycles come back the same for every order.

    Args:
        graph: Populated graph
        sort_type: Vertex visitation order (defaults to settings.vertex_sort)
        weighted: Build a minimum-weight forest (defaults to
            settings.weighted_cycles)

    Returns:
        Lists of vertex keys, one per cycle
    """
    if sort_type is None:
        sort_type = settings.vertex_sort
    if weighted is None:
        weighted = settings.weighted_cycles

    vertices = graph.sorted_vertices(VertexSort(sort_type))
    forest = build_spanning_forest(graph, vertices=vertices, weighted=weighted)
    return cycles_for_forest(graph, forest)


def find_cycles_for_vertices(graph: Graph, vertices: Iterable,
                             weighted: bool = False) -> List[Cycle]:
    """
    Cycles among a subset of vertices.

    Only edges with both endpoints in the subset take part. Keys missing from
    the graph are ignored.
    """
    forest = build_spanning_forest(graph, vertices=vertices, weighted=weighted)
    return cycles_for_forest(graph, forest)


def cycle_edge_keys(cycle: Cycle) -> List[EdgeKey]:
    """Canonical keys of the edges walked by a closed cycle."""
    n = len(cycle)
    return [edge_key(cycle[i], cycle[(i + 1) % n]) for i in range(n)]
