"""Undirected graph container used for region reconstruction.

Vertices are identified by opaque caller-supplied keys (typically a rounded
2D coordinate). Edges are identified by the canonical, ordered pair of their
endpoint keys, so A-B and B-A name the same edge. Adjacency is stored as edge
keys rather than object references: the Graph owns both registries and every
lookup goes through them.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Hashable, Iterable, List, Optional, Set, Tuple

import structlog

logger = structlog.get_logger()

EdgeKey = Tuple[Hashable, Hashable]


class VertexSort(str, Enum):
    """Vertex visitation order used before building a spanning forest."""

    NONE = "none"
    DESCENDING_DEGREE = "descending_degree"
    ASCENDING_DEGREE = "ascending_degree"


def validate_key(key: Hashable) -> Hashable:
    """
    Reject keys that would corrupt the vertex or edge registries.

    Raises:
        ValueError: key is None or a float NaN (never equal to itself)
        TypeError: key is unhashable
    """
    if key is None:
        raise ValueError("Graph vertex must have a key")
    if isinstance(key, float) and math.isnan(key):
        raise ValueError("Graph vertex key cannot be NaN")
    hash(key)
    return key


def edge_key(a: Hashable, b: Hashable) -> EdgeKey:
    """Canonical identity of the unordered pair (a, b): smaller key first."""
    validate_key(a)
    validate_key(b)
    if b < a:
        return (b, a)
    return (a, b)


@dataclass
class GraphVertex:
    """A vertex and the keys of its incident edges, in insertion order."""

    key: Hashable
    edge_keys: Dict[EdgeKey, None] = field(default_factory=dict)

    def __post_init__(self):
        validate_key(self.key)

    @property
    def degree(self) -> int:
        return len(self.edge_keys)

    @property
    def neighbors(self) -> List[Hashable]:
        """Keys at the other end of every incident edge."""
        out = []
        for a, b in self.edge_keys:
            out.append(b if a == self.key else a)
        return out

    def has_edge(self, key: EdgeKey) -> bool:
        return key in self.edge_keys

    def has_neighbor(self, key: Hashable) -> bool:
        return self.find_edge_key(key) is not None

    def find_edge_key(self, key: Hashable) -> Optional[EdgeKey]:
        """Key of the incident edge reaching `key`, or None."""
        for a, b in self.edge_keys:
            if (a == self.key and b == key) or (b == self.key and a == key):
                return (a, b)
        return None


@dataclass(frozen=True)
class GraphEdge:
    """Undirected weighted edge. Endpoint order carries no meaning."""

    a: Hashable
    b: Hashable
    weight: float = 0.0

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.a, self.b)

    def other(self, key: Hashable) -> Hashable:
        """Opposite endpoint; `b` when `key` matches neither end."""
        return self.a if key == self.b else self.b


class Graph:
    """
    Undirected graph holding vertices and edges.

    Both registries are insertion-ordered dicts. Every edge's endpoints are
    registered vertices, and a vertex left without edges by a deletion is
    pruned.
    """

    def __init__(self):
        self.vertices: Dict[Hashable, GraphVertex] = {}
        self.edges: Dict[EdgeKey, GraphEdge] = {}

    def __len__(self) -> int:
        return len(self.vertices)

    def __contains__(self, key) -> bool:
        return key in self.vertices

    def clear(self) -> None:
        """Remove every vertex and edge."""
        self.vertices.clear()
        self.edges.clear()

    def add_vertex(self, key: Hashable) -> GraphVertex:
        """Add a vertex for `key`, keeping the existing one if already present."""
        vertex = self.vertices.get(validate_key(key))
        if vertex is not None:
            return vertex
        vertex = GraphVertex(key)
        self.vertices[key] = vertex
        return vertex

    def add_edge(self, a: Hashable, b: Hashable, weight: float = 0.0) -> GraphEdge:
        """
        Add an edge between keys `a` and `b`, creating the vertices as needed.

        If an edge with the same canonical identity exists, it is returned
        unchanged (including its original weight).

        Args:
            a: First endpoint key
            b: Second endpoint key
            weight: Optional weight, e.g. the length of a wall segment

        Returns:
            The new or existing GraphEdge
        """
        # Validates both keys before anything is stored
        key = edge_key(a, b)
        existing = self.edges.get(key)
        if existing is not None:
            return existing

        edge = GraphEdge(a, b, weight)
        self.edges[key] = edge
        self.add_vertex(a).edge_keys[key] = None
        self.add_vertex(b).edge_keys[key] = None
        return edge

    def delete_edge(self, edge: GraphEdge) -> None:
        """
        Remove an edge from the graph and from both of its endpoints.

        Endpoints left without edges are removed. Deleting an edge that is not
        in the graph logs a warning and does nothing.
        """
        try:
            key = edge.key
        except (TypeError, ValueError):
            key = None  # endpoints that could never have been stored
        if key is None or key not in self.edges:
            logger.warning("Edge not found in graph", a=edge.a, b=edge.b)
            return
        del self.edges[key]

        for vertex_key in key:
            vertex = self.vertices.get(vertex_key)
            if vertex is None:
                continue  # self-loop, already pruned
            vertex.edge_keys.pop(key, None)
            if not vertex.edge_keys:
                del self.vertices[vertex_key]

    def delete_vertex(self, key: Hashable) -> None:
        """Remove a vertex together with every edge incident to it."""
        vertex = self.vertices.get(key)
        if vertex is None:
            logger.warning("Vertex not found in graph", key=key)
            return
        for ek in list(vertex.edge_keys):
            self.delete_edge(self.edges[ek])
        # Isolated vertices are not pruned by edge deletion
        self.vertices.pop(key, None)

    def get_vertex_by_key(self, key: Hashable) -> Optional[GraphVertex]:
        return self.vertices.get(key)

    def get_edge_by_keys(self, a: Hashable, b: Hashable) -> Set[GraphEdge]:
        """
        Edges incident to both `a` and `b`.

        Intersection of the two adjacency sets; empty when either vertex is
        missing.
        """
        va = self.vertices.get(a)
        vb = self.vertices.get(b)
        if va is None or vb is None:
            return set()
        shared = va.edge_keys.keys() & vb.edge_keys.keys()
        return {self.edges[k] for k in shared}

    def find_edge(self, a: Hashable, b: Hashable) -> Optional[GraphEdge]:
        """The edge joining `a` and `b`, or None."""
        try:
            return self.edges.get(edge_key(a, b))
        except (TypeError, ValueError):
            return None

    def all_vertices(self) -> List[GraphVertex]:
        return list(self.vertices.values())

    def all_edges(self) -> List[GraphEdge]:
        return list(self.edges.values())

    def total_weight(self) -> float:
        return sum(edge.weight for edge in self.edges.values())

    def sorted_vertices(self, sort_type: VertexSort = VertexSort.DESCENDING_DEGREE) -> List[GraphVertex]:
        """
        All vertices in the requested visitation order.

        Sorting is stable, so vertices of equal degree keep insertion order.
        """
        sort_type = VertexSort(sort_type)
        vertices = self.all_vertices()
        if sort_type is VertexSort.DESCENDING_DEGREE:
            return sorted(vertices, key=lambda v: v.degree, reverse=True)
        if sort_type is VertexSort.ASCENDING_DEGREE:
            return sorted(vertices, key=lambda v: v.degree)
        return vertices

    def describe(self) -> str:
        """One line per vertex: `key --> neighbor, neighbor`."""
        lines = []
        for vertex in self.vertices.values():
            neighbors = ", ".join(str(n) for n in vertex.neighbors)
            lines.append(f"{vertex.key} --> {neighbors}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    # Cycle extraction entry points; implementations live in their own modules

    def spanning_forest(self, vertices: Optional[Iterable] = None, weighted: bool = True):
        from .spanning_forest import build_spanning_forest

        return build_spanning_forest(self, vertices=vertices, weighted=weighted)

    def all_cycles(self, sort_type: Optional[VertexSort] = None,
                   weighted: Optional[bool] = None) -> List[List[Hashable]]:
        from .cycles import find_all_cycles

        return find_all_cycles(self, sort_type=sort_type, weighted=weighted)

    def cycles_for_vertices(self, vertices: Iterable, weighted: bool = False) -> List[List[Hashable]]:
        from .cycles import find_cycles_for_vertices

        return find_cycles_for_vertices(self, vertices, weighted=weighted)
