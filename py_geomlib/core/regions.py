"""
Enclosed region reconstruction from 2D segment networks.

Bridges coordinates and the graph engine:
1. Snaps segment endpoints to rounded coordinate keys
2. Builds a Graph weighted by segment length
3. Extracts the cycle basis
4. Maps each key cycle back to a closed polygon

The graph modules never see coordinates; everything spatial happens here.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import settings
from .cycles import Cycle, find_all_cycles
from .graph import Graph, VertexSort

logger = structlog.get_logger()

PointKey = Tuple[float, float]


@dataclass
class RegionOptions:
    """Options for region reconstruction."""
    precision: int = field(default_factory=lambda: settings.key_precision)  # decimals kept in keys
    weighted: bool = True  # prefer short edges in the spanning forest
    min_area: float = field(default_factory=lambda: settings.min_region_area)
    sort_type: VertexSort = field(default_factory=lambda: VertexSort(settings.vertex_sort))

    def __post_init__(self):
        if self.precision < 0:
            raise ValueError("precision must be >= 0")
        if self.min_area < 0:
            raise ValueError("min_area must be >= 0")
        self.sort_type = VertexSort(self.sort_type)


@dataclass
class Region:
    """A closed polygon recovered from one graph cycle."""
    keys: List[PointKey]
    vertices: np.ndarray  # (n, 2) ring, closing edge implicit
    area: float  # signed; positive when counter-clockwise


def point_key(x: float, y: float, precision: int = 4) -> PointKey:
    """Vertex key for a coordinate, rounded so near-duplicates collapse."""
    # + 0.0 turns -0.0 into 0.0
    return (round(float(x), precision) + 0.0, round(float(y), precision) + 0.0)


def build_segment_graph(segments: Iterable[Sequence], precision: int = 4,
                        weighted: bool = True) -> Graph:
    """
    Build a Graph from segments given as ((x1, y1), (x2, y2)).

    Args:
        segments: Segment endpoint pairs
        precision: Decimal places kept in vertex keys
        weighted: Weight edges by Euclidean length, else 0

    Returns:
        Graph keyed by rounded coordinates
    """
    graph = Graph()
    skipped = 0
    for segment in segments:
        (x1, y1), (x2, y2) = segment
        a = point_key(x1, y1, precision)
        b = point_key(x2, y2, precision)
        if a == b:
            skipped += 1
            continue
        weight = float(np.hypot(b[0] - a[0], b[1] - a[1])) if weighted else 0.0
        graph.add_edge(a, b, weight)

    logger.debug("Segment graph built",
                 vertices=len(graph.vertices), edges=len(graph.edges),
                 skipped_degenerate=skipped)
    return graph


def polygon_area(points) -> float:
    """Signed shoelace area of a closed ring of (x, y) points."""
    pts = np.asarray(points, dtype=float)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def cycles_to_polygons(cycles: Iterable[Cycle]) -> List[np.ndarray]:
    """Convert cycles of coordinate keys into (n, 2) arrays."""
    return [np.array(cycle, dtype=float).reshape(-1, 2) for cycle in cycles]


def find_regions(segments: Iterable[Sequence],
                 options: Optional[RegionOptions] = None) -> List[Region]:
    """
    Recover the enclosed regions formed by a network of segments.

    Args:
        segments: Segment endpoint pairs ((x1, y1), (x2, y2))
        options: Region options (settings defaults when omitted)

    Returns:
        One Region per independent cycle whose absolute area is at least
        options.min_area
    """
    options = options or RegionOptions()
    graph = build_segment_graph(segments, options.precision, options.weighted)
    cycles = find_all_cycles(graph, sort_type=options.sort_type, weighted=options.weighted)

    regions = []
    for cycle, ring in zip(cycles, cycles_to_polygons(cycles)):
        area = polygon_area(ring)
        if abs(area) < options.min_area:
            continue
        regions.append(Region(keys=list(cycle), vertices=ring, area=area))

    logger.info("Regions reconstructed",
                cycles=len(cycles), regions=len(regions),
                min_area=options.min_area)
    return regions
