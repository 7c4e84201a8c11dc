#!/usr/bin/env python3
"""
Demonstration of room reconstruction from a wall network.

A 10x6 floor plan split by an interior wall, with one stub wall that closes
nothing. The cycle basis holds two independent loops; which two depends on
the spanning forest (weights and vertex order), not on room boundaries.
"""

from py_geomlib.core import Graph, VertexSort, find_regions, RegionOptions
from py_geomlib.utils.logging_setup import configure_logging


WALLS = [
    ((0, 0), (6, 0)),
    ((6, 0), (10, 0)),
    ((10, 0), (10, 6)),
    ((10, 6), (6, 6)),
    ((6, 6), (0, 6)),
    ((0, 6), (0, 0)),
    ((6, 0), (6, 6)),   # interior wall
    ((2, 6), (2, 4)),   # stub, no enclosure
]


def main():
    configure_logging(level="INFO", fmt="console")

    print("=== Room Reconstruction Demo ===\n")

    regions = find_regions(WALLS, RegionOptions(precision=3, min_area=1.0))
    print(f"Found {len(regions)} enclosed loops")
    for i, region in enumerate(regions):
        print(f"   Loop {i}: area={abs(region.area):.1f} corners={region.keys}")

    # The same graph decomposed with each visitation order
    print("\nCycle counts by vertex order:")
    graph = Graph()
    for (x1, y1), (x2, y2) in WALLS:
        graph.add_edge((x1, y1), (x2, y2))
    for sort_type in VertexSort:
        cycles = graph.all_cycles(sort_type=sort_type)
        print(f"   {sort_type.value}: {len(cycles)} cycles")


if __name__ == "__main__":
    main()
