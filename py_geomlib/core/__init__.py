"""
Core graph and region reconstruction functionality.
"""

from .graph import Graph, GraphEdge, GraphVertex, VertexSort, edge_key
from .union_find import UnionFind
from .spanning_forest import build_spanning_forest, forest_edges, forest_weight
from .cycles import find_all_cycles, find_cycles_for_vertices
from .regions import Region, RegionOptions, find_regions

__all__ = ['Graph', 'GraphEdge', 'GraphVertex', 'VertexSort', 'edge_key',
           'UnionFind',
           'build_spanning_forest', 'forest_edges', 'forest_weight',
           'find_all_cycles', 'find_cycles_for_vertices',
           'Region', 'RegionOptions', 'find_regions']
