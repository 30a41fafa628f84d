"""Wall insulation planning: 3D geometry, wall merging, tiling with adhesive layers, triangulation, placement timelines, a command and a web service."""

__version__ = "0.1.0"