"""Hex-grid Wave Function Collapse map generation.

The ``hexgrid`` package holds coordinates, symmetry transforms, layouts and
grids. The ``wfc`` package builds a tile template from a small sample map and
grows large maps from it.
"""

__version__ = "0.1.0"
