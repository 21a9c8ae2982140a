"""Floorplanning of soft and fixed modules on a corner-stitched tile plane, driven by weighted HPWL."""

__version__ = "0.1.0"