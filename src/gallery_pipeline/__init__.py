"""Static HTML gallery generator for directories of JPEG photographs."""

__version__ = "0.1.0"
