"""knotweave: a branching-narrative interpreter for knot-based story graphs."""

__version__ = "0.1.0"
