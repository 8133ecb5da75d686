"""Splines, node variables, constraints, costs, rigid-body dynamics and gaits for legged-robot trajectory optimization."""

__version__ = "0.1.0"