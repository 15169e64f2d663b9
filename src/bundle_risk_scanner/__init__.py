"""Heuristic bundling risk scoring for token transfer histories."""

__version__ = "0.1.0"
