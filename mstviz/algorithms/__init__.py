"""Minimum-spanning-tree algorithms: union-find and the step-wise Kruskal engine."""
