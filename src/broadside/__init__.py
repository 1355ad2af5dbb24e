"""Broadside: a two-player grid naval combat game against a scripted opponent."""

__version__ = "0.1.0"
