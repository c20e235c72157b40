"""Discretized Bayesian updating of a success probability on a finite grid."""

__version__ = "0.1.0"
