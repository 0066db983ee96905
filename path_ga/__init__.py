"""
Genetic-algorithm search for short open Hamiltonian paths over labeled nodes.
"""

__all__ = [
    "data",
    "display",
    "distances",
    "errors",
    "evolutionary",
    "generation",
    "tour",
]
