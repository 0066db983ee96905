import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

import networkx as nx
import numpy as np

from .errors import NumericError, ValidationError


Labels = List[str]
NeighborRanks = List[List[int]]


def _as_float_array(values, what: str) -> np.ndarray:
    if not isinstance(values, np.ndarray):
        try:
            widths = {len(row) for row in values}
        except TypeError as exc:
            raise ValidationError(f"{what} must be two-dimensional") from exc
        if len(widths) > 1:
            raise ValidationError(f"{what} rows have different lengths")
    try:
        return np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise NumericError(f"{what} contains non-numeric values: {exc}") from exc


@dataclass(frozen=True, eq=False)
class MatrixDistances:
    """Explicit pairwise distances, ``matrix[i, j]`` from node i to node j."""

    matrix: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "matrix", _as_float_array(self.matrix, "distance matrix"))

    def count(self) -> int:
        return len(self.matrix)

    def is_square(self) -> bool:
        return self.matrix.ndim == 2 and self.matrix.shape[0] == self.matrix.shape[1]

    def distance(self, i: int, j: int) -> float:
        return float(self.matrix[i, j])

    def row(self, i: int) -> np.ndarray:
        return self.matrix[i]

    def path_length(self, nodes: Sequence[int]) -> float:
        return sum((self.distance(a, b) for a, b in zip(nodes, nodes[1:])), 0.0)

    def max_distance(self) -> float:
        return float(self.matrix.max())


@dataclass(frozen=True, eq=False)
class PointDistances:
    """2-D coordinates; distances are Euclidean and computed on demand."""

    points: np.ndarray
    _coords: List[Tuple[float, float]] = field(init=False, repr=False)

    def __post_init__(self):
        points = _as_float_array(self.points, "locations")
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValidationError("Locations should be (x, y) pairs")
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "_coords", [tuple(p) for p in points.tolist()])

    def count(self) -> int:
        return len(self.points)

    def is_square(self) -> bool:
        return True

    def distance(self, i: int, j: int) -> float:
        (x1, y1), (x2, y2) = self._coords[i], self._coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def row(self, i: int) -> np.ndarray:
        return np.array([self.distance(i, j) for j in range(self.count())])

    def path_length(self, nodes: Sequence[int]) -> float:
        return sum((self.distance(a, b) for a, b in zip(nodes, nodes[1:])), 0.0)

    def max_distance(self) -> float:
        return max(float(self.row(i).max()) for i in range(self.count()))


Distances = Union[MatrixDistances, PointDistances]


def rank_neighbors(distances: Distances) -> NeighborRanks:
    """For every node, all nodes ordered by ascending distance (stable on index)."""
    ranks: NeighborRanks = []
    for node in range(distances.count()):
        row = distances.row(node)
        if np.isnan(row).any():
            raise NumericError(f"distances from node {node} cannot be ordered (NaN)")
        ranks.append(np.argsort(row, kind="stable").tolist())
    return ranks


class DistanceModel:
    """
    Immutable node set: labels, one distance representation and the
    precomputed neighbor ranking. Validation only happens here; everything
    downstream trusts a constructed model.
    """

    def __init__(self, labels: Sequence[str], distances: Distances):
        labels = [str(label) for label in labels]
        self._validate(labels, distances)
        self.size = len(labels)
        self.labels: Tuple[str, ...] = tuple(labels)
        self.distances = distances
        self.neighbors = rank_neighbors(distances)

    @staticmethod
    def _validate(labels: Labels, distances: Distances) -> None:
        if len(labels) < 2:
            raise ValidationError("There should be at least 2 nodes in the dataset")
        if len(set(labels)) != len(labels):
            raise ValidationError("Labels should be unique")
        if isinstance(distances, MatrixDistances):
            if not distances.is_square() or distances.count() != len(labels):
                raise ValidationError(
                    "The number of labels should be the same as the number of nodes: "
                    "the distance matrix isn't a square"
                )
            if np.isinf(distances.matrix).any():
                raise ValidationError("Distances should be finite")
            if (distances.matrix < 0).any():
                raise ValidationError("Distances should not be negative")
        elif isinstance(distances, PointDistances):
            if distances.count() != len(labels):
                raise ValidationError("The number of labels should be the same as the number of locations")
            if np.isinf(distances.points).any():
                raise ValidationError("Locations should be finite")
        else:
            raise ValidationError(f"Unsupported distance representation: {type(distances).__name__}")

    @classmethod
    def from_matrix(cls, labels: Sequence[str], matrix) -> "DistanceModel":
        return cls(labels, MatrixDistances(matrix))

    @classmethod
    def from_points(cls, labels: Sequence[str], points) -> "DistanceModel":
        return cls(labels, PointDistances(points))

    @classmethod
    def from_graph(cls, graph: nx.Graph) -> "DistanceModel":
        nodes = list(graph.nodes())
        matrix = nx.to_numpy_array(graph, nodelist=nodes, weight="weight", nonedge=np.nan)
        np.fill_diagonal(matrix, 0.0)
        if np.isnan(matrix).any():
            raise ValidationError("The graph should be complete: some node pairs have no edge")
        return cls([str(n) for n in nodes], MatrixDistances(matrix))

    @property
    def is_matrix(self) -> bool:
        return isinstance(self.distances, MatrixDistances)

    def distance(self, i: int, j: int) -> float:
        return self.distances.distance(i, j)

    def neighbor_rank(self, node: int) -> List[int]:
        return self.neighbors[node]

    def path_length(self, nodes: Sequence[int]) -> float:
        return self.distances.path_length(nodes)

    def max_distance(self) -> float:
        return self.distances.max_distance()

    def index(self, label: str) -> int:
        return self.labels.index(label)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        kind = "matrix" if self.is_matrix else "points"
        return f"DistanceModel(size={self.size}, distances={kind})"
