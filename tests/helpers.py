"""Shared fixtures for the path_ga tests."""

from path_ga.distances import DistanceModel


LABELS = ["A", "B", "C", "D"]

# A-B=1, A-C=4, A-D=3, B-C=2, B-D=5, C-D=1
MATRIX = [
    [0, 1, 4, 3],
    [1, 0, 2, 5],
    [4, 2, 0, 1],
    [3, 5, 1, 0],
]


def four_node_model() -> DistanceModel:
    return DistanceModel.from_matrix(LABELS, MATRIX)


def grid_model(width: int = 4, height: int = 3) -> DistanceModel:
    labels = [f"{x},{y}" for y in range(height) for x in range(width)]
    points = [(x * 10.0, y * 7.0) for y in range(height) for x in range(width)]
    return DistanceModel.from_points(labels, points)


def pair_length(model: DistanceModel, nodes) -> float:
    return sum(model.distance(a, b) for a, b in zip(nodes, nodes[1:]))


def is_permutation(nodes, size: int) -> bool:
    return sorted(nodes) == list(range(size))
