import math
from functools import total_ordering
from random import Random
from typing import List, Optional, Sequence, Tuple

from .distances import DistanceModel
from .errors import InvariantViolation, NumericError


def _successors(nodes: Sequence[int], size: int) -> List[Optional[int]]:
    succ: List[Optional[int]] = [None] * size
    for node, following in zip(nodes, nodes[1:]):
        succ[node] = following
    return succ


def _preferred(model: DistanceModel, last: int, next_a: Optional[int], next_b: Optional[int]) -> Tuple[int, ...]:
    if next_a is not None and next_b is not None:
        if model.distance(last, next_a) < model.distance(last, next_b):
            return next_a, next_b
        return next_b, next_a
    if next_a is not None:
        return (next_a,)
    if next_b is not None:
        return (next_b,)
    return ()


def _next_node(model: DistanceModel, last: int, candidates: Tuple[int, ...], visited: List[bool]) -> int:
    for node in candidates:
        if not visited[node]:
            return node
    # last itself is already visited, so it never matches here
    for node in model.neighbor_rank(last):
        if not visited[node]:
            return node
    raise InvariantViolation(f"no unvisited node left after node {last}")


@total_ordering
class Tour:
    """
    An open path visiting every node of the model exactly once.

    ``length`` is computed whenever ``nodes`` is set and never lazily; all
    operators build new tours instead of editing one in place.
    Tours order by length only, so two different paths of equal length
    compare equal.
    """

    __slots__ = ("model", "nodes", "length")

    def __init__(self, model: DistanceModel, nodes: Sequence[int], length: Optional[float] = None):
        self.model = model
        self.nodes: List[int] = list(nodes)
        self.length: float = model.path_length(self.nodes) if length is None else length

    @staticmethod
    def random(model: DistanceModel, rng: Random) -> "Tour":
        nodes = list(range(model.size))
        rng.shuffle(nodes)
        return Tour(model, nodes)

    @staticmethod
    def crossover(parent_a: "Tour", parent_b: "Tour", rng: Optional[Random] = None) -> "Tour":
        """
        Greedy edge-preference recombination.

        Starting from parent A's first node, each step follows the successor
        of the last placed node in either parent, the shorter edge first.
        When both successors are already placed, the nearest unvisited
        neighbor of the last node is taken instead.

        The operator is deterministic: ``rng`` is accepted alongside the
        other operators' signatures but no number is drawn from it.
        """
        model = parent_a.model
        size = model.size
        next_a = _successors(parent_a.nodes, size)
        next_b = _successors(parent_b.nodes, size)

        visited = [False] * size
        nodes = [parent_a.nodes[0]]
        visited[nodes[0]] = True
        for _ in range(1, size):
            last = nodes[-1]
            candidates = _preferred(model, last, next_a[last], next_b[last])
            node = _next_node(model, last, candidates, visited)
            visited[node] = True
            nodes.append(node)
        return Tour(model, nodes)

    def mutate(self, rng: Random, neighbor_lookup_k: int, best_of_n: int) -> "Tour":
        """
        Apply inversion then neighbor exchange to ``best_of_n`` copies and
        return the shortest one (the first found on ties).

        ``neighbor_lookup_k`` must be in ``1..size``; callers are expected
        to reject larger values before the search starts.
        """
        size = self.model.size
        if not 1 <= neighbor_lookup_k <= size:
            raise InvariantViolation(
                f"neighbor_lookup_k={neighbor_lookup_k} outside 1..{size}"
            )
        if best_of_n < 1:
            raise InvariantViolation(f"best_of_n={best_of_n} must be at least 1")

        best: Optional[Tour] = None
        for _ in range(best_of_n):
            nodes = self.nodes[:]

            # inversion
            a = rng.randrange(size)
            b = rng.randrange(size)
            if a > b:
                a, b = b, a
            nodes[a : b + 1] = nodes[a : b + 1][::-1]

            # neighbor exchange
            p = rng.randrange(size)
            node1 = nodes[p]
            node2 = self.model.neighbor_rank(node1)[rng.randrange(neighbor_lookup_k)]
            try:
                q = nodes.index(node2)
            except ValueError as exc:
                raise InvariantViolation(f"node {node2} not found during mutation exchange") from exc
            nodes[p], nodes[q] = node2, node1

            child = Tour(self.model, nodes)
            if best is None or child < best:
                best = child
        return best

    def copy(self) -> "Tour":
        return Tour(self.model, self.nodes, self.length)

    def labels(self) -> List[str]:
        return [self.model.labels[node] for node in self.nodes]

    def _key(self) -> float:
        if math.isnan(self.length):
            raise NumericError(f"tour length cannot be ordered: {self.length}")
        return self.length

    def __eq__(self, other):
        if not isinstance(other, Tour):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, Tour):
            return NotImplemented
        return self._key() < other._key()

    __hash__ = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"Tour(nodes={self.nodes}, length={self.length})"
