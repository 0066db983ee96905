import random
from concurrent.futures import Executor
from functools import partial
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .distances import DistanceModel
from .errors import InvariantViolation, ValidationError
from .tour import Tour


CROSSOVER_POLICIES = ("age", "always", "never")


def selection_weights(population: Sequence[Tour]) -> np.ndarray:
    """
    Cumulative roulette weights for a population sorted by ascending length.

    Each tour weighs ``(worst - length)**2 + delta`` with
    ``delta = (worst - best)**2 / n``, so the worst tour keeps a chance of
    ``delta``. A population of equal lengths is weighted uniformly.
    """
    lengths = np.array([tour.length for tour in population], dtype=float)
    best, worst = lengths[0], lengths[-1]
    delta = (worst - best) ** 2 / len(lengths)
    weights = (worst - lengths) ** 2 + delta
    if weights.sum() <= 0:
        weights = np.ones_like(lengths)
    return np.cumsum(weights)


class Generation:
    """One population of the search, sorted shortest first. Never modified after construction."""

    def __init__(self, id: int, generation_count: int, population: Sequence[Tour]):
        if not population:
            raise InvariantViolation("a generation needs at least one tour")
        self.id = id
        self.generation_count = generation_count
        self.population: Tuple[Tour, ...] = tuple(sorted(population))
        self.population_size = len(self.population)
        self.cumulative_weights = selection_weights(self.population)
        self.total_weight = float(self.cumulative_weights[-1])

    @classmethod
    def initial(
        cls,
        generation_count: int,
        population_size: int,
        model: DistanceModel,
        rng: random.Random,
        id: int = 1,
    ) -> "Generation":
        population = [Tour.random(model, rng) for _ in range(population_size)]
        return cls(id, generation_count, population)

    @property
    def best(self) -> Tour:
        return self.population[0]

    @property
    def model(self) -> DistanceModel:
        return self.population[0].model

    def lengths(self) -> List[float]:
        return [tour.length for tour in self.population]

    def select_parent(self, rng: random.Random) -> Tour:
        pointer = rng.random() * self.total_weight
        index = int(np.searchsorted(self.cumulative_weights, pointer, side="left"))
        if index >= self.population_size:
            raise InvariantViolation(f"no parent owns selection pointer {pointer} of {self.total_weight}")
        return self.population[index]

    def uses_crossover(self, policy: str = "age", crossover_until: int = 10) -> bool:
        if policy == "always":
            return True
        if policy == "never":
            return False
        if policy == "age":
            return self.id < crossover_until
        raise ValidationError(f"Unknown crossover policy {policy!r}, expected one of {CROSSOVER_POLICIES}")

    def _breed(self, rng: random.Random, with_crossover: bool, neighbor_lookup_k: int, best_of_n: int) -> Tour:
        if with_crossover:
            parent1 = self.select_parent(rng)
            parent2 = self.select_parent(rng)
            child = Tour.crossover(parent1, parent2, rng)
        else:
            child = self.select_parent(rng)
        return child.mutate(rng, neighbor_lookup_k, best_of_n)

    def _breed_seeded(self, seed: int, with_crossover: bool, neighbor_lookup_k: int, best_of_n: int) -> Tour:
        return self._breed(random.Random(seed), with_crossover, neighbor_lookup_k, best_of_n)

    def evolve(
        self,
        rng: random.Random,
        neighbor_lookup_k: int,
        best_of_n: int,
        crossover_policy: str = "age",
        crossover_until: int = 10,
        executor: Optional[Executor] = None,
    ) -> "Generation":
        """
        Breed the next generation.

        Without an executor every draw comes from ``rng`` in slot order.
        With one, a seed per slot is drawn from ``rng`` up front and each
        slot breeds on its own stream, so the result does not depend on the
        number of workers.
        """
        with_crossover = self.uses_crossover(crossover_policy, crossover_until)
        if executor is None:
            children = [
                self._breed(rng, with_crossover, neighbor_lookup_k, best_of_n)
                for _ in range(self.population_size)
            ]
        else:
            seeds = [rng.getrandbits(64) for _ in range(self.population_size)]
            breed = partial(
                self._breed_seeded,
                with_crossover=with_crossover,
                neighbor_lookup_k=neighbor_lookup_k,
                best_of_n=best_of_n,
            )
            children = list(executor.map(breed, seeds))
        return Generation(self.id + 1, self.generation_count, children)

    def __len__(self) -> int:
        return self.population_size

    def __iter__(self):
        return iter(self.population)

    def __repr__(self) -> str:
        return f"Generation(id={self.id}, size={self.population_size}, best={self.best.length})"
