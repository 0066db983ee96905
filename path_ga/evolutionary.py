import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

from .distances import DistanceModel
from .errors import ValidationError
from .generation import CROSSOVER_POLICIES, Generation
from .tour import Tour


@dataclass
class EvolutionConfig:
    generations: int = 100
    population_size: int = 200
    neighbor_lookup: int = 4
    best_of: int = 10
    crossover_policy: str = "age"
    crossover_until: int = 10
    workers: int = 1
    random_seed: Optional[int] = None

    def validate(self, size: int) -> None:
        for name in ("generations", "population_size", "best_of", "workers"):
            if getattr(self, name) < 1:
                raise ValidationError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.crossover_policy not in CROSSOVER_POLICIES:
            raise ValidationError(
                f"Unknown crossover policy {self.crossover_policy!r}, expected one of {CROSSOVER_POLICIES}"
            )
        if not 1 <= self.neighbor_lookup < size:
            raise ValidationError(
                f"neighbor_lookup must be between 1 and {size - 1} "
                f"(the number of nodes minus one), got {self.neighbor_lookup}"
            )


class EvolutionarySearch:
    """Runs a fixed number of generations over one distance model."""

    def __init__(self, config: EvolutionConfig, model: DistanceModel, rng: random.Random = None):
        config.validate(model.size)
        self.cfg = config
        self.model = model
        self.rng = rng or random.Random(config.random_seed)
        self.generation = Generation.initial(config.generations, config.population_size, model, self.rng)
        self.history: List[float] = [self.generation.best.length]

    def step(self, executor=None) -> Generation:
        self.generation = self.generation.evolve(
            self.rng,
            self.cfg.neighbor_lookup,
            self.cfg.best_of,
            crossover_policy=self.cfg.crossover_policy,
            crossover_until=self.cfg.crossover_until,
            executor=executor,
        )
        self.history.append(self.generation.best.length)
        return self.generation

    def run(self, callback: Optional[Callable[[Generation], None]] = None) -> Tour:
        if self.cfg.workers > 1:
            with ThreadPoolExecutor(max_workers=self.cfg.workers) as ex:
                self._run(callback, ex)
        else:
            self._run(callback, None)
        return self.best()

    def _run(self, callback, executor) -> None:
        while self.generation.id < self.cfg.generations:
            self.step(executor)
            if callback is not None:
                callback(self.generation)

    def best(self) -> Tour:
        return self.generation.best
