import random

from path_ga.data import random_dataset
from path_ga.evolutionary import EvolutionConfig, EvolutionarySearch


def main(size: int = 30, generations: int = 25, seed: int = 7):
    rng = random.Random(seed)
    model = random_dataset(size, rng)

    cfg = EvolutionConfig(
        generations=generations,
        population_size=40,
        neighbor_lookup=4,
        best_of=5,
        random_seed=seed,
    )
    search = EvolutionarySearch(cfg, model)
    search.run(lambda gen: print(f"gen {gen.id}: best length={gen.best.length:.2f}"))
    best = search.best()
    print(" -> ".join(best.labels()))
    return best


if __name__ == "__main__":
    main()
