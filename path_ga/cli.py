import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from path_ga.data import load_dataset
from path_ga.display import render_best, render_dataset, render_generation, solution_count, thousands
from path_ga.errors import PathSearchError
from path_ga.evolutionary import EvolutionConfig, EvolutionarySearch
from path_ga.generation import CROSSOVER_POLICIES


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def build_config(args) -> EvolutionConfig:
    return EvolutionConfig(
        generations=args.generations,
        population_size=args.population_size,
        neighbor_lookup=args.neighbor_lookup,
        best_of=args.best_of,
        crossover_policy=args.crossover_policy,
        crossover_until=args.crossover_until,
        workers=args.workers,
        random_seed=args.seed,
    )


def run(args) -> None:
    t0 = time.perf_counter()
    dataset_path = Path(args.dataset)
    log(f"loading dataset from {dataset_path}")
    model = load_dataset(dataset_path)
    log(f"{model.size} nodes, longest edge {thousands(model.max_distance())}")
    log(f"{solution_count(model.size)} valid solutions in the dataset")

    cfg = build_config(args)
    search = EvolutionarySearch(cfg, model)

    logs_path = Path(args.logs)
    logs_path.parent.mkdir(parents=True, exist_ok=True)
    with logs_path.open("w") as logs:
        logs.write(render_dataset(model) + "\n")
        logs.write(render_generation(search.generation) + "\n")

        def on_generation(generation) -> None:
            if generation.id % args.display_interval == 0:
                logs.write(render_generation(generation) + "\n")
                log(f"gen {generation.id}: best length={thousands(generation.best.length)}")

        log(f"running {cfg.generations} generations of {cfg.population_size} tours")
        best = search.run(on_generation)
        summary = render_best(best)
        logs.write(summary)

    print(summary)
    log(f"done in {time.perf_counter() - t0:.2f}s (logs: {logs_path})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Genetic-algorithm search for short Hamiltonian paths")
    parser.add_argument("-d", "--dataset", default="dataset.json", help="Dataset file (JSON, or TSPLIB .tsp)")
    parser.add_argument("-l", "--logs", default="logs.txt", help="File to log every displayed generation to")
    parser.add_argument("-g", "--generations", type=int, default=100, help="Number of generations to run")
    parser.add_argument("-p", "--population-size", type=int, default=200, help="Number of tours in each generation")
    parser.add_argument(
        "-n",
        "--neighbor-lookup",
        type=int,
        default=4,
        help="Number of nearest neighbors considered by the exchange mutation (must be smaller than the node count)",
    )
    parser.add_argument(
        "-b", "--best-of", type=int, default=10, help="Mutated children generated per tour; only the best is kept"
    )
    parser.add_argument(
        "-i", "--display-interval", type=int, default=20, help="Generations between two logged generations"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")
    parser.add_argument("--crossover-policy", choices=CROSSOVER_POLICIES, default="age")
    parser.add_argument(
        "--crossover-until", type=int, default=10, help="With the age policy, generations numbered below this use crossover"
    )
    parser.add_argument("--workers", type=int, default=1, help="Threads breeding children of a generation")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.display_interval < 1:
        print("error: display interval must be at least 1", file=sys.stderr)
        return 1
    try:
        run(args)
    except (PathSearchError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
