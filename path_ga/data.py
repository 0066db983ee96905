import json
import random
from pathlib import Path
from typing import Dict, Union

import tsplib95

from .distances import DistanceModel
from .errors import ValidationError


PathLike = Union[str, Path]


def _read_document(path: Path) -> Dict:
    if not path.exists():
        raise FileNotFoundError(f"The given file does not exist: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Unable to read the dataset file {path}: {exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Unable to parse the dataset file {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise ValidationError(f"The dataset file {path} should contain a JSON object")
    return document


def model_from_document(document: Dict) -> DistanceModel:
    """Build a model from ``labels`` plus ``locations`` or ``distance_matrix``; locations win when non-empty."""
    labels = document.get("labels")
    if not isinstance(labels, list):
        raise ValidationError("The dataset should have a list of labels")
    locations = document.get("locations")
    if locations:
        return DistanceModel.from_points(labels, locations)
    matrix = document.get("distance_matrix")
    if matrix is None:
        raise ValidationError("The dataset should have either locations or a distance_matrix")
    return DistanceModel.from_matrix(labels, matrix)


def load_json_dataset(path: PathLike) -> DistanceModel:
    return model_from_document(_read_document(Path(path)))


def load_tsplib_dataset(path: PathLike) -> DistanceModel:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"The given file does not exist: {path}")
    try:
        problem = tsplib95.load(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Unable to read the dataset file {path}: {exc}") from exc
    return DistanceModel.from_graph(problem.get_graph())


def load_dataset(path: PathLike) -> DistanceModel:
    path = Path(path)
    if path.suffix.lower() == ".tsp":
        return load_tsplib_dataset(path)
    return load_json_dataset(path)


def random_dataset(size: int, rng: random.Random, square_size: float = 100.0) -> DistanceModel:
    labels = [f"P{i}" for i in range(size)]
    points = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(size)]
    return DistanceModel.from_points(labels, points)
