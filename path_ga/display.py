"""
Human-readable rendering of models, tours and generations for the log file.
"""
import math
from typing import Iterable, List, Sequence

from .distances import DistanceModel
from .generation import Generation
from .tour import Tour


SEPARATOR = "'"


def _plain(value) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}".rstrip("0").rstrip(".")
    return str(value)


def thousands(value) -> str:
    """Group the integer part as ``12'34'567``: three digits, then pairs."""
    text = _plain(value)
    sign = "-" if text.startswith("-") else ""
    digits, dot, fraction = text[len(sign):].partition(".")
    if not digits.isdigit():
        return text
    groups = [digits[-3:]]
    digits = digits[:-3]
    while digits:
        groups.append(digits[-2:])
        digits = digits[:-2]
    return sign + SEPARATOR.join(reversed(groups)) + dot + fraction


def max_display_width(values: Iterable) -> int:
    return max((len(str(v)) for v in values), default=0)


def solution_count(size: int) -> str:
    """``size!`` in scientific notation, e.g. ``3.629e6``, without overflowing."""
    log10 = math.lgamma(size + 1) / math.log(10)
    exponent = math.floor(log10)
    mantissa = 10 ** (log10 - exponent)
    if round(mantissa, 3) >= 10:
        mantissa /= 10
        exponent += 1
    return f"{mantissa:.3f}e{exponent}"


def render_tour(tour: Tour, label_width: int = 0, length_width: int = 0) -> str:
    path = " -> ".join(label.rjust(label_width) for label in tour.labels())
    return f"{path} · {thousands(tour.length).rjust(length_width)}"


def _box(title: str, lines: Sequence[str]) -> str:
    width = max([len(line) for line in lines] + [len(title) + 2])
    out = ["┌─" + f" {title} ".ljust(width, "─") + "─┐"]
    out.extend(f"│ {line.ljust(width)} │" for line in lines)
    out.append("└─" + "─" * width + "─┘")
    return "\n".join(out) + "\n"


def render_generation(generation: Generation) -> str:
    label_width = max_display_width(generation.model.labels)
    length_width = max_display_width(thousands(tour.length) for tour in generation)
    id_width = len(thousands(generation.generation_count))
    lines = [render_tour(tour, label_width, length_width) for tour in generation]
    return _box(f"GENERATION #{generation.id:0{id_width}d}", lines)


def render_best(tour: Tour) -> str:
    return _box("BEST SOLUTION", [render_tour(tour)])


def _table(row_labels: Sequence[str], column_labels: Sequence[str], cells: List[List[str]]) -> str:
    label_width = max_display_width(row_labels)
    column_width = max(max_display_width(column_labels), max(max_display_width(row) for row in cells))
    inner = len(column_labels) * (column_width + 1) - 1
    pad = " " * label_width
    out = [pad + "   " + " ".join(c.rjust(column_width) for c in column_labels)]
    out.append(pad + " ┌─" + "─" * inner + "─┐")
    for label, row in zip(row_labels, cells):
        out.append(label.rjust(label_width) + " │ " + " ".join(c.rjust(column_width) for c in row) + " │")
    out.append(pad + " └─" + "─" * inner + "─┘")
    return "\n".join(out) + "\n"


def render_dataset(model: DistanceModel) -> str:
    """Distance table for matrix models (zero shown as ``_``), coordinate table for point models."""
    labels = list(model.labels)
    if model.is_matrix:
        cells = [
            ["_" if value == 0 else thousands(float(value)) for value in row]
            for row in model.distances.matrix
        ]
        return _table(labels, labels, cells)
    cells = [[thousands(float(x)), thousands(float(y))] for x, y in model.distances.points]
    return _table(labels, ["x", "y"], cells)
