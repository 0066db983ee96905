import random
import unittest

from path_ga.display import (
    max_display_width,
    render_best,
    render_dataset,
    render_generation,
    render_tour,
    solution_count,
    thousands,
)
from path_ga.distances import DistanceModel
from path_ga.generation import Generation
from path_ga.tour import Tour

from tests.helpers import four_node_model


class TestNumbers(unittest.TestCase):
    def test_thousands_grouping(self):
        self.assertEqual(thousands(999), "999")
        self.assertEqual(thousands(1234), "1'234")
        self.assertEqual(thousands(1234567), "12'34'567")
        self.assertEqual(thousands(-98765.0), "-98'765")

    def test_thousands_floats(self):
        self.assertEqual(thousands(4.0), "4")
        self.assertEqual(thousands(1234.5), "1'234.5")
        self.assertEqual(thousands(0.126), "0.13")
        self.assertEqual(thousands(float("inf")), "inf")

    def test_max_display_width(self):
        self.assertEqual(max_display_width(["a", "abc", 12]), 3)
        self.assertEqual(max_display_width([]), 0)

    def test_solution_count(self):
        self.assertEqual(solution_count(4), "2.400e1")
        self.assertEqual(solution_count(10), "3.629e6")
        self.assertTrue(solution_count(200).endswith("e374"))


class TestRendering(unittest.TestCase):
    def setUp(self):
        self.model = four_node_model()

    def test_render_tour(self):
        self.assertEqual(render_tour(Tour(self.model, [0, 1, 2, 3])), "A -> B -> C -> D · 4")
        self.assertEqual(render_tour(Tour(self.model, [0, 1, 2, 3]), 2, 3), " A ->  B ->  C ->  D ·   4")

    def test_render_best(self):
        lines = render_best(Tour(self.model, [0, 1, 2, 3])).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[0].startswith("┌─ BEST SOLUTION "))
        self.assertEqual(lines[1], "│ A -> B -> C -> D · 4 │")
        self.assertEqual(len({len(line) for line in lines}), 1)

    def test_render_generation(self):
        generation = Generation.initial(100, 5, self.model, random.Random(0))
        lines = render_generation(generation).splitlines()
        self.assertIn("GENERATION #001", lines[0])
        self.assertEqual(len(lines), 7)
        self.assertEqual(len({len(line) for line in lines}), 1)

    def test_render_matrix_dataset(self):
        table = render_dataset(self.model)
        lines = table.splitlines()
        self.assertEqual(lines[0].split(), ["A", "B", "C", "D"])
        self.assertEqual(lines[2], "A │ _ 1 4 3 │")
        self.assertEqual(len(lines), 7)

    def test_render_point_dataset(self):
        model = DistanceModel.from_points(["O", "X"], [(0, 0), (1500, 2.5)])
        lines = render_dataset(model).splitlines()
        self.assertEqual(lines[0].split(), ["x", "y"])
        self.assertIn("1'500", lines[3])
        self.assertIn("2.5", lines[3])


if __name__ == "__main__":
    unittest.main()
