from __future__ import annotations

import pytest

from aco_tour import ACOParams, DistanceGraph, Point, PointsFactory


@pytest.fixture
def unit_square() -> list[Point]:
    return [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]


@pytest.fixture
def square_graph(unit_square: list[Point]) -> DistanceGraph:
    return DistanceGraph(unit_square)


@pytest.fixture
def random_graph() -> DistanceGraph:
    return DistanceGraph(PointsFactory.random_points(9, width=100.0, height=100.0, seed=3))


@pytest.fixture
def params() -> ACOParams:
    return ACOParams(alpha=1.0, beta=2.0, evaporation_rate=0.5, q=100.0, num_agents=10, num_iterations=20)
