from __future__ import annotations

import pytest

from aco_tour import PHEROMONE_FLOOR, AntSystemUpdater, AntTour, InvalidInputError, PheromoneField, SourceMergeUpdater
from aco_tour.updater import run_update, select_best


def make_tour(tour: tuple[int, ...], length: float, n: int = 3) -> AntTour:
    return AntTour(tour=tour, length=length, contribution=PheromoneField.blank(n))


def test_select_best_prefers_first_on_ties() -> None:
    tours = [make_tour((0, 1, 2), 5.0), make_tour((1, 2, 0), 3.0), make_tour((2, 0, 1), 3.0)]
    assert select_best(tours) == 1


def test_select_best_requires_tours() -> None:
    with pytest.raises(InvalidInputError):
        select_best([])


def test_source_merge_matches_field_merge() -> None:
    base = PheromoneField.initialize(3, 2)
    contrib = PheromoneField.blank(3)
    contrib.deposit(0, 1, 4.0)
    contrib.evaporate(0.5)
    tours = [AntTour(tour=(0, 1, 2), length=3.0, contribution=contrib)]

    merged = SourceMergeUpdater().update(base, tours, 0.5)

    expected = PheromoneField.merge_contributions(base, [contrib], 0.5)
    assert merged.rows() == expected.rows()
    assert merged.value(0, 1) == pytest.approx(0.5 / 6 + 2.0)


def test_ant_system_evaporates_once_then_deposits_q_over_length() -> None:
    base = PheromoneField.initialize(3, 1)
    nxt = AntSystemUpdater(q=3.0).update(base, [make_tour((0, 1, 2), 3.0)], 0.5)

    for a, b in [(0, 1), (1, 2), (2, 0)]:
        assert nxt.value(a, b) == pytest.approx(1 / 6 + 1.0)
        assert nxt.value(b, a) == pytest.approx(1 / 6 + 1.0)
    assert nxt.value(1, 1) == pytest.approx(1 / 6)
    assert base.value(0, 1) == pytest.approx(1 / 3)


def test_ant_system_skips_zero_length_tours() -> None:
    base = PheromoneField.initialize(3, 1)
    nxt = AntSystemUpdater(q=3.0).update(base, [make_tour((0, 1, 2), 0.0)], 1.0)
    assert nxt.min_value() == PHEROMONE_FLOOR
    assert all(v == PHEROMONE_FLOOR for row in nxt.rows() for v in row)


def test_run_update_reports_best() -> None:
    tours = [make_tour((0, 1, 2), 7.0), make_tour((0, 2, 1), 6.0)]
    outcome = run_update(SourceMergeUpdater(), PheromoneField.initialize(3, 2), tours, 0.5)
    assert outcome.best_index == 1
    assert outcome.best is tours[1]
    assert outcome.field.min_value() >= PHEROMONE_FLOOR
