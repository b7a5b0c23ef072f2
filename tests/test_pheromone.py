from __future__ import annotations

import pytest

from aco_tour import PHEROMONE_FLOOR, InvalidInputError, PheromoneField


def test_initialize_uniform() -> None:
    field = PheromoneField.initialize(4, 10)
    assert all(v == pytest.approx(1 / 40) for row in field.rows() for v in row)


def test_deposit_is_symmetric() -> None:
    field = PheromoneField.blank(3)
    field.deposit(0, 2, 1.5)
    assert field.value(0, 2) == 1.5
    assert field.value(2, 0) == 1.5
    assert field.value(1, 2) == 0.0


def test_evaporate_scales_and_floors() -> None:
    field = PheromoneField([[1.0, 0.0], [0.0, 1.0]])
    field.evaporate(0.25)
    assert field.value(0, 0) == pytest.approx(0.75)
    assert field.value(0, 1) == PHEROMONE_FLOOR


def test_repeated_evaporation_decreases_towards_floor() -> None:
    field = PheromoneField.initialize(5, 2)
    prev = field.rows()
    for _ in range(40):
        field.evaporate(0.5)
        cur = field.rows()
        for row_prev, row_cur in zip(prev, cur, strict=True):
            for a, b in zip(row_prev, row_cur, strict=True):
                assert PHEROMONE_FLOOR <= b <= a
        prev = cur
    assert field.min_value() == PHEROMONE_FLOOR
    assert all(v == PHEROMONE_FLOOR for row in field.rows() for v in row)


def test_merge_contributions_formula() -> None:
    base = PheromoneField.initialize(2, 1)
    c1 = PheromoneField.blank(2)
    c1.deposit(0, 1, 2.0)
    c1.evaporate(0.5)
    c2 = PheromoneField.blank(2)
    c2.evaporate(0.5)

    merged = PheromoneField.merge_contributions(base, [c1, c2], 0.5)

    assert merged.value(0, 1) == pytest.approx(0.25 + 1.0 + PHEROMONE_FLOOR)
    assert merged.value(1, 0) == merged.value(0, 1)
    assert merged.value(0, 0) == pytest.approx(0.25 + 2 * PHEROMONE_FLOOR)
    # base не меняется
    assert base.value(0, 1) == 0.5


@pytest.mark.parametrize("rate", [0.0, 0.3, 1.0])
def test_merge_keeps_floor(rate: float) -> None:
    base = PheromoneField.initialize(3, 1)
    base.evaporate(1.0)
    merged = PheromoneField.merge_contributions(base, [], rate)
    assert merged.min_value() >= PHEROMONE_FLOOR


def test_merge_rejects_size_mismatch() -> None:
    with pytest.raises(InvalidInputError):
        PheromoneField.merge_contributions(PheromoneField.blank(3), [PheromoneField.blank(2)], 0.5)


def test_copy_shares_no_rows() -> None:
    field = PheromoneField.initialize(3, 1)
    other = field.copy()
    other.deposit(0, 1, 5.0)
    assert field.value(0, 1) == pytest.approx(1 / 3)


def test_non_square_rejected() -> None:
    with pytest.raises(InvalidInputError):
        PheromoneField([[1.0, 2.0]])


def test_row_is_read_only_snapshot() -> None:
    field = PheromoneField.initialize(3, 1)
    row = field.row(0)
    assert isinstance(row, tuple)
    with pytest.raises(TypeError):
        row[1] = 9.0  # type: ignore[index]
    field.deposit(0, 1, 1.0)
    assert row[1] == pytest.approx(1 / 3)
