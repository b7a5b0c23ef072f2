from __future__ import annotations

from collections.abc import Sequence

from .errors import InvalidInputError

PHEROMONE_FLOOR = 0.0001


class PheromoneField:
    '''
    Матрица феромонов n x n (желательность ребра i<->j)

    Каждая операция меняет обе ячейки [i][j] и [j][i], поэтому матрица
    симметрична. После evaporate/merge все значения >= PHEROMONE_FLOOR.
    Строки всегда выделяются заново, общих списков между полями нет.
    '''

    __slots__ = ("n", "_tau")

    def __init__(self, values: Sequence[Sequence[float]]) -> None:
        n = len(values)
        if n == 0 or any(len(row) != n for row in values):
            raise InvalidInputError("Матрица феромонов должна быть квадратной и непустой.")
        self.n: int = n
        self._tau: list[list[float]] = [[float(x) for x in row] for row in values]

    @classmethod
    def initialize(cls, n: int, num_agents: int) -> PheromoneField:
        '''Равномерное начальное поле: 1 / (n * num_agents) на каждом ребре'''
        if n < 1 or num_agents < 1:
            raise InvalidInputError("n >= 1 и num_agents >= 1")
        tau0 = 1.0 / (n * num_agents)
        return cls([[tau0] * n for _ in range(n)])

    @classmethod
    def blank(cls, n: int) -> PheromoneField:
        '''Нулевая таблица: личные отложения одного муравья за итерацию'''
        return cls([[0.0] * n for _ in range(n)])

    # ---- Доступ --------------------------------------------------------------
    def value(self, i: int, j: int) -> float:
        return self._tau[i][j]

    def row(self, i: int) -> tuple[float, ...]:
        return tuple(self._tau[i])

    def rows(self) -> list[list[float]]:
        '''Глубокая копия значений'''
        return [list(r) for r in self._tau]

    def min_value(self) -> float:
        return min(min(r) for r in self._tau)

    def copy(self) -> PheromoneField:
        return PheromoneField(self._tau)

    # ---- Обновление ------------------------------------------------------------
    def evaporate(self, rate: float, floor: float = PHEROMONE_FLOOR) -> None:
        '''Испарение: tau *= (1 - rate), затем tau = max(tau, floor)'''
        keep = 1.0 - rate
        for r in self._tau:
            for j, v in enumerate(r):
                r[j] = max(v * keep, floor)

    def deposit(self, i: int, j: int, amount: float) -> None:
        '''Откладывание феромона на ребро i<->j в обе стороны'''
        self._tau[i][j] += amount
        if i != j:
            self._tau[j][i] += amount

    @staticmethod
    def merge_contributions(base: PheromoneField, contributions: Sequence[PheromoneField],
                            rate: float, floor: float = PHEROMONE_FLOOR) -> PheromoneField:
        '''
        Новое поле: (1 - rate) * base[i][j] + сумма contributions_k[i][j]

        Таблицы муравьёв к этому моменту уже испарены, а base - нет.
        В каноническом ACO глобальное поле испаряется один раз и к нему
        прибавляются "сырые" отложения; здесь формула воспроизводится как есть.

        Attributes:
            base: поле до испарения
            contributions: испарённые таблицы муравьёв этой итерации
            rate: коэффициент испарения
        Returns:
            новое поле (base не изменяется)
        '''
        n = base.n
        if any(c.n != n for c in contributions):
            raise InvalidInputError("Размеры таблиц муравьёв не совпадают с полем.")
        keep = 1.0 - rate
        merged = []
        for i in range(n):
            row = []
            for j in range(n):
                total = keep * base._tau[i][j]
                for c in contributions:
                    total += c._tau[i][j]
                row.append(max(total, floor))
            merged.append(row)
        return PheromoneField(merged)

    def __repr__(self) -> str:
        return f"PheromoneField(n={self.n}, min={self.min_value():.4g})"
