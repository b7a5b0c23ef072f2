from __future__ import annotations

import csv
import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .errors import InvalidInputError


@dataclass(slots=True, frozen=True)
class Point:
    '''
    Точка на плоскости

    Attributes:
        x: абсцисса
        y: ордината
    '''
    x: float
    y: float

    def dist(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


def _as_point(p: Point | Sequence[float]) -> Point:
    if isinstance(p, Point):
        return p
    if len(p) != 2:
        raise InvalidInputError(f"Ожидалась пара координат, получено: {p!r}")
    return Point(float(p[0]), float(p[1]))


class DistanceGraph:
    '''
    Полный неориентированный граф на точках плоскости для задачи коммивояжёра

    Хранит матрицу евклидовых расстояний `d[i][j]`, считается один раз на запуск
    Матрица симметрична, диагональ нулевая; после построения только для чтения
    Вершина идентифицируется индексом точки во входной последовательности
    '''

    def __init__(self, points: Iterable[Point | Sequence[float]]) -> None:
        pts = tuple(_as_point(p) for p in points)
        if len(pts) < 2:
            raise InvalidInputError("Нужно как минимум две точки.")
        self.points: tuple[Point, ...] = pts
        self.n: int = len(pts)
        # Считаем обе половины матрицы, без оптимизации по симметрии
        self.d: tuple[tuple[float, ...], ...] = tuple(
            tuple(a.dist(b) for b in pts) for a in pts
        )

    # ---- Основные операции -------------------------------------------------
    def distance(self, i: int, j: int) -> float:
        return self.d[i][j]

    def tour_length(self, tour: Sequence[int]) -> float:
        '''Длина замкнутого маршрута (включая ребро последняя -> первая)'''
        if len(tour) < 2:
            return 0.0
        total = 0.0
        for a, b in zip(tour, tour[1:], strict=False):
            total += self.d[a][b]
        return total + self.d[tour[-1]][tour[0]]

    # ---- Загрузка / сохранение --------------------------------------------
    @staticmethod
    def from_csv(path: str) -> DistanceGraph:
        '''Загружает точки из CSV-файла: по строке `x,y` на точку

        Пустые строки пропускаются.
        '''
        points = []
        try:
            with open(path, encoding="utf-8") as f:
                rows = list(csv.reader(f))
        except (UnicodeDecodeError, csv.Error) as e:
            raise InvalidInputError(f"{path}: не удалось прочитать CSV: {e}") from e
        for lineno, row in enumerate(rows, start=1):
            if not row:
                continue
            try:
                x, y = (float(v) for v in row)
            except ValueError as e:
                raise InvalidInputError(f"{path}:{lineno}: ожидается строка 'x,y'") from e
            points.append(Point(x, y))
        return DistanceGraph(points)

    def to_csv(self, path: str) -> None:
        '''Сохраняет точки в CSV-файл'''
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            for p in self.points:
                writer.writerow([p.x, p.y])


class PointsFactory:
    '''Генерация наборов точек для экспериментов'''

    @staticmethod
    def random_points(n: int, *, width: float = 1200.0, height: float = 700.0,
                      seed: int | None = None) -> list[Point]:
        '''Создаёт n случайных точек в прямоугольнике [0, width] x [0, height]'''
        if n < 2:
            raise InvalidInputError("n >= 2")
        rng = random.Random(seed)
        return [Point(rng.uniform(0.0, width), rng.uniform(0.0, height)) for _ in range(n)]

    @staticmethod
    def regular_polygon(n: int, *, radius: float = 1.0) -> list[Point]:
        '''Вершины правильного n-угольника; оптимальный тур - его периметр'''
        if n < 2:
            raise InvalidInputError("n >= 2")
        step = 2.0 * math.pi / n
        return [Point(radius * math.cos(k * step), radius * math.sin(k * step)) for k in range(n)]
