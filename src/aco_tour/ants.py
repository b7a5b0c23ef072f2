from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from .errors import InvalidInputError, NumericalUnderflow
from .graph import DistanceGraph
from .pheromone import PheromoneField


@dataclass(slots=True)
class ACOParams:
    '''
    Параметры алгоритма муравьиной колонии

    Attributes:
        alpha: важность феромона
        beta: важность эвристической информации (обратного расстояния)
        evaporation_rate: коэффициент испарения феромона (0 <= rate <= 1)
        q: количество феромона, откладываемого муравьем
        num_agents: количество муравьев на итерацию
        num_iterations: количество итераций
    '''
    alpha: float = 1.0
    beta: float = 2.0
    evaporation_rate: float = 0.5
    q: float = 100.0
    num_agents: int = 10
    num_iterations: int = 100

    def validate(self) -> None:
        if not 0.0 <= self.evaporation_rate <= 1.0:
            raise InvalidInputError(f"evaporation_rate вне [0, 1]: {self.evaporation_rate}")
        if self.alpha < 0:
            raise InvalidInputError(f"alpha < 0: {self.alpha}")
        if self.beta < 0:
            raise InvalidInputError(f"beta < 0: {self.beta}")
        if not self.q > 0:
            raise InvalidInputError(f"q <= 0: {self.q}")
        if self.num_agents < 1:
            raise InvalidInputError(f"num_agents < 1: {self.num_agents}")
        if self.num_iterations < 0:
            raise InvalidInputError(f"num_iterations < 0: {self.num_iterations}")


@dataclass(slots=True, frozen=True)
class AntTour:
    '''
    Результат одного муравья за итерацию

    Attributes:
        tour: перестановка вершин 0..n-1 (замкнутая неявно)
        length: длина замкнутого маршрута
        contribution: личная таблица отложений, уже испарённая
    '''
    tour: tuple[int, ...]
    length: float
    contribution: PheromoneField


@dataclass(slots=True)
class Ant:
    '''Состояние муравья во время построения тура'''
    current: int
    path: list[int]
    visited: set[int]
    contribution: PheromoneField = field(repr=False)

    @classmethod
    def start_at(cls, city: int, n: int) -> Ant:
        return cls(current=city, path=[city], visited={city}, contribution=PheromoneField.blank(n))

    def move_to(self, city: int) -> None:
        self.path.append(city)
        self.visited.add(city)
        self.current = city


def _heuristic(dist: float) -> float:
    # 1/d не определено для совпадающих точек
    return 1.0 / dist if dist > 0 else 0.0


def _score(tau: float, eta: float, alpha: float, beta: float) -> float:
    try:
        return (tau ** alpha) * (eta ** beta)
    except OverflowError:
        # второй множитель может быть нулём
        if (tau == 0 and alpha > 0) or (eta == 0 and beta > 0):
            return 0.0
        return math.inf


def normalize(scores: list[float]) -> list[float]:
    '''
    Нормализует веса в вероятности

    Веса делятся на максимальный, поэтому сумма не переполняется.
    Если есть бесконечные веса, вероятность делится поровну между ними.
    NaN считается нулём. NumericalUnderflow, если все веса нулевые
    '''
    clean = [s if s > 0 else 0.0 for s in scores]
    top = max(clean, default=0.0)
    if top == math.inf:
        clean = [1.0 if s == math.inf else 0.0 for s in clean]
        top = 1.0
    if not top > 0:
        raise NumericalUnderflow("все веса нулевые")
    scaled = [s / top for s in clean]
    total = math.fsum(scaled)
    return [s / total for s in scaled]


def roulette(probs: list[float], r: float) -> int:
    '''
    Выбор рулеткой: первая вершина по порядку индексов, у которой
    накопленная вероятность превышает r. Если из-за округления сумма
    не дошла до r, берётся последняя вершина с ненулевой вероятностью
    '''
    acc = 0.0
    last = -1
    for j, p in enumerate(probs):
        if p <= 0:
            continue
        acc += p
        last = j
        if r < acc:
            return j
    return last


class TourConstructor:
    '''
    Построение тура одним муравьем

    Attributes:
        graph: граф расстояний
        params: параметры алгоритма (ACOParams)
        rng: генератор случайных чисел; все случайные решения берутся только из него
    '''
    def __init__(self, graph: DistanceGraph, params: ACOParams, rng: random.Random) -> None:
        self.g = graph
        self.params = params
        self.rng = rng
        n = graph.n
        self.eta = [[0.0 if i == j else _heuristic(graph.distance(i, j)) for j in range(n)]
                    for i in range(n)]

    def build(self, tau: PheromoneField) -> AntTour:
        '''
        Строит тур по текущему полю tau (поле только читается)

        Returns:
            AntTour с туром, длиной и испарённой личной таблицей
        '''
        g = self.g
        q = self.params.q
        ant = Ant.start_at(self.rng.randrange(g.n), g.n)

        while len(ant.path) < g.n:
            cur = ant.current
            nxt = self._choose_next(cur, ant.visited, tau)
            self._deposit(ant, cur, nxt, q)
            ant.move_to(nxt)

        # Ребро замыкания
        self._deposit(ant, ant.path[-1], ant.path[0], q)

        length = g.tour_length(ant.path)
        ant.contribution.evaporate(self.params.evaporation_rate)
        return AntTour(tour=tuple(ant.path), length=length, contribution=ant.contribution)

    def _deposit(self, ant: Ant, a: int, b: int, q: float) -> None:
        d = self.g.distance(a, b)
        if d > 0:
            ant.contribution.deposit(a, b, q / d)

    def _choose_next(self, i: int, visited: set[int], tau: PheromoneField) -> int:
        '''
        Выбор следующей вершины, находясь в вершине i

        Attributes:
            i: текущая вершина
            visited: посещённые вершины (их вес 0)
            tau: поле феромонов
        Returns:
            выбранная вершина
        '''
        alpha = self.params.alpha
        beta = self.params.beta
        tau_row = tau.row(i)
        eta_row = self.eta[i]

        scores = [0.0 if j in visited else _score(tau_row[j], eta_row[j], alpha, beta)
                  for j in range(self.g.n)]
        try:
            probs = normalize(scores)
        except NumericalUnderflow:
            # Равномерно по непосещённым
            probs = [0.0 if j in visited else 1.0 for j in range(self.g.n)]
            probs = [p / sum(probs) for p in probs]

        return roulette(probs, self.rng.random())
