from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .ants import AntTour
from .errors import InvalidInputError
from .pheromone import PheromoneField


@dataclass(slots=True, frozen=True)
class IterationOutcome:
    '''
    Итог одной итерации

    Attributes:
        field: поле феромонов для следующей итерации
        best: лучший муравей итерации
        best_index: его номер (при равенстве длин - меньший)
    '''
    field: PheromoneField
    best: AntTour
    best_index: int


def select_best(tours: Sequence[AntTour]) -> int:
    '''Индекс муравья с минимальной длиной тура; при равенстве - первый'''
    if not tours:
        raise InvalidInputError("Итерация без муравьёв.")
    best = 0
    for k in range(1, len(tours)):
        if tours[k].length < tours[best].length:
            best = k
    return best


class PheromoneUpdater(Protocol):
    '''Правило глобального обновления феромона после итерации'''

    def update(self, field: PheromoneField, tours: Sequence[AntTour],
               rate: float) -> PheromoneField: ...


class SourceMergeUpdater:
    '''
    Слияние испарённых таблиц муравьёв с неиспарённым полем:
    new = (1 - rate) * field + sum(contribution_k)
    '''

    def update(self, field: PheromoneField, tours: Sequence[AntTour],
               rate: float) -> PheromoneField:
        return PheromoneField.merge_contributions(field, [t.contribution for t in tours], rate)


class AntSystemUpdater:
    '''
    Классическое правило Ant System: поле испаряется один раз,
    затем каждый муравей откладывает q / L_k на каждое ребро своего тура.
    Личные таблицы муравьёв не используются

    Attributes:
        q: количество феромона, откладываемого муравьем
    '''

    def __init__(self, q: float) -> None:
        self.q = q

    def update(self, field: PheromoneField, tours: Sequence[AntTour],
               rate: float) -> PheromoneField:
        nxt = field.copy()
        nxt.evaporate(rate)
        for t in tours:
            if not (math.isfinite(t.length) and t.length > 0):
                continue
            amount = self.q / t.length
            path = t.tour
            for a, b in zip(path, path[1:] + path[:1], strict=True):
                nxt.deposit(a, b, amount)
        return nxt


def run_update(updater: PheromoneUpdater, field: PheromoneField,
               tours: Sequence[AntTour], rate: float) -> IterationOutcome:
    '''Обновляет поле и определяет лучшего муравья итерации'''
    k = select_best(tours)
    return IterationOutcome(field=updater.update(field, tours, rate), best=tours[k], best_index=k)
