from __future__ import annotations

import enum
import math
import random
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from .ants import ACOParams, AntTour, TourConstructor
from .errors import InvalidInputError
from .graph import DistanceGraph
from .pheromone import PheromoneField
from .updater import PheromoneUpdater, SourceMergeUpdater, run_update


class RunStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    '''
    Событие после каждой итерации

    Attributes:
        iteration: номер итерации (с 1)
        tour: лучший тур этой итерации
        length: его длина
        best_length: лучшая длина за весь запуск
    '''
    iteration: int
    tour: tuple[int, ...]
    length: float
    best_length: float


@dataclass(slots=True, frozen=True)
class Completed:
    '''
    Завершение запуска

    Attributes:
        best_tour: лучший тур за запуск (None, если итераций не было)
        best_length: его длина (inf, если итераций не было)
        iterations: количество выполненных итераций
        cancelled: запуск прерван через should_stop или timeout
    '''
    best_tour: tuple[int, ...] | None
    best_length: float
    iterations: int
    cancelled: bool = False


@dataclass(slots=True)
class RunResult:
    '''
    Результат выполнения алгоритма муравьиной колонии

    Attributes:
        best_tour: лучший найденный тур (None, если итераций не было)
        best_length: длина лучшего тура
        iterations: количество выполненных итераций
        history: лучшая длина каждой итерации
        cancelled: запуск прерван до исчерпания итераций
    '''
    best_tour: tuple[int, ...] | None
    best_length: float
    iterations: int
    history: list[float] = field(default_factory=list)
    cancelled: bool = False


@dataclass(slots=True)
class RunState:
    '''Состояние одного запуска; создаётся заново при каждом запуске'''
    field: PheromoneField
    best_tour: tuple[int, ...] | None = None
    best_length: float = math.inf
    iteration: int = 0
    status: RunStatus = RunStatus.IDLE

    def offer(self, tour: AntTour) -> bool:
        '''Принимает тур, если он строго короче лучшего'''
        if tour.length < self.best_length:
            self.best_tour = tour.tour
            self.best_length = tour.length
            return True
        return False


class OptimizationLoop:
    '''
    Алгоритм муравьиной колонии для задачи коммивояжера на точках плоскости

    Attributes:
        graph: граф расстояний
        params: параметры алгоритма (ACOParams)
        seed: зерно генератора (игнорируется, если передан rng)
        rng: готовый генератор случайных чисел
        updater: правило обновления феромона (по умолчанию SourceMergeUpdater)
        should_stop: проверяется между итерациями; True - остановить запуск
        timeout: ограничение по времени в секундах, проверяется между итерациями
        early_stop: остановка после N итераций без улучшения (None - не использовать)
        clock: источник монотонного времени для timeout
    '''
    def __init__(self, graph: DistanceGraph, params: ACOParams | None = None, *,
                 seed: int | None = None, rng: random.Random | None = None,
                 updater: PheromoneUpdater | None = None,
                 should_stop: Callable[[], bool] | None = None,
                 timeout: float | None = None, early_stop: int | None = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.g = graph
        self.params = params or ACOParams()
        self.params.validate()
        if early_stop is not None and early_stop < 1:
            raise InvalidInputError(f"early_stop < 1: {early_stop}")
        if timeout is not None and not timeout >= 0:
            raise InvalidInputError(f"timeout < 0: {timeout}")
        self.rng = rng or random.Random(seed)
        self.updater = updater or SourceMergeUpdater()
        self.should_stop = should_stop
        self.timeout = timeout
        self.early_stop = early_stop
        self.clock = clock
        self.state: RunState | None = None

    @property
    def status(self) -> RunStatus:
        return self.state.status if self.state else RunStatus.IDLE

    def iterate(self) -> Iterator[ProgressEvent | Completed]:
        '''
        Запуск как генератор событий: ProgressEvent после каждой итерации,
        Completed в конце. Хост читает события в своём темпе
        '''
        g = self.g
        p = self.params
        state = RunState(field=PheromoneField.initialize(g.n, p.num_agents))
        self.state = state
        state.status = RunStatus.RUNNING

        if g.n == 2:
            # Единственный тур, колония не нужна
            state.best_tour = (0, 1)
            state.best_length = g.tour_length(state.best_tour)
            state.status = RunStatus.COMPLETED
            yield Completed(state.best_tour, state.best_length, 0)
            return

        constructor = TourConstructor(g, p, self.rng)
        deadline = None if self.timeout is None else self.clock() + self.timeout
        no_improve = 0
        cancelled = False

        for it in range(1, p.num_iterations + 1):
            if self._stop_requested(deadline):
                cancelled = True
                break

            tours = [constructor.build(state.field) for _ in range(p.num_agents)]
            outcome = run_update(self.updater, state.field, tours, p.evaporation_rate)
            state.field = outcome.field
            state.iteration = it

            if state.offer(outcome.best):
                no_improve = 0
            else:
                no_improve += 1

            yield ProgressEvent(it, outcome.best.tour, outcome.best.length, state.best_length)

            if self.early_stop and no_improve >= self.early_stop:
                break

        state.status = RunStatus.CANCELLED if cancelled else RunStatus.COMPLETED
        yield Completed(state.best_tour, state.best_length, state.iteration, cancelled)

    def run(self) -> RunResult:
        '''
        Запуск алгоритма до конца
        Возвращает объект RunResult с результатами
        '''
        history = []
        for event in self.iterate():
            if isinstance(event, ProgressEvent):
                history.append(event.length)
            else:
                return RunResult(best_tour=event.best_tour, best_length=event.best_length,
                                 iterations=event.iterations, history=history,
                                 cancelled=event.cancelled)
        raise AssertionError("iterate() завершился без Completed")  # pragma: no cover

    def _stop_requested(self, deadline: float | None) -> bool:
        if self.should_stop is not None and self.should_stop():
            return True
        return deadline is not None and self.clock() >= deadline
