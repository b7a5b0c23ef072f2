"""Муравьиный алгоритм для задачи коммивояжёра на точках плоскости.

Пакет предоставляет:
- aco_tour.graph: Point, DistanceGraph, генерация/загрузка точек
- aco_tour.pheromone: PheromoneField
- aco_tour.ants: ACOParams, TourConstructor (построение тура одним муравьем)
- aco_tour.updater: правила глобального обновления феромона
- aco_tour.colony: OptimizationLoop (итерации, лучший тур, события хода)
- aco_tour.cli: CLI для запуска из терминала
"""
from .ants import ACOParams, AntTour, TourConstructor
from .colony import Completed, OptimizationLoop, ProgressEvent, RunResult, RunState, RunStatus
from .errors import ACOError, InvalidInputError, NumericalUnderflow
from .graph import DistanceGraph, Point, PointsFactory
from .pheromone import PHEROMONE_FLOOR, PheromoneField
from .updater import AntSystemUpdater, PheromoneUpdater, SourceMergeUpdater

__all__ = [
    "ACOError",
    "ACOParams",
    "AntSystemUpdater",
    "AntTour",
    "Completed",
    "DistanceGraph",
    "InvalidInputError",
    "NumericalUnderflow",
    "OptimizationLoop",
    "PHEROMONE_FLOOR",
    "PheromoneField",
    "PheromoneUpdater",
    "Point",
    "PointsFactory",
    "ProgressEvent",
    "RunResult",
    "RunState",
    "RunStatus",
    "SourceMergeUpdater",
    "TourConstructor",
]
