from __future__ import annotations

import argparse
from pathlib import Path

from .ants import ACOParams
from .colony import Completed, OptimizationLoop, ProgressEvent
from .errors import ACOError
from .graph import DistanceGraph, PointsFactory
from .updater import AntSystemUpdater, SourceMergeUpdater


def build_argparser() -> argparse.ArgumentParser:
    '''Создаёт парсер аргументов командной строки'''
    p = argparse.ArgumentParser(
        prog="aco-tour",
        description="Муравьиный алгоритм (ACO) для TSP на точках плоскости: загрузка точек из CSV или генерация.",
    )
    src = p.add_argument_group("Источник точек")
    src.add_argument("--csv", type=str, help="Путь к CSV со строками 'x,y'", default=None)

    rnd = p.add_argument_group("Случайные точки")
    rnd.add_argument("--n", type=int, default=20, help="Количество точек (если не указан --csv)")
    rnd.add_argument("--width", type=float, default=1200.0, help="Ширина области")
    rnd.add_argument("--height", type=float, default=700.0, help="Высота области")
    rnd.add_argument("--seed", type=int, default=None, help="Seed для воспроизводимости")

    aco = p.add_argument_group("Параметры ACO")
    aco.add_argument("--alpha", type=float, default=1.0, help="Влияние феромона")
    aco.add_argument("--beta", type=float, default=2.0, help="Влияние эвристики 1/d")
    aco.add_argument("--rate", type=float, default=0.5, help="Испарение (0..1)")
    aco.add_argument("--q", type=float, default=100.0, help="Масштаб депонирования")
    aco.add_argument("--ants", type=int, default=10, help="Количество муравьёв")
    aco.add_argument("--iters", type=int, default=100, help="Число итераций")
    aco.add_argument("--update", choices=("merge", "ant-system"), default="merge",
                     help="Правило обновления феромона")
    aco.add_argument("--early-stop", type=int, default=None, help="Ранний стоп после N итераций без улучшения")
    aco.add_argument("--timeout", type=float, default=None, help="Ограничение по времени, секунды")

    out = p.add_argument_group("Вывод")
    out.add_argument("-v", "--verbose", action="store_true", help="Печатать ход итераций")
    out.add_argument("--save-best", type=str, default=None, help="Сохраняет лучший тур в файл (txt)")

    return p


def main(argv: list[str] | None = None) -> int:
    '''Точка входа для aco-tour'''
    parser = build_argparser()
    args = parser.parse_args(argv)

    params = ACOParams(alpha=args.alpha, beta=args.beta, evaporation_rate=args.rate, q=args.q,
                       num_agents=args.ants, num_iterations=args.iters)
    updater = AntSystemUpdater(args.q) if args.update == "ant-system" else SourceMergeUpdater()
    try:
        if args.csv:
            g = DistanceGraph.from_csv(args.csv)
        else:
            g = DistanceGraph(PointsFactory.random_points(args.n, width=args.width,
                                                          height=args.height, seed=args.seed))
        loop = OptimizationLoop(g, params=params, seed=args.seed, updater=updater,
                                timeout=args.timeout, early_stop=args.early_stop)
    except ACOError as e:
        parser.error(str(e))

    done = None
    for event in loop.iterate():
        if isinstance(event, ProgressEvent):
            it = event.iteration
            if args.verbose and (it <= 3 or it > params.num_iterations - 3):
                print(f"Итерация {it}: лучший в итерации {list(event.tour)}, "
                      f"длина={event.length:.3f}, лучший за запуск={event.best_length:.3f}")
        elif isinstance(event, Completed):
            done = event

    if done is None or done.best_tour is None:
        print("\nИтераций не было, маршрут не построен.")
        return 0

    print("\nЛучший маршрут:", " -> ".join(map(str, done.best_tour)))
    print(f"Длина: {done.best_length:.3f}")
    print("Итераций:", done.iterations)
    if done.cancelled:
        print("Запуск прерван по таймауту.")

    if args.save_best:
        Path(args.save_best).write_text(" ".join(map(str, done.best_tour)), encoding="utf-8")
        print("Сохранено:", args.save_best)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
