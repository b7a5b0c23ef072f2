from __future__ import annotations


class ACOError(Exception):
    '''Базовое исключение пакета aco_tour'''


class InvalidInputError(ACOError, ValueError):
    '''
    Некорректные входные данные: меньше двух точек, битый CSV,
    параметры алгоритма вне допустимых диапазонов.
    Поднимается до начала итераций
    '''


class NumericalUnderflow(ACOError, ArithmeticError):
    '''
    Все веса кандидатов при нормализации вероятностей нулевые.
    Перехватывается внутри построения тура, наружу не выходит
    '''


__all__ = ["ACOError", "InvalidInputError", "NumericalUnderflow"]
