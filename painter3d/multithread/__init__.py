"""Пул потоков для тяжёлых попарных вычислений."""

from painter3d.multithread.task_pool import TaskPool

__all__ = ["TaskPool"]
