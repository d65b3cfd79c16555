# painter3d/core/collision.py
"""
События столкновений.

SAT‑сравнение, пришедшее к выводу «боксы пересекаются», рассылает
событие обеим моделям с общим случайным collision_id; каждая модель
передаёт его своим предкам.  Поэтому общий предок получает пару
(A, B) и (B, A) – CollisionEmitter пропускает только первое.
"""

from __future__ import annotations

import random
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class CollisionEvent:
    collision_id: int
    models: Tuple[Any, Any]


def new_collision_id() -> int:
    return random.getrandbits(32)


class EventEmitter:
    """Минимальный emitter: on / once / off / emit."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        self._listeners[event].append(listener)
        return self

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        def wrapper(payload):
            self.off(event, wrapper)
            listener(payload)
        return self.on(event, wrapper)

    def off(self, event: str, listener: Listener) -> "EventEmitter":
        listeners = self._listeners.get(event)
        if not listeners:
            return self
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            del self._listeners[event]
        return self

    def emit(self, event: str, payload: Any) -> bool:
        listeners = self._listeners.get(event)
        if not listeners:
            return False
        # копия – once() удаляет себя во время обхода
        for listener in list(listeners):
            listener(payload)
        return True


class CollisionEmitter(EventEmitter):
    """Emitter, подавляющий зеркальный дубликат последнего столкновения."""

    def __init__(self):
        super().__init__()
        self._last: CollisionEvent | None = None

    def emit(self, event: str, payload: CollisionEvent) -> bool:
        last = self._last
        if (
            last is not None
            and payload.collision_id == last.collision_id
            and all(any(m is l for l in last.models) for m in payload.models)
        ):
            return False

        self._last = payload
        return super().emit(event, payload)
