# -*- coding: utf-8 -*-
"""Базовый узел графа сцены."""
import itertools
import weakref

from painter3d.core.collision import CollisionEmitter, CollisionEvent

_uid_counter = itertools.count(1)


class SceneNode:
    """
    Все элементы сцены наследуются от SceneNode.

    Родитель хранится слабой ссылкой: узлом владеет только его родитель
    (через список children), обратная ссылка нужна лишь для всплытия
    событий вверх по иерархии.
    """
    def __init__(self, name="Node"):
        self.name = name
        self.uid = next(_uid_counter)
        self.children = []
        self._parent_ref = None
        self._collision_emitter = CollisionEmitter()

    # ----------------- иерархия -----------------
    @property
    def parent(self):
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, node):
        self._parent_ref = weakref.ref(node) if node is not None else None

    def add(self, *nodes):
        for node in nodes:
            if node.parent is not None:
                node.parent.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def remove(self, *nodes):
        for node in nodes:
            if node in self.children:
                node.parent = None
                self.children.remove(node)
        return self

    def clear(self):
        for node in list(self.children):
            self.remove(node)
        return self

    def remove_from_parent(self):
        parent = self.parent
        if parent is not None:
            parent.remove(self)
        return self

    def traverse(self):
        """Генератор DFS (pre‑order: родитель раньше детей)."""
        yield self
        for child in self.children:
            yield from child.traverse()

    def ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    # ----------------- события -----------------
    def on(self, event: str, listener):
        """Подписаться; возвращает функцию отписки."""
        self._collision_emitter.on(event, listener)
        return lambda: self.off(event, listener)

    def once(self, event: str, listener):
        self._collision_emitter.once(event, listener)

    def off(self, event: str, listener):
        self._collision_emitter.off(event, listener)

    def emit(self, event: str, message: CollisionEvent):
        """Слушатели этого узла, затем всплытие к предкам."""
        self._collision_emitter.emit(event, message)
        for node in self.ancestors():
            node._collision_emitter.emit(event, message)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"
