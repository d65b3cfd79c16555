# painter3d/scene/light.py
"""
Источники света: фоновый и один направленный.

Поддерживается только белый свет; `value` – итоговый RGB с учётом
интенсивности и выключателя.
"""

from painter3d.math.vec4 import Vec4

DEFAULT_INTENSITY = 0.5
_WHITE = (255, 255, 255)


class Light:
    def __init__(self, intensity: float = DEFAULT_INTENSITY, switch: str = "ON"):
        self._intensity = intensity
        self._switch = "ON"
        self.value = (0, 0, 0)
        self.switch = switch

    @property
    def intensity(self) -> float:
        return self._intensity

    @intensity.setter
    def intensity(self, value: float):
        self._intensity = value
        self._update_value()

    @property
    def switch(self) -> str:
        return self._switch

    @switch.setter
    def switch(self, value: str):
        if value not in ("ON", "OFF"):
            raise ValueError(f"Light switch must be 'ON' or 'OFF', got {value!r}")
        self._switch = value
        self._update_value()

    def _update_value(self):
        if self._switch == "OFF":
            self.value = (0, 0, 0)
        else:
            self.value = tuple(round(c * self._intensity) for c in _WHITE)

    def __repr__(self):
        return f"{type(self).__name__}(intensity={self._intensity}, switch={self._switch})"


class AmbientLight(Light):
    pass


class DirectionalLight(Light):
    """direction – направление *на* источник (от поверхности к свету)."""

    def __init__(self, x: float = 0.5, y: float = 1.0, z: float = 0.5,
                 intensity: float = DEFAULT_INTENSITY, switch: str = "ON"):
        super().__init__(intensity, switch)
        self.direction = Vec4.direction(x, y, z).unit()
