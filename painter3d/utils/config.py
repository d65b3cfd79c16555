"""
Простой загрузчик/сохранитель конфигурации рендерера в формате JSON.
Если файл не найден – используются настройки по‑умолчанию (файл
создаётся только явным вызовом `save()`).
"""

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from painter3d.utils.logger import logger

DEFAULT_CONFIG = {
    "viewport": {"width": 800, "height": 600},
    "culling": {"backface": False},
    "background": None,
}

class Config:
    """Конфигурация, прочитанная из JSON (с откатом на DEFAULT_CONFIG)."""

    def __init__(self, path: str = "painter3d.json"):
        self.path = Path(path)
        self._load()

    def _load(self):
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self.data = json.load(f)
                logger.info("[Config] Loaded configuration.")
            except (OSError, ValueError) as exc:
                logger.error(f"[Config] Failed to read config: {exc}")
                self.data = copy.deepcopy(DEFAULT_CONFIG)
        else:
            logger.info("[Config] No config file – using defaults.")
            self.data = copy.deepcopy(DEFAULT_CONFIG)

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value

    def get(self, key, default=None):
        return self.data.get(key, default)


@dataclass(frozen=True)
class RendererConfig:
    """Единственные настройки, влияющие на алгоритмы ядра."""
    viewport_width: int = 800
    viewport_height: int = 600
    backface_culling: bool = False
    background: Optional[str] = None

    @classmethod
    def from_config(cls, cfg: Config) -> "RendererConfig":
        viewport = cfg["viewport"] or {}
        culling = cfg["culling"] or {}
        return cls(
            viewport_width=int(viewport.get("width", cls.viewport_width)),
            viewport_height=int(viewport.get("height", cls.viewport_height)),
            backface_culling=bool(culling.get("backface", cls.backface_culling)),
            background=cfg["background"],
        )
