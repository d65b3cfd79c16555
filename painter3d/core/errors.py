"""
Исключения ядра.

* ConsistencyError – ошибка программиста (стадия запрошена раньше
  предшественника, полигон потерян BSP и т.п.). Внутри библиотеки
  никогда не перехватывается.
* SingularMatrixError – обращение вырожденной матрицы.

Вырожденная геометрия исключениями не является: она логируется и
выбрасывается из дальнейшей обработки.
"""


class Painter3DError(Exception):
    """Базовое исключение пакета."""


class ConsistencyError(Painter3DError):
    """Нарушен внутренний инвариант – текущий проход конвейера прерывается."""


class SpaceNotCalculatedError(ConsistencyError):
    def __init__(self, space, obj_name: str = None):
        self.space = space
        self.obj_name = obj_name
        name = getattr(space, "name", space)
        where = f" for '{obj_name}'" if obj_name else ""
        super().__init__(f"{name} space is not calculated{where}")


class SingularMatrixError(Painter3DError):
    """Матрица вырождена (det == 0) и не имеет обратной."""
