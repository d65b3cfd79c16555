"""
Корневой узел сцены: модели, группы, камеры + фон и освещение.
"""

from painter3d.scene.light import AmbientLight, DirectionalLight
from painter3d.scene.model import Object3D
from painter3d.scene.node import SceneNode


class Scene(SceneNode):
    """Корень графа; сам не преобразуется и в буфер не попадает."""
    def __init__(self, *nodes, background: str = None,
                 ambient_light: AmbientLight = None,
                 directional_light: DirectionalLight = None):
        super().__init__("RootScene")
        self.background = background
        self.ambient_light = ambient_light or AmbientLight()
        self.directional_light = directional_light or DirectionalLight()
        self.add(*nodes)

    def objects(self):
        """Все Object3D сцены (pre‑order DFS, родитель раньше детей)."""
        return [node for child in self.children for node in child.traverse()
                if isinstance(node, Object3D)]
