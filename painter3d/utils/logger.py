# painter3d/utils/logger.py
# ---------------------------------------------------------------
# Минимальный логгер, общий для всего пакета.
# ---------------------------------------------------------------

import logging


def init_logger():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("Painter3D")

logger = init_logger()
