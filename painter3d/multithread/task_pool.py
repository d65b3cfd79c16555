# painter3d/multithread/task_pool.py
# ---------------------------------------------------------------
# Простой пул задач на основе concurrent.futures.
# Используется для попарных SAT‑сравнений моделей (O(n²)); сами
# сравнения не трогают граф сцены, результаты собираются после
# барьера (wait_all / map) в вызывающем потоке.
# ---------------------------------------------------------------

from concurrent.futures import ThreadPoolExecutor
import queue

from painter3d.utils.logger import logger


class TaskPool:
    """Пул готового количества потоков; задачи принимаются как callables."""
    def __init__(self, max_workers=None):
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.tasks = queue.Queue()
        self._shutdown = False

    def submit(self, fn, *args, **kwargs):
        """Отправить задачу в пул, вернуть Future."""
        if self._shutdown:
            raise RuntimeError("TaskPool already shut down")
        future = self.executor.submit(fn, *args, **kwargs)
        self.tasks.put(future)
        return future

    def map(self, fn, items):
        """Применить fn к каждому элементу; результаты – в порядке items."""
        futures = [self.submit(fn, item) for item in items]
        self.wait_all()
        return [f.result() for f in futures]

    def wait_all(self):
        """Блокировать до завершения всех поставленных задач."""
        while not self.tasks.empty():
            future = self.tasks.get()
            future.result()  # пробрасывает исключения, если они возникли

    def shutdown(self, wait=True):
        self._shutdown = True
        self.executor.shutdown(wait=wait)
        logger.debug("[TaskPool] Shut down.")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
