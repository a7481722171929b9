"""Tarea periódica que ejecuta el barrido de vencimientos.

La tarea pertenece al ciclo de vida de la aplicación: ``start`` lanza un
barrido inmediato y luego uno cada intervalo; ``stop`` la cancela. Un barrido
que encuentra otro en curso termina sin hacer nada.
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.services.expiration_service import SweepResult, check_expiring_documents

logger = logging.getLogger(__name__)


class ExpirationScheduler:
    def __init__(self, session_factory: Callable[[], Session], interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("El intervalo debe ser positivo")
        self._session_factory = session_factory
        self._interval = interval_seconds
        self._sweep_lock = threading.Lock()
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_sweep(self) -> Optional[SweepResult]:
        """Ejecuta un barrido en el hilo actual; ``None`` si ya había uno en curso."""
        if not self._sweep_lock.acquire(blocking=False):
            logger.warning("[expiration-checker] Ya hay una revisión en curso, se omite")
            return None
        try:
            db = self._session_factory()
            try:
                return check_expiring_documents(db)
            finally:
                db.close()
        except Exception:
            logger.exception("[expiration-checker] Error al revisar documentos")
            return None
        finally:
            self._sweep_lock.release()

    async def run_once(self) -> Optional[SweepResult]:
        return await asyncio.to_thread(self.run_sweep)

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info(
            "[expiration-checker] Revisión automática de vencimientos iniciada (cada %.1f horas)",
            self._interval / 3600,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("[expiration-checker] Revisión automática detenida")
