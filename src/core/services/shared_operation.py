"""Operación asíncrona memoizada y compartida.

Estados:
- IDLE: nadie la ha lanzado, o el último intento falló.
- PENDING: hay una tarea en vuelo; los llamadores tardíos se enganchan a ella.
- RESOLVED: el valor quedó fijado para el resto de la sesión.

Un fallo devuelve la operación a IDLE para que la siguiente llamada reintente
desde cero; el error se propaga a todos los que estaban esperando.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class OperationState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


class SharedOperation(Generic[T]):
    """Coalesce llamadas concurrentes a `factory` en una única tarea."""

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory = factory
        self._state = OperationState.IDLE
        self._task: asyncio.Task[T] | None = None
        self._value: T | None = None

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def value(self) -> T | None:
        return self._value

    async def run(self) -> T:
        if self._state is OperationState.RESOLVED:
            return self._value  # type: ignore[return-value]
        if self._task is None:
            self._task = asyncio.ensure_future(self._execute())
            self._state = OperationState.PENDING
        # shield: cancelar a un llamador no cancela el trabajo compartido.
        return await asyncio.shield(self._task)

    async def _execute(self) -> T:
        # Las transiciones ocurren dentro de la tarea, antes de despertar a
        # los llamadores, así que al recibir el error el estado ya es IDLE.
        try:
            value = await self._factory()
        except BaseException:
            self._task = None
            self._state = OperationState.IDLE
            raise
        self._value = value
        self._task = None
        self._state = OperationState.RESOLVED
        return value
