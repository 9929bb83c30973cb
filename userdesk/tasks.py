"""Exécution des appels bloquants hors du thread Tkinter."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    import tkinter as tk

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class CancelToken:
    """Jeton lié à la durée de vie d'une vue ; une fois annulé, les réponses tardives sont ignorées."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class Runner(Protocol):
    def run(
        self,
        call: Callable[[], Any],
        *,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        token: CancelToken,
    ) -> None: ...


class InlineRunner:
    """Exécute l'appel immédiatement sur le thread appelant."""

    def run(
        self,
        call: Callable[[], Any],
        *,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        token: CancelToken,
    ) -> None:
        if token.cancelled:
            return
        try:
            result = call()
        except Exception as exc:  # noqa: BLE001
            if not token.cancelled:
                on_error(exc)
            return
        if not token.cancelled:
            on_success(result)


@dataclass(slots=True)
class _PendingTask:
    future: Future
    on_success: SuccessCallback
    on_error: ErrorCallback
    token: CancelToken


class TaskRunner:
    """Lance les appels dans un pool de threads et relaie le résultat sur le thread Tk."""

    def __init__(self, root: tk.Misc, *, max_workers: int = 4, executor: Executor | None = None) -> None:
        self._root = root
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="userdesk")
        self._pending: list[_PendingTask] = []
        self._after_id: str | None = None

    def run(
        self,
        call: Callable[[], Any],
        *,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        token: CancelToken,
    ) -> None:
        if token.cancelled:
            return
        future = self._executor.submit(call)
        self._pending.append(_PendingTask(future, on_success, on_error, token))
        if self._after_id is None:
            self._after_id = self._root.after(POLL_INTERVAL_MS, self._poll)

    def shutdown(self) -> None:
        if self._after_id is not None:
            try:
                self._root.after_cancel(self._after_id)
            except ValueError:
                pass
            self._after_id = None
        for task in self._pending:
            task.token.cancel()
        self._pending.clear()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _poll(self) -> None:
        self._after_id = None
        finished: list[_PendingTask] = []
        waiting: list[_PendingTask] = []
        for task in self._pending:
            (finished if task.future.done() else waiting).append(task)
        self._pending = waiting
        if waiting:
            self._after_id = self._root.after(POLL_INTERVAL_MS, self._poll)

        for task in finished:
            if task.token.cancelled:
                logger.debug("Discarding late result for a closed view")
                continue
            try:
                self._dispatch(task)
            except Exception as exc:  # noqa: BLE001
                # Les autres tâches terminées doivent tout de même être livrées.
                logger.exception("Task callback failed")
                self._root.report_callback_exception(type(exc), exc, exc.__traceback__)

    @staticmethod
    def _dispatch(task: _PendingTask) -> None:
        error = task.future.exception()
        if error is None:
            task.on_success(task.future.result())
        else:
            task.on_error(error)
