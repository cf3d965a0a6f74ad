"""
Background fetches that publish their result into the shared UI state.

The job runs off the UI thread; the shared lock is taken only once it has
finished, to publish either the result (through ``on_success``) or the
error.
"""

from typing import Callable, TypeVar

from loguru import logger

from roads.state import FocusId, SharedState, State, WorkerState
from roads.utils import DotsSpinner

T = TypeVar("T")

Job = Callable[[], T]
OnSuccess = Callable[[State, T], None]
Spawner = Callable[[Callable[[], None]], None]


class FetchBusyError(RuntimeError):
    """A fetch was started while another one is still running."""


def _fail(state: State, exc: Exception) -> None:
    message = str(exc) or type(exc).__name__
    state.worker_state = WorkerState.error(message)
    state.focus = FocusId.ERROR
    state.fetching_spinner = DotsSpinner()


class FetchController:
    """
    Starts at most one background job per session.

    ``spawner`` receives a zero-argument callable and must run it off the
    UI thread (the textual app starts a daemon thread).
    """

    def __init__(self, shared: SharedState, spawner: Spawner):
        self.shared = shared
        self.spawner = spawner

    def start(self, state: State, job: Job, on_success: OnSuccess) -> None:
        """
        Kick off ``job``. ``state`` is the already-locked shared state of the
        caller; the lock is re-taken by the worker on completion.
        """
        if not state.worker_state.is_idle:
            raise FetchBusyError("a fetch is already running")

        state.worker_state = WorkerState.fetching()
        state.fetching_spinner = DotsSpinner()
        name = getattr(job, "__name__", "job")
        logger.debug(f"Starting background {name}")

        def run() -> None:
            try:
                result = job()
            except Exception as e:
                logger.error(f"Background {name} failed: {e}")
                with self.shared.lock:
                    _fail(self.shared.state, e)
                return

            with self.shared.lock:
                st = self.shared.state
                st.worker_state = WorkerState.idle()
                try:
                    on_success(st, result)
                except Exception as e:
                    logger.error(f"Handling result of {name} failed: {e}")
                    _fail(st, e)

        self.spawner(run)
