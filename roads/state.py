# roads/state.py

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from roads.models import PlaceEntry
from roads.options import Option, ParamEditState, default_options, option_value
from roads.utils import DotsSpinner, WrappingList


class FocusId(Enum):
    SEARCH = "Search"
    PLACES = "Places"
    OPTIONS = "Options"
    HELP = "Help"
    ERROR = "Error"
    PARAM_EDIT = "ParamEdit"


# Tab / Shift-Tab cycle
TAB_ORDER = (FocusId.SEARCH, FocusId.PLACES, FocusId.OPTIONS, FocusId.HELP)


class WorkerStatus(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    ERROR = "error"


@dataclass(frozen=True)
class WorkerState:
    status: WorkerStatus = WorkerStatus.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "WorkerState":
        return cls(WorkerStatus.IDLE)

    @classmethod
    def fetching(cls) -> "WorkerState":
        return cls(WorkerStatus.FETCHING)

    @classmethod
    def error(cls, message: str) -> "WorkerState":
        return cls(WorkerStatus.ERROR, message)

    @property
    def is_idle(self) -> bool:
        return self.status is WorkerStatus.IDLE

    @property
    def is_busy(self) -> bool:
        return self.status is WorkerStatus.FETCHING

    @property
    def is_error(self) -> bool:
        return self.status is WorkerStatus.ERROR


@dataclass
class State:
    """All mutable UI state. Only touch it while holding SharedState.lock."""

    focus: FocusId = FocusId.SEARCH
    user_city: str = ""
    places: WrappingList[PlaceEntry] = field(default_factory=WrappingList)
    params: WrappingList[Option] = field(default_factory=default_options)
    worker_state: WorkerState = field(default_factory=WorkerState.idle)
    fetching_spinner: DotsSpinner = field(default_factory=DotsSpinner)
    param_edit_state: Optional[ParamEditState] = None

    def worker_busy(self) -> bool:
        return self.worker_state.is_busy

    def param(self, name: str) -> Any:
        return option_value(self.params, name)

    def set_current_param(self, value) -> None:
        option = self.params.selected()
        if option is not None:
            option.value = value


class SharedState:
    """The single mutually-excluded cell shared by the UI loop and the worker."""

    def __init__(self, state: Optional[State] = None):
        self.state = state or State()
        self.lock = threading.Lock()
