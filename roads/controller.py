"""
Keyboard dispatch for the panel state machine.

The controller is toolkit-agnostic: it receives ``KeyPress`` values and
mutates ``State``. Callers must hold the shared lock around ``dispatch``.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from loguru import logger

from roads import geo, options
from roads.fetch import FetchController
from roads.models import PlaceEntry
from roads.opener import open_path
from roads.options import ParamEditState
from roads.state import TAB_ORDER, FocusId, SharedState, State, WorkerState
from roads.svg import dump_svg
from roads.utils import WrappingList

ENTER = "enter"
ESCAPE = "escape"
BACKSPACE = "backspace"
TAB = "tab"
BACKTAB = "shift+tab"
CTRL_C = "ctrl+c"
UP = "up"
DOWN = "down"


@dataclass(frozen=True)
class KeyPress:
    key: str
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "KeyPress":
        return cls(char, char)


def edit_string(buffer: str, key: KeyPress) -> Tuple[str, bool]:
    """Apply an editing key; returns the new buffer and whether it changed."""
    if key.key == BACKSPACE:
        return buffer[:-1], True
    if key.char is not None and key.char.isprintable():
        return buffer + key.char, True
    return buffer, False


def svg_path(query: str) -> str:
    return f"{query}.svg"


class Controller:
    def __init__(
        self,
        shared: SharedState,
        fetcher: FetchController,
        search: Callable[[str], List[PlaceEntry]] = geo.search,
        fetch_roads: Callable[[PlaceEntry], list] = geo.fetch_roads,
        opener: Callable[[str], None] = open_path,
    ):
        self.shared = shared
        self.fetcher = fetcher
        self.search = search
        self.fetch_roads = fetch_roads
        self.opener = opener

    def dispatch(self, key: KeyPress) -> bool:
        """Handle one key press. Returns True when the program should quit."""
        state = self.shared.state

        global_keys = state.focus is not FocusId.PARAM_EDIT

        if global_keys and key.key in (ESCAPE, CTRL_C):
            logger.info("Quit requested")
            return True

        if state.worker_busy():
            return False

        if global_keys and key.key in (TAB, BACKTAB):
            self._cycle_focus(state, forward=key.key == TAB)
            return False

        handler = {
            FocusId.SEARCH: self._on_search,
            FocusId.PLACES: self._on_places,
            FocusId.OPTIONS: self._on_options,
            FocusId.PARAM_EDIT: self._on_param_edit,
            FocusId.ERROR: self._on_error,
        }.get(state.focus)
        if handler is not None:
            handler(state, key)
        return False

    def _cycle_focus(self, state: State, forward: bool) -> None:
        if state.focus not in TAB_ORDER:
            return
        step = 1 if forward else len(TAB_ORDER) - 1
        current = TAB_ORDER.index(state.focus)
        state.focus = TAB_ORDER[(current + step) % len(TAB_ORDER)]
        logger.debug(f"Focus -> {state.focus.value}")

    # ---------- PANELS ----------
    def _on_search(self, state: State, key: KeyPress) -> None:
        if key.key == ENTER:
            if state.user_city:
                self._start_search(state, state.user_city)
            return

        state.user_city, changed = edit_string(state.user_city, key)
        if changed:
            state.places = WrappingList()

    def _on_places(self, state: State, key: KeyPress) -> None:
        if key.key in (UP, "k"):
            state.places.up()
        elif key.key in (DOWN, "j"):
            state.places.down()
        elif key.key == ENTER:
            place = state.places.selected()
            if place is not None:
                self._start_render(state, place)

    def _on_options(self, state: State, key: KeyPress) -> None:
        if key.key in (UP, "k"):
            state.params.up()
        elif key.key in (DOWN, "j"):
            state.params.down()
        elif key.key == ENTER:
            option = state.params.selected()
            if option is not None:
                state.param_edit_state = ParamEditState(option.value)
                state.focus = FocusId.PARAM_EDIT

    def _on_param_edit(self, state: State, key: KeyPress) -> None:
        edit = state.param_edit_state
        if edit is None:
            state.focus = FocusId.OPTIONS
            return

        if key.key == ENTER:
            value = edit.commit()
            if value is not None:
                option = state.params.selected()
                logger.info(f"Option '{option.name}' set to {value.render()}")
                state.set_current_param(value)
                state.param_edit_state = None
                state.focus = FocusId.OPTIONS
        elif key.key == ESCAPE:
            state.param_edit_state = None
            state.focus = FocusId.OPTIONS
        else:
            buffer, changed = edit_string(edit.buffer, key)
            if changed:
                edit.set_buffer(buffer)

    def _on_error(self, state: State, key: KeyPress) -> None:
        if key.key == ENTER:
            state.worker_state = WorkerState.idle()
            state.focus = FocusId.SEARCH

    # ---------- BACKGROUND WORK ----------
    def _start_search(self, state: State, query: str) -> None:
        search = self.search

        def search_places():
            return search(query)

        def show_places(st: State, places: List[PlaceEntry]) -> None:
            st.places = WrappingList(places)
            st.focus = FocusId.PLACES

        self.fetcher.start(state, search_places, show_places)

    def _start_render(self, state: State, place: PlaceEntry) -> None:
        fetch_roads = self.fetch_roads
        opener = self.opener

        def download_roads():
            return fetch_roads(place)

        def save_svg(st: State, paths: list) -> None:
            path = svg_path(st.user_city)
            written = dump_svg(
                path,
                (st.param(options.WIDTH_OPTION), st.param(options.HEIGHT_OPTION)),
                st.param(options.STROKE_WIDTH_OPTION),
                st.param(options.BACKGROUND_COLOR_OPTION),
                paths,
            )
            if written and st.param(options.OPEN_OPTION):
                opener(path)

        self.fetcher.start(state, download_roads, save_svg)
