"""
Textual front-end: layout, per-frame rendering and key forwarding.

All behaviour lives in ``roads.controller``; this module only turns the
shared state into widgets every 50 ms and hands keys to the controller.
"""

from threading import Thread
from typing import Callable, Iterable, Optional

from loguru import logger
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Static

from roads.controller import BACKTAB, CTRL_C, ESCAPE, TAB, Controller, KeyPress
from roads.fetch import FetchController
from roads.models import PlaceEntry
from roads.options import max_name_len
from roads.state import FocusId, SharedState, State

HELP_TEXT = """Simple TUI to render the roads of a given place into an svg file.

To start off, search a place by editing the Search line edit, hit enter and select the desired place to render.

Use the arrow keys or jk to move up and down and <TAB> to switch section.

Hit <Enter> on an option to edit it.

Esc or Ctrl-C to quit.
"""

FRAME_INTERVAL = 0.05
HIGHLIGHT_STYLE = "italic dim bright_yellow"


def place_label(entry: PlaceEntry) -> Text:
    label = Text(entry.display_name)
    label.append(f" ({entry.osm_id} - {entry.osm_type})", style="italic")
    return label


def visible_range(n: int, selected: Optional[int], height: int) -> range:
    """Rows to draw so that the selected one stays on screen."""
    if height <= 0 or n <= height:
        return range(n)
    start = 0 if selected is None else max(0, selected - height + 1)
    return range(start, min(n, start + height))


def render_list(
    items: Iterable[Text],
    selected: Optional[int],
    symbol: str,
    height: int = 0,
) -> Text:
    rows = list(items)
    pad = " " * len(symbol)
    lines = []
    for i in visible_range(len(rows), selected, height):
        if i == selected:
            line = Text(symbol)
            line.append_text(rows[i])
            line.stylize(HIGHLIGHT_STYLE)
        else:
            line = Text(pad)
            line.append_text(rows[i])
        lines.append(line)
    return Text("\n").join(lines)


class Panel(Static):
    """A bordered block whose border lights up when it holds focus."""

    def __init__(self, focus_id: FocusId, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.focus_id = focus_id

    def on_mount(self) -> None:
        self.border_title = self.focus_id.value

    @property
    def rows(self) -> int:
        return self.content_size.height


class RoadsApp(App):
    CSS = """
    Screen { layers: base overlay; }
    #main { height: 100%; }
    #left { width: 70%; }
    #right { width: 30%; }
    #search { height: 10%; min-height: 3; }
    #places { height: 90%; }
    #options { height: 40%; }
    #help { height: 60%; }
    Panel { border: solid white; padding: 0 1; }
    Panel.-focused { border: solid yellow; }
    #edit-layer {
        dock: top; layer: overlay; width: 100%; height: 100%;
        align: center middle; display: none;
    }
    #param-edit { width: 40%; height: 3; padding: 0; background: $background; }
    #param-edit.-invalid { background: red; }
    #error {
        dock: top; layer: overlay; width: 100%; height: 100%;
        display: none; background: $background;
    }
    """
    # Checked before textual's own tab-focus and quit bindings
    BINDINGS = [
        Binding("tab", f"press('{TAB}')", show=False, priority=True),
        Binding("shift+tab", f"press('{BACKTAB}')", show=False, priority=True),
        Binding("escape", f"press('{ESCAPE}')", show=False, priority=True),
        Binding("ctrl+c", f"press('{CTRL_C}')", show=False, priority=True),
    ]

    def __init__(self, shared: Optional[SharedState] = None):
        super().__init__()
        self.shared = shared or SharedState()
        self.controller = Controller(
            self.shared, FetchController(self.shared, self.run_in_background)
        )

    def compose(self) -> ComposeResult:
        with Horizontal(id="main"):
            with Vertical(id="left"):
                yield Panel(FocusId.SEARCH, id="search")
                yield Panel(FocusId.PLACES, id="places")
            with Vertical(id="right"):
                yield Panel(FocusId.OPTIONS, id="options")
                yield Panel(FocusId.HELP, HELP_TEXT, id="help")
        with Container(id="edit-layer"):
            yield Panel(FocusId.PARAM_EDIT, id="param-edit")
        yield Panel(FocusId.ERROR, id="error")

    def on_mount(self) -> None:
        self.refresh_frame()
        self.set_interval(FRAME_INTERVAL, self.refresh_frame)

    # ---------- INPUT ----------
    def action_press(self, key: str) -> None:
        self._dispatch(KeyPress(key))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        char = event.character if event.is_printable else None
        self._dispatch(KeyPress(event.key, char))

    def _dispatch(self, key: KeyPress) -> None:
        with self.shared.lock:
            quit_requested = self.controller.dispatch(key)
        if quit_requested:
            self.exit()
            return
        self.refresh_frame()

    def run_in_background(self, job: Callable[[], None]) -> None:
        # Daemon, so quitting never waits for a request in flight
        Thread(target=job, name="roads-fetch", daemon=True).start()

    # ---------- DRAWING ----------
    def refresh_frame(self) -> None:
        with self.shared.lock:
            self._draw(self.shared.state)

    def _draw(self, st: State) -> None:
        for panel in self.query(Panel):
            panel.set_class(panel.focus_id is st.focus, "-focused")

        error = self.query_one("#error", Panel)
        error.display = st.worker_state.is_error
        if st.worker_state.is_error:
            error.update(Text(st.worker_state.message or ""))
            return

        busy = st.worker_busy()
        if busy:
            st.fetching_spinner.tick()

        self.query_one("#search", Panel).update(Text(st.user_city))

        places = self.query_one("#places", Panel)
        symbol = f"{st.fetching_spinner.glyph()} " if busy else "> "
        places.update(
            render_list(
                (place_label(p) for p in st.places),
                st.places.selected_ix(),
                symbol,
                places.rows,
            )
        )

        options = self.query_one("#options", Panel)
        pad = max_name_len(st.params)
        options.update(
            render_list(
                (Text(o.render(pad)) for o in st.params),
                st.params.selected_ix() if st.focus is FocusId.OPTIONS else None,
                "* ",
                options.rows,
            )
        )

        layer = self.query_one("#edit-layer")
        edit = st.param_edit_state
        option = st.params.selected()
        layer.display = st.focus is FocusId.PARAM_EDIT and edit is not None
        if layer.display and option is not None:
            editor = self.query_one("#param-edit", Panel)
            editor.border_title = option.name
            editor.set_class(not edit.is_valid, "-invalid")
            editor.update(Text(edit.buffer))


def run() -> int:
    app = RoadsApp()
    logger.info("Starting terminal UI")
    app.run()
    return app.return_code or 0
