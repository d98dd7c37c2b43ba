"""
sudoview Terminal UI
Textual front end for browsing the authentication log.

The app only draws RenderModel snapshots from a ViewerSession and forwards
key presses as navigation commands; all paging logic lives in the session.
"""

from __future__ import annotations

import logging
from typing import Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Static

from sudoview.highlighter import StyledSpan, spans_to_text
from sudoview.paginator import Tab
from sudoview.session import NavCommand, RenderModel, ViewerSession


logger = logging.getLogger("sudoview.tui")

TITLE = "Super User Management Interface"
TOO_SMALL_NOTICE = "Terminal too small to display any log lines. Enlarge the window."

BODY_TITLES = {
    Tab.ALL: "Logs",
    Tab.SUDO: "Logs",
    Tab.COMMANDS: "Commands",
}


def render_lines(rows: Sequence[Sequence[StyledSpan]]) -> Text:
    """Join highlighted rows into one Rich Text block, one row per line."""
    separator = Text("\n", no_wrap=True, overflow="ellipsis")
    return separator.join(spans_to_text(row) for row in rows)


def render_tab_bar(model: RenderModel) -> Text:
    """Tab titles with the selected one emphasised."""
    text = Text()
    for i, title in enumerate(model.tab_titles):
        if i:
            text.append(" | ", style="grey37")
        style = "bold grey85" if i == model.tab_index else "grey50"
        text.append(f" {title} ", style=style)
    return text


def render_frequency(rows: Sequence[tuple[str, int]]) -> Text:
    """Commands with their counts, most used first."""
    text = Text(no_wrap=True, overflow="ellipsis")
    for i, (command, count) in enumerate(rows):
        if i:
            text.append("\n")
        text.append(command, style="grey70")
        text.append(f" ({count})", style="dark_orange")
    return text


def titled(title: str, body: Text) -> Text:
    """Prefix a panel body with its title line."""
    text = Text(title, style="bold dark_orange", no_wrap=True, overflow="ellipsis")
    text.append("\n")
    text.append_text(body)
    return text


class SudoViewTUI(App):
    """
    Textual TUI application for the sudo log viewer.
    Arrow keys page through logs and switch tabs; q quits.
    """

    CSS = """
    Screen {
        background: $surface;
    }

    #tabs {
        height: 3;
        border: round $primary;
        border-title-color: darkorange;
        padding: 0 1;
    }

    #body {
        height: 1fr;
        border: round $primary;
        border-title-color: darkorange;
    }

    #logs {
        height: 1fr;
    }

    #commands {
        height: 1fr;
    }

    #recent {
        width: 30%;
        border-right: solid $primary;
        padding: 0 1;
    }

    #frequency {
        width: 70%;
        padding: 0 1;
    }

    #status {
        height: 1;
        background: #c8c8c8;
        color: black;
    }
    """

    BINDINGS = [
        Binding("q", "quit_viewer", "Quit"),
        Binding("up", "page_up", "Page up"),
        Binding("down", "page_down", "Page down"),
        Binding("right", "next_tab", "Next tab"),
        Binding("left", "prev_tab", "Prev tab"),
    ]

    def __init__(self, session: ViewerSession, **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.title = TITLE
        self.sub_title = str(session.dataset.log_path)
        self.model: RenderModel | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="tabs")
        with Container(id="body"):
            yield Static(id="logs")
            with Horizontal(id="commands"):
                yield Static(id="recent")
                yield Static(id="frequency")
        yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#tabs", Static).border_title = "Tabs"
        self.call_after_refresh(self.refresh_view)

    def on_resize(self, event: events.Resize) -> None:
        # page capacity follows the new height; first frame is drawn from on_mount
        if self.model is not None:
            self.call_after_refresh(self.refresh_view)

    def page_capacity(self) -> int:
        """Rows available for log lines inside the body border."""
        return self.query_one("#body", Container).size.height

    def refresh_view(self) -> None:
        """Recompute the frame for the current size and redraw every panel."""
        model = self.session.render(self.page_capacity())
        self.model = model

        self.query_one("#tabs", Static).update(render_tab_bar(model))

        body = self.query_one("#body", Container)
        logs = self.query_one("#logs", Static)
        commands = self.query_one("#commands", Horizontal)
        body.border_title = BODY_TITLES[model.tab]

        if model.too_small:
            commands.display = False
            logs.display = True
            logs.update(Text(TOO_SMALL_NOTICE, style="bold yellow"))
        elif model.tab is Tab.COMMANDS:
            logs.display = False
            commands.display = True
            self.query_one("#recent", Static).update(
                titled("Recent", render_lines(model.recent))
            )
            self.query_one("#frequency", Static).update(
                titled("Frequency", render_frequency(model.frequency))
            )
        else:
            commands.display = False
            logs.display = True
            logs.update(render_lines(model.lines))

        self.query_one("#status", Static).update(Text(model.status, no_wrap=True, overflow="ellipsis"))

    def _navigate(self, command: NavCommand) -> None:
        if not self.session.handle(command):
            logger.info("Viewer closed")
            self.exit()
            return
        self.refresh_view()

    def action_quit_viewer(self) -> None:
        """Quit the application."""
        self._navigate(NavCommand.QUIT)

    def action_page_up(self) -> None:
        self._navigate(NavCommand.PAGE_UP)

    def action_page_down(self) -> None:
        self._navigate(NavCommand.PAGE_DOWN)

    def action_next_tab(self) -> None:
        self._navigate(NavCommand.NEXT_TAB)

    def action_prev_tab(self) -> None:
        self._navigate(NavCommand.PREV_TAB)


def run_viewer(session: ViewerSession) -> None:
    """Run the viewer until the user quits."""
    logger.info(
        f"Starting viewer: {len(session.dataset.lines)} lines, "
        f"{len(session.dataset.events)} sudo events"
    )
    SudoViewTUI(session).run()
