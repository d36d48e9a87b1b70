#!/usr/bin/env python3
# geotiles/shell/app.py
"""Compose the prompt_toolkit session for the interactive tile calculator."""

import logging
from typing import Optional

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import FormattedText, HTML
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

from geotiles.actions import ACTIONS, run_line
from geotiles.config import Config
from geotiles.errors import GeoError
from geotiles.shell.state import ShellState
from geotiles.styles import make_style
from geotiles.version import version_info

log = logging.getLogger(__name__)

_QUIT_WORDS = ("quit", "exit", "q")


class TileShell:
    def __init__(self, cfg: Optional[Config] = None):
        self.cfg = cfg or Config.load()
        self.state = ShellState(self.cfg)
        self.style: Style = make_style(self.cfg)

        history_file = self.cfg["shell"].get("history_file")
        history = FileHistory(history_file) if history_file else InMemoryHistory()
        completer = WordCompleter(sorted(ACTIONS) + list(_QUIT_WORDS), ignore_case=True, sentence=True)

        self.kb = self._build_key_bindings()
        self.session: PromptSession = PromptSession(
            history=history,
            completer=completer,
            key_bindings=self.kb,
            bottom_toolbar=self._toolbar,
            style=self.style,
        )

    def _build_key_bindings(self):
        kb = KeyBindings()

        @kb.add("c-l")
        def _(event):
            event.app.renderer.clear()

        return kb

    def _toolbar(self):
        zb = self.state.settings.zoom_bounds
        last = str(self.state.last_tile) if self.state.last_tile is not None else "-"
        msg = f" zoom {zb.min}..{zb.max}  target {self.state.settings.target_tile_count}  last {last}"
        if self.state.info_msg:
            msg += f"  {self.state.info_msg}"
        return FormattedText([("class:bottom-toolbar", msg)])

    def _print(self, style_class: str, text: str) -> None:
        print_formatted_text(FormattedText([(f"class:{style_class}", text)]), style=self.style)

    def execute(self, line: str) -> bool:
        """Run one line. Returns False when the session should end."""
        if line.strip().lower() in _QUIT_WORDS:
            return False
        try:
            words = line.split()
            style_class = "help" if words and words[0].lower() in ("help", "?") else "tile"
            for out in run_line(self.state, line):
                self._print(style_class, out)
            self.state.set_info("")
        except GeoError as exc:
            log.debug("command failed: %s", exc)
            self._print("error", f"error: {exc}")
            self.state.set_info("last command failed")
        return True

    def run(self) -> None:
        print_formatted_text(HTML(f"<prompt>{version_info()}</prompt> - type <b>help</b> for commands"),
                             style=self.style)
        while True:
            try:
                line = self.session.prompt(FormattedText([("class:prompt", "geotiles> ")]))
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not self.execute(line):
                break
