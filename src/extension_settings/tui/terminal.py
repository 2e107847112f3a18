"""Run a panel in the terminal.

Input is read in raw mode through prompt_toolkit; each key press's raw
data is handed to the panel as one token and the panel is redrawn in
place below the cursor.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
from typing import Iterable, List, Optional, TextIO

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress

from .component import Panel

logger = logging.getLogger(__name__)

# A lone escape byte is only reported once no further bytes follow it
ESCAPE_FLUSH_DELAY = 0.05

CLEAR_TO_END = "\x1b[J"


class TerminalRunner:
    """Drive a panel from terminal input until stop() is called.

    Args:
        panel: Panel to render and feed input to.
        output: Stream to draw on (stdout by default).
        width: Fixed render width; the terminal width when None.
    """

    def __init__(
        self,
        panel: Panel,
        output: Optional[TextIO] = None,
        width: Optional[int] = None,
    ) -> None:
        self._panel = panel
        self._output = output or sys.stdout
        self._width = width
        self._drawn_lines = 0
        self._stopped = False
        self._finished: Optional[asyncio.Future] = None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        """End the session after the current token."""
        self._stopped = True
        if self._finished is not None and not self._finished.done():
            self._finished.set_result(None)

    def width(self) -> int:
        if self._width is not None:
            return self._width
        return shutil.get_terminal_size().columns

    def process_keys(self, key_presses: Iterable[KeyPress]) -> None:
        """Feed key presses to the panel, then redraw once."""
        handled = False
        for key_press in key_presses:
            if self._stopped:
                break
            self._panel.handle_input(key_press.data)
            handled = True
        if handled and not self._stopped:
            self.redraw()

    def redraw(self) -> None:
        """Replace the previous frame with a fresh render."""
        lines: List[str] = self._panel.render(self.width())
        out = self._output
        if self._drawn_lines:
            out.write("\r")
            if self._drawn_lines > 1:
                out.write(f"\x1b[{self._drawn_lines - 1}A")
        out.write(CLEAR_TO_END)
        out.write("\r\n".join(lines))
        out.flush()
        self._drawn_lines = len(lines)

    async def run(self, input: Optional[Input] = None) -> None:
        """Draw the panel and process input until stop() is called.

        Args:
            input: prompt_toolkit input to read from (stdin by default).
        """
        loop = asyncio.get_running_loop()
        self._finished = loop.create_future()
        if self._stopped:
            self._finished.set_result(None)

        term_input = input or create_input()
        flush_handle: Optional[asyncio.TimerHandle] = None

        def flush() -> None:
            self.process_keys(term_input.flush_keys())

        def on_keys_ready() -> None:
            nonlocal flush_handle
            self.process_keys(term_input.read_keys())
            if flush_handle is not None:
                flush_handle.cancel()
            flush_handle = loop.call_later(ESCAPE_FLUSH_DELAY, flush)

        self.redraw()
        logger.debug("Terminal session started")
        try:
            with term_input.raw_mode(), term_input.attach(on_keys_ready):
                await self._finished
        finally:
            if flush_handle is not None:
                flush_handle.cancel()
            self._output.write("\r\n")
            self._output.flush()
            logger.debug("Terminal session ended")
