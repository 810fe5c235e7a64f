"""Marshalling of display updates onto the UI thread."""

import asyncio
import threading
from collections.abc import Callable
from typing import Any


class UiDispatcher:
    """Runs callbacks on the thread that owns the display state.

    The owning thread is the one running `loop`. Calls made on that thread
    execute inline; calls from any other thread are posted to the loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self._ui_thread_id = threading.get_ident()

    @property
    def on_ui_thread(self) -> bool:
        return threading.get_ident() == self._ui_thread_id

    def run(self, callback: Callable[..., Any], *args: Any) -> None:
        if self.on_ui_thread:
            callback(*args)
        else:
            self.loop.call_soon_threadsafe(callback, *args)
