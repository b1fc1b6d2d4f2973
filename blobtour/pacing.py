"""Human pacing between walkthrough phases."""

from __future__ import annotations

from typing import Awaitable, Callable

import anyio

Pacer = Callable[[str], Awaitable[None]]

CONTINUE_PROMPT = "Press 'Enter' to continue."


def console_pacer(prompt: str = CONTINUE_PROMPT) -> Pacer:
    """Return a pacer that prints ``prompt`` and waits for Enter on stdin."""

    async def _pace(message: str = prompt) -> None:
        if message:
            print(message)
        # input() blocks; keep it off the event loop.
        await anyio.to_thread.run_sync(input)

    return _pace


async def noop_pacer(message: str = CONTINUE_PROMPT) -> None:
    return None


def make_pacer(interactive: bool) -> Pacer:
    return console_pacer() if interactive else noop_pacer


__all__ = ["Pacer", "CONTINUE_PROMPT", "console_pacer", "noop_pacer", "make_pacer"]
