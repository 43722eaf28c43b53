"""Word-by-word reveal of an answer that arrived in one piece.

The answer is split on single spaces and replayed one word per tick, so the
chat panel shows a typing cadence instead of the whole text at once.
"""

import asyncio
import logging
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

# Seconds between two revealed words
REVEAL_INTERVAL = 0.08


def iter_prefixes(text: str) -> Iterator[str]:
    """Yield every word prefix of ``text``, ending with ``text`` itself.

    Splits on single spaces only, so repeated spaces and newlines survive
    the round trip and the last prefix always equals the input.
    """
    words = text.split(" ")
    for index in range(len(words)):
        yield " ".join(words[: index + 1])


class RevealScheduler:
    """Periodic timer that pushes growing prefixes of an answer.

    Callbacks:
        on_update: Receives each prefix, in order.
        on_first_chunk: Fires once, after the first non-empty prefix.
        on_done: Fires once, after the full text was pushed.
    """

    def __init__(
        self,
        text: str,
        on_update: Callable[[str], None],
        on_first_chunk: Callable[[], None],
        on_done: Callable[[], None],
        interval: float = REVEAL_INTERVAL,
    ) -> None:
        self._text = text
        self._on_update = on_update
        self._on_first_chunk = on_first_chunk
        self._on_done = on_done
        self._interval = interval
        self._started = False
        self._task: asyncio.Task[None] | None = None

    @property
    def started(self) -> bool:
        """Whether a non-empty prefix has been shown."""
        return self._started

    def start(self) -> asyncio.Task[None]:
        """Schedule the reveal on the running event loop."""
        if self._task is None:
            self._task = asyncio.create_task(self.run())
        return self._task

    async def run(self) -> None:
        """Reveal the answer one word per tick.

        ``on_done`` always runs, also when a callback raises or the task is
        cancelled.
        """
        count = 0
        try:
            for prefix in iter_prefixes(self._text):
                await asyncio.sleep(self._interval)
                self._on_update(prefix)
                count += 1
                if not self._started and prefix:
                    self._started = True
                    self._on_first_chunk()
        finally:
            logger.debug(f"Reveal finished after {count} ticks")
            self._on_done()
