"""Watch mode: regenerate declarations when locale files change."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

from .config import ConfigError, LocgenConfig
from .generator import MergeConflictError
from .logging import get_logger
from .orchestrator import GenerationOutcome, Orchestrator
from .sources import SourceError

Fingerprint = Tuple[Tuple[str, int, int], ...]

_RECOVERABLE_ERRORS = (SourceError, ConfigError, MergeConflictError, OSError)


class Watcher:
    """Polls the listen path and reruns generation after changes settle.

    A change is picked up once the fingerprint of the watched tree differs
    from the last one seen; regeneration waits until no further change has
    been observed for ``debounce`` seconds.
    """

    def __init__(
        self,
        orchestrator: Orchestrator,
        config: LocgenConfig,
        *,
        interval: float | None = None,
        debounce: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.orchestrator = orchestrator
        self.config = config
        self.interval = interval if interval is not None else config.watch.interval
        self.debounce = debounce if debounce is not None else config.watch.debounce
        self._clock = clock
        self._sleep = sleep
        self._last: Fingerprint = ()
        self._pending_since: Optional[float] = None
        self.logger = get_logger("watch")

    @property
    def listen_path(self) -> Path:
        return self.config.watch_path

    def fingerprint(self) -> Fingerprint:
        """Return ``(path, mtime_ns, size)`` for every visible file under the listen path."""
        root = self.listen_path
        if not root.exists():
            return ()
        if root.is_file():
            stat = root.stat()
            return ((root.name, stat.st_mtime_ns, stat.st_size),)

        output = self.config.output_path.resolve()
        entries = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
            for filename in filenames:
                if filename.startswith("."):
                    continue
                path = Path(dirpath) / filename
                if path.resolve() == output:
                    continue
                try:
                    stat = path.stat()
                except FileNotFoundError:
                    continue
                entries.append((str(path.relative_to(root)), stat.st_mtime_ns, stat.st_size))
        return tuple(sorted(entries))

    def start(self) -> GenerationOutcome:
        """Run the initial generation; its errors propagate to the caller."""
        if not self.listen_path.exists():
            self.logger.warning("Listen path %s does not exist yet", self.listen_path)
        self._last = self.fingerprint()
        return self.orchestrator.run_generate(self.config)

    def poll(self) -> Optional[GenerationOutcome]:
        """Check for changes once; returns the outcome when a regeneration ran."""
        current = self.fingerprint()
        now = self._clock()
        if current != self._last:
            self.logger.info("Change detected under %s", self.listen_path)
            self._last = current
            self._pending_since = now
            if self.debounce > 0:
                return None
        if self._pending_since is None or now - self._pending_since < self.debounce:
            return None
        self._pending_since = None
        return self.regenerate()

    def regenerate(self) -> Optional[GenerationOutcome]:
        """Drop cached sources and generate again, logging failures instead of raising."""
        self.logger.info("Regenerating types due to file changes")
        self.orchestrator.cache.invalidate()
        try:
            outcome = self.orchestrator.run_generate(self.config)
        except _RECOVERABLE_ERRORS as exc:
            self.logger.error("Error during type generation: %s", exc)
            return None
        self.logger.info("Continuing to watch for changes")
        return outcome

    def run(self, *, max_polls: Optional[int] = None) -> None:
        """Generate once, then poll until interrupted or ``max_polls`` is reached."""
        self.start()
        self.logger.info("Watching %s for changes (Ctrl+C to stop)", self.listen_path)
        polls = 0
        while max_polls is None or polls < max_polls:
            self._sleep(self.interval)
            self.poll()
            polls += 1


__all__ = ["Watcher"]
