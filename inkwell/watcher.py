"""Watch mode for Inkwell.

Watches the source tree and rebuilds the whole site whenever something in it
changes:
- File events only set a single pending flag, so a burst of events results in
  one rebuild.
- Builds run on the thread that called run_forever(); an event arriving while
  a build is running cancels it between pages and a fresh build starts.
- A failing rebuild is reported and watching continues.

Key classes:
- SiteWatcher: Runs the rebuild loop.
- _ChangeHandler: File system event handler that requests rebuilds.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path

from jinja2 import TemplateError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .build import BuildCancelled, BuildError, BuildResult, build_site
from .config import Context

# Reads performed by the build itself must not look like changes.
_IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


class SiteWatcher:
    """Rebuilds the site on every change under the source directory.

    Attributes:
        context: Resolved build context.
        clean: Passed through to build_site.
        debounce_seconds: Quiet period to let a burst of events settle.
        poll_seconds: How often the loop checks for stop requests.
        builds: Number of builds started, cancelled ones included.
    """

    def __init__(
        self,
        context: Context,
        clean: bool = False,
        debounce_seconds: float = 0.05,
        poll_seconds: float = 0.5,
    ):
        self.context = context
        self.clean = clean
        self.debounce_seconds = debounce_seconds
        self.poll_seconds = poll_seconds
        self.builds = 0
        self._pending = threading.Event()
        self._stopped = threading.Event()
        self._observer: Observer | None = None

    def request_rebuild(self) -> None:
        """Ask for a rebuild; repeated requests before it starts coalesce."""
        self._pending.set()

    @property
    def pending(self) -> bool:
        return self._pending.is_set()

    def run_forever(self, build_first: bool = False) -> None:
        """Start the observer and rebuild until stopped or interrupted.

        Args:
            build_first: Run a build once the observer is running, so edits
                made during that build are not missed.
        """
        self._start_observer()
        print(f"watch: {self.context.src_dir}")
        try:
            if build_first:
                self.rebuild("Initial build...")
            while not self._stopped.is_set():
                self.run_once(timeout=self.poll_seconds)
        except KeyboardInterrupt:
            pass
        finally:
            self._stop_observer()

    def run_once(self, timeout: float | None = None) -> BuildResult | None:
        """Wait for a pending request and run one rebuild.

        Args:
            timeout: Seconds to wait for a request; None waits forever.

        Returns:
            The build result, or None if nothing was pending, the build was
            cancelled, or it failed.
        """
        if not self._pending.wait(timeout) or self._stopped.is_set():
            return None
        if self.debounce_seconds:
            time.sleep(self.debounce_seconds)
        self._pending.clear()
        return self.rebuild()

    def rebuild(self, reason: str = "Change detected; rebuilding...") -> BuildResult | None:
        """Run a full build, reporting failures instead of raising them."""
        print(reason)
        self.builds += 1
        try:
            return build_site(
                self.context, clean=self.clean, should_cancel=self._pending.is_set
            )
        except BuildCancelled:
            print("Build superseded by a newer change.")
        except BuildError as exc:
            print(f"Build failed: {exc}")
        except (OSError, TemplateError) as exc:
            print(f"Build failed: {type(exc).__name__}: {exc}")
        return None

    def stop(self) -> None:
        """Stop the loop after the current wait or build."""
        self._stopped.set()
        self._pending.set()

    def _start_observer(self) -> None:  # pragma: no cover - integration path
        handler = _ChangeHandler(self)
        observer = Observer()
        observer.schedule(handler, str(self.context.src_dir), recursive=True)
        observer.start()
        self._observer = observer

    def _stop_observer(self) -> None:  # pragma: no cover - integration path
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: SiteWatcher):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event):
        if event.is_directory or event.event_type in _IGNORED_EVENT_TYPES:
            return
        path = Path(event.src_path)
        # Output may live under the source tree; writing it must not retrigger.
        try:
            path.relative_to(self.watcher.context.out_dir)
            return
        except ValueError:
            pass
        print(f"watch: {event.event_type} {path}")
        self.watcher.request_rebuild()
