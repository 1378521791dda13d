import os
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional, Set, Tuple, Union

from watchfiles import Change, DefaultFilter, watch

from lessonhub.core.logger import logger
from lessonhub.services.course import COURSE_FILENAMES


WATCHED_EXTENSIONS = (".md", ".yaml", ".yml")
TRIGGER_CHANGES = (Change.added, Change.modified)


class LessonFileFilter(DefaultFilter):
    """Pass created or modified lesson and course files, ignore everything else."""

    def __init__(self, extensions: Tuple[str, ...] = WATCHED_EXTENSIONS, **kwargs):
        self.extensions = tuple(ext.lower() for ext in extensions)
        super().__init__(**kwargs)

    def __call__(self, change: Change, path: str) -> bool:
        return (
            change in TRIGGER_CHANGES
            and path.lower().endswith(self.extensions)
            and super().__call__(change, path)
        )


def classify_changes(changes: Iterable[Tuple[Change, str]]) -> Tuple[bool, bool]:
    """
    Decide which reloads a batch of filesystem changes calls for.

    Returns:
        (reload_course, rebuild_lessons). Both may be True for one batch.
    """
    reload_course = False
    rebuild_lessons = False
    for change, path in changes:
        if change not in TRIGGER_CHANGES:
            continue
        name = Path(path).name.lower()
        if not name.endswith(WATCHED_EXTENSIONS):
            continue
        if name in COURSE_FILENAMES:
            reload_course = True
        if name.endswith(".md"):
            rebuild_lessons = True
    return reload_course, rebuild_lessons


class ChangeWatcher:
    """
    Background thread that keeps the catalog in step with the lesson root.

    Changes are grouped by watchfiles over ``debounce_ms`` so an editor's save
    burst produces one batch. Batches are handled one at a time; changes that
    land while a rebuild runs are buffered and arrive as the next batch.
    """

    def __init__(
        self,
        root: Union[str, os.PathLike],
        on_course_change: Callable[[], object],
        on_lessons_change: Callable[[], object],
        debounce_ms: int = 100,
        force_polling: bool = False,
        poll_delay_ms: int = 300,
        retry_delay: float = 5.0,
    ):
        self.root = Path(root)
        self.on_course_change = on_course_change
        self.on_lessons_change = on_lessons_change
        self.debounce_ms = debounce_ms
        self.force_polling = force_polling
        self.poll_delay_ms = poll_delay_ms
        self.retry_delay = retry_delay
        self._filter = LessonFileFilter()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ChangeWatcher":
        if self._thread is not None:
            raise RuntimeError("File watcher already started")
        self._thread = threading.Thread(
            target=self._run, name="lessonhub-watcher", daemon=True
        )
        self._thread.start()
        return self

    def close(self, timeout: float = 5.0) -> None:
        """Stop watching and release the watch handle."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def __enter__(self) -> "ChangeWatcher":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def handle_changes(self, changes: Set[Tuple[Change, str]]) -> None:
        reload_course, rebuild_lessons = classify_changes(changes)
        if not (reload_course or rebuild_lessons):
            return

        for _, path in changes:
            logger.info(f"Detected file change: {path}")

        if reload_course:
            self._invoke(self.on_course_change, "course reload")
        if rebuild_lessons:
            self._invoke(self.on_lessons_change, "lesson rebuild")

    def _invoke(self, callback: Callable[[], object], action: str) -> None:
        try:
            callback()
        except Exception as e:
            logger.structured_error(f"File watcher {action} failed", error=e)

    def _run(self) -> None:
        logger.info(f"Watching {self.root} for lesson changes")
        while not self._stop_event.is_set():
            try:
                for changes in watch(
                    self.root,
                    watch_filter=self._filter,
                    step=self.debounce_ms,
                    stop_event=self._stop_event,
                    force_polling=self.force_polling,
                    poll_delay_ms=self.poll_delay_ms,
                    raise_interrupt=False,
                ):
                    self.handle_changes(changes)
            except (OSError, RuntimeError) as e:
                logger.structured_error(
                    "File watcher error", error=e, root=str(self.root)
                )
                self._stop_event.wait(self.retry_delay)
                continue
            # change stream ended
            break
        logger.info("File watcher stopped")


def start_watcher(
    root: Union[str, os.PathLike],
    on_course_change: Callable[[], object],
    on_lessons_change: Callable[[], object],
    **kwargs,
) -> ChangeWatcher:
    """Start a ChangeWatcher on root; call ``close()`` on the result to stop it."""
    return ChangeWatcher(root, on_course_change, on_lessons_change, **kwargs).start()
