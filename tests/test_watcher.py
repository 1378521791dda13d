"""
tests/test_watcher.py

Tests for lessonhub/services/watcher.py.

Three groups:
  1. Change classification and the watchfiles filter (pure).
  2. Batch dispatch and the run loop with a stubbed change source.
  3. One live round trip using watchfiles' polling backend.
"""

import tempfile
import threading
import time
import unittest
from pathlib import Path
from unittest import mock

from watchfiles import Change

from lessonhub.services import watcher as watcher_module
from lessonhub.services.watcher import (
    ChangeWatcher,
    LessonFileFilter,
    classify_changes,
    start_watcher,
)


class Recorder:
    def __init__(self):
        self.course_calls = 0
        self.lesson_calls = 0
        self.lessons_changed = threading.Event()

    def on_course(self):
        self.course_calls += 1

    def on_lessons(self):
        self.lesson_calls += 1
        self.lessons_changed.set()


# ---------------------------------------------------------------------------
# 1. Classification
# ---------------------------------------------------------------------------

class TestClassifyChanges(unittest.TestCase):

    def test_markdown_change_rebuilds_lessons(self):
        self.assertEqual(
            classify_changes({(Change.modified, "/l/section1-html-css/week1.md")}),
            (False, True),
        )

    def test_course_file_reloads_course(self):
        for name in ("course.yaml", "course.yml", "COURSE.YAML"):
            with self.subTest(name=name):
                self.assertEqual(
                    classify_changes({(Change.added, f"/l/{name}")}), (True, False)
                )

    def test_both_in_one_batch(self):
        changes = {(Change.modified, "/l/course.yaml"), (Change.added, "/l/week2.md")}
        self.assertEqual(classify_changes(changes), (True, True))

    def test_unrelated_files_ignored(self):
        changes = {
            (Change.modified, "/l/notes.txt"),
            (Change.modified, "/l/settings.yaml"),
            (Change.added, "/l/image.png"),
        }
        self.assertEqual(classify_changes(changes), (False, False))

    def test_deletions_ignored(self):
        self.assertEqual(
            classify_changes({(Change.deleted, "/l/week1.md")}), (False, False)
        )

    def test_empty_batch(self):
        self.assertEqual(classify_changes(set()), (False, False))


class TestLessonFileFilter(unittest.TestCase):

    def setUp(self):
        self.filter = LessonFileFilter()

    def test_accepts_lesson_and_course_files(self):
        self.assertTrue(self.filter(Change.added, "/l/week1.md"))
        self.assertTrue(self.filter(Change.modified, "/l/course.yml"))
        self.assertTrue(self.filter(Change.modified, "/l/Other.YAML"))

    def test_rejects_other_changes(self):
        self.assertFalse(self.filter(Change.deleted, "/l/week1.md"))
        self.assertFalse(self.filter(Change.modified, "/l/week1.md.swp"))
        self.assertFalse(self.filter(Change.modified, "/l/.git/week1.md"))


# ---------------------------------------------------------------------------
# 2. Dispatch and run loop
# ---------------------------------------------------------------------------

class TestChangeWatcherDispatch(unittest.TestCase):

    def setUp(self):
        self.recorder = Recorder()
        self.watcher = ChangeWatcher(
            "/unused", self.recorder.on_course, self.recorder.on_lessons, retry_delay=0
        )

    def test_one_reload_per_batch(self):
        self.watcher.handle_changes(
            {
                (Change.modified, "/l/week1.md"),
                (Change.modified, "/l/week2.md"),
                (Change.added, "/l/section1-html-css/week3.md"),
            }
        )
        self.assertEqual(self.recorder.lesson_calls, 1)
        self.assertEqual(self.recorder.course_calls, 0)

    def test_course_and_lessons_both_fire(self):
        self.watcher.handle_changes(
            {(Change.modified, "/l/course.yaml"), (Change.modified, "/l/week1.md")}
        )
        self.assertEqual(self.recorder.course_calls, 1)
        self.assertEqual(self.recorder.lesson_calls, 1)

    def test_irrelevant_batch_does_nothing(self):
        self.watcher.handle_changes({(Change.modified, "/l/data.json")})
        self.assertEqual(self.recorder.course_calls, 0)
        self.assertEqual(self.recorder.lesson_calls, 0)

    def test_failing_callback_is_logged_and_others_still_run(self):
        def broken():
            raise RuntimeError("boom")

        watcher = ChangeWatcher("/unused", broken, self.recorder.on_lessons)
        with self.assertLogs("lessonhub", level="ERROR") as logs:
            watcher.handle_changes(
                {(Change.modified, "/l/course.yaml"), (Change.modified, "/l/week1.md")}
            )
        self.assertIn("boom", "\n".join(logs.output))
        self.assertEqual(self.recorder.lesson_calls, 1)

    def test_run_handles_batches_until_stream_ends(self):
        batches = [
            {(Change.modified, "/l/week1.md")},
            {(Change.modified, "/l/course.yml")},
        ]
        with mock.patch.object(watcher_module, "watch", return_value=iter(batches)) as fake:
            self.watcher._run()

        fake.assert_called_once()
        self.assertEqual(self.recorder.lesson_calls, 1)
        self.assertEqual(self.recorder.course_calls, 1)

    def test_run_survives_watch_errors(self):
        batches = [{(Change.added, "/l/week1.md")}]
        side_effect = [FileNotFoundError(2, "No such file or directory"), iter(batches)]

        with mock.patch.object(watcher_module, "watch", side_effect=side_effect) as fake:
            with self.assertLogs("lessonhub", level="ERROR") as logs:
                self.watcher._run()

        self.assertEqual(fake.call_count, 2)
        self.assertIn("File watcher error", "\n".join(logs.output))
        self.assertEqual(self.recorder.lesson_calls, 1)

    def test_start_twice_raises(self):
        with mock.patch.object(watcher_module, "watch", return_value=iter([])):
            self.watcher.start()
            try:
                with self.assertRaises(RuntimeError):
                    self.watcher.start()
            finally:
                self.watcher.close()
        self.assertFalse(self.watcher.running)


# ---------------------------------------------------------------------------
# 3. Live round trip
# ---------------------------------------------------------------------------

class TestChangeWatcherLive(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_markdown_write_triggers_rebuild(self):
        recorder = Recorder()
        watcher = start_watcher(
            self.root,
            recorder.on_course,
            recorder.on_lessons,
            debounce_ms=50,
            force_polling=True,
            poll_delay_ms=50,
        )
        try:
            self.assertTrue(watcher.running)
            lesson = self.root / "week1.md"
            deadline = time.monotonic() + 15
            attempt = 0
            # keep touching the file until the watcher has settled and reports it
            while not recorder.lessons_changed.is_set() and time.monotonic() < deadline:
                attempt += 1
                lesson.write_text("# Week 1\n" + "x" * attempt, encoding="utf-8")
                recorder.lessons_changed.wait(0.5)
            self.assertTrue(recorder.lessons_changed.is_set())
        finally:
            watcher.close()

        self.assertFalse(watcher.running)
        self.assertGreaterEqual(recorder.lesson_calls, 1)
        self.assertEqual(recorder.course_calls, 0)


if __name__ == "__main__":
    unittest.main()
