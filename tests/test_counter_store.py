import os
import sys
import tempfile
import threading
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("COUNTER_DB_PATH", os.path.join(tempfile.gettempdir(), "resume_tailor_test_counter.db"))

from resume_tailor.core import counter_store  # noqa: E402
from resume_tailor.core.config import settings  # noqa: E402


class CounterStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        db_path = os.path.join(self._tmp.name, "nested", "counter.db")
        self._settings_patch = patch.object(counter_store, "settings", replace(settings, counter_db_path=db_path))
        self._settings_patch.start()
        counter_store.init_counter_store()

    def tearDown(self):
        self._settings_patch.stop()
        if counter_store._conn is not None:
            counter_store._conn.close()
        counter_store._conn = None
        counter_store._conn_path = None
        self._tmp.cleanup()

    def test_missing_counter_reads_zero(self):
        self.assertEqual(counter_store.get_count(), 0)
        self.assertEqual(counter_store.get_count("other"), 0)

    def test_increment_returns_new_value(self):
        self.assertEqual(counter_store.increment(), 1)
        self.assertEqual(counter_store.increment(), 2)
        self.assertEqual(counter_store.get_count(), 2)

    def test_counters_are_independent(self):
        counter_store.increment("a")
        counter_store.increment("a")
        counter_store.increment("b")
        self.assertEqual(counter_store.get_count("a"), 2)
        self.assertEqual(counter_store.get_count("b"), 1)

    def test_reset_clears_counter(self):
        counter_store.increment()
        counter_store.reset()
        self.assertEqual(counter_store.get_count(), 0)

    def test_concurrent_increments_are_not_lost(self):
        seen: list[int] = []
        seen_lock = threading.Lock()

        def worker():
            for _ in range(25):
                value = counter_store.increment()
                with seen_lock:
                    seen.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(counter_store.get_count(), 200)
        self.assertEqual(sorted(seen), list(range(1, 201)))


if __name__ == "__main__":
    unittest.main()
