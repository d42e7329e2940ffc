import sys
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core import assets  # noqa: E402
from resume_tailor.core.config import settings  # noqa: E402


class ResolveAssetRootTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_first_directory_with_landing_page_wins(self):
        empty = self.root / "empty"
        empty.mkdir()
        first = self.root / "first"
        first.mkdir()
        (first / assets.LANDING_PAGE).write_text("<html></html>", encoding="utf-8")
        second = self.root / "second"
        second.mkdir()
        (second / assets.LANDING_PAGE).write_text("<html></html>", encoding="utf-8")

        resolved = assets.resolve_asset_root([self.root / "missing", empty, first, second])

        self.assertEqual(resolved, first)

    def test_no_candidate_gives_none(self):
        self.assertIsNone(assets.resolve_asset_root([self.root / "missing", self.root]))

    def test_custom_marker(self):
        (self.root / assets.TAILOR_PAGE).write_text("<html></html>", encoding="utf-8")
        self.assertEqual(assets.resolve_asset_root([self.root], marker=assets.TAILOR_PAGE), self.root)


class DefaultAssetCandidatesTests(unittest.TestCase):
    def test_configured_directory_comes_first(self):
        patched = replace(settings, public_dir="/srv/site", serverless=False)
        with patch.object(assets, "settings", patched):
            candidates = assets.default_asset_candidates()

        self.assertEqual(candidates[0], Path("/srv/site"))
        self.assertIn(assets.PROJECT_ROOT / "public", candidates)
        self.assertNotIn(Path("/var/task/public"), candidates)

    def test_serverless_adds_bundle_locations_without_duplicates(self):
        patched = replace(settings, public_dir=None, serverless=True)
        with patch.object(assets, "settings", patched):
            candidates = assets.default_asset_candidates()

        self.assertEqual(candidates[0], assets.PROJECT_ROOT / "public")
        self.assertIn(Path("/var/task/public"), candidates)
        self.assertIn(Path("/var/task/netlify/functions/public"), candidates)
        self.assertEqual(len(candidates), len(set(candidates)))


if __name__ == "__main__":
    unittest.main()
