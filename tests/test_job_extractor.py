import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.content.job_extractor import (  # noqa: E402
    EXTRACTION_FAILED_MESSAGE,
    extract_job_text,
)
from resume_tailor.core.errors import ExtractionFailed  # noqa: E402

LONG_SENTENCE = (
    "Design and operate the payment APIs used by thousands of merchants, "
    "and mentor two junior engineers on testing practice."
)


def _ld_json(payload) -> str:
    return f'<script type="application/ld+json">{json.dumps(payload)}</script>'


class ExtractJobTextTests(unittest.TestCase):
    def test_structured_job_posting_wins(self):
        payload = {
            "@context": "https://schema.org",
            "@type": "JobPosting",
            "title": "Backend Engineer",
            "description": "&lt;p&gt;" + LONG_SENTENCE + "&lt;/p&gt;&lt;ul&gt;&lt;li&gt;Python&lt;/li&gt;&lt;/ul&gt;",
        }
        page = (
            "<html><head>" + _ld_json(payload) + "</head>"
            "<body><div class='job-description'><p>Other text that should not be read.</p></div></body></html>"
        )

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "structured_data")
        self.assertEqual(result.text, LONG_SENTENCE + " Python")
        self.assertFalse(result.truncated)

    def test_structured_data_inside_graph_is_found(self):
        payload = {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "Organization", "name": "Acme"},
                {"@type": "JobPosting", "description": LONG_SENTENCE},
            ],
        }
        result = extract_job_text("<html><head>" + _ld_json(payload) + "</head><body></body></html>")
        self.assertEqual(result.strategy_used, "structured_data")
        self.assertIn("payment APIs", result.text)

    def test_invalid_json_ld_falls_through_to_meta_description(self):
        page = (
            '<html><head><script type="application/ld+json">{not json</script>'
            f'<meta name="description" content="{LONG_SENTENCE}"></head><body></body></html>'
        )
        result = extract_job_text(page)
        self.assertEqual(result.strategy_used, "meta_tag")
        self.assertEqual(result.text, LONG_SENTENCE)

    def test_short_chunks_accumulate_until_accepted(self):
        payload = {"@type": "JobPosting", "description": "Backend Engineer for the payments platform group."}
        meta = "Remote friendly role with an on-call rotation shared across eight people."
        page = (
            "<html><head>" + _ld_json(payload) + f'<meta name="description" content="{meta}"></head>'
            "<body><p>ignored</p></body></html>"
        )

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "meta_tag")
        self.assertEqual(result.text, "Backend Engineer for the payments platform group. " + meta)

    def test_description_container_is_used_without_inline_scripts(self):
        page = (
            "<html><body><nav>Home Jobs</nav>"
            "<div class='job-description'><script>var tracking = 1;</script>"
            f"<h2>About the role</h2><p>{LONG_SENTENCE}</p></div></body></html>"
        )

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "content_selector")
        self.assertEqual(result.text, "About the role " + LONG_SENTENCE)
        self.assertNotIn("tracking", result.text)
        self.assertNotIn("Home Jobs", result.text)

    def test_main_element_is_the_fallback(self):
        page = f"<html><body><nav>Home Jobs</nav><main><p>{LONG_SENTENCE}</p></main><footer>Legal</footer></body></html>"

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "main_content_fallback")
        self.assertEqual(result.text, LONG_SENTENCE)

    def test_whole_document_is_the_last_resort(self):
        page = f"<html><head><title>Careers</title></head><body><p>{LONG_SENTENCE}</p></body></html>"

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "brute_force")
        self.assertIn(LONG_SENTENCE, result.text)

    def test_too_little_text_raises(self):
        with self.assertRaises(ExtractionFailed) as ctx:
            extract_job_text("<html><body><p>Too short</p></body></html>")
        self.assertEqual(ctx.exception.message, EXTRACTION_FAILED_MESSAGE)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_empty_page_raises(self):
        with self.assertRaises(ExtractionFailed):
            extract_job_text(None)

    def test_long_text_is_truncated_and_flagged(self):
        page = "<html><body><main><p>" + ("engineer " * 200) + "</p></main></body></html>"

        result = extract_job_text(page, max_chars=500)

        self.assertTrue(result.truncated)
        self.assertEqual(len(result.text), 500)

    def test_deeply_nested_json_ld_is_ignored(self):
        page = (
            '<html><head><script type="application/ld+json">'
            + "[" * 100000
            + "]" * 100000
            + f"</script></head><body><main><p>{LONG_SENTENCE} {LONG_SENTENCE}</p></main></body></html>"
        )

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "main_content_fallback")
        self.assertIn(LONG_SENTENCE, result.text)

    def test_deeply_nested_json_ld_alone_fails_cleanly(self):
        page = '<html><head><script type="application/ld+json">' + "[" * 100000 + "]" * 100000 + "</script></head></html>"
        with self.assertRaises(ExtractionFailed):
            extract_job_text(page)

    def test_job_posting_buried_below_the_depth_limit_is_skipped(self):
        posting = json.dumps({"@type": "JobPosting", "description": LONG_SENTENCE})
        page = (
            '<html><head><script type="application/ld+json">'
            + "[" * 500
            + posting
            + "]" * 500
            + f'</script><meta name="description" content="{LONG_SENTENCE}"></head><body></body></html>'
        )

        result = extract_job_text(page)

        self.assertEqual(result.strategy_used, "meta_tag")

    def test_malformed_markup_still_yields_text(self):
        page = "<div class='job-description'><p>" + LONG_SENTENCE + " <b>unclosed <i>tags"

        result = extract_job_text(page)

        self.assertIn(LONG_SENTENCE, result.text)


if __name__ == "__main__":
    unittest.main()
