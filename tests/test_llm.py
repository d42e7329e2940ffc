import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import openai

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.errors import LLMError  # noqa: E402
from resume_tailor.services import llm  # noqa: E402

ENABLED_ENV = {"TOOLS_LLM_ENABLED": "1", "OPENAI_API_KEY": "sk-test-key"}


def _fake_client(content=None, error=None):
    create = MagicMock()
    if error is not None:
        create.side_effect = error
    else:
        create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def _status_error(error_cls, status_code):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return error_cls("upstream said no", response=httpx.Response(status_code, request=request), body=None)


class ReplyParsingTests(unittest.TestCase):
    def test_code_fences_are_stripped(self):
        self.assertEqual(llm.strip_code_fences('```json\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(llm.strip_code_fences('```\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(llm.strip_code_fences('  {"a": 1}  '), '{"a": 1}')

    def test_parse_json_reply(self):
        self.assertEqual(llm.parse_json_reply('```json\n{"score": 72}\n```'), {"score": 72})

    def test_invalid_json_raises(self):
        with self.assertRaises(LLMError) as ctx:
            llm.parse_json_reply("Sure! Here is your analysis.")
        self.assertEqual(ctx.exception.reason, "llm_invalid")
        self.assertEqual(ctx.exception.status_code, 500)


class LlmEnabledTests(unittest.TestCase):
    def test_missing_or_placeholder_key_disables(self):
        with patch.dict(os.environ, {"TOOLS_LLM_ENABLED": "1", "OPENAI_API_KEY": ""}):
            self.assertFalse(llm.llm_enabled())
        with patch.dict(os.environ, {"TOOLS_LLM_ENABLED": "1", "OPENAI_API_KEY": "your_openai_api_key"}):
            self.assertFalse(llm.llm_enabled())
        with patch.dict(os.environ, {"TOOLS_LLM_ENABLED": "0", "OPENAI_API_KEY": "sk-test-key"}):
            self.assertFalse(llm.llm_enabled())

    def test_real_key_enables(self):
        with patch.dict(os.environ, ENABLED_ENV):
            self.assertTrue(llm.llm_enabled())


class JsonCompletionTests(unittest.TestCase):
    def test_disabled_llm_raises_configuration_error(self):
        with patch.dict(os.environ, {"TOOLS_LLM_ENABLED": "0"}):
            with self.assertRaises(LLMError) as ctx:
                llm.json_completion(system_prompt="s", user_prompt="u")
        self.assertEqual(ctx.exception.reason, "llm_disabled")
        self.assertIn("OPENAI_API_KEY", ctx.exception.message)

    def test_fenced_reply_is_parsed(self):
        client = _fake_client('```json\n{"score": 81}\n```')
        with patch.dict(os.environ, ENABLED_ENV), patch("resume_tailor.services.llm._client", return_value=client):
            result = llm.json_completion(system_prompt="sys", user_prompt="user", max_output_tokens=2000)

        self.assertEqual(result, {"score": 81})
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["max_tokens"], 2000)
        self.assertEqual(kwargs["messages"][0], {"role": "system", "content": "sys"})
        self.assertNotIn("response_format", kwargs)

    def test_json_response_format_can_be_requested(self):
        client = _fake_client('{"ok": true}')
        env = dict(ENABLED_ENV, OPENAI_RESPONSE_FORMAT="json")
        with patch.dict(os.environ, env), patch("resume_tailor.services.llm._client", return_value=client):
            llm.json_completion(system_prompt="sys", user_prompt="user")

        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})

    def test_empty_reply_raises(self):
        client = _fake_client("")
        with patch.dict(os.environ, ENABLED_ENV), patch("resume_tailor.services.llm._client", return_value=client):
            with self.assertRaises(LLMError) as ctx:
                llm.json_completion(system_prompt="sys", user_prompt="user")
        self.assertEqual(ctx.exception.reason, "llm_empty")

    def test_upstream_status_errors_map_to_messages(self):
        cases = [
            (openai.AuthenticationError, 401, "Invalid OpenAI API key. Please check your .env file."),
            (openai.RateLimitError, 429, "OpenAI API rate limit exceeded. Please try again later."),
            (openai.InternalServerError, 503, "OpenAI API server error. Please try again later."),
        ]
        for error_cls, status_code, message in cases:
            client = _fake_client(error=_status_error(error_cls, status_code))
            with patch.dict(os.environ, ENABLED_ENV), patch("resume_tailor.services.llm._client", return_value=client):
                with self.assertRaises(LLMError) as ctx:
                    llm.json_completion(system_prompt="sys", user_prompt="user")
            self.assertEqual(ctx.exception.message, message)
            self.assertEqual(ctx.exception.status_code, 500)


if __name__ == "__main__":
    unittest.main()
