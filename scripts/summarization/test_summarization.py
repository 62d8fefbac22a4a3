#!/usr/bin/env python3
"""
Tests for session summarization.

Run with: python3 -m pytest scripts/summarization/test_summarization.py -v
"""

import asyncio
import io
import os
import sys
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

# Add parent directory to path for imports when run directly
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from recall_config import config
from summarization import (
    BaseSummarizer,
    HeuristicSummarizer,
    LLMSummarizer,
    SessionSummarizer,
    SummaryPrompts,
)


OBSERVATIONS = [
    {"tool": "Edit", "summary": "Edited login.py", "details": {"file": "src/auth/login.py"},
     "context": {"lastUserMessage": "fix the redirect loop"}},
    {"tool": "Bash", "summary": "Ran git commit",
     "details": {"command": "git commit -m 'fix auth'", "success": True}},
    {"tool": "Edit", "summary": "Edited token.py", "details": {"file": "src\\auth\\token.py"}},
    {"tool": "Write", "summary": "Wrote notes.md", "details": {"file": "docs/notes.md"}},
    {"tool": "Bash", "summary": "Ran ls", "details": {"command": "ls -la", "success": False}},
]

CONVERSATIONS = [
    {"message": "How does the refresh token expire?", "type": "question"},
    {"message": "thanks, that works", "type": "statement"},
    {"message": "And the access token?", "type": "question"},
]


def fake_message(text, input_tokens=120, output_tokens=30):
    """Minimal stand-in for an Anthropic Messages API response."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


class TestHeuristicSummarizer(unittest.TestCase):
    """Test rule-based summaries."""

    def setUp(self):
        self.summarizer = HeuristicSummarizer()

    def test_full_summary(self):
        """Tools, files, commands, failures and questions are all reported."""
        summary = self.summarizer.summarize(OBSERVATIONS, CONVERSATIONS)

        self.assertEqual(
            summary,
            "Tools: Edit(2), Bash(2), Write(1) | Files: login.py, token.py, notes.md"
            " | Commands: git commit -m 'fix auth' | Some operations failed"
            ' | Question: "How does the refresh token expire?" (+1 more)'
        )

    def test_files_capped(self):
        """At most five file names, with a count of the rest."""
        observations = [
            {"tool": "Edit", "details": {"file": f"src/mod{n}.py"}} for n in range(7)
        ]
        summary = self.summarizer.summarize(observations, [])
        self.assertIn("Files: mod0.py, mod1.py, mod2.py, mod3.py, mod4.py (+2 more)", summary)

    def test_repeated_files_listed_once(self):
        """The same file edited twice is listed once."""
        observations = [{"tool": "Edit", "details": {"file": "a/app.py"}}] * 3
        summary = self.summarizer.summarize(observations, [])
        self.assertEqual(summary, "Tools: Edit(3) | Files: app.py")

    def test_commands_truncated_and_capped(self):
        """Long commands are cut to 30 chars and only two are kept."""
        observations = [
            {"tool": "Bash", "details": {"command": "git push origin feature/very-long-branch-name"}},
            {"tool": "Bash", "details": {"command": "npm test"}},
            {"tool": "Bash", "details": {"command": "docker compose up"}},
            {"tool": "Bash", "details": {"command": "make build"}},
        ]
        summary = self.summarizer.summarize(observations, None)
        self.assertEqual(
            summary,
            "Tools: Bash(4) | Commands: git push origin feature/very-l, npm test"
        )

    def test_long_question_truncated(self):
        """Questions are cut to 50 chars."""
        question = "x" * 80
        summary = self.summarizer.summarize([], [{"message": question, "type": "question"}])
        self.assertTrue(summary.endswith(f'Question: "{"x" * 50}"'))

    def test_empty_session(self):
        """No activity still yields a summary line."""
        self.assertEqual(self.summarizer.summarize(None, None), "Tools: ")

    def test_malformed_entries_skipped(self):
        """Unknown shapes never raise."""
        observations = ["garbage", None, {"details": "bad"}, {"tool": "Read"}]
        summary = self.summarizer.summarize(observations, ["hello", None])
        self.assertEqual(summary, "Tools: unknown(1), Read(1)")

    def test_summary_type(self):
        """Heuristic summaries are marked local."""
        self.assertEqual(self.summarizer.summary_type, "local")
        self.assertIsInstance(self.summarizer, BaseSummarizer)


class TestSummaryPrompts(unittest.TestCase):
    """Test prompt construction."""

    def test_prompt_contents(self):
        """Project, messages, operations and limits appear in the prompt."""
        prompt = SummaryPrompts.session_summary_prompt(
            OBSERVATIONS, CONVERSATIONS, project="auth-service", max_chars=200, language="Korean"
        )

        self.assertIn("Project: auth-service", prompt)
        self.assertIn('- [question] "How does the refresh token expire?"', prompt)
        self.assertIn("- [Edit] Edited login.py", prompt)
        self.assertIn('  User request: "fix the redirect loop"', prompt)
        self.assertIn("in Korean, in at most 200 characters", prompt)

    def test_prompt_placeholders(self):
        """Empty sessions get placeholders instead of blank sections."""
        prompt = SummaryPrompts.session_summary_prompt([], None)

        self.assertIn("Project: unknown", prompt)
        self.assertIn("(no conversations)", prompt)
        self.assertIn("(no operations)", prompt)


class TestLLMSummarizer(unittest.TestCase):
    """Test the Claude-backed summarizer without network access."""

    def setUp(self):
        patcher = patch("summarization.llm_summarizer.anthropic.Anthropic")
        self.mock_anthropic = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = self.mock_anthropic.return_value

    def test_requires_api_key(self):
        """Missing credentials are rejected at construction."""
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                LLMSummarizer()

    def test_key_from_environment(self):
        """The key is read from ANTHROPIC_API_KEY when not passed."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-env"}):
            summarizer = LLMSummarizer()
        self.assertEqual(summarizer.api_key, "sk-env")

    def test_summarize(self):
        """Response text is returned stripped and usage recorded."""
        self.client.messages.create.return_value = fake_message("  Fixed the login redirect.\n")
        summarizer = LLMSummarizer(api_key="sk-test", model="claude-test", max_tokens=150)

        summary = summarizer.summarize(OBSERVATIONS, CONVERSATIONS, project="auth-service")

        self.assertEqual(summary, "Fixed the login redirect.")
        self.assertEqual(summarizer.last_usage["total_tokens"], 150)
        self.assertEqual(summarizer.summary_type, "ai")

        kwargs = self.client.messages.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "claude-test")
        self.assertEqual(kwargs["max_tokens"], 150)
        self.assertIn("Project: auth-service", kwargs["messages"][0]["content"])

    def test_non_text_blocks_ignored(self):
        """Only text blocks make up the summary."""
        message = fake_message("Summary")
        message.content.insert(0, SimpleNamespace(type="thinking", text="hidden"))
        self.client.messages.create.return_value = message

        summary = LLMSummarizer(api_key="sk-test").summarize([], [])

        self.assertEqual(summary, "Summary")

    def test_empty_response(self):
        """A response without text is an error."""
        self.client.messages.create.return_value = fake_message("   ")
        summarizer = LLMSummarizer(api_key="sk-test")

        with self.assertRaises(RuntimeError):
            summarizer.summarize([], [])

    def test_summarize_async(self):
        """The async variant returns the same summary."""
        self.client.messages.create.return_value = fake_message("Async summary")
        summarizer = LLMSummarizer(api_key="sk-test")

        summary = asyncio.run(summarizer.summarize_async(OBSERVATIONS, CONVERSATIONS))

        self.assertEqual(summary, "Async summary")

    def test_is_available(self):
        """Availability follows the configured key variable."""
        with patch.dict(os.environ, {"MY_KEY": "x"}, clear=True):
            self.assertTrue(LLMSummarizer.is_available("MY_KEY"))
            self.assertFalse(LLMSummarizer.is_available())


class FailingSummarizer(BaseSummarizer):
    summary_type = "ai"

    def summarize(self, observations, conversations, project=None):
        raise RuntimeError("rate limited")


class StaticSummarizer(BaseSummarizer):
    summary_type = "ai"

    def __init__(self, text):
        self.text = text

    def summarize(self, observations, conversations, project=None):
        return self.text


class TestSessionSummarizer(unittest.TestCase):
    """Test summarizer selection and fallback."""

    def setUp(self):
        config.set('summarization.enabled', True)
        config.set('summarization.mode', 'auto')
        config.set('summarization.api_key', None)

    def tearDown(self):
        config.reload()

    def test_uses_llm_when_it_works(self):
        """A working LLM summary is returned as 'ai'."""
        summarizer = SessionSummarizer(llm=StaticSummarizer("Reworked auth flow"))
        self.assertEqual(
            summarizer.summarize(OBSERVATIONS, CONVERSATIONS), ("Reworked auth flow", "ai")
        )

    def test_falls_back_on_error(self):
        """LLM failures fall back to the heuristic with a warning."""
        summarizer = SessionSummarizer(llm=FailingSummarizer())

        with redirect_stderr(io.StringIO()) as stderr:
            summary, summary_type = summarizer.summarize(OBSERVATIONS, CONVERSATIONS)

        self.assertEqual(summary_type, "local")
        self.assertTrue(summary.startswith("Tools: Edit(2)"))
        self.assertIn("rate limited", stderr.getvalue())

    def test_falls_back_on_empty(self):
        """An empty LLM summary is not stored."""
        summarizer = SessionSummarizer(llm=StaticSummarizer(""))
        _, summary_type = summarizer.summarize(OBSERVATIONS, CONVERSATIONS)
        self.assertEqual(summary_type, "local")

    def test_no_key_means_heuristic(self):
        """Without credentials no LLM is set up."""
        summarizer = SessionSummarizer()
        self.assertIsNone(summarizer.llm)
        self.assertEqual(summarizer.summarize([], [])[1], "local")

    def test_llm_mode_without_key_warns(self):
        """Asking for LLM mode without a key is reported."""
        config.set('summarization.mode', 'llm')

        with redirect_stderr(io.StringIO()) as stderr:
            summarizer = SessionSummarizer()

        self.assertIsNone(summarizer.llm)
        self.assertIn("Warning", stderr.getvalue())

    def test_local_mode_skips_llm(self):
        """Local mode never builds an LLM summarizer."""
        config.set('summarization.mode', 'local')
        config.set('summarization.api_key', 'sk-test')

        self.assertIsNone(SessionSummarizer().llm)

    def test_builds_llm_from_config(self):
        """With a key the LLM summarizer is configured from settings."""
        config.set('summarization.api_key', 'sk-test')
        config.set('summarization.max_chars', 120)

        with patch("summarization.llm_summarizer.anthropic.Anthropic"):
            summarizer = SessionSummarizer()

        self.assertIsInstance(summarizer.llm, LLMSummarizer)
        self.assertEqual(summarizer.llm.max_chars, 120)


if __name__ == "__main__":
    unittest.main()
