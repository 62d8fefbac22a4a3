"""
LLM session summarizer.

Calls the Claude API to write a short summary of a session.
"""

import asyncio
import os
from typing import Dict, List, Optional

import anthropic

from .base import BaseSummarizer
from .prompt_templates import SummaryPrompts


class LLMSummarizer(BaseSummarizer):
    """
    LLM-based session summarizer.

    Uses the Claude API with:
    - Async execution
    - Timeout handling
    - Token usage tracking
    """

    summary_type = "ai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-3-5-haiku-20241022",
        max_tokens: int = 300,
        max_chars: int = 250,
        language: str = "English",
        timeout: float = 30.0
    ):
        """
        Initialize summarizer.

        Args:
            api_key: Anthropic API key (or from env)
            model: Model to use
            max_tokens: Maximum response tokens
            max_chars: Summary length requested in the prompt
            language: Summary language requested in the prompt
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.environ.get('ANTHROPIC_API_KEY')
        if not self.api_key:
            raise ValueError(
                "API key required. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter"
            )

        self.model = model
        self.max_tokens = max_tokens
        self.max_chars = max_chars
        self.language = language
        self.timeout = timeout
        self.last_usage: Dict[str, int] = {}
        self.client = anthropic.Anthropic(api_key=self.api_key, timeout=timeout)

    def summarize(
        self,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None
    ) -> str:
        """
        Summarize a session synchronously.

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Project name

        Returns:
            Summary text

        Raises:
            RuntimeError: API call failed or returned no text
        """
        prompt = SummaryPrompts.session_summary_prompt(
            observations,
            conversations,
            project=project,
            max_chars=self.max_chars,
            language=self.language
        )
        return self._call_api(prompt)

    async def summarize_async(
        self,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None
    ) -> str:
        """
        Summarize a session asynchronously.

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Project name

        Returns:
            Summary text
        """
        try:
            # Run in executor to avoid blocking
            loop = asyncio.get_running_loop()
            return await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    self.summarize,
                    observations,
                    conversations,
                    project
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise TimeoutError(f"API call timed out after {self.timeout}s")

    def _call_api(self, prompt: str) -> str:
        """
        Make API call to Claude.

        Args:
            prompt: Summary prompt

        Returns:
            Stripped response text
        """
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": prompt
                    }
                ]
            )
        except anthropic.APIError as e:
            raise RuntimeError(f"Anthropic API error: {e}") from e

        self.last_usage = {
            'input_tokens': message.usage.input_tokens,
            'output_tokens': message.usage.output_tokens,
            'total_tokens': message.usage.input_tokens + message.usage.output_tokens
        }

        texts = [
            block.text for block in message.content
            if getattr(block, 'type', 'text') == 'text'
        ]
        summary = "".join(texts).strip()
        if not summary:
            raise RuntimeError("Empty summary in API response")

        return summary

    @staticmethod
    def is_available(api_key_env: str = 'ANTHROPIC_API_KEY') -> bool:
        """Check if LLM summaries are possible (credentials present)."""
        return bool(os.environ.get(api_key_env))
