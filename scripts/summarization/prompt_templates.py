"""
Prompt templates for LLM session summaries.
"""

from typing import Dict, List, Optional


class SummaryPrompts:
    """Prompt templates for summarizing a development session."""

    @staticmethod
    def format_conversations(conversations: Optional[List[Dict]]) -> str:
        """
        Render conversation entries as prompt lines.

        Args:
            conversations: Captured user messages

        Returns:
            One '- [type] "message"' line per entry
        """
        return "\n".join(
            f'- [{c.get("type", "statement")}] "{c.get("message", "")}"'
            for c in (conversations or [])
            if isinstance(c, dict)
        )

    @staticmethod
    def format_observations(observations: Optional[List[Dict]]) -> str:
        """
        Render observations as prompt lines.

        Args:
            observations: Tool-operation observations

        Returns:
            One '- [tool] summary' line per entry, followed by the user
            request that triggered it when recorded
        """
        lines = []
        for o in observations or []:
            if not isinstance(o, dict):
                continue
            line = f'- [{o.get("tool", "unknown")}] {o.get("summary", "")}'
            context = o.get("context")
            if isinstance(context, dict) and context.get("lastUserMessage"):
                line += f'\n  User request: "{context["lastUserMessage"]}"'
            lines.append(line)
        return "\n".join(lines)

    @classmethod
    def session_summary_prompt(
        cls,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None,
        max_chars: int = 250,
        language: str = "English"
    ) -> str:
        """
        Generate prompt for a session summary.

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Project name
            max_chars: Requested summary length limit
            language: Language the summary should be written in

        Returns:
            Formatted prompt string
        """
        conversation_text = cls.format_conversations(conversations) or "(no conversations)"
        observation_text = cls.format_observations(observations) or "(no operations)"

        return f"""You summarize software development sessions.

Project: {project or "unknown"}

Conversation in this session:
{conversation_text}

Operations performed in this session:
{observation_text}

Analyze the conversation and operations above and summarize them as:
1. Main topic (1-2 sentences): what was mainly discussed or worked on
2. Key questions: the important questions the user asked
3. Changes made: what was changed or completed, if anything

Answer concisely in {language}, in at most {max_chars} characters."""
