"""
Heuristic session summaries (zero-cost fallback).

Builds a one-line summary from tool counts, touched files, notable
commands and questions, without any API calls.
"""

from collections import Counter
from pathlib import PurePath
from typing import Dict, List, Optional

from .base import BaseSummarizer

NOTABLE_COMMANDS = ('git', 'npm', 'yarn', 'pip', 'docker')
MAX_FILES = 5
MAX_COMMANDS = 2


class HeuristicSummarizer(BaseSummarizer):
    """
    Rule-based session summarizer (no API calls).

    Never raises on malformed observations; unknown shapes are skipped.
    """

    summary_type = "local"

    def summarize(
        self,
        observations: Optional[List[Dict]],
        conversations: Optional[List[Dict]],
        project: Optional[str] = None
    ) -> str:
        """
        Summarize a session from its captured activity.

        Args:
            observations: Tool-operation observations
            conversations: Captured user messages
            project: Unused, accepted for interface compatibility

        Returns:
            Summary such as
            'Tools: Edit(2), Bash(1) | Files: login.py | Commands: git status'
        """
        tool_counts = Counter()
        files = {}
        commands = []
        has_error = False

        questions = [
            str(c.get('message', ''))[:50]
            for c in conversations or []
            if isinstance(c, dict) and c.get('type') == 'question'
        ]

        for o in observations or []:
            if not isinstance(o, dict):
                continue

            tool = o.get('tool', 'unknown')
            tool_counts[tool] += 1

            details = o.get('details') if isinstance(o.get('details'), dict) else {}

            if details.get('file'):
                # Normalize Windows separators before taking the name
                files[PurePath(str(details['file']).replace('\\', '/')).name] = None

            command = details.get('command')
            if tool == 'Bash' and command:
                first_word = str(command).split(' ')[0]
                if first_word in NOTABLE_COMMANDS:
                    commands.append(str(command)[:30])

            if details.get('success') is False:
                has_error = True

        tool_summary = ', '.join(f"{tool}({count})" for tool, count in tool_counts.items())
        summary = f"Tools: {tool_summary}"

        file_names = list(files)
        if file_names:
            summary += f" | Files: {', '.join(file_names[:MAX_FILES])}"
            if len(file_names) > MAX_FILES:
                summary += f" (+{len(file_names) - MAX_FILES} more)"

        if commands:
            summary += f" | Commands: {', '.join(commands[:MAX_COMMANDS])}"

        if has_error:
            summary += " | Some operations failed"

        if questions:
            summary += f' | Question: "{questions[0]}"'
            if len(questions) > 1:
                summary += f" (+{len(questions) - 1} more)"

        return summary
