"""System prompts for the assist routes."""

from code_assist.llm.prompts.resolver import resolve_prompt, validate_prompt_table
from code_assist.llm.prompts.templates import PROMPT_TEMPLATES, WORD_BUDGET_PLACEHOLDER


__all__ = [
    "PROMPT_TEMPLATES",
    "WORD_BUDGET_PLACEHOLDER",
    "resolve_prompt",
    "validate_prompt_table",
]
