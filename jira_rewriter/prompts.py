"""Style presets and the prompt builder for Jira comment rewrites."""

from __future__ import annotations

from jira_rewriter.types import Provider, StylePreset

STYLE_PRESETS: dict[StylePreset, str] = {
    "professional": (
        "Rewrite this text in a professional, clear, and concise manner suitable for business "
        "communication in Jira. Use appropriate formatting."
    ),
    "friendly": (
        "Rewrite this text in a friendly but professional tone, making it approachable while "
        "maintaining clarity for team collaboration."
    ),
    "concise": (
        "Rewrite this text to be as concise as possible while retaining all important information. "
        "Focus on brevity and clarity."
    ),
    "detailed": (
        "Rewrite this text with more detail and context, making it comprehensive and thorough for "
        "technical documentation."
    ),
    "update": (
        "Rewrite this as a clear project update, organizing information logically with status, "
        "progress, and next steps."
    ),
}

STYLE_LABELS: dict[StylePreset, str] = {
    "professional": "Professional",
    "friendly": "Friendly",
    "concise": "Concise",
    "detailed": "Detailed",
    "update": "Project Update",
}

PROVIDER_LABELS: dict[Provider, str] = {
    "claude": "Claude 3.5 Sonnet",
    "openai": "GPT-4",
}

# Jira comment markup differs from Jira wiki markup; the model must not emit the latter.
FORMATTING_RULES = """Important formatting requirements for Jira COMMENTS (not wiki):
- Use *bold* for emphasis (surround with asterisks)
- Use _italic_ for secondary emphasis (surround with underscores)
- Use `code` for inline code or technical terms (surround with backticks)
- Use * for bullet points (asterisk followed by space)
- Use # for headings (hash followed by space)
- Use ``` for code blocks (triple backticks on separate lines)
- Do NOT use {code}, {quote}, {noformat}, h1., h2., h3. - these don't work in Jira comments
- Keep sentences clear and scannable
- Use proper line breaks for readability"""


def resolve_instruction(style: StylePreset, custom_instruction: str = "") -> str:
    """Return the custom instruction when set, otherwise the preset for ``style``."""
    return custom_instruction or STYLE_PRESETS[style]


def build_prompt(text: str, style: StylePreset, custom_instruction: str = "") -> str:
    """Build the single user prompt sent to the provider.

    ``text`` is inserted verbatim between double quotes; quotes inside it are
    not escaped.
    """
    instruction = resolve_instruction(style, custom_instruction)
    return f'{instruction}\n\n{FORMATTING_RULES}\n\nText to rewrite: "{text}"'
