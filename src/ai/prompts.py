"""
Prompt text for AI document edits, and cleanup of what comes back.
"""

# Instructions handed to whichever language model the host wires in
EDIT_INSTRUCTIONS = """You are a writing assistant editing a Markdown document. Rules:
- Conversational, direct prose; active voice; varied sentence length
- Prefer specifics over abstractions
- Preserve the author's voice, intent and existing structure
- Keep length similar unless brevity improves quality
- Do not invent facts, quotes, links, or statistics
- Markdown only; no preamble, explanations, or front matter"""


def build_edit_prompt(instruction: str, document: str, selection: str = "") -> str:
    """Build the prompt asking for the whole document back with the edit applied.

    Args:
        instruction: What the person asked for
        document: Full current document
        selection: Selected text the instruction is about, if any

    Returns:
        Prompt string.
    """
    parts = [
        "Edit the following document according to the request.",
        "",
        f"REQUEST: {instruction.strip()}",
    ]
    if selection.strip():
        parts += ["", f"SELECTED TEXT: {selection}"]
    parts += [
        "",
        "DOCUMENT:",
        document,
        "",
        "Return ONLY the edited document. Do not include any of the above prompt text, "
        "labels, or explanations.",
    ]
    return "\n".join(parts)


def clean_response(text: str) -> str:
    """Strip a markdown code fence wrapped around the whole response."""
    lines = text.strip().split("\n")
    if len(lines) >= 2 and lines[0].startswith("```") and lines[-1].strip() == "```":
        return "\n".join(lines[1:-1])
    return text
