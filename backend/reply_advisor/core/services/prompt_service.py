from __future__ import annotations

NO_HISTORY = "none"
NAME_PLACEHOLDER = "○○"
CANDIDATE_MARKER = "[candidate {index}]"

PERSONAS: tuple[tuple[str, str], ...] = (
    (
        "Soothing",
        "upbeat and affirming, generous with emoticons, praises her for every little thing",
    ),
    (
        "Attentive",
        "asks lots of questions, plays cute with 🥺, a little jealous, casual dialect",
    ),
    (
        "Assertive",
        "short sentences, strong words like \"you're mine\" and \"I love you\"",
    ),
)


def _persona_block() -> str:
    lines = [f"{i}. {name}: {style}" for i, (name, style) in enumerate(PERSONAS, start=1)]
    return "\n".join(lines)


def _format_block() -> str:
    blocks = []
    for i, (name, _) in enumerate(PERSONAS, start=1):
        marker = CANDIDATE_MARKER.format(index=i)
        blocks.append(f"{marker}\n(reply text only)\n{name}")
    return "\n\n".join(blocks)


def build_base_prompt(
    corpus: str,
    conversation_history: str | None,
    client_context: str | None = None,
) -> str:
    """Assemble the shared instructions for both text and screenshot requests."""
    history = (conversation_history or "").strip() or NO_HISTORY
    context_section = ""
    if client_context and client_context.strip():
        context_section = f"\nClient profile:\n{client_context.strip()}\n"

    return f"""You are a reply advisor for a top-selling host who answers his customers over LINE.
Write one reply candidate in the voice of each of the three host types below, making the most of each type's character.

Reference material (host analysis data):
{corpus}

[Three host types]
{_persona_block()}

[Strict rules]
- Each reply is one or two very short sentences
- No commentary, analysis or remarks
- Output reply text only

[Anonymization - absolutely mandatory]
- Never output any woman's name that appears in the reference material
- If a name is needed, use "{NAME_PLACEHOLDER}-chan" only
- Never quote real names

[Output format]
Start every candidate with its marker on its own line, put the reply on the next line and the host type on the line after it:

{_format_block()}
{context_section}
Conversation so far:
{history}
"""


def build_text_prompt(base_prompt: str, message: str) -> str:
    """Attach the incoming text message to the base prompt."""
    return f"{base_prompt}\nMessage from her: {message}"


def build_image_prompt(base_prompt: str) -> str:
    """Prefix the base prompt with the screenshot reading instructions."""
    return f"""Read this LINE screenshot and produce reply candidates.

[Task - perform internally, do not output]
1. Read the conversation in the screenshot
2. Identify the last message the woman sent

[Output - reply candidates only]
Do not output any transcription or description of the conversation.
Output the three reply candidates only.

{base_prompt}"""
