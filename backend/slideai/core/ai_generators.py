"""
AI content generation for SlideAI.

Agents
------
- **deck_content_agent** – turns a chat history into a ``PresentationPayload``

The layout engine never calls the model; it only consumes the payload this
module returns.
"""

import logging

from pydantic_ai import Agent

from slideai.core.config import settings
from slideai.core.exceptions import ContentGenerationError
from slideai.schemas.generation import ChatTurn
from slideai.schemas.presentation import PresentationPayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Deck content agent  (structured JSON for presentation slides)
# ---------------------------------------------------------------------------

_DECK_CONTENT_SYSTEM_PROMPT = """\
You are a presentation architect with a management-consulting background.  \
Analyse the conversation history and produce a persuasive, consulting-grade \
presentation as structured JSON.

## Structure of the deck (pyramid principle)

1. **Cover** — ``title`` and ``subtitle`` (date, presenter or tagline)
2. **Executive summary** — state the conclusion first (1 slide)
3. **Background / problem** — why this matters (1-2 slides)
4. **Body** — evidence for the main claim (4-8 slides)
5. **Proposal / next steps** — concrete actions (1-2 slides)
6. **Summary** — restate the key messages (1 slide, title it "Summary")

## Each slide

- **title**: short label for the slide (a few words)
- **message**: the ONE conclusion of the slide as a full assertive sentence.  \
  Required.  Reading only the messages in order must tell the whole story.
- **body**: 2-3 sentences of reasoning or background for the message
- **bullets**: 3-5 concrete supporting points
- **highlights**: 1-3 numbers or keywords to emphasise
- **notes**: detailed speaker notes

## Structured layouts

When the content naturally has a shape, fill the matching field instead of \
plain bullets and set ``layout`` accordingly: ``stats`` (value/label pairs), \
``comparison`` (before/after), ``leftColumn``/``rightColumn``, ``quote`` + \
``source``, ``flow`` (process steps), ``pyramid`` (hierarchy, top first), \
``matrix`` (2x2 with axis labels), ``parallel`` (3-4 equal options), \
``timeline``, ``cycle``, ``funnel``, ``tableData``, ``grid``, ``venn``, \
``tree``, ``qaItems``, ``caseStudy``.  Use ``isSection`` for divider slides.

## Rules

- Messages are claims, not topics: "Revenue grew 150% and beat target", not \
  "About revenue".
- Answer "so what?" on every slide; prefer concrete numbers and facts.
- If the conversation is thin, enrich it with general knowledge.
- Never leave ``message`` empty.
"""

deck_content_agent = Agent(
    model=settings.CONTENT_MODEL,
    output_type=PresentationPayload,
    system_prompt=_DECK_CONTENT_SYSTEM_PROMPT,
    retries=settings.CONTENT_RETRIES,
    defer_model_check=True,
)


def format_history(history: list[ChatTurn]) -> str:
    """Flatten a chat history into a transcript for the content agent."""
    lines = []
    for turn in history:
        speaker = "Assistant" if turn.role in ("assistant", "model") else "User"
        lines.append(f"{speaker}: {turn.text}")
    return "\n\n".join(lines)


async def generate_presentation_payload(history: list[ChatTurn]) -> PresentationPayload:
    """Use the *deck_content_agent* to turn a conversation into slide content."""
    prompt = (
        "## Conversation\n\n"
        f"{format_history(history)}\n\n"
        "Based on the conversation above, generate the presentation JSON."
    )
    try:
        result = await deck_content_agent.run(prompt)
    except Exception as e:
        logger.error("Content agent failed: %s", e, exc_info=True)
        raise ContentGenerationError(f"Slide content generation failed: {e}") from e

    payload: PresentationPayload = result.output
    logger.info("Generated payload %r with %d slides", payload.title, len(payload.slides))
    return payload
