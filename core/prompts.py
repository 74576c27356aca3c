"""Build the STAR report prompt from a story, competency and store category.

The prompt is a pure function of its three inputs: no timestamps, no
randomness, so identical inputs always produce an identical string.
"""
from config import PROMPTS_DIR
from core.competencies import CORE_COMPETENCIES, store_category_label, competency_label
from core.errors import ValidationError

STAR_PROMPT_FILE = "star_report.txt"


def _competency_details(code):
    """Definition + numbered key behaviours block, or "" for unknown codes."""
    info = CORE_COMPETENCIES.get(code)
    if not info:
        return ""
    behaviors = "\n".join(
        f"{i}. {behavior}" for i, behavior in enumerate(info["key_behaviors"], start=1)
    )
    return (
        f"\n\n【{info['name']} 職能定義】\n{info['definition']}"
        f"\n\n【關鍵行為】\n{behaviors}"
    )


def build_star_prompt(story, competency, store_category):
    """Compose the instruction prompt for a STAR report.

    Args:
        story: The employee's first-person narrative, embedded verbatim.
        competency: Competency code. Unknown codes are used as the label.
        store_category: Store category code. Unknown codes are used as the label.

    Returns:
        The prompt text.

    Raises:
        ValidationError: story is empty or blank.
    """
    if not story or not str(story).strip():
        raise ValidationError("story is required", fields=["story"])

    template = (PROMPTS_DIR / STAR_PROMPT_FILE).read_text(encoding="utf-8")
    return template.format(
        store_category=store_category_label(store_category),
        competency=competency_label(competency),
        competency_details=_competency_details(competency),
        story=story,
    )
