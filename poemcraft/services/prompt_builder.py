from __future__ import annotations

from typing import List, Optional

from poemcraft.core.types import PoemRequest

__all__ = [
    "LEARNING_TOPICS",
    "build_prompt",
    "learning_topic_label",
    "parse_names",
]

LEARNING_TOPICS = {
    "numbers": "Numbers & Counting",
    "alphabet": "Alphabet & Letters",
    "colors": "Colors & Shapes",
    "seasons": "Seasons & Weather",
    "body-parts": "Body Parts",
    "family": "Family & Friends",
    "emotions": "Emotions & Feelings",
    "safety": "Safety Rules",
    "healthy-habits": "Healthy Habits",
    "good-manners": "Good Manners",
}

STYLE_GUIDELINES = (
    "Style guidelines:\n"
    "- Heartfelt: Emotional, sincere, touching, meaningful\n"
    "- Playful: Fun, lighthearted, cheerful, energetic\n"
    "- Elegant: Sophisticated, graceful, refined, classic\n"
    "- Humorous: Funny, witty, amusing, light-hearted"
)


def parse_names(names: Optional[str]) -> List[str]:
    """Split a comma-separated names field, dropping blanks."""
    if not names:
        return []
    return [n.strip() for n in names.split(",") if n.strip()]


def learning_topic_label(topic: str) -> str:
    # Unknown ids pass through as-is
    return LEARNING_TOPICS.get(topic, topic)


def _subject(req: PoemRequest) -> str:
    options = req.childrenOptions or []
    if req.occasion == "children":
        if req.childrenTheme and options:
            if len(options) == 1:
                return f" for children about {options[0]}"
            return f" for children featuring {', '.join(options)}"
        return " for children"
    if req.occasion == "learning":
        if req.learningTopic:
            return f" to help children learn about {learning_topic_label(req.learningTopic)}"
        return " to help children learn"
    return f" for a {req.occasion}"


def _requirements(req: PoemRequest) -> str:
    options = req.childrenOptions or []
    if req.occasion == "children":
        out = (
            "\n\nChildren's poem requirements:\n"
            "- Use simple, age-appropriate language\n"
            "- Include fun sounds, rhythms, and rhymes\n"
            "- Make it engaging and easy to remember\n"
            "- Use vivid, colorful imagery\n"
            "- Keep it positive and uplifting\n"
            "- Create 2-3 short stanzas"
        )
        if len(options) == 1:
            out += (
                f"\n- Focus on {options[0]} and make it the main character or subject"
                f"\n- Include characteristics and behaviors of {options[0]}"
                "\n- Make it educational while being fun"
            )
        elif options:
            out += (
                f"\n- Feature {', '.join(options)} in the poem"
                "\n- Show how they interact or play together"
                "\n- Make it a fun adventure with all the selected items"
            )
        return out

    if req.occasion == "learning":
        out = (
            "\n\nLearning poem requirements:\n"
            "- Use simple, educational language\n"
            "- Teach concepts through rhythm and rhyme\n"
            "- Make learning fun and memorable\n"
            "- Include factual information\n"
            "- Use repetition to reinforce learning\n"
            "- Create 3-4 educational stanzas"
        )
        if req.learningTopic:
            out += (
                f"\n- Focus on teaching {learning_topic_label(req.learningTopic)}"
                "\n- Include specific facts and examples"
                "\n- Make it interactive and engaging"
                "\n- Help children remember key concepts"
            )
        return out

    return (
        "\n\nRequirements:\n"
        "- Create an original poem of 3-4 stanzas\n"
        f"- Make it appropriate for the {req.occasion} occasion\n"
        "- Include specific references to the event type"
    )


def build_prompt(req: PoemRequest) -> str:
    """Turn a generation request into the instruction sent to the model.

    Pure and deterministic: the same request always yields the same string.
    Sections are concatenated in a fixed order: subject line, style
    guidelines, occasion requirements, closing directives.
    """
    names = parse_names(req.names)

    prompt = f"Create a {req.style} poem" + _subject(req)
    if len(names) == 1:
        prompt += f" for {names[0]}"
    elif names:
        prompt += f" for {' and '.join(names)}"
    prompt += ".\n\n" + STYLE_GUIDELINES
    prompt += _requirements(req)

    prompt += (
        f"\n- Use a {req.style} tone throughout"
        "\n- Make it personal and meaningful"
    )
    if names:
        prompt += "\n- Incorporate the name(s) naturally into the poem"
    prompt += (
        "\n- Ensure proper rhythm and rhyme scheme"
        "\n- Make it memorable and touching"
        "\n\nPlease write only the poem content, no additional text or explanations."
    )
    return prompt
