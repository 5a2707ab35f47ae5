# poemcraft/services/templates.py
# Purpose: deterministic fallback poems used when the model call fails or comes back empty.
# Tables hold raw lines with {placeholders}; substitution happens in render_fallback().
# No external deps; safe to import anywhere.

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from poemcraft.core.types import PoemRequest
from poemcraft.services.prompt_builder import learning_topic_label, parse_names

__all__ = [
    "OCCASIONS",
    "CHILDREN_THEMES",
    "OCCASION_TEMPLATES",
    "CHILDREN_TEMPLATES",
    "LEARNING_TEMPLATES",
    "render_fallback",
]

# ---------------------------
# Form catalogue
# ---------------------------
OCCASIONS = [
    ("birthday", "Birthday"),
    ("wedding", "Wedding"),
    ("graduation", "Graduation"),
    ("anniversary", "Anniversary"),
    ("valentines", "Valentine's Day"),
    ("mothers-day", "Mother's Day"),
    ("fathers-day", "Father's Day"),
    ("friendship", "Friendship"),
    ("condolence", "Condolence"),
    ("congratulations", "Congratulations"),
    ("children", "Children's Poems"),
    ("learning", "Learning Poems"),
]

CHILDREN_THEMES = [
    {
        "value": "animals",
        "label": "Animals",
        "multiselect": True,
        "options": ["puppy", "kitten", "elephant", "lion", "rabbit", "bear", "monkey", "giraffe",
                    "penguin", "dolphin", "tiger", "zebra", "owl", "fox", "whale"],
    },
    {
        "value": "toys",
        "label": "Toys",
        "multiselect": True,
        "options": ["teddy bear", "doll", "toy car", "blocks", "ball", "train", "puzzle", "robot",
                    "kite", "balloon", "bicycle", "skateboard", "yo-yo", "marbles", "jump rope"],
    },
    {
        "value": "characters",
        "label": "Characters",
        "multiselect": False,
        "options": ["superhero", "princess", "pirate", "fairy", "knight", "astronaut", "dinosaur",
                    "unicorn", "dragon", "mermaid"],
    },
    {
        "value": "nature",
        "label": "Nature",
        "multiselect": False,
        "options": ["rainbow", "sunshine", "flowers", "trees", "ocean", "stars", "moon",
                    "butterflies", "garden", "forest"],
    },
    {
        "value": "activities",
        "label": "Activities",
        "multiselect": False,
        "options": ["playing", "reading", "drawing", "singing", "dancing", "swimming", "running",
                    "jumping", "learning", "exploring"],
    },
]

# ---------------------------
# Template banks
# ---------------------------
# occasion -> style -> lines
OCCASION_TEMPLATES: Dict[str, Dict[str, List[str]]] = {
    "birthday": {
        "heartfelt": [
            "Another year has come to pass,",
            "With memories that will always last,",
            "Dear {name}, on this special day,",
            "We celebrate you in every way.",
            "",
            "Your laughter brightens every room,",
            "Your kindness helps dispel all gloom,",
            "May this birthday bring you joy so true,",
            "And all your dreams come shining through.",
        ],
        "playful": [
            "🎉 It's party time, hooray hooray!",
            "{name}'s birthday is here today!",
            "Cake and presents, fun galore,",
            "Let's celebrate and then some more!",
            "",
            "Another year of awesome you,",
            "Happy Birthday! Dreams come true! 🎂",
        ],
        "elegant": [
            "In graceful years that gently flow,",
            "Your wisdom and your beauty grow,",
            "{name}, on this day of birth,",
            "We celebrate your gentle worth.",
        ],
        "humorous": [
            "Another year older, but who's counting?",
            "(Okay, maybe the candles are mounting!)",
            "{name}, you're aging like fine wine,",
            "Which means you're getting better with time!",
        ],
    },
    "wedding": {
        "heartfelt": [
            "Two hearts that beat as one today,",
            "{names} have found their perfect way,",
            "In love's embrace, forever bound,",
            "True happiness you both have found.",
            "",
            "May your journey together be blessed,",
            "With joy, laughter, and sweet rest,",
            "Through all of life's adventures new,",
            "May love forever see you through.",
        ],
        "elegant": [
            "In sacred bonds of love you stand,",
            "{names} united, hand in hand,",
            "Before family, friends, and all above,",
            "You pledge your everlasting love.",
            "",
            "May your union be a work of art,",
            "Two souls becoming one in heart,",
            "With grace and beauty, love so true,",
            "Congratulations to both of you.",
        ],
    },
    "graduation": {
        "heartfelt": [
            "Knowledge gained and wisdom earned,",
            "Through years of study, you have learned,",
            "{name}, today you stand so tall,",
            "Ready to conquer, ready for all.",
            "",
            "Your dedication brought you here,",
            "Through challenges faced without fear,",
            "Now spread your wings and chase your dreams,",
            "Nothing's impossible, or so it seems.",
        ],
        "playful": [
            "🎓 Caps off to you, graduate!",
            "{name}, you made it through the gate!",
            "No more homework, no more tests,",
            "Time to put your skills to the test!",
            "",
            "From student life to the real world,",
            "Your future's bright, your flag unfurled,",
            "So celebrate this awesome day,",
            "Hip hip hooray, you're on your way! 🌟",
        ],
    },
}

# (theme, first word of item) -> style -> lines
CHILDREN_TEMPLATES: Dict[Tuple[str, str], Dict[str, List[str]]] = {
    ("animals", "puppy"): {
        "playful": [
            "{name}, here's a puppy story just for you,",
            "A little friend who's fluffy and so true!",
            "Wag, wag, wag goes his happy tail,",
            "Bounding through the yard without fail!",
            "",
            "Soft and cuddly, brown and white,",
            "He loves to play from dawn till night,",
            "Your puppy friend will always be",
            "Full of love and joy for thee!",
        ],
        "heartfelt": [
            "Dear {name}, a puppy's love is pure and bright,",
            "Like sunshine warming everything in sight,",
            "With gentle eyes and paws so small,",
            "He'll be your friend through one and all.",
            "",
            "In every bark and playful bound,",
            "The sweetest friendship can be found,",
            "A loyal heart that beats so true,",
            "A puppy's love, just made for you.",
        ],
    },
    ("toys", "teddy"): {
        "playful": [
            "{name}, your teddy bear is here to say,",
            "\"Let's have some fun and play today!\"",
            "Soft and brown with button eyes,",
            "He'll keep you safe beneath the skies.",
            "",
            "Hugs and cuddles all day long,",
            "He'll listen to your favorite song,",
            "Your teddy friend will always be",
            "Right there with you, happily!",
        ],
    },
}

# topic -> style -> lines
LEARNING_TEMPLATES: Dict[str, Dict[str, List[str]]] = {
    "numbers": {
        "playful": [
            "{name}, let's count from one to ten,",
            "We'll count again and then again!",
            "One little duck, two little bees,",
            "Three pretty flowers, four tall trees.",
            "",
            "Five bright stars up in the sky,",
            "Six birds learning how to fly,",
            "Seven, eight, nine, and ten!",
            "Now let's start counting once again!",
        ],
    },
    "alphabet": {
        "playful": [
            "{name}, let's sing the ABC,",
            "Come along and learn with me!",
            "A is for apple, red and round,",
            "B is for ball that bounces around.",
            "",
            "C is for cat who likes to play,",
            "D is for dog who runs all day,",
            "Letters are fun from A to Z,",
            "Learning is as fun as fun can be!",
        ],
    },
    "colors": {
        "playful": [
            "{name}, look around and you will see,",
            "Colors everywhere for you and me!",
            "Red like apples, blue like sky,",
            "Yellow sunshine way up high.",
            "",
            "Green like grass beneath your feet,",
            "Orange carrots, such a treat!",
            "Purple flowers, pink so bright,",
            "Colors make the world just right!",
        ],
    },
}

# Generic stanzas for table misses
GENERIC_OCCASION = [
    "A special {occasion} poem for {name}!",
    "",
    "May this occasion bring you joy,",
    "And happiness that none can destroy,",
    "With love and laughter all around,",
    "May blessings in your life be found!",
]

GENERIC_CHILDREN_MULTI = [
    "{name}, let's explore a world so bright,",
    "With {items} - what a sight!",
    "",
    "They dance and play throughout the day,",
    "In such a fun and magical way,",
    "Each one unique and special too,",
    "Just like the wonderful you!",
    "",
    "Together they create such joy,",
    "Every girl and every boy,",
    "Can learn and laugh and sing along,",
    "With this happy, cheerful song!",
]

GENERIC_CHILDREN_SINGLE = [
    "{name}, here's a special poem for you,",
    "About {item} and all they do!",
    "",
    "They bring such joy and happiness,",
    "And fill your days with sweet success,",
    "With wonder, magic, and delight,",
    "They make everything just right!",
]

GENERIC_LEARNING = [
    "{name}, let's learn about {topic},",
    "It's going to be such fun for me and you!",
    "",
    "We'll discover something new today,",
    "Through this special learning way,",
    "With rhythm, rhyme, and lots of cheer,",
    "Learning makes everything so clear!",
]

DEFAULT_CHILDREN_PAIR = ("animals", "puppy")
DEFAULT_ITEM = "all the things you love"
# (occasion, style) -> stand-in for {names} when no names were given
DEFAULT_COUPLES = {
    ("wedding", "heartfelt"): "Two souls",
    ("wedding", "elegant"): "Two hearts",
}
DEFAULT_COUPLE = "Two hearts"
KID_OCCASIONS = ("children", "learning")


def _render(lines: List[str], **values: str) -> str:
    return "\n".join(line.format(**values) for line in lines)


def _children_pair(theme: Optional[str], options: List[str]) -> Tuple[Optional[str], Optional[str]]:
    """Resolve (theme, item) for single-item children's poems."""
    if not theme:
        if not options:
            return DEFAULT_CHILDREN_PAIR
        theme = DEFAULT_CHILDREN_PAIR[0]
    suffix = None
    if theme and "-" in theme:
        theme, suffix = theme.split("-", 1)
    return theme, (options[0] if options else suffix)


def _children_fallback(name: str, req: PoemRequest) -> str:
    options = list(req.childrenOptions or [])
    if len(options) > 1:
        return _render(GENERIC_CHILDREN_MULTI, name=name, items=", ".join(options))

    theme, item = _children_pair(req.childrenTheme, options)
    if not item:
        return _render(GENERIC_CHILDREN_SINGLE, name=name, item=DEFAULT_ITEM)

    by_style = CHILDREN_TEMPLATES.get((theme or "", item.split(" ")[0]), {})
    lines = by_style.get(req.style)
    if lines:
        return _render(lines, name=name)
    return _render(GENERIC_CHILDREN_SINGLE, name=name, item=item)


def _learning_fallback(name: str, req: PoemRequest) -> str:
    topic = req.learningTopic or ""
    lines = LEARNING_TEMPLATES.get(topic, {}).get(req.style)
    if lines:
        return _render(lines, name=name)
    label = learning_topic_label(topic or "learning")
    return _render(GENERIC_LEARNING, name=name, topic=label.lower())


def render_fallback(req: PoemRequest) -> str:
    """Deterministic template poem for a request. Never raises."""
    names = parse_names(req.names)
    if names:
        name = names[0]
    elif req.occasion in KID_OCCASIONS:
        name = "little one"
    else:
        name = "dear friend"

    if req.occasion == "children":
        return _children_fallback(name, req)
    if req.occasion == "learning":
        return _learning_fallback(name, req)

    by_style = OCCASION_TEMPLATES.get(req.occasion)
    if by_style is None:
        return _render(GENERIC_OCCASION, name=name, occasion=req.occasion)
    style = req.style if req.style in by_style else "heartfelt"
    lines = by_style[style]
    couple = " and ".join(names) if names else DEFAULT_COUPLES.get((req.occasion, style), DEFAULT_COUPLE)
    return _render(lines, name=name, names=couple)
