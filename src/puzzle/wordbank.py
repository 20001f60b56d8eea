"""Static theme catalogue used by the puzzle generator."""

from typing import Dict, Iterable, List, Tuple

from .models import Theme


THEMES: Dict[str, Theme] = {
    "animals": Theme(
        name="animals",
        easy=("cat", "dog", "cow", "pig", "bee", "ant", "fox", "owl", "bat", "rat", "bug", "fish"),
        medium=("tiger", "elephant", "giraffe", "penguin", "dolphin", "monkey",
                "rabbit", "turtle", "lizard", "eagle", "shark", "whale"),
        hard=("rhinoceros", "hippopotamus", "chimpanzee", "crocodile", "kangaroo", "chameleon",
              "butterfly", "octopus", "flamingo", "platypus", "armadillo", "mongoose"),
    ),
    "food": Theme(
        name="food",
        easy=("pie", "egg", "ham", "jam", "tea", "ice", "nut", "gum", "cake", "milk", "soup", "rice"),
        medium=("pizza", "burger", "chicken", "cheese", "banana", "orange",
                "potato", "tomato", "carrot", "lettuce", "butter", "yogurt"),
        hard=("spaghetti", "broccoli", "strawberry", "chocolate", "sandwich", "avocado",
              "cucumber", "zucchini", "asparagus", "artichoke", "cauliflower", "blueberry"),
    ),
    "sports": Theme(
        name="sports",
        easy=("run", "jump", "swim", "ski", "bike", "ball", "game", "win", "race", "kick", "throw", "catch"),
        medium=("soccer", "tennis", "hockey", "boxing", "racing", "skiing",
                "diving", "rowing", "cycling", "golfing", "surfing", "skating"),
        hard=("basketball", "volleyball", "badminton", "wrestling", "gymnastics", "marathon",
              "swimming", "football", "baseball", "cheerleading", "weightlifting", "skateboarding"),
    ),
    "nature": Theme(
        name="nature",
        easy=("sun", "moon", "star", "tree", "leaf", "wind", "rain", "snow", "rock", "sand", "hill", "lake"),
        medium=("forest", "mountain", "rainbow", "thunder", "lightning", "sunset",
                "flower", "volcano", "desert", "island", "valley", "canyon"),
        hard=("waterfall", "wilderness", "hurricane", "earthquake", "avalanche", "tornado",
              "glacier", "meadow", "prairie", "plateau", "peninsula", "archipelago"),
    ),
    "colors": Theme(
        name="colors",
        easy=("red", "blue", "pink", "gold", "gray", "tan", "navy", "lime", "black", "white", "brown", "cyan"),
        medium=("green", "yellow", "orange", "purple", "silver", "bronze",
                "maroon", "violet", "indigo", "salmon", "coral", "amber"),
        hard=("turquoise", "magenta", "crimson", "lavender", "emerald", "burgundy",
              "chartreuse", "vermillion", "aquamarine", "fuchsia", "periwinkle", "mahogany"),
    ),
    "school": Theme(
        name="school",
        easy=("pen", "book", "desk", "art", "math", "read", "draw", "test", "quiz", "page", "word", "line"),
        medium=("pencil", "teacher", "student", "homework", "science", "history",
                "library", "computer", "notebook", "backpack", "classroom", "assignment"),
        hard=("calculator", "geography", "literature", "education", "assignment", "knowledge",
              "microscope", "experiment", "biography", "encyclopedia", "dictionary", "multiplication"),
    ),
    "space": Theme(
        name="space",
        easy=("sun", "moon", "star", "mars", "sky", "ufo", "orbit", "comet", "earth", "space", "alien", "rocket"),
        medium=("planet", "rocket", "saturn", "galaxy", "meteor", "jupiter",
                "neptune", "mercury", "venus", "uranus", "pluto", "asteroid"),
        hard=("astronaut", "telescope", "constellation", "spacecraft", "universe", "satellite",
              "nebula", "supernova", "blackhole", "meteorite", "observatory", "cosmology"),
    ),
    "transportation": Theme(
        name="transportation",
        easy=("car", "bus", "van", "jet", "boat", "bike", "taxi", "train", "truck", "ship", "plane", "walk"),
        medium=("truck", "plane", "ferry", "subway", "scooter", "helicopter",
                "motorcycle", "bicycle", "trolley", "wagon", "sled", "canoe"),
        hard=("automobile", "helicopter", "submarine", "spacecraft", "ambulance", "limousine",
              "bulldozer", "excavator", "steamboat", "hovercraft", "monorail", "stagecoach"),
    ),
}

# Player preference tag -> themes it unlocks
PREFERENCE_THEMES: Dict[str, Tuple[str, ...]] = {
    "animals": ("animals",),
    "vacation": ("transportation", "nature"),
    "location": ("nature",),
    "sports": ("sports",),
    "hobby": ("sports", "colors"),
    "school": ("school",),
    "colors": ("colors",),
    "space": ("space",),
}

# (easy, medium, hard) words drawn for each requested difficulty
TIER_MIX: Dict[str, Tuple[int, int, int]] = {
    "easy": (8, 3, 1),
    "medium": (4, 6, 2),
    "hard": (2, 4, 6),
}


def get_theme(name: str) -> Theme:
    """
    Look up a theme by name.

    Raises:
        KeyError: If the theme does not exist
    """
    return THEMES[name.lower()]


def themes_for_preferences(preferences: Iterable[str]) -> List[str]:
    """
    Collect the themes unlocked by a set of preference tags.

    Tags are processed in sorted order so the result does not depend on
    set iteration order. Each theme is listed once even when several tags
    unlock it. Unknown tags are ignored.
    """
    matched: List[str] = []
    for tag in sorted(preferences):
        for theme in PREFERENCE_THEMES.get(tag.lower(), ()):
            if theme not in matched:
                matched.append(theme)
    return matched
