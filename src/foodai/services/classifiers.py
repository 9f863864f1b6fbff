"""Data-driven meal classification."""

from dataclasses import dataclass
from typing import Protocol

from foodai.domain.meals import Meal

HIGH_PROTEIN_GRAMS = 20.0
DEFAULT_FOOD_EMOJI = "🍽️"


class MealClassifier(Protocol):
    """Decides whether a meal belongs to a category."""

    category: str

    def matches(self, meal: Meal) -> bool:
        """Return True when the meal falls into the category."""


@dataclass(frozen=True)
class KeywordClassifier(MealClassifier):
    """Matches meals whose name contains any of the keywords."""

    category: str
    keywords: frozenset[str]

    def matches(self, meal: Meal) -> bool:
        """Return True when a keyword occurs in the meal name."""
        return self.matches_name(meal.name)

    def matches_name(self, name: str) -> bool:
        """Case-insensitive substring match against the keywords."""
        lowered = name.lower()
        return any(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class MinimumProteinClassifier(MealClassifier):
    """Matches meals with at least the given grams of protein."""

    category: str
    min_protein_g: float = HIGH_PROTEIN_GRAMS

    def matches(self, meal: Meal) -> bool:
        """Return True when the meal reaches the protein threshold."""
        return meal.protein >= self.min_protein_g


VEGETABLE = KeywordClassifier(
    category="vegetable",
    keywords=frozenset(
        {
            "샐러드",
            "채소",
            "야채",
            "상추",
            "양상추",
            "브로콜리",
            "시금치",
            "salad",
            "vegetable",
            "veggie",
            "lettuce",
            "broccoli",
            "spinach",
        }
    ),
)

HIGH_PROTEIN = MinimumProteinClassifier(category="high-protein")

# Checked in order; the first matching category wins.
FOOD_EMOJIS: tuple[tuple[str, KeywordClassifier], ...] = (
    ("🍚", KeywordClassifier("rice", frozenset({"밥", "rice"}))),
    ("🍜", KeywordClassifier("noodles", frozenset({"면", "국수", "noodle"}))),
    ("🍞", KeywordClassifier("bread", frozenset({"빵", "bread"}))),
    ("🍗", KeywordClassifier("chicken", frozenset({"치킨", "chicken"}))),
    ("🍕", KeywordClassifier("pizza", frozenset({"피자", "pizza"}))),
    ("🍔", KeywordClassifier("burger", frozenset({"햄버거", "burger"}))),
    ("🥗", KeywordClassifier("salad", frozenset({"샐러드", "salad"}))),
    ("🍎", KeywordClassifier("fruit", frozenset({"과일", "fruit"}))),
    ("🥛", KeywordClassifier("milk", frozenset({"우유", "milk"}))),
    ("☕", KeywordClassifier("coffee", frozenset({"커피", "coffee"}))),
    ("🥬", KeywordClassifier("kimchi", frozenset({"김치", "kimchi"}))),
    ("🥩", KeywordClassifier("meat", frozenset({"고기", "meat"}))),
    ("🐟", KeywordClassifier("fish", frozenset({"생선", "fish"}))),
    ("🥚", KeywordClassifier("egg", frozenset({"계란", "egg"}))),
)


def food_emoji(name: str) -> str:
    """Return a display emoji for a food name."""
    for emoji, classifier in FOOD_EMOJIS:
        if classifier.matches_name(name):
            return emoji
    return DEFAULT_FOOD_EMOJI
