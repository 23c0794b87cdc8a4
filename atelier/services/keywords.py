"""Keyword extraction from artwork text fields."""

import re
from typing import Iterable, List, Optional

STOP_WORDS = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am", "among",
    "an", "and", "any", "are", "around", "as", "at", "be", "because", "been", "before",
    "behind", "being", "below", "beside", "between", "beyond", "both", "but", "by",
    "can", "could", "did", "do", "does", "done", "down", "during", "each", "either",
    "else", "even", "ever", "every", "few", "for", "from", "further", "had", "has",
    "have", "he", "her", "here", "hers", "him", "his", "how", "however", "if", "in",
    "into", "is", "it", "its", "itself", "just", "like", "made", "many", "may", "me",
    "might", "mine", "more", "most", "must", "my", "near", "no", "nor", "not", "now",
    "of", "off", "on", "once", "only", "or", "other", "our", "ours", "out", "over",
    "own", "per", "same", "she", "should", "since", "so", "some", "such", "than",
    "that", "the", "their", "theirs", "them", "then", "there", "these", "they", "this",
    "those", "through", "thus", "to", "too", "toward", "towards", "under", "until",
    "up", "upon", "us", "very", "via", "was", "we", "well", "were", "what", "when",
    "where", "whether", "which", "while", "who", "whom", "whose", "why", "will",
    "with", "within", "without", "would", "yet", "you", "your", "yours",
})

MIN_KEYWORD_LENGTH = 3


def extract_keywords(
    title: Optional[str],
    description: Optional[str],
    medium: Optional[str],
) -> List[str]:
    """
    Extract distinct keywords from free-text fields, in order of appearance.

    Examples:
        >>> extract_keywords("The Blue Harbour", None, "oil on canvas")
        ['blue', 'harbour', 'oil', 'canvas']
    """
    combined = " ".join(part for part in (title, description, medium) if part).lower()
    seen = []
    for word in re.split(r"\W+", combined):
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS and word not in seen:
            seen.append(word)
    return seen


def merge_keywords(*groups: Iterable[str]) -> List[str]:
    """Union of keyword lists preserving first occurrence order."""
    merged: List[str] = []
    for group in groups:
        for keyword in group or []:
            if keyword and keyword not in merged:
                merged.append(keyword)
    return merged
