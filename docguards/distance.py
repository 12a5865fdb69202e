"""Edit distance and minimum-distance filtering of code elements."""
from typing import Iterable, List


def levenshtein(s1: str, s2: str) -> int:
    if len(s1) < len(s2):
        return levenshtein(s2, s1)
    if not s2:
        return len(s1)
    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row
    return previous_row[-1]


def closest(text: str, elements: Iterable, threshold: int) -> List:
    """Elements at the minimum distance from ``text``, if that is within ``threshold``.

    Ties are all kept, in iteration order.
    """
    best: List = []
    min_distance = threshold
    for element in elements:
        d = element.distance(text)
        if d < min_distance:
            min_distance = d
            best = [element]
        elif d == min_distance:
            best.append(element)
    return best
