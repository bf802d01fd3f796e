from typing import Dict, Mapping


def _popularity_key(item):
    word, count = item
    return (-count, -len(word), word)


def sort_word_counts(word_counts: Mapping[str, int], popular_word_count: int) -> Dict[str, int]:
    """Return the `popular_word_count` most popular words, most popular first.

    Ordering: higher count first, then longer word first, then alphabetical.
    The returned dict preserves that order.
    """
    if popular_word_count < 0:
        raise ValueError(f"popular_word_count must be >= 0, got {popular_word_count}")
    ranked = sorted(word_counts.items(), key=_popularity_key)
    return dict(ranked[:popular_word_count])
