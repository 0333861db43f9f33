import re

from lexis.domain.constants import ANSWER_MATCH_RATIO, ANSWER_STOPWORDS

# ---------- Normalization ----------

_PUNCTUATION = re.compile(r"[.,!?;:'\"()\-–—]")
_WHITESPACE = re.compile(r"\s+")


def stem_word(word: str) -> str:
    """Strip a common English inflection. Deliberately crude."""
    if len(word) < 4:
        return word
    if word.endswith("ied"):
        return word[:-3] + "y"
    if word.endswith("ed") and len(word) > 4:
        return word[:-2]
    if word.endswith("ing") and len(word) > 5:
        return word[:-3]
    if word.endswith("es") and len(word) > 4:
        return word[:-2]
    if word.endswith("s") and len(word) > 4:
        return word[:-1]
    return word


def normalize_for_comparison(text: str) -> list[str]:
    """Lowercase, strip punctuation and stopwords, stem, and sort the words of text."""
    text = _PUNCTUATION.sub("", text.lower())
    text = _WHITESPACE.sub(" ", text).strip()
    words = [stem_word(w) for w in text.split(" ") if w and w not in ANSWER_STOPWORDS]
    return sorted(words)


# ---------- Answer checking ----------


def check_answer(user_answer: str, correct_term: str) -> bool:
    """
    Decide whether a typed answer matches the expected term.

    Exact match after normalization wins outright. Otherwise each user word
    that contains, or is contained in, some expected word counts as a hit;
    the answer passes when hits cover at least ANSWER_MATCH_RATIO of the
    longer word list.
    """
    if not user_answer.strip() or not correct_term:
        return False

    user_words = normalize_for_comparison(user_answer)
    correct_words = normalize_for_comparison(correct_term)

    if user_words == correct_words:
        return True
    if not user_words or not correct_words:
        return False

    hits = sum(1 for uw in user_words if any(uw in cw or cw in uw for cw in correct_words))
    return hits / max(len(user_words), len(correct_words)) >= ANSWER_MATCH_RATIO
