"""Translation from the four UI grades to the 0-5 SM-2 quality scale."""

from lexis.domain.errors import InvalidQuality
from lexis.domain.review.models import Grade

# Qualities 0 and 2 are never produced from the UI grades.
GRADE_TO_QUALITY: dict[Grade, int] = {
    Grade.AGAIN: 1,
    Grade.HARD: 3,
    Grade.GOOD: 4,
    Grade.EASY: 5,
}


def parse_grade(grade: Grade | str) -> Grade:
    """
    Coerce free-form input into a Grade.

    Accepts Grade members or their string values, ignoring case and
    surrounding whitespace. Raises InvalidQuality for anything else.
    """
    if isinstance(grade, Grade):
        return grade
    if isinstance(grade, str):
        try:
            return Grade(grade.strip().lower())
        except ValueError:
            pass
    raise InvalidQuality(grade)


def map_quality(grade: Grade | str) -> int:
    """Map a UI grade to its SM-2 quality: again=1, hard=3, good=4, easy=5."""
    return GRADE_TO_QUALITY[parse_grade(grade)]
