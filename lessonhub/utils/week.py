"""Week number heuristics for lesson filenames."""

WEEK_TOKENS = ("week", "lesson", "chapter")

DEFAULT_MAX_WEEK = 48


def extract_week_from_filename(filename: str, max_week: int = DEFAULT_MAX_WEEK) -> int:
    """
    Guess a week number from a lesson filename.

    Every digit in the (lower-cased, ``.md``-stripped) name is concatenated and
    parsed as one number, so ``week-1-lesson-2.md`` yields 12, not 1. Existing
    content is numbered against this behaviour.

    Args:
        filename: Base name of the lesson file
        max_week: Largest week number the course layout accepts

    Returns:
        The week number in [1, max_week], or 0 when the name has no week token,
        no digits, or digits outside the accepted range
    """
    lower = filename.lower()
    if lower.endswith(".md"):
        lower = lower[: -len(".md")]

    if not any(token in lower for token in WEEK_TOKENS):
        return 0

    digits = "".join(char for char in lower if "0" <= char <= "9")
    if not digits:
        return 0

    week = int(digits)
    if 1 <= week <= max_week:
        return week
    return 0
