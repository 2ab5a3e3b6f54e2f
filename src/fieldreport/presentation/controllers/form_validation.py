"""Input rules shared by the incident forms."""

from typing import Optional

TITLE_MIN_LENGTH = 5
DESCRIPTION_MIN_LENGTH = 10


def validate_incident_form(title: Optional[str], description: Optional[str]) -> Optional[str]:
    """Return the first problem with the form, or None when it is valid.

    Both values are checked after trimming.
    """
    title = (title or "").strip()
    description = (description or "").strip()

    if not title:
        return "Title is required"
    if not description:
        return "Description is required"
    if len(title) < TITLE_MIN_LENGTH:
        return f"Title must be at least {TITLE_MIN_LENGTH} characters"
    if len(description) < DESCRIPTION_MIN_LENGTH:
        return f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"
    return None
