"""On-canvas node labels."""

from __future__ import annotations


def get_name_abbreviation(display_name: str | None) -> str | None:
    """First letter of the first two space-separated tokens.

    "Jane Doe" -> "JD", "Madonna" -> "M", " Doe" -> "?D", "" -> None.
    """
    if not display_name:
        return None

    split = display_name.split(" ")
    given_name = split[0]
    surname = split[1] if len(split) > 1 else ""

    first_letter = given_name[0] if given_name else "?"
    second_letter = surname[0] if surname else ""
    return f"{first_letter}{second_letter}"
