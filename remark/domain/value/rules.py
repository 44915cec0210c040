"""Input validation rules.

Pure functions shared by every service. Lengths are measured after
trimming surrounding whitespace. `sanitize` only trims: escaping for HTML
is the rendering layer's job.
"""

import re
from enum import Enum
from typing import Any

from remark.domain.error import ValidationError


class Rule(str, Enum):
    """Named validation rule."""

    NAME = "name"
    USERNAME = "username"
    EMAIL = "email"
    COMMENT = "comment"
    PASSWORD = "password"
    ID = "id"


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

_LENGTHS: dict[Rule, tuple[int, int]] = {
    Rule.NAME: (1, 50),
    Rule.USERNAME: (1, 50),
    Rule.COMMENT: (1, 500),
    Rule.PASSWORD: (8, 100),
    Rule.ID: (1, 100),
}


def sanitize(value: str) -> str:
    """Strip leading and trailing whitespace."""
    return value.strip()


def validate(value: Any, rule: Rule | str) -> bool:
    """Check a value against a named rule.

    Args:
        value: Candidate value; anything that is not a string fails
        rule: Rule or rule name ("name", "email", ...)

    Returns:
        True if the trimmed value satisfies the rule

    Raises:
        ValueError: If the rule name is unknown
    """
    rule = Rule(rule)
    if not isinstance(value, str):
        return False

    text = sanitize(value)

    if rule is Rule.EMAIL:
        return bool(EMAIL_PATTERN.match(text))

    low, high = _LENGTHS[rule]
    if not low <= len(text) <= high:
        return False

    if rule is Rule.ID:
        return bool(ID_PATTERN.match(text))
    if rule is Rule.PASSWORD:
        return (
            any(c.islower() for c in text)
            and any(c.isupper() for c in text)
            and any(c.isdigit() for c in text)
        )
    return True


def require(value: Any, rule: Rule | str, field: str) -> str:
    """Validate and sanitize a value.

    Args:
        value: Candidate value
        rule: Rule to apply
        field: Field name used in the error message

    Returns:
        The sanitized value

    Raises:
        ValidationError: If the value does not satisfy the rule
    """
    if not validate(value, rule):
        raise ValidationError(f"Invalid {field}", field=field)
    return sanitize(value)
