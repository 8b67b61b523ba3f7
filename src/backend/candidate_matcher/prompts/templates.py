"""Placeholder substitution for prompt templates.

Templates use `{{name}}` placeholders filled by plain string replacement, so
braces elsewhere in a template (JSON examples, code) need no escaping and
unknown placeholders pass through untouched.
"""

from candidate_matcher.core.config import RatingConfig

VACANCY_DESCRIPTION = "{{vacancy_description}}"
CV_CONTENT = "{{cv_content}}"
RATING_RANGE = "{{rating_range}}"
MIN_RATING = "{{min_rating}}"
MAX_RATING = "{{max_rating}}"


def fill(template: str, values: dict[str, str]) -> str:
    for placeholder, value in values.items():
        template = template.replace(placeholder, value)
    return template


def apply_rating_range(template: str, rating: RatingConfig) -> str:
    return fill(
        template,
        {
            RATING_RANGE: rating.range_description,
            MIN_RATING: str(rating.min),
            MAX_RATING: str(rating.max),
        },
    )


def build_user_prompt(template: str, vacancy_description: str, cv_content: str) -> str:
    """Fill the vacancy and CV into a user template.

    Both values are inserted in a single pass over the template so a CV that
    happens to contain `{{vacancy_description}}` is left as written.
    """
    parts = template.split(CV_CONTENT)
    return cv_content.join(part.replace(VACANCY_DESCRIPTION, vacancy_description) for part in parts)
