"""Parser for the ``field:value`` filter micro-language.

An expression is a whitespace-separated list of tokens, each of the form
``field:value``. The token is split at its first colon, so values may
themselves contain colons. Repeated fields collect their values in the
order they appear; the platform ORs values within a field.

    "status:active category:news status:draft"
        -> status: [active, draft], category: [news]
"""

from typing import Any

from ..errors import FilterParseError
from ..models.documents import FilterClause


def parse_filters(expression: str) -> dict[str, list[FilterClause]]:
    """Parse a filter expression into clauses grouped by field.

    Args:
        expression: Space-separated ``field:value`` tokens (may be empty)

    Returns:
        Mapping of field name to its clauses, in order of first appearance

    Raises:
        FilterParseError: If a token has no colon, no field or no value
    """
    filters: dict[str, list[FilterClause]] = {}

    for token in (expression or "").split():
        field, sep, value = token.partition(":")
        if not sep:
            raise FilterParseError(f"Filter token '{token}' is missing ':'", token)
        if not field:
            raise FilterParseError(f"Filter token '{token}' has no field name", token)
        if not value:
            raise FilterParseError(f"Filter token '{token}' has no value", token)

        filters.setdefault(field, []).append(FilterClause(value=value))

    return filters


def to_facet_filters(filters: dict[str, list[FilterClause]]) -> list[dict[str, Any]]:
    """Convert parsed filters into the search API's facet filter list."""
    return [
        {"fieldName": field, "values": [clause.to_dict() for clause in clauses]}
        for field, clauses in filters.items()
    ]
