"""Validation of backend rows into domain models."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_rows(model: type[ModelT], rows: list[dict[str, Any]]) -> list[ModelT]:
    """Validate rows into models, skipping (and logging) rows that do not fit the schema."""
    parsed: list[ModelT] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {model.__name__} row {row.get('id', '?')}: "
                f"{e.error_count()} validation error(s)"
            )
    return parsed


def parse_row(model: type[ModelT], row: dict[str, Any] | None) -> ModelT | None:
    """Validate a single row, returning None when it is missing or malformed."""
    if row is None:
        return None
    rows = parse_rows(model, [row])
    return rows[0] if rows else None
