"""JSON representations shared by the API resources."""

import pydantic

from instruks.domain.entities import Category, Instruks


def instruks_to_dict(instruks: Instruks) -> dict:
    return {
        "id": str(instruks.id),
        "document_id": str(instruks.document_id),
        "version_number": instruks.version_number,
        "is_latest": instruks.is_latest,
        "previous_version_id": (
            str(instruks.previous_version_id) if instruks.previous_version_id else None
        ),
        "title": instruks.title,
        "description": instruks.description,
        "content": instruks.content,
        "category_id": str(instruks.category_id),
        "created_at": instruks.created_at.isoformat(),
        "updated_at": instruks.updated_at.isoformat(),
    }


def category_to_dict(category: Category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "parent_id": str(category.parent_id) if category.parent_id else None,
    }


def validation_error_body(error: pydantic.ValidationError) -> dict:
    """Flatten pydantic errors into {"field", "message"} pairs."""
    return {
        "error": "Validation failed",
        "fields": [
            {
                "field": ".".join(str(p) for p in e["loc"]),
                "message": e["msg"],
            }
            for e in error.errors()
        ],
    }
