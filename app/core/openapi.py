"""OpenAPI metadata and customization utilities.

Enriches the generated schema with tag descriptions and documents the
optional ``X-User-Id`` header used to key the rate limiter, keeping
documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA: list[dict[str, str]] = [
    {
        "name": "Localizations",
        "description": "Create localized name variants and browse recent requests.",
    },
    {
        "name": "Favorites",
        "description": "Save, list and remove a user's favorite variants.",
    },
    {
        "name": "Rate limit",
        "description": "Per-IP/per-user request budget checks.",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tag metadata and headers."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        components = schema.setdefault("components", {})
        components.setdefault("headers", {})["X-RateLimit-Remaining"] = {
            "description": "Requests left in the current window (sent with 429).",
            "schema": {"type": "integer"},
        }

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
