"""OpenAPI metadata customization.

Adds tags metadata and documents the 429 answer shared by every rate limited
employee operation, keeping documentation concerns out of the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {
        "name": "Employees",
        "description": "Employee directory lookups, aggregates and mutations.",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


def apply_openapi_customizations(app: FastAPI, *, rate_limited: bool = False) -> None:
    """Patch FastAPI's OpenAPI generation.

    - Adds tags metadata if not present
    - When ``rate_limited``, documents a 429 response on every employee operation
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        if rate_limited:
            for path, methods in schema.get("paths", {}).items():
                if path.endswith("/health"):
                    continue
                for method_obj in methods.values():
                    if isinstance(method_obj, dict):
                        method_obj.setdefault("responses", {}).setdefault(
                            "429",
                            {"description": "Too many requests; retry after the backoff period."},
                        )

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
