"""Self-describing "help" payloads for endpoints."""

from __future__ import annotations

from typing import Any

DEFAULT_ENDPOINT = "default-endpoint"
DEFAULT_DESCRIPTION = "No description provided"


def standard_headers() -> dict[str, Any]:
    """Headers a client sends to request an endpoint's help payload."""
    return {
        "X-Help-Request": True,
        "X-Request-Type": "HELP",
        "Accept": "application/json",
    }


def standard_response_body(
    endpoint: str | None,
    description: str | None,
    example_request: dict[str, Any] | None,
) -> dict[str, Any]:
    return {
        "endpoint": endpoint if endpoint is not None else DEFAULT_ENDPOINT,
        "description": description if description is not None else DEFAULT_DESCRIPTION,
        "headers": standard_headers(),
        "request": dict(example_request) if example_request is not None else {},
        "response": {
            "status": "200 OK",
            "body": {"info": "Example response body"},
        },
    }


def basic_get(endpoint: str, description: str) -> dict[str, Any]:
    return standard_response_body(endpoint, description, {"method": "GET"})


def basic_post(endpoint: str, description: str) -> dict[str, Any]:
    return standard_response_body(endpoint, description, {"method": "POST"})


def basic_put(endpoint: str, description: str) -> dict[str, Any]:
    return standard_response_body(endpoint, description, {"method": "PUT"})


def basic_delete(endpoint: str, description: str) -> dict[str, Any]:
    return standard_response_body(endpoint, description, {"method": "DELETE"})
