"""Service description blocks built from package metadata.

``read_metadata`` never raises: a distribution that is not installed, or
whose metadata cannot be read, yields an ``error`` entry and a timestamp so
info endpoints keep answering.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DISTRIBUTION = "api-commons"
UNKNOWN = "unknown"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_metadata(distribution: str = DEFAULT_DISTRIBUTION) -> dict[str, Any]:
    """Name, version and descriptive fields of an installed distribution."""
    try:
        meta = metadata.metadata(distribution)
    except metadata.PackageNotFoundError:
        logger.warning("Package metadata not found for distribution %s", distribution)
        return {"error": f"Package metadata not found for {distribution}", "timestamp": _now()}
    except Exception as exc:
        logger.warning("Failed to read metadata for %s: %s", distribution, exc)
        return {"error": f"Failed to read metadata: {exc}", "timestamp": _now()}

    return {
        "name": meta.get("Name", UNKNOWN),
        "version": meta.get("Version", UNKNOWN),
        "description": meta.get("Summary", ""),
        "developers": meta.get("Author-email", "") or meta.get("Author", ""),
        "owners": meta.get("Maintainer-email", "") or meta.get("Maintainer", ""),
        "timestamp": _now(),
    }


def build_info(service_name: str, version: str) -> dict[str, Any]:
    return {"service": service_name, "version": version, "timestamp": _now()}


def build_info_from(service_name: str, package_info: dict[str, Any]) -> dict[str, Any]:
    """Like ``build_info`` but taking version and name from *package_info*."""
    return {
        "service": service_name,
        "version": package_info.get("version", UNKNOWN),
        "name": package_info.get("name", UNKNOWN),
        "timestamp": _now(),
    }


def full_info(
    service_name: str,
    version: str,
    description: str,
    developer_email: str,
    owner_email: str,
) -> dict[str, Any]:
    return {
        "service": service_name,
        "version": version,
        "description": description,
        "developerContact": developer_email,
        "projectOwnerContact": owner_email,
        "timestamp": _now(),
    }


def full_info_from(service_name: str, package_info: dict[str, Any]) -> dict[str, Any]:
    return {
        "service": service_name,
        "version": package_info.get("version", UNKNOWN),
        "name": package_info.get("name", UNKNOWN),
        "description": package_info.get("description", ""),
        "developers": package_info.get("developers", ""),
        "owners": package_info.get("owners", ""),
        "organization": package_info.get("organization", ""),
        "timestamp": _now(),
    }
