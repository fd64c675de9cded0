"""Service metadata and endpoint help payloads."""

from api_commons.metadata.help import (
    basic_delete,
    basic_get,
    basic_post,
    basic_put,
    standard_headers,
    standard_response_body,
)
from api_commons.metadata.info import (
    build_info,
    build_info_from,
    full_info,
    full_info_from,
    read_metadata,
)

__all__ = [
    "basic_delete",
    "basic_get",
    "basic_post",
    "basic_put",
    "build_info",
    "build_info_from",
    "full_info",
    "full_info_from",
    "read_metadata",
    "standard_headers",
    "standard_response_body",
]
