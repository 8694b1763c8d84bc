from .base import ServerTypeConfig, ImageConfig, ImageKind
from .registry import (
    SERVER_TYPE_REGISTRY,
    resolve_server_type,
    get_config,
    get_capabilities,
    has_capability,
    get_content_types,
    get_pagination_style,
    get_endpoint,
    format_endpoint,
    snapshot_config,
    list_server_types,
    build_image_url
)

__all__ = [
    "ServerTypeConfig",
    "ImageConfig",
    "ImageKind",
    "SERVER_TYPE_REGISTRY",
    "resolve_server_type",
    "get_config",
    "get_capabilities",
    "has_capability",
    "get_content_types",
    "get_pagination_style",
    "get_endpoint",
    "format_endpoint",
    "snapshot_config",
    "list_server_types",
    "build_image_url"
]
