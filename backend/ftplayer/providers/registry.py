"""
Server type registry

Static catalog of the supported upstream providers, built once at import and
never mutated.
"""
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from ..core.exceptions import UnknownServerTypeError, ValidationError
from ..models.ftp_server import ServerType, ServerCapability, ContentType, PaginationStyle
from .base import ServerTypeConfig, ImageKind
from . import circle_ftp, dflix, amader_ftp

SERVER_TYPE_REGISTRY = MappingProxyType({
    ServerType.circle_ftp: circle_ftp.CONFIG,
    ServerType.dflix: dflix.CONFIG,
    ServerType.amader_ftp: amader_ftp.CONFIG,
})

ServerTypeLike = Union[ServerType, str]


def resolve_server_type(server_type: ServerTypeLike) -> ServerType:
    """Accept an enum member or its string value, reject anything else"""
    if isinstance(server_type, ServerType):
        return server_type
    try:
        return ServerType(server_type)
    except ValueError:
        raise UnknownServerTypeError(server_type)


def get_config(server_type: ServerTypeLike) -> ServerTypeConfig:
    resolved = resolve_server_type(server_type)
    config = SERVER_TYPE_REGISTRY.get(resolved)
    if config is None:
        raise UnknownServerTypeError(server_type)
    return config


def get_capabilities(server_type: ServerTypeLike) -> FrozenSet[ServerCapability]:
    return frozenset(get_config(server_type).capabilities)


def has_capability(server_type: ServerTypeLike, capability: ServerCapability) -> bool:
    return capability in get_config(server_type).capabilities


def get_content_types(server_type: ServerTypeLike) -> Tuple[ContentType, ...]:
    return get_config(server_type).content_types


def get_pagination_style(server_type: ServerTypeLike) -> PaginationStyle:
    return get_config(server_type).pagination_style


def get_endpoint(server_type: ServerTypeLike, key: str) -> Optional[str]:
    """Endpoint template for ``key``, or None when the provider lacks it"""
    return get_config(server_type).endpoints.get(key)


def format_endpoint(server_type: ServerTypeLike, key: str, **params: Any) -> Optional[str]:
    """Endpoint with ``{placeholder}`` segments filled from ``params``.

    Placeholders without a matching parameter are left in place.
    """
    template = get_endpoint(server_type, key)
    if template is None:
        return None

    path = template
    for name, value in params.items():
        path = path.replace("{" + name + "}", str(value))
    return path


def snapshot_config(server_type: ServerTypeLike) -> Dict[str, Any]:
    """JSON-ready deep copy of a provider config for denormalized storage"""
    return get_config(server_type).model_dump(mode="json")


def list_server_types() -> List[Dict[str, Any]]:
    types = []
    for server_type, config in SERVER_TYPE_REGISTRY.items():
        types.append({
            "server_type": server_type,
            "base_url": config.base_url,
            "requires_auth": config.requires_auth,
            "capabilities": list(config.capabilities),
            "content_types": list(config.content_types),
            "endpoints": dict(config.endpoints),
            "pagination_style": config.pagination_style,
        })
    return types


def _default_image_url(config: ServerTypeConfig, image_path: str) -> str:
    return f"{config.image_config.base_url}{image_path}"


def build_image_url(
    server_type: ServerTypeLike,
    image_path: str,
    image_kind: Union[ImageKind, str] = ImageKind.poster,
    content_id: Optional[str] = None
) -> str:
    """Full image URL following the provider's addressing scheme"""
    resolved = resolve_server_type(server_type)
    config = get_config(resolved)

    try:
        kind = ImageKind(image_kind)
    except ValueError:
        raise ValidationError(f"Invalid image kind: {image_kind}")

    if resolved == ServerType.circle_ftp:
        return circle_ftp.build_image_url(config, image_path, kind, content_id)
    elif resolved == ServerType.dflix:
        return dflix.build_image_url(config, image_path, kind, content_id)
    elif resolved == ServerType.amader_ftp:
        return amader_ftp.build_image_url(config, image_path, kind, content_id)
    else:
        return _default_image_url(config, image_path)
