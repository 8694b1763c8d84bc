from typing import Dict, Any, Optional, Tuple
import enum
from pydantic import BaseModel, Field
from ..models.ftp_server import ServerCapability, ContentType, PaginationStyle


class ImageKind(enum.Enum):
    poster = "poster"
    thumbnail = "thumbnail"
    backdrop = "backdrop"


class ImageConfig(BaseModel):
    base_url: str
    poster_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    dynamic_paths: bool = False  # Paths contain {id}/{itemId} placeholders

    class Config:
        frozen = True


class ServerTypeConfig(BaseModel):
    """Static description of one upstream provider's API shape.

    ``custom_fields`` is an open bag for provider peculiarities (query-param
    names, default limits, field mappings, auth header templates) that do not
    normalize across providers.
    """
    base_url: str
    image_config: ImageConfig
    requires_auth: bool = False
    capabilities: Tuple[ServerCapability, ...]
    content_types: Tuple[ContentType, ...]
    endpoints: Dict[str, str] = Field(default_factory=dict)
    pagination_style: PaginationStyle = PaginationStyle.standard
    response_format: str = "json"
    custom_fields: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True
