from typing import Optional
from ..models.ftp_server import ServerCapability, ContentType, PaginationStyle
from .base import ServerTypeConfig, ImageConfig, ImageKind

IMAGE_QUALITY = 96

CONFIG = ServerTypeConfig(
    base_url="http://amaderftp.net:8096",
    image_config=ImageConfig(
        base_url="http://amaderftp.net:8096",
        poster_path="/Items/{itemId}/Images/Primary",
        backdrop_path="/Items/{itemId}/Images/Backdrop",
        dynamic_paths=True
    ),
    requires_auth=True,
    capabilities=(
        ServerCapability.browse_home,
        ServerCapability.browse_categories,
        ServerCapability.search,
        ServerCapability.watch,
        ServerCapability.download,
        ServerCapability.pagination,
        ServerCapability.tv_series,
        ServerCapability.seasoned_episodes,
        ServerCapability.filter_by_category,
    ),
    content_types=(
        ContentType.movie,
        ContentType.series,
    ),
    endpoints={
        "authenticate": "/Users/authenticatebyname",
        "user_items": "/Users/{userId}/Items",
        "item_details": "/Users/{userId}/Items/{itemId}",
        "series_episodes": "/Shows/{seriesId}/Episodes",
        "search": "/Users/{userId}/Items",
        "browse": "/Users/{userId}/Items",
        "images": "/Items/{itemId}/Images/{imageType}",
    },
    pagination_style=PaginationStyle.offset,
    response_format="json",
    custom_fields={
        "auth_credentials": {
            "username": "user",
            "password": "1234",
        },
        "auth_header": "X-Emby-Authorization",
        "auth_header_format": 'MediaBrowser Client="{client}", Device="{device}", DeviceId="{deviceId}", Version="{version}"',
        "auth_header_with_token": 'MediaBrowser Client="{client}", Device="{device}", DeviceId="{deviceId}", Version="{version}", Token="{token}"',
        "default_client": "FTPlayer",
        "default_device": "Mobile",
        "default_version": "1.0.0",
        "library_ids": {
            "movies": "4f9a1aee122b0b1d02c34ba39f31e331",
            "tv_shows": "ea34d9f8d8b815c9ee04e1b30418f93d",
        },
        "search_query_param": "searchTerm",
        "limit_query_param": "Limit",
        "start_index_param": "StartIndex",
        "sort_by_param": "SortBy",
        "sort_order_param": "SortOrder",
        "recursive_param": "Recursive",
        "include_item_types_param": "IncludeItemTypes",
        "parent_id_param": "ParentId",
        "fields_param": "Fields",
        "default_limit": 20,
        "default_fields": "PrimaryImageAspectRatio,MediaSourceCount,BasicSyncInfo",
        "item_types": {
            "movie": "Movie",
            "series": "Series",
            "episode": "Episode",
        },
        "sort_options": {
            "date_created": "DateCreated",
            "premiere_date": "PremiereDate",
            "sort_name": "SortName",
            "date_played": "DatePlayed",
        },
        "ticks_per_second": 10000000,
        "image_construction": {
            "poster": {
                "path": "/Items/{itemId}/Images/Primary",
                "query_params": ["tag", "quality", "fillWidth", "fillHeight"],
                "default_quality": IMAGE_QUALITY,
                "default_width": 207,
                "default_height": 310,
            },
            "backdrop": {
                "path": "/Items/{itemId}/Images/Backdrop",
                "query_params": ["tag", "quality", "fillWidth", "fillHeight"],
                "default_quality": IMAGE_QUALITY,
                "default_width": 360,
                "default_height": 203,
            },
            "logo": {
                "path": "/Items/{itemId}/Images/Logo",
                "query_params": ["tag", "quality"],
            },
        },
        "metadata_fields": [
            "Id", "Name", "Type", "RunTimeTicks", "PremiereDate",
            "OfficialRating", "CommunityRating", "Overview", "Genres",
            "ProductionYear", "ImageTags", "BackdropImageTags", "UserData",
            "MediaSources", "Path",
        ],
        "stream_url_template": "/Videos/{itemId}/stream",
    }
)


def build_image_url(
    config: ServerTypeConfig,
    image_path: str,
    image_kind: ImageKind = ImageKind.poster,
    content_id: Optional[str] = None
) -> str:
    """Images are addressed by item id, ``image_path`` is the image tag.

    Returns an empty string without a content id since the URL cannot be
    formed.
    """
    if not content_id:
        return ""

    image_config = config.image_config
    if image_kind == ImageKind.backdrop:
        template = image_config.backdrop_path or ""
    else:
        template = image_config.poster_path or ""
    path = template.replace("{itemId}", str(content_id))
    return f"{image_config.base_url}{path}?tag={image_path}&quality={IMAGE_QUALITY}"
