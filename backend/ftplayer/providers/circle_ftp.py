from typing import Optional
from ..models.ftp_server import ServerCapability, ContentType, PaginationStyle
from .base import ServerTypeConfig, ImageConfig, ImageKind


CONFIG = ServerTypeConfig(
    base_url="http://new.circleftp.net:5000",
    image_config=ImageConfig(
        base_url="http://new.circleftp.net:5000/uploads/",
        dynamic_paths=False
    ),
    requires_auth=False,
    capabilities=(
        ServerCapability.browse_home,
        ServerCapability.browse_categories,
        ServerCapability.search,
        ServerCapability.watch,
        ServerCapability.download,
        ServerCapability.pagination,
        ServerCapability.trending,
        ServerCapability.tv_series,
        ServerCapability.multi_file_content,
        ServerCapability.single_file_content,
        ServerCapability.seasoned_episodes,
        ServerCapability.view_counts,
        ServerCapability.filter_by_category,
    ),
    content_types=(
        ContentType.single_video,
        ContentType.series,
        ContentType.single_file,
        ContentType.multi_file,
    ),
    endpoints={
        "home_page": "/api/home-page/getHomePagePosts",
        "categories": "/api/categories",
        "browse": "/api/posts",
        "search": "/api/posts",
        "details": "/api/posts/{id}",
    },
    pagination_style=PaginationStyle.standard,
    response_format="json",
    custom_fields={
        "has_category_posts": True,
        "has_most_visited_posts": True,
        "has_latest_post": True,
        "search_query_param": "searchTerm",
        "category_query_param": "categoryExact",
        "limit_query_param": "limit",
        "page_query_param": "page",
        "order_query_param": "order",
        "default_limit": 50,
        "content_structure": {
            "single_video": "string",
            "single_file": "string",
            "series": "array_of_seasons",
            "multi_file": "array_of_files",
        },
        "image_fields": {
            "poster": "image",
            "thumbnail": "imageSm",
            "cover": "cover",
        },
        "metadata_fields": [
            "title", "name", "type", "metaData", "tags",
            "quality", "watchTime", "year", "view", "categories",
        ],
    }
)


def build_image_url(
    config: ServerTypeConfig,
    image_path: str,
    image_kind: ImageKind = ImageKind.poster,
    content_id: Optional[str] = None
) -> str:
    """Uploads are served flat, the path is appended as-is"""
    return f"{config.image_config.base_url}{image_path}"
