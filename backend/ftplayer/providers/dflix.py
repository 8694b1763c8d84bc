from typing import Optional
from ..models.ftp_server import ServerCapability, ContentType, PaginationStyle
from .base import ServerTypeConfig, ImageConfig, ImageKind

DEFAULT_POSTER_PATH = "/poster/"

CONFIG = ServerTypeConfig(
    base_url="http://www.dflix.live/api/v1",
    image_config=ImageConfig(
        base_url="http://www.dflix.live/Admin/main/images",
        poster_path=DEFAULT_POSTER_PATH,
        backdrop_path="/{id}/screen/",
        dynamic_paths=True
    ),
    requires_auth=False,
    capabilities=(
        ServerCapability.browse_categories,
        ServerCapability.search,
        ServerCapability.watch,
        ServerCapability.download,
        ServerCapability.filter_by_category,
        ServerCapability.filter_by_year,
        ServerCapability.filter_by_genre,
        ServerCapability.filter_by_quality,
        ServerCapability.pagination,
        ServerCapability.tv_series,
    ),
    content_types=(
        ContentType.movie,
        ContentType.tv_show,
    ),
    endpoints={
        "search": "/search.php",
        "movies": "/movies.php",
        "browse": "/movies.php",
        "sorting": "/sorting.php",
        "tv_shows": "/tvshows.php",
        "menu": "/menu.php",
        "categories": "/menu.php",
        "genres": "/moviegenre.php",
        "years": "/movieyearbycat.php",
    },
    pagination_style=PaginationStyle.standard,
    response_format="json",
    custom_fields={
        "direct_watch_links": True,
        "search_query_param": "search",
        "category_query_param": "category",
        "limit_query_param": "limit",
        "page_query_param": "page",
        "sort_by_param": "sort_by",
        "default_limit": 30,
        "default_sort_by": "uploadTime DESC",
        "valid_categories": [
            "Hollywood", "English Movies", "Korean", "Chinese", "Japanese",
            "Iranian", "Norwegian", "Swedish", "Indonesian", "Vietnamese",
            "Polish", "Bollywood", "Hindi Dubbed", "Tamil", "Telugu",
            "Malayalam", "Kannada", "English Tv Series",
        ],
        "image_construction": {
            "poster": {"field": "poster", "path": "/poster/"},
            "tv_poster": {"field": "TVposter", "path": "/poster/"},
            "backdrop": {
                "field": "backdrops_Poster",
                "path_template": "/{id}/screen/",
                "requires_content_id": True,
            },
        },
        "metadata_fields": {
            "movies": [
                "id", "MovieTitle", "MovieYear", "MovieWatchLink", "poster",
                "MovieCategory", "MovieQuality", "Story", "Actors", "Runtime",
                "backdrops_Poster",
            ],
            "tv_shows": ["id", "TVtitle", "TVID", "TVposter", "FileLocation", "TVCategory"],
        },
        "tv_shows_logic": {
            "uses_file_location": True,
            "requires_episode_endpoint": True,
        },
        # Listings already carry everything, there is no detail endpoint
        "no_detail_endpoint": True,
        "pass_full_object_to_details": True,
    }
)


def build_image_url(
    config: ServerTypeConfig,
    image_path: str,
    image_kind: ImageKind = ImageKind.poster,
    content_id: Optional[str] = None
) -> str:
    """Backdrops live under a per-content directory, posters share one folder"""
    image_config = config.image_config
    if image_kind == ImageKind.backdrop and content_id:
        backdrop_path = (image_config.backdrop_path or "").replace("{id}", str(content_id))
        return f"{image_config.base_url}{backdrop_path}{image_path}"

    poster_path = image_config.poster_path or DEFAULT_POSTER_PATH
    return f"{image_config.base_url}{poster_path}{image_path}"
