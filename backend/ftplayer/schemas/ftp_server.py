from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, validator
from pydantic import ValidationError as PydanticValidationError
from typing import Optional, Dict, Any, List
from datetime import datetime
from ..models.ftp_server import ServerType, ServerCapability, ContentType, PaginationStyle


def _strip_required(v: str, field_label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_label} cannot be empty")
    return v


_http_url = TypeAdapter(AnyHttpUrl)


def _optional_http_url(v: Optional[str], field_label: str) -> Optional[str]:
    """Blank means unset; anything else must be an absolute http(s) URL, kept as given"""
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    try:
        _http_url.validate_python(v)
    except PydanticValidationError:
        raise ValueError(f"{field_label} must be a valid http or https URL")
    return v


class FtpServerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    isp_provider: str = Field(..., min_length=1)
    ping_url: Optional[str] = None
    ui_url: Optional[str] = None
    priority: int = Field(0, ge=0)
    is_active: bool = True


class FtpServerCreate(FtpServerBase):
    server_type: ServerType

    @validator('name')
    def validate_name(cls, v):
        return _strip_required(v, "Server name")

    @validator('isp_provider')
    def validate_isp_provider(cls, v):
        return _strip_required(v, "ISP provider")

    @validator('ping_url')
    def validate_ping_url(cls, v):
        return _optional_http_url(v, "Ping URL")

    @validator('ui_url')
    def validate_ui_url(cls, v):
        return _optional_http_url(v, "UI URL")


class FtpServerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    isp_provider: Optional[str] = Field(None, min_length=1)
    ping_url: Optional[str] = None
    ui_url: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @validator('name')
    def validate_name(cls, v):
        if v is not None:
            return _strip_required(v, "Server name")
        return v

    @validator('isp_provider')
    def validate_isp_provider(cls, v):
        if v is not None:
            return _strip_required(v, "ISP provider")
        return v

    @validator('ping_url')
    def validate_ping_url(cls, v):
        return _optional_http_url(v, "Ping URL")

    @validator('ui_url')
    def validate_ui_url(cls, v):
        return _optional_http_url(v, "UI URL")


class FtpServerResponse(FtpServerBase):
    id: int
    user_id: int
    server_type: ServerType
    config: Dict[str, Any]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FtpServerSummary(BaseModel):
    id: int
    name: str
    server_type: ServerType
    isp_provider: str

    class Config:
        from_attributes = True


class FtpServerEnvelope(BaseModel):
    message: str
    server: FtpServerResponse


class FtpServerListResponse(BaseModel):
    message: str
    servers: List[FtpServerResponse]


class ServerTypeInfo(BaseModel):
    server_type: ServerType
    base_url: str
    requires_auth: bool
    capabilities: List[ServerCapability]
    content_types: List[ContentType]
    endpoints: Dict[str, str]
    pagination_style: PaginationStyle


class ServerTypeListResponse(BaseModel):
    message: str
    server_types: List[ServerTypeInfo]


class PingResponse(BaseModel):
    message: str
    url: Optional[str] = None
    reachable: bool
    status_code: Optional[int] = None
    latency_ms: Optional[float] = None


class ImageUrlResponse(BaseModel):
    message: str
    url: str
