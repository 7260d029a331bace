"""
Pydantic schemas for request and response data validation.
Entity schemas mirror the records served by the content backend; the backend
is authoritative, so unknown fields are kept rather than rejected.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Generic, List, Literal, Optional, TypeVar, Union


HeroStatus = Literal["active", "inactive"]
EmailType = Literal["confirmation", "update", "cancellation", "custom"]

T = TypeVar("T")


class BackendRecord(BaseModel):
    """Base for records mirrored from the content backend."""
    model_config = ConfigDict(extra="allow")


class CategoryImage(BackendRecord):
    id: int
    category_id: int
    image_path: str
    alt_text: Optional[str] = None
    sort_order: int = 0


class Category(BackendRecord):
    """
    Category with its one-to-many image list.
    Used by /api/categories endpoints.
    """
    id: int
    name: str
    description: Optional[str] = None
    images: List[CategoryImage] = []


class HeroSection(BackendRecord):
    """
    Hero banner entry; image_path is a single path or a list of paths.
    Used by /api/hero-sections endpoints.
    """
    id: int
    image_path: Union[str, List[str]]
    status: HeroStatus = "active"

    @property
    def image_paths(self) -> List[str]:
        if isinstance(self.image_path, str):
            return [self.image_path] if self.image_path else []
        return list(self.image_path)


class FilmStripImage(BackendRecord):
    id: int
    image_path: str
    alt_text: Optional[str] = None
    sort_order: int = 0


class NewsImage(BackendRecord):
    id: int
    image_path: str


class NewsItem(BackendRecord):
    id: int
    title: str
    description: str
    date: str
    images: List[NewsImage] = []


class PortfolioItem(BackendRecord):
    """Portfolio entry; category is free text, not an enum."""
    id: int
    title: str
    category: str
    camera: Optional[str] = None
    alt: str
    image_path: str
    order: int = 0


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Paginated list shape returned by the content backend.
    The list proxies relay it unchanged; the admin console parses each page
    into the screen's record model.
    """
    data: List[T]
    last_page: int = 1

    model_config = ConfigDict(extra="allow")

    @field_validator("last_page", mode="before")
    @classmethod
    def none_to_first(cls, v):
        return 1 if v in (None, 0) else v


class Booking(BaseModel):
    """
    Booking record read from the backend for notification emails.
    Field names follow the backend's camelCase JSON.
    """
    id: Optional[Union[int, str]] = None
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    service_type: str = Field(default="", alias="serviceType")
    date: str = ""
    time: str = ""
    guests: Union[int, str] = ""
    message: Optional[str] = None
    status: str = "pending"

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator(
        "first_name", "last_name", "email", "phone", "service_type", "date", "time", "guests",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return str(v).lower() if v else "pending"


class LoginRequest(BaseModel):
    """
    Admin credentials forwarded to the backend login endpoint.
    Used by POST /api/admin/login.
    """
    email: str
    password: str

    model_config = ConfigDict(extra="allow")


class SendEmailRequest(BaseModel):
    """
    Request schema for sending a booking notification.
    Used by POST /api/admin/bookings/send-email.
    """
    booking_id: Union[int, str] = Field(alias="bookingId")
    custom_message: str = Field(default="", alias="customMessage")
    email_type: EmailType = Field(default="custom", alias="emailType")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("custom_message", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ChatRequest(BaseModel):
    """Request schema for POST /api/chatbot."""
    message: str

    @field_validator("message")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v


class ChatResponse(BaseModel):
    reply: str


class QuickReply(BaseModel):
    label: str
    message: str
