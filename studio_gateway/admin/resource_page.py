"""
State for the admin CRUD screens.

One ResourcePage class drives every screen (categories, film strip, hero
sections, news, portfolio); a ResourceConfig carries what differs between them:
route, required fields, upload field and toast copy.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

import requests
from pydantic import ValidationError

from studio_gateway.admin.client import GatewayClient, GatewayError
from studio_gateway.admin.hero_form import HERO_STATUSES, HeroSectionForm
from studio_gateway.admin.notifications import Notifier
from studio_gateway.admin.uploads import ObjectURLStore, UploadDialog
from studio_gateway.config import settings
from studio_gateway.schemas import (
    BackendRecord,
    Category,
    FilmStripImage,
    HeroSection,
    NewsItem,
    PortfolioItem,
)
from studio_gateway.utils.images import resolve_image_url
from studio_gateway.utils.pagination import DEFAULT_PER_PAGE

logger = logging.getLogger(__name__)

# Failures the page reports as toasts instead of raising
REQUEST_ERRORS = (GatewayError, requests.RequestException, ValueError)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class Modal(str, Enum):
    CLOSED = "closed"
    ADD = "add"
    VIEW = "view"
    DELETE = "delete"
    EDIT = "edit"


def own_image_paths(item: Mapping[str, Any]) -> List[str]:
    """Image paths stored on the record itself (str or list)."""
    value = item.get("image_path")
    if isinstance(value, list):
        return [path for path in value if path]
    return [value] if value else []


def nested_image_paths(item: Mapping[str, Any]) -> List[str]:
    """Image paths of the record's images[] relation."""
    return [image.get("image_path") for image in item.get("images") or [] if image.get("image_path")]


@dataclass(frozen=True)
class ResourceConfig:
    """
    What one admin screen manages.

    Attributes:
        singular: Lower-case noun used in fallback error messages
        label: Capitalized noun used in success toasts
        path: Gateway route of the collection
        required_fields: (field, message shown when it is blank)
        optional_fields: Sent only when non-blank
        defaults: Factories for fields the form pre-fills
        choices: Allowed values for enum fields
        file_field: Multipart key of the uploads
        file_message: Message shown when nothing was selected
        single_file: Exactly one upload is sent
        created_message: Success copy, formatted with the fields and {count}
        image_paths: Extracts image paths from a row
        filterable: Screen has search, status filter and sorting
        editable: Screen supports editing existing records
        record: Model each listed row is validated against
    """
    singular: str
    label: str
    path: str
    required_fields: Tuple[Tuple[str, str], ...] = ()
    optional_fields: Tuple[str, ...] = ()
    defaults: Mapping[str, Callable[[], str]] = field(default_factory=dict)
    choices: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    file_field: str = "images[]"
    file_message: str = "Please select at least one image"
    single_file: bool = False
    created_message: str = "Created successfully"
    image_paths: Callable[[Mapping[str, Any]], List[str]] = own_image_paths
    filterable: bool = False
    editable: bool = False
    record: Type[BackendRecord] = BackendRecord

    @property
    def field_names(self) -> List[str]:
        names = [name for name, _ in self.required_fields] + list(self.optional_fields)
        names += [name for name in self.defaults if name not in names]
        return names


CATEGORIES = ResourceConfig(
    singular="category",
    label="Category",
    path="/api/categories",
    required_fields=(("name", "Please enter a category name"),),
    optional_fields=("description",),
    created_message='Category "{name}" created with {count} image(s)',
    image_paths=nested_image_paths,
    record=Category,
)

FILM_STRIP = ResourceConfig(
    singular="image",
    label="Image",
    path="/api/film-strip",
    created_message="{count} image(s) uploaded successfully",
    record=FilmStripImage,
)

HERO_SECTIONS = ResourceConfig(
    singular="hero section",
    label="Hero section",
    path="/api/hero-sections",
    defaults={"status": lambda: "active"},
    choices={"status": HERO_STATUSES},
    created_message="Hero section created successfully",
    filterable=True,
    editable=True,
    record=HeroSection,
)

NEWS_FIELDS_MESSAGE = "Please fill in all fields and upload at least one image"

NEWS = ResourceConfig(
    singular="news item",
    label="News item",
    path="/api/news",
    required_fields=(("title", NEWS_FIELDS_MESSAGE), ("description", NEWS_FIELDS_MESSAGE)),
    defaults={"date": lambda: date.today().isoformat()},
    file_message=NEWS_FIELDS_MESSAGE,
    created_message="News item created successfully",
    image_paths=nested_image_paths,
    record=NewsItem,
)

PORTFOLIO = ResourceConfig(
    singular="portfolio item",
    label="Portfolio item",
    path="/api/portfolio",
    required_fields=(
        ("title", "Please enter a title"),
        ("category", "Please enter a category"),
        ("alt", "Please enter alt text"),
    ),
    optional_fields=("camera",),
    file_field="image",
    file_message="Please select an image",
    single_file=True,
    created_message="Portfolio item created successfully",
    record=PortfolioItem,
)


class ResourcePage:
    """
    List, create, delete (and for hero sections, edit) one resource.

    Load state and modal state are independent: a failed reload leaves any
    open dialog alone, and closing a dialog never touches the item list.
    """

    def __init__(
        self,
        config: ResourceConfig,
        client: GatewayClient,
        notifier: Optional[Notifier] = None,
        image_base_url: Optional[str] = None,
        store: Optional[ObjectURLStore] = None,
    ):
        self.config = config
        self.client = client
        self.notifier = notifier or Notifier()
        self.image_base_url = image_base_url if image_base_url is not None else settings.API_IMG_URL
        self.store = store or ObjectURLStore()

        self.items: List[dict] = []
        self.total_pages = 1
        self.page_index = 0
        self.page_size = DEFAULT_PER_PAGE
        self.search = ""
        self.status_filter = ""
        self.sort_by = "created_at"
        self.sort_order = "desc"

        self.load_state = LoadState.IDLE
        self.modal = Modal.CLOSED
        self.selected: Optional[dict] = None
        self.dialog: Optional[UploadDialog] = None
        self.form: Optional[HeroSectionForm] = None

    # Listing

    def query_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": self.page_index + 1, "perPage": self.page_size}
        if self.config.filterable:
            if self.search:
                params["search"] = self.search
            if self.status_filter:
                params["status"] = self.status_filter
            params["sortBy"] = self.sort_by
            params["sortOrder"] = self.sort_order
        return params

    def load(self) -> bool:
        """
        Fetch the current page. On failure the previous items stay in place.

        Returns:
            bool: True when the list was replaced
        """
        self.load_state = LoadState.LOADING
        try:
            page = self.client.list(self.config.path, params=self.query_params(), record=self.config.record)
        except REQUEST_ERRORS as e:
            self.load_state = LoadState.ERROR
            self.notifier.error("Error", self._message(e, f"Failed to fetch {self.config.singular} list"))
            return False

        self.items = [row.model_dump(exclude_unset=True) for row in page.data]
        self.total_pages = page.last_page
        self.load_state = LoadState.LOADED
        logger.debug(f"Loaded {len(self.items)} {self.config.singular} row(s), page {self.page_index + 1}/{page.last_page}")
        return True

    def set_page(self, page_index: int) -> bool:
        self.page_index = max(page_index, 0)
        return self.load()

    def set_page_size(self, page_size: int) -> bool:
        self.page_size = page_size
        self.page_index = 0
        return self.load()

    def set_search(self, search: str) -> bool:
        self.search = search
        self.page_index = 0
        return self.load()

    def set_status_filter(self, status: str) -> bool:
        self.status_filter = status
        self.page_index = 0
        return self.load()

    def set_sort(self, sort_by: str, descending: bool = True) -> bool:
        self.sort_by = sort_by
        self.sort_order = "desc" if descending else "asc"
        return self.load()

    def image_urls(self, item: Mapping[str, Any]) -> List[str]:
        paths = self.config.image_paths(item)
        if not paths:
            return [resolve_image_url(None, self.image_base_url)]
        return [resolve_image_url(path, self.image_base_url) for path in paths]

    def rows(self) -> List[dict]:
        """Current items with their image URLs resolved for display."""
        return [{**item, "image_urls": self.image_urls(item)} for item in self.items]

    # Dialogs

    def open_add(self) -> UploadDialog:
        self.close()
        self.dialog = UploadDialog(self.store)
        self.modal = Modal.ADD
        return self.dialog

    def open_view(self, item: dict) -> None:
        self.close()
        self.selected = item
        self.modal = Modal.VIEW

    def open_delete(self, item: dict) -> None:
        """Ask for confirmation; nothing is deleted until confirm_delete()."""
        self.close()
        self.selected = item
        self.modal = Modal.DELETE

    def open_edit(self, item: dict) -> Optional[HeroSectionForm]:
        """
        Open the edit dialog for a listed record.

        Returns:
            HeroSectionForm or None when the record cannot be edited as shown

        Raises:
            ValueError: If the screen does not support editing
        """
        if not self.config.editable:
            raise ValueError(f"{self.config.label} records cannot be edited")
        self.close()
        try:
            record = HeroSection.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Cannot edit {self.config.singular} {item.get('id')}: {e.error_count()} invalid field(s)")
            self.notifier.error("Error", f"This {self.config.singular} has invalid data and cannot be edited")
            return None
        self.selected = item
        self.form = HeroSectionForm(self.image_base_url, record, self.store)
        self.modal = Modal.EDIT
        return self.form

    def close(self) -> None:
        """Close whatever dialog is open and release its previews."""
        if self.dialog is not None:
            self.dialog.close()
            self.dialog = None
        if self.form is not None:
            self.form.close()
            self.form = None
        self.selected = None
        self.modal = Modal.CLOSED

    # Mutations

    def validate(self, fields: Mapping[str, Any], file_count: int) -> Optional[str]:
        """Return the first validation message, or None when the form can be sent."""
        for name, message in self.config.required_fields:
            if not str(fields.get(name) or "").strip():
                return message
        for name, allowed in self.config.choices.items():
            value = fields.get(name)
            if value and value not in allowed:
                return f"Please choose a valid {name}"
        if file_count == 0:
            return self.config.file_message
        if self.config.single_file and file_count != 1:
            return "Please select a single image"
        return None

    def build_fields(self, fields: Mapping[str, Any]) -> List[Tuple[str, str]]:
        values = {name: factory() for name, factory in self.config.defaults.items()}
        values.update({name: value for name, value in fields.items() if value not in (None, "")})
        return [(name, str(values[name])) for name in self.config.field_names if name in values]

    def create(self, fields: Mapping[str, Any], dialog: Optional[UploadDialog] = None) -> bool:
        """
        Validate and submit the add form.

        Args:
            fields: Text fields of the form
            dialog: Upload dialog holding the selected files (defaults to the open one)

        Returns:
            bool: True when the record was created and the list reloaded
        """
        dialog = dialog or self.dialog
        files = dialog.files if dialog is not None else []

        message = self.validate(fields, len(files))
        if message:
            self.notifier.error("Error", message)
            return False

        form_fields = self.build_fields(fields)
        uploads = files[:1] if self.config.single_file else files
        try:
            self.client.create(self.config.path, form_fields, [(self.config.file_field, f) for f in uploads])
        except REQUEST_ERRORS as e:
            self.notifier.error("Error", self._message(e, f"Failed to create {self.config.singular}"))
            return False

        values = dict(form_fields)
        description = self.config.created_message.format(count=len(uploads), **values)
        if dialog is not None:
            dialog.close()
        self.close()
        self.notifier.success("Success", description)
        logger.info(f"Created {self.config.singular} with {len(uploads)} upload(s)")
        self.load()
        return True

    def confirm_delete(self) -> bool:
        """Delete the record picked with open_delete()."""
        if self.modal != Modal.DELETE or self.selected is None:
            return False

        item_id = self.selected.get("id")
        try:
            self.client.delete(self.config.path, item_id)
        except REQUEST_ERRORS as e:
            self.notifier.error("Error", self._message(e, f"Failed to delete {self.config.singular}."))
            self.close()
            return False

        self.items = [item for item in self.items if item.get("id") != item_id]
        self.close()
        self.notifier.success("Success", f"{self.config.label} deleted successfully.")
        logger.info(f"Deleted {self.config.singular} {item_id}")
        return True

    def update(self) -> bool:
        """Submit the edit form; only files added in this session are uploaded."""
        if self.modal != Modal.EDIT or self.form is None:
            return False

        form = self.form
        try:
            self.client.update(self.config.path, form.item_id, form.fields(), form.files())
        except REQUEST_ERRORS as e:
            self.notifier.error("Error", self._message(e, f"Failed to update {self.config.singular}"))
            return False

        self.close()
        self.notifier.success("Success", f"{self.config.label} updated successfully")
        self.load()
        return True

    @staticmethod
    def _message(error: Exception, fallback: str) -> str:
        if isinstance(error, GatewayError):
            return error.message
        if isinstance(error, ValidationError):
            return fallback
        return str(error) or fallback
