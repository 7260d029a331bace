"""
Add/edit form for hero sections.
"""
from typing import List, Optional, Sequence, Tuple

from studio_gateway.admin.uploads import ObjectURLStore, SelectedFile, UploadDialog
from studio_gateway.schemas import HeroSection
from studio_gateway.utils.images import resolve_image_url

HERO_STATUSES = ("active", "inactive")


class HeroSectionForm:
    """
    Keeps images already stored on the backend apart from files added in this
    session, so an edit uploads only the new files.

    The form shows one combined image list: existing paths first, then new
    files. Indexes passed to remove_image refer to that combined list.
    """

    def __init__(
        self,
        image_base_url: str,
        initial: Optional[HeroSection] = None,
        store: Optional[ObjectURLStore] = None,
    ):
        self.image_base_url = image_base_url
        self.uploads = UploadDialog(store)
        self.existing_paths: List[str] = list(initial.image_paths) if initial else []
        self.status = initial.status if initial else "active"
        self.item_id = initial.id if initial else None

    def __enter__(self) -> "HeroSectionForm":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_edit(self) -> bool:
        return self.item_id is not None

    @property
    def new_files(self) -> List[SelectedFile]:
        return self.uploads.files

    @property
    def total_images(self) -> int:
        return len(self.existing_paths) + len(self.uploads)

    def previews(self) -> List[str]:
        """Preview URLs in display order (existing images, then new files)."""
        existing = [resolve_image_url(path, self.image_base_url) for path in self.existing_paths]
        return existing + list(self.uploads.previews)

    def set_status(self, value: str) -> None:
        if value not in HERO_STATUSES:
            raise ValueError(f"Status must be one of {', '.join(HERO_STATUSES)}")
        self.status = value

    def add_images(self, files: Sequence[SelectedFile]) -> None:
        self.uploads.add_files(files)

    def remove_image(self, index: int) -> None:
        if index < len(self.existing_paths):
            self.existing_paths.pop(index)
        else:
            self.uploads.remove_file(index - len(self.existing_paths))

    def fields(self) -> List[Tuple[str, str]]:
        return [("status", self.status)]

    def files(self) -> List[Tuple[str, SelectedFile]]:
        return [("images[]", f) for f in self.uploads.files]

    def close(self) -> None:
        self.uploads.close()
