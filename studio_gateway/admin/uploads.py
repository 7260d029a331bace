"""
Upload dialogs and their local preview URLs.

Every selected file gets a blob: preview URL backed by a small WebP thumbnail.
URLs are live until revoked; dialogs revoke what they created when files are
replaced, removed, or the dialog closes.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from studio_gateway.utils.images import make_preview

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class ObjectURLStore:
    """
    Registry of live preview URLs.

    Attributes:
        created: Number of URLs ever created
        revoked: Number of successful revocations
    """

    def __init__(self):
        self._objects: Dict[str, Tuple[bytes, str]] = {}
        self.created = 0
        self.revoked = 0

    def create(self, selected: SelectedFile) -> str:
        """Build a preview for the file and return its blob: URL."""
        preview, content_type = make_preview(selected.content, selected.content_type)
        url = f"blob:{uuid.uuid4()}"
        self._objects[url] = (preview, content_type)
        self.created += 1
        return url

    def revoke(self, url: str) -> bool:
        """
        Release a preview URL.

        Returns:
            bool: False when the URL was unknown or already revoked
        """
        if self._objects.pop(url, None) is None:
            return False
        self.revoked += 1
        return True

    def resolve(self, url: str) -> Optional[Tuple[bytes, str]]:
        return self._objects.get(url)

    @property
    def live_count(self) -> int:
        return len(self._objects)


class UploadDialog:
    """
    File selection state of one upload dialog.
    files[i] is always previewed by previews[i].

    Use as a context manager so previews are released when the dialog goes away:

        with UploadDialog(store) as dialog:
            dialog.select_files(files)
            ...
    """

    def __init__(self, store: Optional[ObjectURLStore] = None):
        self.store = store or ObjectURLStore()
        self.files: List[SelectedFile] = []
        self.previews: List[str] = []
        self.closed = False

    def __enter__(self) -> "UploadDialog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self.files)

    def select_files(self, files: Iterable[SelectedFile]) -> None:
        """Replace the selection; previews of the old selection are revoked."""
        self._revoke_all()
        self.files = []
        self.previews = []
        self.add_files(files)

    def add_files(self, files: Iterable[SelectedFile]) -> None:
        """Append files to the current selection."""
        self._ensure_open()
        for selected in files:
            self.files.append(selected)
            self.previews.append(self.store.create(selected))

    def remove_file(self, index: int) -> SelectedFile:
        """
        Drop file and preview at index.

        Raises:
            IndexError: When index is out of range
        """
        if not 0 <= index < len(self.files):
            raise IndexError(f"No selected file at index {index}")
        self.store.revoke(self.previews[index])
        self.previews.pop(index)
        return self.files.pop(index)

    def close(self) -> None:
        """Revoke every live preview. Closing twice does nothing."""
        if self.closed:
            return
        self._revoke_all()
        self.files = []
        self.previews = []
        self.closed = True

    def reset(self) -> None:
        """Clear the selection but keep the dialog usable."""
        self._revoke_all()
        self.files = []
        self.previews = []
        self.closed = False

    def _revoke_all(self) -> None:
        for url in self.previews:
            self.store.revoke(url)
        if self.previews:
            logger.debug(f"Revoked {len(self.previews)} preview URL(s)")

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError("Upload dialog is closed")
