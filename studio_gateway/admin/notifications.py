"""
Toast notifications raised by the admin console.
"""
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

logger = logging.getLogger(__name__)


@dataclass
class Toast:
    level: Literal["success", "error"]
    title: str
    description: Optional[str] = None


class Notifier:
    """Collects toasts in display order and mirrors them to the log."""

    def __init__(self):
        self.toasts: List[Toast] = []

    def success(self, title: str, description: Optional[str] = None) -> Toast:
        toast = Toast("success", title, description)
        self.toasts.append(toast)
        logger.info(f"{title}: {description or ''}")
        return toast

    def error(self, title: str, description: Optional[str] = None) -> Toast:
        toast = Toast("error", title, description)
        self.toasts.append(toast)
        logger.warning(f"{title}: {description or ''}")
        return toast

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def clear(self) -> None:
        self.toasts.clear()
