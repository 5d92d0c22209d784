"""Template Storage - loads and saves the template library as JSON.

Responsible for:
- Loading a TemplateStore, falling back to an empty one on any failure
- Saving a TemplateStore, with a user-facing advisory when the disk is full
"""

import errno
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from about_time.models import TemplateLibrary, TemplateStore

logger = logging.getLogger(__name__)

QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}

QUOTA_EXCEEDED_MESSAGE = "Storage quota exceeded. Please delete some templates."


class TemplateStorage:
    """JSON file persistence for a template library."""

    def __init__(
        self,
        library_path: str | Path,
        on_quota_exceeded: Optional[Callable[[str], None]] = None,
    ):
        """Initialize storage for one library file.

        Args:
            library_path: Path of the library JSON file
            on_quota_exceeded: Called with an advisory message when a save
                fails because the storage is full
        """
        self.library_path = Path(library_path)
        self.on_quota_exceeded = on_quota_exceeded

    def load(self) -> TemplateStore:
        """Load the library; returns an empty store if it cannot be read."""
        if not self.library_path.exists():
            return TemplateStore()

        try:
            library = TemplateLibrary.load_from_file(self.library_path)
            return TemplateStore.from_library(library)
        except (OSError, ValueError) as e:
            logger.error("Failed to load templates from %s: %s", self.library_path, e)
            return TemplateStore()

    def save(self, store: TemplateStore) -> bool:
        """Write the library to disk.

        Write failures are logged and never raised.

        Returns:
            True if the library was written
        """
        try:
            store.to_library().save_to_file(self.library_path)
            return True
        except OSError as e:
            logger.error("Failed to save templates to %s: %s", self.library_path, e)
            if e.errno in QUOTA_ERRNOS:
                logger.warning(QUOTA_EXCEEDED_MESSAGE)
                if self.on_quota_exceeded is not None:
                    self.on_quota_exceeded(QUOTA_EXCEEDED_MESSAGE)
            return False
