"""Loads the system prompt that opens every conversation."""
import logging
from pathlib import Path
from typing import Optional, Union

from config import SYSTEM_SPEC_PATH, DEFAULT_SYSTEM_SPEC

logger = logging.getLogger(__name__)


class SpecificationLoader:
    """Reads the system specification text, falling back to a default."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        default: str = DEFAULT_SYSTEM_SPEC
    ):
        self.path = Path(path or SYSTEM_SPEC_PATH)
        self.default = default

    def load(self) -> str:
        """
        Load the system specification.

        Never raises: a missing, unreadable or empty file yields the default text.

        Returns:
            System prompt text
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read system spec at {self.path}, using default: {e}")
            return self.default

        if not text.strip():
            logger.warning(f"System spec at {self.path} is empty, using default")
            return self.default

        logger.debug(f"Loaded system spec from {self.path} ({len(text)} chars)")
        return text
