"""
Source file type interface
"""

from abc import ABC, abstractmethod

from pyx_shared.models.cards import ParseResult
from pyx_shared.models.import_config import FileConfig


class FileType(ABC):
    """A configured source file that can be validated and parsed into cards"""

    type_name: str = ""

    def __init__(self, config: FileConfig, config_index: int):
        self.config = config
        self.config_index = config_index

    @abstractmethod
    def validate(self) -> None:
        """
        Validate that the configuration for this file is usable

        Raises:
            ConfigurationError: configuration is invalid; the message says why
        """
        pass

    @abstractmethod
    def process(self) -> ParseResult:
        """
        Parse the file

        Returns:
            Black and white cards keyed by the deck names found in the file
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self.config_index}, name={self.config.name!r})"
