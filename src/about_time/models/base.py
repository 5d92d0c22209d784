"""Base model class with common functionality for all About Time models."""

from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T", bound="TimeModel")


class TimeModel(BaseModel):
    """Base model class with JSON serialization support.

    Field names are snake_case in Python and camelCase on the wire, so
    template libraries written by other tools load without translation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Accept both the wire alias and the Python field name
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_json(self, indent: int = 2) -> str:
        """Serialize model to a camelCase JSON string.

        Args:
            indent: Indentation level for pretty printing (default: 2)

        Returns:
            JSON string representation of the model
        """
        return self.model_dump_json(indent=indent, by_alias=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize model to a camelCase dictionary."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_json(cls: type[T], json_str: str) -> T:
        """Deserialize model from JSON string."""
        return cls.model_validate_json(json_str)

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Deserialize model from dictionary."""
        return cls.model_validate(data)

    @classmethod
    def load_from_file(cls: type[T], file_path: str | Path) -> T:
        """Load model from a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            Model instance
        """
        path = Path(file_path)
        return cls.from_json(path.read_text(encoding="utf-8"))

    def save_to_file(self, file_path: str | Path, indent: int = 2) -> None:
        """Save model to a JSON file.

        Args:
            file_path: Path to save the JSON file
            indent: Indentation level for pretty printing (default: 2)
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(indent=indent), encoding="utf-8")
