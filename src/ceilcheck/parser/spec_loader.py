"""Application description (app.json) loader."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ceilcheck.models.app import App

DEFAULT_SPEC_FILE = "app.json"


class DuplicateIdentifierError(ValueError):
    """Raised when a JSON object declares the same key twice."""

    def __init__(self, key: str, source: Path | None = None):
        message = f"identifier `{key}` is declared more than once"
        super().__init__(f"{source}: {message}" if source else message)
        self.key = key
        self.source = source


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise DuplicateIdentifierError(key)
        result[key] = value
    return result


class SpecLoader:
    """Loads application descriptions from JSON documents."""

    @staticmethod
    def find_spec_file(spec_root: Path) -> Path | None:
        """Find app.json in the given directory.

        Args:
            spec_root: Directory to search for app.json

        Returns:
            Path to app.json if found, None otherwise
        """
        spec_file = spec_root / DEFAULT_SPEC_FILE
        if spec_file.exists() and spec_file.is_file():
            return spec_file
        return None

    @staticmethod
    def parse_data(data: str) -> App:
        """Parse a JSON document into an App.

        Raises:
            DuplicateIdentifierError: If any object repeats a key
            ValueError: If the document is not valid JSON or not a valid app
        """
        try:
            spec_data = json.loads(data, object_pairs_hook=_reject_duplicate_keys)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")

        try:
            return App.model_validate(spec_data)
        except ValidationError as e:
            raise ValueError(f"Invalid application structure: {e}")

    @classmethod
    def parse_spec(cls, spec_file: Path) -> App:
        """Parse an application description file into the model.

        Args:
            spec_file: Path to the JSON document

        Returns:
            App: Parsed and structurally validated application

        Raises:
            FileNotFoundError: If the file doesn't exist
            DuplicateIdentifierError: If a task or resource name collides
            ValueError: If the file is invalid JSON or not a valid app
        """
        if not spec_file.exists():
            raise FileNotFoundError(f"Application file not found: {spec_file}")

        try:
            data = spec_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ValueError(f"Failed to read application file {spec_file}: {e}")

        try:
            return cls.parse_data(data)
        except DuplicateIdentifierError as e:
            raise DuplicateIdentifierError(e.key, source=spec_file) from e
        except ValueError as e:
            raise ValueError(f"{spec_file}: {e}")

    @classmethod
    def parse_spec_from_path(cls, path: Path) -> App:
        """Parse from a file path or a directory containing app.json.

        Raises:
            FileNotFoundError: If no application file is found
            ValueError: If the application file is invalid
        """
        if path.is_dir():
            spec_file = cls.find_spec_file(path)
            if spec_file is None:
                raise FileNotFoundError(f"No {DEFAULT_SPEC_FILE} found in {path}")
            return cls.parse_spec(spec_file)

        return cls.parse_spec(path)
