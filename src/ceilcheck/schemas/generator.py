"""JSON Schema generation from the Pydantic application model."""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import BaseModel

from ..models.app import App

logger = logging.getLogger(__name__)

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


class SchemaGenerator:
    """Generates the JSON schema of the application document format."""

    def __init__(self):
        self.schemas: dict[str, dict[str, Any]] = {}

    def generate_all_schemas(self) -> dict[str, dict[str, Any]]:
        """Generate JSON schemas for every document type.

        Returns:
            Dictionary mapping schema names to JSON schemas
        """
        self.schemas = {
            "app": self._model_to_schema(
                App,
                "ceilcheck-app-v1",
                "JSON Schema for ceilcheck application descriptions",
                "https://ceilcheck.dev/schemas/app.v1.schema.json",
            ),
        }

        logger.info(f"Generated {len(self.schemas)} JSON schemas")
        return self.schemas

    def save_schemas(self, output_dir: Path) -> dict[str, Path]:
        """Save generated schemas to files.

        Args:
            output_dir: Directory to save schema files

        Returns:
            Dictionary mapping schema names to file paths
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        schema_files = {}

        for schema_name, schema in self.schemas.items():
            schema_file = output_dir / f"{schema_name}.schema.json"

            with open(schema_file, "w", encoding="utf-8") as f:
                json.dump(schema, f, indent=2, ensure_ascii=False)

            schema_files[schema_name] = schema_file
            logger.debug(f"Saved schema: {schema_file}")

        return schema_files

    def _model_to_schema(
        self,
        model_class: type[BaseModel],
        title: str,
        description: str,
        schema_id: str
    ) -> dict[str, Any]:
        """Convert Pydantic model to JSON schema (input side, by alias)."""
        schema = model_class.model_json_schema(by_alias=True, mode="validation")

        schema["$schema"] = SCHEMA_DIALECT
        schema["$id"] = schema_id
        schema["title"] = title
        schema["description"] = description

        return schema

    def validate_schema_compliance(self) -> list[str]:
        """Check generated schemas against the JSON Schema meta-schema.

        Returns:
            List of validation errors (empty if all schemas are valid)
        """
        errors = []

        for schema_name, schema in self.schemas.items():
            try:
                jsonschema.Draft202012Validator.check_schema(schema)
                logger.debug(f"Schema {schema_name} is valid")
            except jsonschema.SchemaError as e:
                error_msg = f"Schema {schema_name} is invalid: {e.message}"
                errors.append(error_msg)
                logger.error(error_msg)

        return errors
