"""Export and import of whole gift documents.

The interchange format is pretty-printed JSON described by the bundled
``schemas/document-schema.json``. Import is all-or-nothing: a payload that
fails to parse or validate raises :class:`ValidationError` and yields no
document at all.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from gift_builder.core.document import Document
from gift_builder.errors import ValidationError
from gift_builder.settings import settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "document-schema.json"


def load_schema() -> Dict[str, Any]:
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _format_path(path: Any) -> str:
    parts = [f"[{p}]" if isinstance(p, int) else f".{p}" for p in path]
    return "$" + "".join(parts)


def _check(validator: jsonschema.Draft7Validator, data: Any, what: str, **context: Any) -> None:
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        first = errors[0]
        where = _format_path(first.absolute_path)
        raise ValidationError(
            f"{what} at {where}: {first.message}",
            context={
                "reason": "schema",
                "path": where,
                "errors": [f"{_format_path(e.absolute_path)}: {e.message}" for e in errors],
                **context,
            },
        )


class ConfigSerializer:
    """Encodes documents to, and decodes them from, the interchange format.

    Parameters
    ----------
    schema : dict, optional
        JSON Schema to validate imports against. Defaults to the bundled one.
    indent : int
        Indentation of exported JSON.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None, indent: int = 2) -> None:
        self._schema = schema if schema is not None else load_schema()
        self._validator = jsonschema.Draft7Validator(self._schema)
        self._fragment_validators: Dict[str, jsonschema.Draft7Validator] = {}
        self.indent = indent

    def export_config(self, document: Document) -> str:
        """Serialize ``document`` to pretty-printed JSON text."""
        return json.dumps(document.to_dict(), indent=self.indent, ensure_ascii=False)

    def import_config(self, text: str) -> Document:
        """Parse and validate ``text`` into a new :class:`Document`.

        Raises
        ------
        ValidationError
            If ``text`` is not JSON, does not match the schema, or repeats a
            block id.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Malformed configuration: {e}", context={"reason": "parse"}
            ) from e
        self.validate(data)
        try:
            return Document.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(
                f"Malformed configuration: {e}", context={"reason": "decode"}
            ) from e

    def validate(self, data: Any) -> None:
        """Check decoded JSON against the schema and the unique-id rule."""
        _check(self._validator, data, "Malformed configuration")
        duplicates = self._duplicate_ids(data["blocks"])
        if duplicates:
            raise ValidationError(
                f"Malformed configuration: duplicate block ids {duplicates}",
                context={"reason": "duplicate_ids", "ids": duplicates},
            )

    def validate_content(self, type_tag: str, data: Any) -> None:
        """Check one block's content dict against the definition for ``type_tag``.

        Tags without a definition only need an object. Run before a record
        enters the document so that every saved document imports again.
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Invalid {type_tag} content: expected an object",
                context={"reason": "schema", "path": "$", "type": type_tag},
            )
        if type_tag in self._schema.get("definitions", {}).get("content", {}):
            _check(self._fragment(f"content/{type_tag}"), data, f"Invalid {type_tag} content", type=type_tag)

    def validate_theme(self, data: Any) -> None:
        _check(self._fragment("themeDef"), data, "Invalid theme")

    def _fragment(self, name: str) -> jsonschema.Draft7Validator:
        validator = self._fragment_validators.get(name)
        if validator is None:
            validator = jsonschema.Draft7Validator(
                {"definitions": self._schema.get("definitions", {}), "$ref": f"#/definitions/{name}"}
            )
            self._fragment_validators[name] = validator
        return validator

    def is_valid(self, text: str) -> bool:
        try:
            self.import_config(text)
        except ValidationError:
            return False
        return True

    @staticmethod
    def _duplicate_ids(blocks: List[Dict[str, Any]]) -> List[str]:
        seen = set()
        duplicates: List[str] = []
        for block in blocks:
            block_id = block["id"]
            if block_id in seen and block_id not in duplicates:
                duplicates.append(block_id)
            seen.add(block_id)
        return duplicates

    @staticmethod
    def export_filename() -> str:
        """File name offered for downloaded exports."""
        return settings.export_filename

    def write(self, document: Document, path: Optional[Path] = None) -> Path:
        """Write an export of ``document`` to ``path`` (default: export filename)."""
        target = Path(path) if path is not None else Path(self.export_filename())
        with open(target, "w", encoding="utf-8") as f:
            f.write(self.export_config(document))
        logger.info("Exported %r (%d blocks) to %s", document.title, len(document.blocks), target)
        return target

    def read(self, path: Path) -> Document:
        """Import the file at ``path``."""
        with open(path, encoding="utf-8") as f:
            return self.import_config(f.read())
