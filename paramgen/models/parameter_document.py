from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

"""ParameterEntry / ParameterDocument models.

Output document shape (one per row):

    {
      "$schema": "<deployment parameters schema>",
      "contentVersion": "1.0.0.0",
      "parameters": {"<column>": {"value": "<cell>"}, ...}
    }
"""

__all__ = [
    "DEPLOYMENT_PARAMETERS_SCHEMA",
    "CONTENT_VERSION",
    "ParameterEntry",
    "ParameterDocument",
]

DEPLOYMENT_PARAMETERS_SCHEMA = (
    "http://schema.management.azure.com/schemas/2015-01-01/deploymentParameters.json#"
)
CONTENT_VERSION = "1.0.0.0"


@dataclass(frozen=True)
class ParameterEntry:
    """One column of one row, destined for the ``parameters`` section."""
    name: str
    value: Any

    def wrapped(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass
class ParameterDocument:
    """Full output artifact for a single row.

    ``parameters`` holds the wrapped values keyed by parameter name. Adding an
    entry whose name already exists replaces the earlier one (last write wins).
    """
    parameters: dict[str, dict[str, Any]] = field(default_factory=dict)
    schema: str = DEPLOYMENT_PARAMETERS_SCHEMA
    content_version: str = CONTENT_VERSION

    @classmethod
    def from_entries(cls, entries: Iterable[ParameterEntry]) -> ParameterDocument:
        doc = cls()
        for entry in entries:
            doc.add(entry)
        return doc

    def add(self, entry: ParameterEntry) -> None:
        self.parameters[entry.name] = entry.wrapped()

    def to_dict(self) -> dict[str, Any]:
        """Return the envelope as a dict with the fixed key order."""
        return {
            "$schema": self.schema,
            "contentVersion": self.content_version,
            "parameters": self.parameters,
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to JSON text.

        Compact separators are used when ``indent`` is None so the output
        matches ``{"$schema":"...","contentVersion":"1.0.0.0",...}`` exactly.
        Raises TypeError for values json cannot encode and ValueError for
        NaN or infinity, which have no JSON representation.
        """
        separators = (",", ":") if indent is None else None
        return json.dumps(
            self.to_dict(),
            ensure_ascii=False,
            allow_nan=False,
            indent=indent,
            separators=separators,
        )
