"""Domain models for the CSV -> deployment-parameters generator.

Rows coming out of the tabular reader, the parameter documents built from
them, and the result object returned to the CLI.
"""

from .conversion_result import ConversionResult
from .parameter_document import (
    CONTENT_VERSION,
    DEPLOYMENT_PARAMETERS_SCHEMA,
    ParameterDocument,
    ParameterEntry,
)
from .row import Row, RowData

__all__ = [
    # Input models
    "Row",
    "RowData",
    # Output models
    "ParameterEntry",
    "ParameterDocument",
    "CONTENT_VERSION",
    "DEPLOYMENT_PARAMETERS_SCHEMA",
    "ConversionResult",
]
