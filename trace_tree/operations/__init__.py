"""Operations deriving calculated properties over property trees."""

from .base import FieldPath, Operation, OperationPipeline, resolve_path
from .add_duration import AddDuration
from .add_status import AddStatus
from .set_formatters import SetFormatters
from .pipelines import operations_for

__all__ = [
    "FieldPath",
    "Operation",
    "OperationPipeline",
    "resolve_path",
    "AddDuration",
    "AddStatus",
    "SetFormatters",
    "operations_for",
]
