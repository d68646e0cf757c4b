"""Operation surface for reshack."""

from .catalog import OperationCatalog, OperationSpec, build_operation_catalog
from .handlers import dispatch
from .registry import OperationRegistry
from .shared import OperationContext, OperationResult

__all__ = [
    "OperationCatalog",
    "OperationContext",
    "OperationRegistry",
    "OperationResult",
    "OperationSpec",
    "build_operation_catalog",
    "dispatch",
]
