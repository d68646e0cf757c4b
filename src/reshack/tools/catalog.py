"""Static catalog of the operations exposed to callers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..commands import Operation
from .handlers import INPUT_MODELS


@dataclass(frozen=True)
class OperationSpec:
    operation: Operation
    description: str
    input_model: type[BaseModel]

    @property
    def name(self) -> str:
        return self.operation.value

    def input_schema(self) -> dict[str, Any]:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("required", [])
        return schema


class OperationCatalog:
    """Ordered lookup of operation specs by public name."""

    def __init__(self, specs: Iterable[OperationSpec] | None = None) -> None:
        self._specs: dict[str, OperationSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: OperationSpec) -> None:
        self._specs[spec.name] = spec

    def spec(self, name: str) -> OperationSpec | None:
        return self._specs.get(name)

    def specs(self) -> list[OperationSpec]:
        return list(self._specs.values())

    def render(self) -> str:
        if not self._specs:
            return "(no operations)"
        return "\n".join(f"{spec.name:18} {spec.description}" for spec in self._specs.values())


_DESCRIPTIONS: dict[Operation, str] = {
    Operation.LIST_RESOURCES: "List all resources in a PE file (exe, dll, etc) or resource file.",
    Operation.EXTRACT_RESOURCE: (
        "Extract resource(s) from a PE file (exe, dll, etc) or resource file. "
        "Can extract single resource or multiple resources to a folder."
    ),
    Operation.ADD_RESOURCE: (
        "Add a new resource to a PE file. Fails if resource already exists. "
        "Use addoverwrite or addskip for different behaviors."
    ),
    Operation.DELETE_RESOURCE: "Delete resource(s) from a PE file",
    Operation.MODIFY_RESOURCE: "Modify an existing resource in a PE file",
    Operation.COMPILE_RC: "Compile a resource script (.rc) file to a binary resource (.res) file",
    Operation.CHANGE_LANGUAGE: "Change the language of all resources in a PE file",
    Operation.RUN_SCRIPT: "Execute a ResourceHacker script file with multiple commands",
    Operation.GET_HELP: "Get ResourceHacker command-line help information",
}


def build_operation_catalog() -> OperationCatalog:
    return OperationCatalog(
        OperationSpec(operation, _DESCRIPTIONS[operation], INPUT_MODELS[operation]) for operation in Operation
    )
