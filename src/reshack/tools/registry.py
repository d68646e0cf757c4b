"""Operation registry with call logging."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Any

from loguru import logger

from ..errors import UnknownOperationError
from .catalog import OperationCatalog, OperationSpec, build_operation_catalog
from .handlers import dispatch
from .shared import OperationContext, OperationResult


def _shorten_text(text: str, width: int = 30, placeholder: str = "...") -> str:
    """Shorten text to width characters, cutting in the middle of words if needed."""
    if len(text) <= width:
        return text

    available = width - len(placeholder)
    if available <= 0:
        return placeholder

    return text[:available] + placeholder


def _render_params(arguments: Mapping[str, Any]) -> str:
    params: list[str] = []
    for key, value in arguments.items():
        try:
            rendered = json.dumps(value, ensure_ascii=False)
        except TypeError:
            rendered = repr(value)
        value = _shorten_text(rendered, width=30, placeholder="...")
        if value.startswith('"') and not value.endswith('"'):
            value = value + '"'
        params.append(f"{key}={value}")
    return ", ".join(params)


class OperationRegistry:
    """Route named calls to their handlers within one shared context."""

    def __init__(self, context: OperationContext, catalog: OperationCatalog | None = None) -> None:
        self.context = context
        self.catalog = catalog or build_operation_catalog()

    def has(self, name: str) -> bool:
        return self.catalog.spec(name) is not None

    def get(self, name: str) -> OperationSpec | None:
        return self.catalog.spec(name)

    def descriptors(self) -> list[OperationSpec]:
        return self.catalog.specs()

    def detail(self, name: str) -> str:
        spec = self.get(name)
        if spec is None:
            raise UnknownOperationError(name)
        return f"name: {spec.name}\ndescription: {spec.description}\nschema: {json.dumps(spec.input_schema())}"

    async def execute(self, name: str, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        arguments = arguments or {}
        spec = self.get(name)
        if spec is None:
            logger.warning("tool.call.unknown name={}", name)
            return OperationResult(f"Error: {UnknownOperationError(name)}", is_error=True)

        logger.info("tool.call.start name={} {{ {} }}", name, _render_params(arguments))
        start = time.monotonic()
        try:
            result = await dispatch(spec.operation, self.context, arguments)
        except Exception:
            logger.exception("tool.call.error name={}", name)
            raise
        finally:
            duration = time.monotonic() - start
            logger.info("tool.call.end name={} duration={:.3f}ms", name, duration * 1000)
        if result.is_error:
            logger.warning("tool.call.failed name={}", name)
        return result
