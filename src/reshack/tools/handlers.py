"""Operation handlers: validate, build, run, render."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, assert_never

from loguru import logger
from pydantic import BaseModel, ValidationError

from ..commands import Operation, build_arguments
from ..errors import ArtifactReadError, OperationValidationError
from ..paths import temporary_artifact
from ..rc_parser import parse_script, read_script
from ..runner import ExecutionOutcome
from .shared import (
    AddResourceInput,
    ChangeLanguageInput,
    CompileRcInput,
    DeleteResourceInput,
    ExtractResourceInput,
    GetHelpInput,
    ListResourcesInput,
    ModifyResourceInput,
    OperationContext,
    OperationResult,
    RunScriptInput,
)

PATH_PARAMETERS = (
    "input_file",
    "output_path",
    "output_file",
    "resource_file",
    "input_rc",
    "output_res",
    "script_file",
)
NO_HELP_OUTPUT = "No help output available"

INPUT_MODELS: dict[Operation, type[BaseModel]] = {
    Operation.LIST_RESOURCES: ListResourcesInput,
    Operation.EXTRACT_RESOURCE: ExtractResourceInput,
    Operation.ADD_RESOURCE: AddResourceInput,
    Operation.DELETE_RESOURCE: DeleteResourceInput,
    Operation.MODIFY_RESOURCE: ModifyResourceInput,
    Operation.COMPILE_RC: CompileRcInput,
    Operation.CHANGE_LANGUAGE: ChangeLanguageInput,
    Operation.RUN_SCRIPT: RunScriptInput,
    Operation.GET_HELP: GetHelpInput,
}


def _resolved(context: OperationContext, params: BaseModel) -> dict[str, Any]:
    values = params.model_dump(mode="json")
    for key in PATH_PARAMETERS:
        if key in values and values[key]:
            values[key] = context.resolve(values[key])
    return values


def _failure(summary: str, outcome: ExecutionOutcome) -> OperationResult:
    return OperationResult(f"✗ {summary}\n\nError: {outcome.error}\n{outcome.diagnostics}", is_error=True)


def _success(summary: str, outcome: ExecutionOutcome, output: str | None = None) -> OperationResult:
    location = f"Output: {output}\n\n" if output is not None else ""
    return OperationResult(f"✓ {summary}\n\n{location}{outcome.output.strip()}")


def _validation_failure(operation: Operation, exc: ValidationError | OperationValidationError) -> OperationResult:
    if isinstance(exc, ValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}" for error in exc.errors()
        )
    else:
        details = str(exc)
    return OperationResult(f"Error: invalid parameters for {operation}: {details}", is_error=True)


async def _run_edit(
    context: OperationContext,
    operation: Operation,
    params: BaseModel,
    *,
    output_key: str,
    success: str,
    failure: str,
) -> OperationResult:
    values = _resolved(context, params)
    outcome = await context.runner.execute(build_arguments(operation, values))
    if not outcome.succeeded:
        return _failure(failure, outcome)
    return _success(success, outcome, values[output_key])


async def extract_resource(context: OperationContext, params: ExtractResourceInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.EXTRACT_RESOURCE,
        params,
        output_key="output_path",
        success="Resource extraction completed successfully",
        failure="Resource extraction failed",
    )


async def add_resource(context: OperationContext, params: AddResourceInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.ADD_RESOURCE,
        params,
        output_key="output_file",
        success=f"Resource added successfully (mode: {params.mode})",
        failure="Failed to add resource",
    )


async def delete_resource(context: OperationContext, params: DeleteResourceInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.DELETE_RESOURCE,
        params,
        output_key="output_file",
        success="Resource deleted successfully",
        failure="Failed to delete resource",
    )


async def modify_resource(context: OperationContext, params: ModifyResourceInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.MODIFY_RESOURCE,
        params,
        output_key="output_file",
        success="Resource modified successfully",
        failure="Failed to modify resource",
    )


async def compile_rc(context: OperationContext, params: CompileRcInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.COMPILE_RC,
        params,
        output_key="output_res",
        success="RC file compiled successfully",
        failure="Failed to compile RC file",
    )


async def change_language(context: OperationContext, params: ChangeLanguageInput) -> OperationResult:
    return await _run_edit(
        context,
        Operation.CHANGE_LANGUAGE,
        params,
        output_key="output_file",
        success=f"Language changed successfully to ID {params.language_id}",
        failure="Failed to change language",
    )


async def run_script(context: OperationContext, params: RunScriptInput) -> OperationResult:
    values = _resolved(context, params)
    outcome = await context.runner.execute(build_arguments(Operation.RUN_SCRIPT, values))
    if not outcome.succeeded:
        return _failure("Script execution failed", outcome)
    return _success("Script executed successfully", outcome)


async def get_help(context: OperationContext, params: GetHelpInput) -> OperationResult:
    args = build_arguments(Operation.GET_HELP, params.model_dump(mode="json"))
    outcome = await context.runner.execute(args, timeout_seconds=context.settings.help_timeout_seconds)
    if not outcome.succeeded and not outcome.output:
        return _failure("Failed to get help", outcome)
    return OperationResult(outcome.output or NO_HELP_OUTPUT)


async def list_resources(context: OperationContext, params: ListResourcesInput) -> OperationResult:
    input_file = context.resolve(params.input_file)
    with temporary_artifact(".rc", directory=context.settings.temp_dir) as artifact:
        args = build_arguments(
            Operation.LIST_RESOURCES,
            {"input_file": input_file, "artifact_path": str(artifact)},
        )
        outcome = await context.runner.execute(args)
        if not outcome.succeeded:
            return OperationResult(
                f"✗ Failed to list resources (extraction failed)\n\nError: {outcome.error}\n"
                f"{outcome.diagnostics}",
                is_error=True,
            )
        try:
            inventory = parse_script(_read_artifact(artifact))
        except ArtifactReadError as exc:
            return OperationResult(f"Error reading generated RC file: {exc}", is_error=True)
    logger.debug("resources.listed input={} count={}", input_file, len(inventory))
    return OperationResult(f"✓ Resources listed for: {params.input_file}\n\n{inventory.render()}")


def _read_artifact(artifact: Path) -> str:
    try:
        return read_script(artifact)
    except OSError as exc:
        raise ArtifactReadError(str(exc)) from exc


async def dispatch(operation: Operation, context: OperationContext, arguments: Mapping[str, Any]) -> OperationResult:
    """Validate ``arguments`` for ``operation`` and run its handler.

    Every failure comes back as an error result; nothing raises past this point
    except programming errors.
    """
    try:
        params = INPUT_MODELS[operation].model_validate(dict(arguments))
    except ValidationError as exc:
        return _validation_failure(operation, exc)

    try:
        match operation:
            case Operation.LIST_RESOURCES:
                return await list_resources(context, params)
            case Operation.EXTRACT_RESOURCE:
                return await extract_resource(context, params)
            case Operation.ADD_RESOURCE:
                return await add_resource(context, params)
            case Operation.DELETE_RESOURCE:
                return await delete_resource(context, params)
            case Operation.MODIFY_RESOURCE:
                return await modify_resource(context, params)
            case Operation.COMPILE_RC:
                return await compile_rc(context, params)
            case Operation.CHANGE_LANGUAGE:
                return await change_language(context, params)
            case Operation.RUN_SCRIPT:
                return await run_script(context, params)
            case Operation.GET_HELP:
                return await get_help(context, params)
            case _:
                assert_never(operation)
    except OperationValidationError as exc:
        return _validation_failure(operation, exc)
