"""Argument vectors for the Resource Hacker command line."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, assert_never

from .errors import MissingParameterError, OperationValidationError
from .mask import EMPTY_MASK, normalize_mask

LOG_CONSOLE = "CONSOLE"
LOG_NONE = "NUL"


class Operation(StrEnum):
    EXTRACT_RESOURCE = "extract_resource"
    ADD_RESOURCE = "add_resource"
    DELETE_RESOURCE = "delete_resource"
    MODIFY_RESOURCE = "modify_resource"
    COMPILE_RC = "compile_rc"
    CHANGE_LANGUAGE = "change_language"
    RUN_SCRIPT = "run_script"
    GET_HELP = "get_help"
    LIST_RESOURCES = "list_resources"


class AddMode(StrEnum):
    ADD = "add"  # fail if the resource exists
    OVERWRITE = "addoverwrite"
    SKIP = "addskip"


class HelpTopic(StrEnum):
    GENERAL = "general"
    COMMANDLINE = "commandline"
    SCRIPT = "script"


@dataclass(frozen=True)
class CommandSpec:
    """One editor invocation, flag values already resolved."""

    operation: Operation
    open_path: str | None = None
    save_path: str | None = None
    action: str | None = None
    resource_path: str | None = None
    mask: str | None = None
    log: str | None = None
    script_path: str | None = None
    help_topic: HelpTopic | None = None

    def arguments(self) -> list[str]:
        if self.operation is Operation.RUN_SCRIPT:
            return ["-script", str(self.script_path)]
        if self.operation is Operation.GET_HELP:
            if self.help_topic in (HelpTopic.COMMANDLINE, HelpTopic.SCRIPT):
                return ["-help", str(self.help_topic)]
            return ["-help"]

        args: list[str] = []
        for flag, value in (
            ("-open", self.open_path),
            ("-save", self.save_path),
            ("-action", self.action),
            ("-resource", self.resource_path),
            ("-mask", self.mask),
            ("-log", self.log),
        ):
            if value is not None:
                args.extend([flag, value])
        return args


def change_language_action(language_id: int) -> str:
    return f"changelanguage({language_id})"


def _require(params: Mapping[str, Any], key: str) -> Any:
    value = params.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingParameterError(key)
    return value


def _optional(params: Mapping[str, Any], key: str, default: str) -> str:
    value = params.get(key)
    return default if value is None or value == "" else str(value)


def _add_mode(params: Mapping[str, Any]) -> AddMode:
    raw = params.get("mode")
    if raw is None or raw == "":
        return AddMode.ADD
    try:
        return AddMode(raw)
    except ValueError:
        choices = ", ".join(mode.value for mode in AddMode)
        raise OperationValidationError(f"invalid mode {raw!r}; expected one of: {choices}", parameter="mode") from None


def _help_topic(params: Mapping[str, Any]) -> HelpTopic:
    raw = params.get("topic")
    try:
        return HelpTopic(raw)
    except ValueError:
        return HelpTopic.GENERAL


def _language_id(params: Mapping[str, Any]) -> int:
    raw = _require(params, "language_id")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise OperationValidationError(
            f"language_id must be an integer, got {raw!r}", parameter="language_id"
        ) from None


def build_spec(operation: Operation, params: Mapping[str, Any]) -> CommandSpec:  # noqa: C901
    """Turn validated call parameters into a command description.

    File paths in ``params`` must already be absolute.

    Raises:
        OperationValidationError: If a parameter the operation needs is missing or invalid.
    """
    log = _optional(params, "log_file", LOG_CONSOLE)
    match operation:
        case Operation.EXTRACT_RESOURCE:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "output_path"),
                action="extract",
                mask=normalize_mask(params.get("resource_mask")),
                log=log,
            )
        case Operation.ADD_RESOURCE:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "output_file"),
                action=_add_mode(params).value,
                resource_path=_require(params, "resource_file"),
                mask=normalize_mask(params.get("resource_mask")),
                log=log,
            )
        case Operation.DELETE_RESOURCE:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "output_file"),
                action="delete",
                mask=normalize_mask(_require(params, "resource_mask")),
                log=log,
            )
        case Operation.MODIFY_RESOURCE:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "output_file"),
                action="modify",
                resource_path=_require(params, "resource_file"),
                mask=normalize_mask(params.get("resource_mask")),
                log=log,
            )
        case Operation.COMPILE_RC:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_rc"),
                save_path=_require(params, "output_res"),
                action="compile",
                log=log,
            )
        case Operation.CHANGE_LANGUAGE:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "output_file"),
                action=change_language_action(_language_id(params)),
                log=log,
            )
        case Operation.RUN_SCRIPT:
            return CommandSpec(operation, script_path=_require(params, "script_file"))
        case Operation.GET_HELP:
            return CommandSpec(operation, help_topic=_help_topic(params))
        case Operation.LIST_RESOURCES:
            return CommandSpec(
                operation,
                open_path=_require(params, "input_file"),
                save_path=_require(params, "artifact_path"),
                action="extract",
                mask=EMPTY_MASK,
                log=LOG_NONE,
            )
    assert_never(operation)


def build_arguments(operation: Operation, params: Mapping[str, Any]) -> list[str]:
    """Return the ordered argument vector for ``operation``."""
    return build_spec(operation, params).arguments()
