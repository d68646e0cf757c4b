"""Shared operation input models and call context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ..commands import AddMode, HelpTopic
from ..config import Settings
from ..mask import EMPTY_MASK
from ..paths import resolve_path
from ..runner import ProcessRunner

LOG_FILE_DESCRIPTION = "Log file path. Use 'CONSOLE' or 'CON' for console output, 'NUL' to disable logging"
MASK_DESCRIPTION = "Resource mask 'Type,Name,Language' (e.g., 'ICONGROUP,MAINICON,0'). Empty parts can be omitted."


class ListResourcesInput(BaseModel):
    """List the resources contained in a PE or resource file."""

    input_file: str = Field(..., description="Path to the PE file or resource file to inspect")


class ExtractResourceInput(BaseModel):
    """Extract resources to a file or folder."""

    input_file: str = Field(..., description="Path to the input PE file or resource file")
    output_path: str = Field(..., description="Output file path or folder path for extraction")
    resource_mask: str = Field(
        default=EMPTY_MASK,
        description="Resource mask in format 'Type,Name,Language' (e.g., 'ICON,,' or 'BITMAP,128,0'). "
        "Empty parts can be omitted.",
    )
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class AddResourceInput(BaseModel):
    """Add a resource to a PE file."""

    input_file: str = Field(..., description="Path to the PE file to modify")
    output_file: str = Field(..., description="Path for the output file")
    resource_file: str = Field(..., description="Path to the resource file to add (e.g., .ico, .bmp, .rc, .res)")
    resource_mask: str = Field(default=EMPTY_MASK, description=MASK_DESCRIPTION)
    mode: AddMode = Field(
        default=AddMode.ADD,
        description="Add mode: 'add' (fail if exists), 'addoverwrite' (replace if exists), 'addskip' (skip if exists)",
    )
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class DeleteResourceInput(BaseModel):
    """Delete resources from a PE file."""

    input_file: str = Field(..., description="Path to the PE file to modify")
    output_file: str = Field(..., description="Path for the output file")
    resource_mask: str = Field(..., description="Resource mask 'Type,Name,Language' to identify resources to delete")
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class ModifyResourceInput(BaseModel):
    """Replace an existing resource in a PE file."""

    input_file: str = Field(..., description="Path to the PE file to modify")
    output_file: str = Field(..., description="Path for the output file")
    resource_file: str = Field(..., description="Path to the new resource file")
    resource_mask: str = Field(default=EMPTY_MASK, description=MASK_DESCRIPTION)
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class CompileRcInput(BaseModel):
    """Compile a resource script into a binary resource file."""

    input_rc: str = Field(..., description="Path to the .rc resource script file")
    output_res: str = Field(..., description="Path for the output .res file")
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class ChangeLanguageInput(BaseModel):
    """Change the language of every resource in a PE file."""

    input_file: str = Field(..., description="Path to the PE file to modify")
    output_file: str = Field(..., description="Path for the output file")
    language_id: int = Field(
        ...,
        description="Language ID (e.g., 1033 for English-US, 1049 for Russian, 2052 for Chinese-Simplified)",
    )
    log_file: str = Field(default="CONSOLE", description=LOG_FILE_DESCRIPTION)


class RunScriptInput(BaseModel):
    """Run a Resource Hacker script file."""

    script_file: str = Field(..., description="Path to the ResourceHacker script file")


class GetHelpInput(BaseModel):
    """Show Resource Hacker help."""

    topic: HelpTopic = Field(default=HelpTopic.GENERAL, description="Help topic to display")

    @field_validator("topic", mode="before")
    @classmethod
    def _fallback_topic(cls, value: object) -> object:
        if isinstance(value, str) and value in {topic.value for topic in HelpTopic}:
            return value
        return HelpTopic.GENERAL


@dataclass(frozen=True)
class OperationContext:
    """Everything a handler needs besides its own parameters."""

    settings: Settings
    runner: ProcessRunner
    cwd: Path | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, cwd: Path | None = None) -> OperationContext:
        return cls(settings=settings, runner=ProcessRunner(settings), cwd=cwd)

    def resolve(self, raw_path: str) -> str:
        return resolve_path(raw_path, self.cwd)


@dataclass(frozen=True)
class OperationResult:
    """Rendered operation outcome."""

    text: str
    is_error: bool = False
