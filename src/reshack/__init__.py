"""reshack - drive Resource Hacker from MCP clients and the command line."""

__version__ = "1.0.0"

from .commands import AddMode, CommandSpec, HelpTopic, Operation, build_arguments  # noqa: E402
from .mask import ResourceMask, normalize_mask  # noqa: E402
from .rc_parser import ResourceEntry, ResourceInventory, parse_script  # noqa: E402
from .runner import ExecutionOutcome, ProcessRunner  # noqa: E402

__all__ = [
    "AddMode",
    "CommandSpec",
    "ExecutionOutcome",
    "HelpTopic",
    "Operation",
    "ProcessRunner",
    "ResourceEntry",
    "ResourceInventory",
    "ResourceMask",
    "__version__",
    "build_arguments",
    "normalize_mask",
    "parse_script",
]
