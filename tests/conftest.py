from __future__ import annotations

import sys
from pathlib import Path

import pytest

from reshack.config import Settings
from reshack.tools import OperationContext, OperationRegistry

# Stands in for ResourceHacker.exe. "PE files" here are text files holding the
# resource script that extraction should produce.
FAKE_EDITOR = '''\
import pathlib
import sys

args = sys.argv[1:]
if args and args[0] == "-help":
    topic = args[1] if len(args) > 1 else "general"
    print(f"Resource Hacker help: {topic}")
    sys.exit(0)

opts = dict(zip(args[0::2], args[1::2]))
if "-script" in opts:
    script = pathlib.Path(opts["-script"])
    if not script.exists():
        print(f"Error: script not found: {script}", file=sys.stderr)
        sys.exit(1)
    print(f"ran {len(script.read_text().splitlines())} commands")
    sys.exit(0)

source = pathlib.Path(opts["-open"])
if not source.exists():
    print(f"Error: Cannot open file: {source}", file=sys.stderr)
    sys.exit(1)

action = opts["-action"]
target = pathlib.Path(opts["-save"])
if action == "extract":
    target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
    (target.parent / "ICON_1.ico").write_bytes(b"\\x00\\x00\\x01\\x00")
else:
    target.write_text(f"{action} {opts.get('-resource', '')} {opts.get('-mask', '')}", encoding="utf-8")
if opts.get("-log") != "NUL":
    print(f"Success: {action} {opts.get('-mask', '')}".rstrip())
'''


@pytest.fixture
def fake_editor(tmp_path: Path) -> Path:
    if sys.platform == "win32":
        pytest.skip("fake editor relies on a shebang script")
    script = tmp_path / "bin" / "ResourceHacker"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n{FAKE_EDITOR}", encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture
def settings(tmp_path: Path, fake_editor: Path) -> Settings:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return Settings(_env_file=None, executable=str(fake_editor), temp_dir=temp_dir)


@pytest.fixture
def context(settings: Settings, tmp_path: Path) -> OperationContext:
    return OperationContext.from_settings(settings, cwd=tmp_path)


@pytest.fixture
def registry(context: OperationContext) -> OperationRegistry:
    return OperationRegistry(context)
