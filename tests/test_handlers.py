import asyncio
from pathlib import Path

import pytest

from reshack.commands import Operation
from reshack.rc_parser import EMPTY_INVENTORY_MESSAGE
from reshack.tools import OperationContext, dispatch
from reshack.tools.handlers import list_resources
from reshack.tools.shared import ListResourcesInput

SCRIPT = """\
LANGUAGE 9, 1
MAINICON ICON "ICON_1.ico"
1 RT_MANIFEST "manifest.xml"
"""


def _pe(tmp_path: Path, name: str = "app.exe", script: str = SCRIPT) -> Path:
    path = tmp_path / name
    path.write_text(script, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_extract_success_reports_resolved_output(context: OperationContext, tmp_path: Path) -> None:
    _pe(tmp_path)

    result = await dispatch(
        Operation.EXTRACT_RESOURCE, context, {"input_file": "app.exe", "output_path": "out.rc", "resource_mask": ""}
    )

    assert not result.is_error
    assert result.text.startswith("✓ Resource extraction completed successfully")
    assert f"Output: {tmp_path / 'out.rc'}" in result.text
    assert "Success: extract ,," in result.text
    assert (tmp_path / "out.rc").read_text(encoding="utf-8") == SCRIPT


@pytest.mark.asyncio
async def test_extract_missing_input_reports_diagnostics(context: OperationContext, tmp_path: Path) -> None:
    result = await dispatch(
        Operation.EXTRACT_RESOURCE, context, {"input_file": "missing.exe", "output_path": "out.rc"}
    )

    assert result.is_error
    assert result.text.startswith("✗ Resource extraction failed")
    assert "Error: Command failed with exit code 1" in result.text
    assert f"Cannot open file: {tmp_path / 'missing.exe'}" in result.text


@pytest.mark.asyncio
async def test_missing_required_parameter_never_spawns(context: OperationContext, monkeypatch) -> None:
    async def _fail(*_args, **_kwargs):
        raise AssertionError("editor must not run")

    monkeypatch.setattr(context.runner, "execute", _fail)

    result = await dispatch(Operation.ADD_RESOURCE, context, {"input_file": "a.exe", "output_file": "b.exe"})

    assert result.is_error
    assert "resource_file" in result.text
    assert result.text.startswith("Error: invalid parameters for add_resource")


@pytest.mark.asyncio
async def test_blank_delete_mask_is_a_validation_failure(context: OperationContext, monkeypatch) -> None:
    async def _fail(*_args, **_kwargs):
        raise AssertionError("editor must not run")

    monkeypatch.setattr(context.runner, "execute", _fail)

    result = await dispatch(
        Operation.DELETE_RESOURCE, context, {"input_file": "a.exe", "output_file": "b.exe", "resource_mask": ""}
    )

    assert result.is_error
    assert "missing required parameter: resource_mask" in result.text


@pytest.mark.asyncio
async def test_add_resource_default_mode(context: OperationContext, tmp_path: Path) -> None:
    _pe(tmp_path)
    (tmp_path / "icon.ico").write_bytes(b"\x00")

    result = await dispatch(
        Operation.ADD_RESOURCE,
        context,
        {"input_file": "app.exe", "output_file": "new.exe", "resource_file": "icon.ico", "resource_mask": "ICON,1"},
    )

    assert not result.is_error
    assert "Resource added successfully (mode: add)" in result.text
    assert (tmp_path / "new.exe").read_text(encoding="utf-8") == f"add {tmp_path / 'icon.ico'} ICON,1,"


@pytest.mark.asyncio
async def test_add_resource_rejects_unknown_mode(context: OperationContext) -> None:
    result = await dispatch(
        Operation.ADD_RESOURCE,
        context,
        {"input_file": "a.exe", "output_file": "b.exe", "resource_file": "c.ico", "mode": "replace"},
    )

    assert result.is_error
    assert "mode" in result.text


@pytest.mark.asyncio
async def test_delete_modify_compile_and_language(context: OperationContext, tmp_path: Path) -> None:
    _pe(tmp_path)
    (tmp_path / "new.bmp").write_bytes(b"BM")

    deleted = await dispatch(
        Operation.DELETE_RESOURCE,
        context,
        {"input_file": "app.exe", "output_file": "del.exe", "resource_mask": "BITMAP"},
    )
    modified = await dispatch(
        Operation.MODIFY_RESOURCE,
        context,
        {"input_file": "app.exe", "output_file": "mod.exe", "resource_file": "new.bmp"},
    )
    compiled = await dispatch(Operation.COMPILE_RC, context, {"input_rc": "app.exe", "output_res": "app.res"})
    relabeled = await dispatch(
        Operation.CHANGE_LANGUAGE, context, {"input_file": "app.exe", "output_file": "lang.exe", "language_id": "1049"}
    )

    assert "✓ Resource deleted successfully" in deleted.text
    assert (tmp_path / "del.exe").read_text(encoding="utf-8") == "delete  BITMAP,,"
    assert "✓ Resource modified successfully" in modified.text
    assert "✓ RC file compiled successfully" in compiled.text
    assert f"Output: {tmp_path / 'app.res'}" in compiled.text
    assert "✓ Language changed successfully to ID 1049" in relabeled.text
    assert (tmp_path / "lang.exe").read_text(encoding="utf-8").startswith("changelanguage(1049)")


@pytest.mark.asyncio
async def test_run_script(context: OperationContext, tmp_path: Path) -> None:
    (tmp_path / "script.txt").write_text("[FILENAMES]\nExe=a.exe\n", encoding="utf-8")

    ok = await dispatch(Operation.RUN_SCRIPT, context, {"script_file": "script.txt"})
    failed = await dispatch(Operation.RUN_SCRIPT, context, {"script_file": "nope.txt"})

    assert ok.text == "✓ Script executed successfully\n\nran 2 commands"
    assert failed.is_error
    assert failed.text.startswith("✗ Script execution failed")
    assert "script not found" in failed.text


@pytest.mark.asyncio
async def test_get_help_topics(context: OperationContext) -> None:
    general = await dispatch(Operation.GET_HELP, context, {})
    script = await dispatch(Operation.GET_HELP, context, {"topic": "script"})

    assert general.text.strip() == "Resource Hacker help: general"
    assert script.text.strip() == "Resource Hacker help: script"


@pytest.mark.asyncio
async def test_get_help_unknown_topic_falls_back_to_general(context: OperationContext) -> None:
    bogus = await dispatch(Operation.GET_HELP, context, {"topic": "bogus"})
    absent = await dispatch(Operation.GET_HELP, context, {"topic": None})

    assert not bogus.is_error
    assert bogus.text.strip() == "Resource Hacker help: general"
    assert absent.text.strip() == "Resource Hacker help: general"


@pytest.mark.asyncio
async def test_get_help_reports_why_it_failed(settings, tmp_path: Path) -> None:
    broken = OperationContext.from_settings(settings.model_copy(update={"executable": str(tmp_path / "nope.exe")}))

    result = await dispatch(Operation.GET_HELP, broken, {})

    assert result.is_error
    assert result.text.startswith("✗ Failed to get help")
    assert "failed to start" in result.text


@pytest.mark.asyncio
async def test_failure_shows_both_streams(context: OperationContext, monkeypatch) -> None:
    from reshack.runner import ExecutionOutcome

    async def _noisy(*_args, **_kwargs):
        return ExecutionOutcome(
            succeeded=False, stdout="Opening a.exe\n", stderr="Error: bad mask\n", error="Command failed", returncode=1
        )

    monkeypatch.setattr(context.runner, "execute", _noisy)

    result = await dispatch(Operation.COMPILE_RC, context, {"input_rc": "a.rc", "output_res": "a.res"})

    assert result.text == "✗ Failed to compile RC file\n\nError: Command failed\nOpening a.exe\nError: bad mask"


@pytest.mark.asyncio
async def test_get_help_without_output(context: OperationContext, monkeypatch) -> None:
    from reshack.runner import ExecutionOutcome

    async def _silent(*_args, **_kwargs):
        return ExecutionOutcome(succeeded=True)

    monkeypatch.setattr(context.runner, "execute", _silent)

    result = await dispatch(Operation.GET_HELP, context, {"topic": "commandline"})

    assert result.text == "No help output available"
    assert not result.is_error


@pytest.mark.asyncio
async def test_list_resources(context: OperationContext, tmp_path: Path) -> None:
    _pe(tmp_path)

    result = await dispatch(Operation.LIST_RESOURCES, context, {"input_file": "app.exe"})

    assert not result.is_error
    lines = result.text.splitlines()
    assert lines[0] == "✓ Resources listed for: app.exe"
    assert lines[2] == "Type                 Name/ID"
    assert lines[4:] == ["ICON                 MAINICON", "RT_MANIFEST          1"]
    assert list((tmp_path / "tmp").iterdir()) == []


@pytest.mark.asyncio
async def test_list_resources_empty_inventory(context: OperationContext, tmp_path: Path) -> None:
    _pe(tmp_path, script="// nothing here\n")

    result = await dispatch(Operation.LIST_RESOURCES, context, {"input_file": "app.exe"})

    assert not result.is_error
    assert result.text.endswith(EMPTY_INVENTORY_MESSAGE)


@pytest.mark.asyncio
async def test_list_resources_extraction_failure_cleans_up(context: OperationContext, tmp_path: Path) -> None:
    result = await dispatch(Operation.LIST_RESOURCES, context, {"input_file": "missing.exe"})

    assert result.is_error
    assert result.text.startswith("✗ Failed to list resources (extraction failed)")
    assert "Cannot open file" in result.text
    assert list((tmp_path / "tmp").iterdir()) == []


@pytest.mark.asyncio
async def test_list_resources_unreadable_artifact(context: OperationContext, tmp_path: Path, monkeypatch) -> None:
    from reshack.runner import ExecutionOutcome

    async def _no_artifact(*_args, **_kwargs):
        return ExecutionOutcome(succeeded=True, returncode=0)

    monkeypatch.setattr(context.runner, "execute", _no_artifact)

    result = await list_resources(context, ListResourcesInput(input_file="app.exe"))

    assert result.is_error
    assert result.text.startswith("Error reading generated RC file:")
    assert list((tmp_path / "tmp").iterdir()) == []


@pytest.mark.asyncio
async def test_concurrent_listings_do_not_share_artifacts(context: OperationContext, tmp_path: Path) -> None:
    names = [f"app{index}.exe" for index in range(6)]
    for index, name in enumerate(names):
        _pe(tmp_path, name, f"RES{index} ICON\n")

    results = await asyncio.gather(
        *(dispatch(Operation.LIST_RESOURCES, context, {"input_file": name}) for name in names)
    )

    for index, result in enumerate(results):
        assert not result.is_error
        rows = result.text.splitlines()[4:]
        assert rows == [f"ICON                 RES{index}"]
    assert list((tmp_path / "tmp").iterdir()) == []
