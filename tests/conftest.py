import pytest
from pathlib import Path

import hscan.config.logger as logger_module
from hscan.config.scan import ScanConfig, ToolSettings
from hscan.models.document import CommandResult, ScanDirectories, ValidatedFilename


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the user's HScan folder, log dir and .env file."""
    for var in (
        "HSCAN_DIRECTORY",
        "HSCAN_SCANNER",
        "HSCAN_CONVERTER",
        "HSCAN_SPOOLER",
        "HSCAN_OPENER",
        "HSCAN_SCAN_MODE",
        "HSCAN_SCAN_RESOLUTION",
        "HSCAN_SETTINGS_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(logger_module, "DEFAULT_LOGS_PATH", str(tmp_path / "logs"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tools() -> ToolSettings:
    """Default tool settings (scanimage, convert, lp, xdg-open)."""
    return ToolSettings()


@pytest.fixture
def target_dir(tmp_path) -> Path:
    return tmp_path / "HScan"


@pytest.fixture
def make_config(target_dir):
    """Factory for ScanConfig instances rooted in a temporary target directory."""
    def _make(**overrides) -> ScanConfig:
        values = {"target_directory": target_dir, "auto_name": True}
        values.update(overrides)
        return ScanConfig(**values)
    return _make


@pytest.fixture
def pdf_name() -> ValidatedFilename:
    return ValidatedFilename(name="MyScan.pdf", extension="pdf")


@pytest.fixture
def scan_dirs(target_dir) -> ScanDirectories:
    """Provisioned default layout: <target>/pdf and <target>/hscan_temp."""
    dirs = ScanDirectories(target=target_dir, output=target_dir / "pdf", temp=target_dir / "hscan_temp")
    dirs.output.mkdir(parents=True)
    dirs.temp.mkdir(parents=True)
    return dirs


@pytest.fixture
def fake_commands():
    """Recorder standing in for run_command.

    Writes the last argument as a file for converter calls, so conversions
    appear to succeed. Individual programs can be made to fail through
    ``failures``.
    """
    class FakeCommands:
        def __init__(self):
            self.calls: list[list[str]] = []
            self.failures: dict[str, CommandResult] = {}

        def __call__(self, args, stdout_path=None):
            args = [str(arg) for arg in args]
            self.calls.append(args)
            program = args[0]
            if program in self.failures:
                failure = self.failures[program]
                if stdout_path is not None:
                    Path(stdout_path).write_bytes(b"partial")
                return CommandResult(args=args, returncode=failure.returncode, output=failure.output)
            if stdout_path is not None:
                Path(stdout_path).write_bytes(b"II*\x00fake-tiff")
            if program == "convert":
                Path(args[-1]).write_bytes(b"%PDF-1.4 fake")
            return CommandResult(args=args, returncode=0, output="")

        def programs(self) -> list[str]:
            return [call[0] for call in self.calls]

    return FakeCommands()
