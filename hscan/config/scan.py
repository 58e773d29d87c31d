"""Run configuration and external tool settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SCANNER = "scanimage"
DEFAULT_CONVERTER = "convert"
DEFAULT_SPOOLER = "lp"
DEFAULT_OPENER = "xdg-open"
DEFAULT_SCAN_MODE = "Gray"
DEFAULT_SCAN_RESOLUTION = 300
DEFAULT_SCAN_FORMAT = "tiff"

TEMP_DIRECTORY_NAME = "hscan_temp"

_TOOL_ENV_VARS = {
    "scanner": "HSCAN_SCANNER",
    "converter": "HSCAN_CONVERTER",
    "spooler": "HSCAN_SPOOLER",
    "opener": "HSCAN_OPENER",
    "scan_mode": "HSCAN_SCAN_MODE",
    "scan_resolution": "HSCAN_SCAN_RESOLUTION",
}


def default_target_directory(env: Mapping[str, str] | None = None) -> Path:
    """Return the default target directory.

    ``HSCAN_DIRECTORY`` takes precedence over ``~/Documents/HScan``.
    """
    source = os.environ if env is None else env
    override = source.get("HSCAN_DIRECTORY")
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return Path.home() / "Documents" / "HScan"


class ScanConfig(BaseModel):
    """Options for a single run, parsed once from the command line."""

    model_config = ConfigDict(frozen=True)

    verbose: bool = Field(False, description="Emit debug-level progress messages.")
    test_mode: bool = Field(False, description="Fake the scan with a generated report instead of using hardware.")
    auto_name: bool = Field(False, description="Generate a timestamp file name instead of prompting.")
    target_directory: Path = Field(default_factory=default_target_directory,
                                   description="Base directory for output and temp files.")
    custom_directory: bool = Field(False, description="Target was overridden; use it verbatim as output directory.")
    open_after: bool = Field(False, description="Open the document and its folder once created.")
    print_after: bool = Field(False, description="Send the document to the default printer once created.")
    print_blank: bool = Field(False, description="Print a generated blank page instead of the document.")
    wait_seconds: int = Field(0, ge=0, description="Countdown before scanning starts.")


class ToolSettings(BaseModel):
    """Names of the external programs and the fixed scan parameters."""

    model_config = ConfigDict(frozen=True)

    scanner: str = Field(DEFAULT_SCANNER, description="SANE acquisition command.")
    converter: str = Field(DEFAULT_CONVERTER, description="ImageMagick conversion command.")
    spooler: str = Field(DEFAULT_SPOOLER, description="CUPS print command.")
    opener: str = Field(DEFAULT_OPENER, description="Desktop file opener.")
    scan_mode: str = Field(DEFAULT_SCAN_MODE, description="Scanner colour mode.")
    scan_resolution: int = Field(DEFAULT_SCAN_RESOLUTION, ge=1, description="Scan resolution in DPI.")
    scan_format: str = Field(DEFAULT_SCAN_FORMAT, description="Raster format written by the scanner.")


def load_tool_settings(env: Mapping[str, str] | None = None) -> ToolSettings:
    """Build tool settings from the environment.

    A ``.env`` file in the working directory is loaded first when reading from
    the real process environment.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    overrides = {}
    for field_name, env_var in _TOOL_ENV_VARS.items():
        value = env.get(env_var)
        if value and value.strip():
            overrides[field_name] = value.strip()
    return ToolSettings(**overrides)
