from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # type: ignore[import-untyped]


@dataclass
class InputsConfig:
    contacts: Optional[str] = None


@dataclass
class OutputsConfig:
    ldif: Path


@dataclass
class LdifConfig:
    base64_multiline: bool = True
    skip_malformed: bool = False


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ExportConfig:
    inputs: InputsConfig
    outputs: OutputsConfig
    ldif: LdifConfig
    logging: LoggingConfig


def _load_yaml(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "on", "1"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "off", "0"}:
        return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")


def load_export_config(args: argparse.Namespace) -> ExportConfig:
    config_data = _load_yaml(getattr(args, "config", None))
    inputs_cfg = config_data.get("inputs", {}) or {}
    outputs_cfg = config_data.get("outputs", {}) or {}
    ldif_cfg = config_data.get("ldif", {}) or {}
    logging_cfg = config_data.get("logging", {}) or {}

    inputs = InputsConfig(
        contacts=getattr(args, "contacts", None) or inputs_cfg.get("contacts"),
    )

    out_path = (
        getattr(args, "out", None)
        or outputs_cfg.get("ldif")
        or os.path.join(os.getcwd(), "contacts.ldif")
    )
    outputs = OutputsConfig(ldif=Path(out_path))

    base64_multiline = _as_bool(ldif_cfg.get("base64_multiline", True), "ldif.base64_multiline")
    if getattr(args, "no_base64", False):
        base64_multiline = False
    ldif = LdifConfig(
        base64_multiline=base64_multiline,
        skip_malformed=getattr(args, "skip_malformed", None)
        or _as_bool(ldif_cfg.get("skip_malformed", False), "ldif.skip_malformed"),
    )

    arg_level = getattr(args, "log_level", None)
    effective_level = (arg_level or logging_cfg.get("level") or "WARNING").upper()
    logging_config = LoggingConfig(level=effective_level)

    return ExportConfig(
        inputs=inputs,
        outputs=outputs,
        ldif=ldif,
        logging=logging_config,
    )
