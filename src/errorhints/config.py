from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .hints import DEFAULT_CATALOG_PATH


@dataclass
class ExplorerConfig:
    catalog_path: Path = DEFAULT_CATALOG_PATH
    reload_on_search: bool = False


def load_config(path: Optional[Path]) -> Dict:
    """Load a config file from TOML or JSON."""
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Config file {path} was not found.")
    if path.suffix in {".toml", ".tml"}:
        return tomllib.loads(path.read_text())
    if path.suffix in {".json"}:
        return json.loads(path.read_text())
    raise ValueError(f"Unsupported config format for {path}. Use TOML or JSON.")


def build_config(
    *,
    catalog_path: Optional[Path] = None,
    reload_on_search: Optional[bool] = None,
    config_file: Optional[Path] = None,
) -> ExplorerConfig:
    """Merge CLI inputs with any file-based configuration."""
    file_data = load_config(config_file)
    cfg = file_data.get("errorhints", {}) if isinstance(file_data, dict) else {}
    if not isinstance(cfg, dict):
        raise ValueError(f"[errorhints] in {config_file} must be a table.")

    final_catalog = catalog_path or cfg.get("catalog_path")
    if final_catalog is None:
        final_catalog = DEFAULT_CATALOG_PATH
    else:
        final_catalog = Path(final_catalog)
        # Relative paths in a config file resolve against the file's directory.
        if not catalog_path and config_file is not None and not final_catalog.is_absolute():
            final_catalog = config_file.parent / final_catalog

    return ExplorerConfig(
        catalog_path=final_catalog,
        reload_on_search=_maybe_bool(reload_on_search, cfg.get("reload_on_search", False)),
    )


def _maybe_bool(cli_value: Optional[bool], cfg_value: Optional[bool]) -> bool:
    if cli_value is not None:
        return cli_value
    return bool(cfg_value) if cfg_value is not None else False
