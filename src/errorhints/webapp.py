from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .config import build_config
from .hints import HintCatalog
from .search import HintSearchEngine
from .web import create_app


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


config = build_config(catalog_path=_env_path("HINTS_CATALOG"), config_file=_env_path("HINTS_CONFIG"))
engine = HintSearchEngine(HintCatalog(config.catalog_path), reload_on_search=config.reload_on_search)
app = create_app(engine)
