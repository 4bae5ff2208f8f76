from pathlib import Path

import yaml

SAMPLE_ERRORS = [
    {"type": "NullPointerException", "hint": "Check for null before use"},
    {"type": "IndexOutOfBounds", "hint": "Check array bounds"},
]


def write_catalog(tmpdir: Path, errors: list[dict] | None = None, name: str = "hints.yml") -> Path:
    path = tmpdir / name
    path.write_text(yaml.safe_dump({"errors": SAMPLE_ERRORS if errors is None else errors}, sort_keys=False))
    return path
