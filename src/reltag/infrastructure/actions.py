"""GitHub Actions step outputs.

Writes ``name=value`` lines to the file named by ``$GITHUB_OUTPUT`` so a
workflow can read ``steps.<id>.outputs.tag``.  Outside Actions this is a
no-op.
"""

from __future__ import annotations

import os
from pathlib import Path

OUTPUT_ENV_VAR = "GITHUB_OUTPUT"


def set_output(name: str, value: str) -> bool:
    """Append one step output. Returns False when not running in Actions."""
    target = os.environ.get(OUTPUT_ENV_VAR)
    if not target:
        return False
    with Path(target).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}={value}\n")
    return True
