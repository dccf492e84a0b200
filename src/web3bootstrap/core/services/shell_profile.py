"""
Shell profile writer — the only persisted state the bootstrapper owns.

After a fresh Homebrew install, ``eval "$(<brew> shellenv)"`` is
appended to the login profile so new terminals see it.  Writes are
idempotent and happen at most once per run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from web3bootstrap.core.context import RunContext

logger = logging.getLogger(__name__)


def render_line(template: str, inputs: dict[str, str]) -> str:
    """Substitute ``{var}`` placeholders with input values.

    Simple string replacement, no escaping.
    """
    result = template
    for key, value in inputs.items():
        result = result.replace(f"{{{key}}}", str(value))
    return result


def append_profile_line(ctx: RunContext, line: str) -> dict[str, Any]:
    """Append ``line`` to the run's login profile.

    Returns:
        ``{"ok": True, "lines_added": N, "file": "..."}`` on success,
        ``{"ok": False, "error": "..."}`` if the profile cannot be written.
    """
    target = Path(ctx.profile_path) if ctx.profile_path else Path(ctx.host.home) / ".zprofile"

    if ctx.profile_written:
        return {"ok": True, "lines_added": 0, "file": str(target), "note": "already written this run"}

    existing = ""
    if target.is_file():
        try:
            existing = target.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read %s: %s", target, e)

    if line in existing.splitlines():
        ctx.profile_written = True
        return {"ok": True, "lines_added": 0, "file": str(target), "note": "line already present"}

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as f:
            if existing and not existing.endswith("\n"):
                f.write("\n")
            f.write(line + "\n")
    except OSError as e:
        logger.warning("Cannot write %s: %s", target, e)
        return {"ok": False, "error": f"Cannot write {target}: {e}"}

    ctx.profile_written = True
    logger.info("Appended to %s: %s", target, line)
    return {"ok": True, "lines_added": 1, "file": str(target)}
