"""Output directory handling and the per-artifact write policy table.

Every file skema produces has an explicit policy:

- ``ALWAYS_OVERWRITE`` — fully rewritten on every run (group schemas,
  package ``__init__`` files)
- ``CREATE_IF_ABSENT`` — written once, then left to the user
  (``reference.py``)

Before a run the destination is cleared of everything except
create-if-absent artifacts, so stale groups never survive a regeneration.
"""

import logging
import shutil
from enum import Enum
from pathlib import Path, PurePosixPath

logger = logging.getLogger("skema.generate")

REFERENCE_FILE = "reference.py"


class WritePolicy(Enum):
    """How an artifact is written when it already exists."""

    ALWAYS_OVERWRITE = "always-overwrite"
    CREATE_IF_ABSENT = "create-if-absent"


# Artifact path (relative to the output directory, "*" = any group) -> policy
ARTIFACT_POLICIES: dict[PurePosixPath, WritePolicy] = {
    PurePosixPath("__init__.py"): WritePolicy.ALWAYS_OVERWRITE,
    PurePosixPath(REFERENCE_FILE): WritePolicy.CREATE_IF_ABSENT,
    PurePosixPath("*/__init__.py"): WritePolicy.ALWAYS_OVERWRITE,
    PurePosixPath("*/schema.py"): WritePolicy.ALWAYS_OVERWRITE,
}


def policy_for(relative: PurePosixPath) -> WritePolicy:
    """Look up the policy for an artifact path relative to the output directory."""
    for pattern, policy in ARTIFACT_POLICIES.items():
        if relative.match(str(pattern)) and len(relative.parts) == len(pattern.parts):
            return policy
    msg = f"No write policy registered for generated file {relative}"
    raise KeyError(msg)


def prepare_destination(directory: Path) -> None:
    """Create *directory*, or clear it of everything but create-if-absent artifacts."""
    if not directory.exists():
        directory.mkdir(parents=True)
        return

    preserved = {
        str(path)
        for path, policy in ARTIFACT_POLICIES.items()
        if policy is WritePolicy.CREATE_IF_ABSENT
    }
    for entry in sorted(directory.iterdir()):
        if entry.name in preserved and entry.is_file():
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        logger.debug("Removed %s", entry)


def write_artifact(directory: Path, relative: str, content: str) -> Path | None:
    """Write one generated file under *directory* according to its policy.

    Returns the written path, or ``None`` when a create-if-absent file
    already exists.  Files are written with ``\\n`` line endings so output
    is byte-identical across platforms.
    """
    rel = PurePosixPath(relative)
    policy = policy_for(rel)
    target = directory.joinpath(*rel.parts)

    if policy is WritePolicy.CREATE_IF_ABSENT and target.exists():
        logger.debug("Kept existing %s", target)
        return None

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8", newline="\n")
    return target
