"""JSON save-file persistence for config and seen registry."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from planespotter.errors import SaveCorrupted, SaveNotFound
from planespotter.models.save_state import Config, SaveState, SeenRegistry

logger = logging.getLogger("planespotter.storage")

PathLike = Union[str, Path]


def _encode(state: SaveState) -> str:
    return json.dumps(state.to_document(), indent=4, ensure_ascii=False)


def load(path: PathLike) -> SaveState:
    """Read the save file at ``path``.

    Raises SaveNotFound when no file exists yet; callers create it first
    with :func:`create_if_absent`.
    """

    save_path = Path(path)
    try:
        raw = save_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SaveNotFound(f"No save file at {save_path}") from exc

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SaveCorrupted(f"Save file {save_path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise SaveCorrupted(f"Save file {save_path} does not hold a JSON object")

    try:
        return SaveState.from_document(document)
    except ValidationError as exc:
        raise SaveCorrupted(f"Save file {save_path} is malformed: {exc}") from exc


def save(path: PathLike, state: SaveState) -> None:
    """Overwrite the save file with the whole of ``state``.

    The document is written to a sibling temp file and renamed over the
    save file, so readers never see a partial write.
    """

    save_path = Path(path)
    tmp_path = save_path.with_name(save_path.name + ".tmp")
    tmp_path.write_text(_encode(state), encoding="utf-8")
    os.replace(tmp_path, save_path)


def create_if_absent(path: PathLike, config: Optional[Config] = None) -> bool:
    """Write a default save file unless one already exists.

    ``config`` seeds the observer settings on first run; otherwise the
    documented defaults are used. Returns True when a file was created.
    """

    save_path = Path(path)
    if save_path.exists():
        return False

    state = SaveState(config=config or Config(), registry=SeenRegistry())
    save_path.parent.mkdir(parents=True, exist_ok=True)
    save(save_path, state)
    logger.info("Created save file at %s", save_path)
    return True


def save_config(path: PathLike, config: Config) -> SaveState:
    """Replace the stored config while keeping the seen registry."""

    create_if_absent(path)
    current = load(path)
    updated = SaveState(config=config, registry=current.registry)
    save(path, updated)
    logger.info("Saved config to %s", path)
    return updated


__all__ = ["create_if_absent", "load", "save", "save_config"]
