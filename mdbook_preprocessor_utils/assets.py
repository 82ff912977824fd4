"""Static assets shipped by a preprocessor and the helpers that write them."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import shutil
from typing import Iterable, List, Optional

from .errors import AssetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Asset:
    """A named, immutable byte payload."""

    name: str
    contents: bytes

    def __post_init__(self) -> None:
        # Bare file name only; assets all land in one directory.
        if (
            not isinstance(self.name, str)
            or self.name in {"", ".", ".."}
            or "/" in self.name
            or "\\" in self.name
            or Path(self.name).is_absolute()
        ):
            raise AssetError(f"Invalid asset name {self.name!r}: expected a plain file name")

    @classmethod
    def from_file(cls, path: Path | str, name: Optional[str] = None) -> "Asset":
        path = Path(path)
        try:
            contents = path.read_bytes()
        except OSError as exc:
            raise AssetError(f"Unable to read asset {path}: {exc}") from exc
        return cls(name=name or path.name, contents=contents)


def load_assets(base_dir: Path | str, *names: str) -> List[Asset]:
    """Read each of *names* from *base_dir*.

    Plugins usually call this once at import time with the directory that
    holds their bundled JavaScript and CSS::

        ASSETS = load_assets(Path(__file__).parent / "js", "embed.js", "embed.css")
    """

    base = Path(base_dir)
    return [Asset.from_file(base / name, name=Path(name).name) for name in names]


def copy_assets(src_dir: Path | str, dst_dir: Path | str) -> None:
    """Copy every file in *src_dir* into *dst_dir*.

    A missing *src_dir* is not an error; *dst_dir* is still created.
    """

    src = Path(src_dir)
    dst = Path(dst_dir)
    dst.mkdir(parents=True, exist_ok=True)

    if not src.exists():
        logger.debug("Asset source %s does not exist; nothing to copy", src)
        return

    for entry in sorted(src.iterdir()):
        if not entry.is_file():
            continue
        shutil.copy(entry, dst / entry.name)
        logger.debug("Copied %s to %s", entry, dst)


def materialize_assets(namespace: str, assets: Iterable[Asset], shared_root: Path | str) -> Path:
    """Write *assets* into ``shared_root/namespace`` and return that directory.

    Existing files with the same name are overwritten.
    """

    target = Path(shared_root) / namespace
    try:
        target.mkdir(parents=True, exist_ok=True)
        count = 0
        for asset in assets:
            (target / asset.name).write_bytes(asset.contents)
            count += 1
    except OSError as exc:
        raise AssetError(f"Unable to write assets to {target}: {exc}") from exc

    logger.debug("Wrote %d assets to %s", count, target)
    return target


__all__ = ["Asset", "copy_assets", "load_assets", "materialize_assets"]
