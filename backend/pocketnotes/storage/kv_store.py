import logging
import os
import uuid
from pathlib import Path
from typing import Optional

log = logging.getLogger("pocketnotes.storage")


def _safe_key(key: str) -> str:
    # keys become file names; keep them flat
    if not key or any(ch in key for ch in ["/", "\\"]) or ".." in key:
        raise ValueError("Invalid storage key")
    return key


def _atomic_write_text(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # one tmp file per write so concurrent writers never share it
    tmp_path = path.with_suffix(f"{path.suffix}.{uuid.uuid4().hex}.tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


class LocalStore:
    """String key/value storage, one file per key under ``base_dir/store``.

    Values are opaque serialized strings; callers own the encoding.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _path(self, key: str) -> Path:
        return self.base_dir / "store" / f"{_safe_key(key)}.json"

    def get_item(self, key: str) -> Optional[str]:
        p = self._path(key)
        if not p.exists():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except OSError as exc:
            # unreadable is treated as absent
            log.warning("Could not read key %s: %s", key, exc)
            return None

    def set_item(self, key: str, value: str) -> None:
        _atomic_write_text(self._path(key), value)

    def remove_item(self, key: str) -> bool:
        p = self._path(key)
        try:
            p.unlink()
        except FileNotFoundError:
            return False
        return True
