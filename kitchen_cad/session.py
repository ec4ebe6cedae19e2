"""
Design sessions — one folder per kitchen being worked on.

    <SESSIONS_DIR>/<session_id>/
        session.json                      id, timestamps, description
        kitchen_layout_<cuisine>.json     saved blueprints

``SESSIONS_DIR`` defaults to ``outputs/sessions`` and can be moved with
``KITCHEN_CAD_SESSIONS_DIR``.  IDs are the creation time to the second,
suffixed ``_2``, ``_3``... when two sessions start in the same second.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from kitchen_cad import config


log = logging.getLogger("kitchen_cad.session")

META_FILE = "session.json"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Session:
    id: str
    path: Path = field(repr=False)
    created: str                         # ISO 8601, UTC
    last_modified: str
    description: str = ""

    def meta(self) -> dict:
        d = asdict(self)
        d.pop("path")
        return d

    def touch(self) -> None:
        self.last_modified = _now()
        self.path.mkdir(parents=True, exist_ok=True)
        (self.path / META_FILE).write_text(json.dumps(self.meta(), indent=2), encoding="utf-8")

    def write_artifact(self, filename: str, data: Any) -> Path:
        p = self.path / filename
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        self.touch()
        return p

    def read_artifact(self, filename: str) -> Any | None:
        p = self.path / filename
        if not p.is_file():
            return None
        return json.loads(p.read_text(encoding="utf-8"))

    def list_artifacts(self) -> list[str]:
        """Blueprint files in the folder, by name."""
        return sorted(p.name for p in self.path.glob("*.json") if p.name != META_FILE)


def _read_session(folder: Path) -> Session | None:
    try:
        meta = json.loads((folder / META_FILE).read_text(encoding="utf-8"))
        return Session(
            id=meta["id"],
            path=folder,
            created=meta["created"],
            last_modified=meta["last_modified"],
            description=meta.get("description", ""),
        )
    except (OSError, json.JSONDecodeError, KeyError) as exc:
        log.debug("Skipping %s: %s", folder, exc)
        return None


def create_session(description: str = "", sessions_dir: Path | None = None) -> Session:
    root = sessions_dir or config.SESSIONS_DIR
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    sid, n = stamp, 1
    while (root / sid).exists():
        n += 1
        sid = f"{stamp}_{n}"

    created = _now()
    session = Session(id=sid, path=root / sid, created=created,
                      last_modified=created, description=description)
    session.touch()
    log.info("Created session %s at %s", sid, session.path)
    return session


def load_session(session_id: str, sessions_dir: Path | None = None) -> Session | None:
    return _read_session((sessions_dir or config.SESSIONS_DIR) / session_id)


def list_sessions(sessions_dir: Path | None = None) -> list[dict]:
    """Metadata of every readable session, newest first."""
    root = sessions_dir or config.SESSIONS_DIR
    if not root.is_dir():
        return []
    found = (_read_session(d) for d in sorted(root.iterdir(), reverse=True) if d.is_dir())
    return [s.meta() for s in found if s is not None]
