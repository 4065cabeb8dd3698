"""세션 스냅샷: 한 줄에 한 필드, 고정 순서 텍스트

    player_name
    awareness
    tone            (정보용. 로드 후에는 인식도에서 다시 계산)
    inventory       (쉼표 구분, 없으면 빈 줄)
    current_room
    glitch_mode     (True / False)
    sanity          (선택. 없으면 100)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from synapse.core.errors import SnapshotError
from synapse.core.logging import get_logger
from synapse.core.resources import SANITY_MAX, Tone, derive_tone
from synapse.db.models import SaveSlotModel

logger = get_logger(__name__)

REQUIRED_FIELD_COUNT = 6


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise SnapshotError(f"Invalid boolean literal: {raw!r}")


def _parse_int(raw: str, field_name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise SnapshotError(f"Invalid integer for {field_name}: {raw!r}") from e


@dataclass
class SessionSnapshot:
    player_name: str
    awareness: int
    current_room: str
    inventory: list[str] = field(default_factory=list)
    glitch_mode: bool = False
    sanity: int = SANITY_MAX
    tone: Optional[Tone] = None

    def __post_init__(self) -> None:
        if self.tone is None:
            self.tone = derive_tone(self.awareness)

    def to_text(self) -> str:
        """
        Raises:
            SnapshotError: 이름에 줄바꿈/제어 문자가 들어 있음
        """
        if not self.player_name.isprintable():
            raise SnapshotError(f"Player name is not storable: {self.player_name!r}")
        lines = [
            self.player_name,
            str(self.awareness),
            derive_tone(self.awareness).value,
            ",".join(self.inventory),
            self.current_room,
            str(self.glitch_mode),
            str(self.sanity),
        ]
        return "\n".join(lines) + "\n"

    @classmethod
    def from_text(cls, text: str) -> SessionSnapshot:
        """
        Raises:
            SnapshotError: 필드 부족, 숫자/불리언 해석 실패
        """
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        if lines[-1] == "":
            lines.pop()
        if len(lines) < REQUIRED_FIELD_COUNT:
            raise SnapshotError(
                f"Snapshot has {len(lines)} lines, expected at least {REQUIRED_FIELD_COUNT}"
            )

        awareness = _parse_int(lines[1], "awareness")
        if awareness < 0:
            raise SnapshotError(f"Negative awareness: {awareness}")

        try:
            tone: Optional[Tone] = Tone(lines[2].strip().lower())
        except ValueError:
            logger.warning("Unknown tone %r in snapshot, ignored", lines[2])
            tone = None

        sanity = SANITY_MAX
        if len(lines) > REQUIRED_FIELD_COUNT and lines[6].strip():
            sanity = _parse_int(lines[6], "sanity")
            if not 0 <= sanity <= SANITY_MAX:
                raise SnapshotError(f"Sanity out of range: {sanity}")

        return cls(
            player_name=lines[0],
            awareness=awareness,
            tone=tone,
            inventory=[item for item in lines[3].split(",") if item],
            current_room=lines[4].strip(),
            glitch_mode=_parse_bool(lines[5]),
            sanity=sanity,
        )


class SnapshotStore(Protocol):
    def save(self, snapshot: SessionSnapshot) -> None: ...

    def load(self) -> SessionSnapshot: ...


class FileSnapshotStore:
    """콘솔 게임용 파일 저장소"""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, snapshot: SessionSnapshot) -> None:
        try:
            self.path.write_text(snapshot.to_text(), encoding="utf-8")
        except OSError as e:
            raise SnapshotError(f"Cannot write snapshot to {self.path}: {e}") from e
        logger.info("Snapshot saved to %s", self.path)

    def load(self) -> SessionSnapshot:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot from {self.path}: {e}") from e
        return SessionSnapshot.from_text(text)


class DatabaseSnapshotStore:
    """HTTP 세션용 DB 저장소. 슬롯(플레이어 이름)마다 스냅샷 텍스트 한 건."""

    def __init__(self, session_factory: sessionmaker[Session], slot: str) -> None:
        self._session_factory = session_factory
        self.slot = slot

    def save(self, snapshot: SessionSnapshot) -> None:
        try:
            with self._session_factory() as db:
                row = db.get(SaveSlotModel, self.slot)
                if row is None:
                    row = SaveSlotModel(slot=self.slot, payload="")
                    db.add(row)
                row.payload = snapshot.to_text()
                row.updated_at = datetime.utcnow()
                db.commit()
        except SQLAlchemyError as e:
            raise SnapshotError(f"Cannot save slot {self.slot!r}: {e}") from e
        logger.info("Snapshot saved to slot %s", self.slot)

    def load(self) -> SessionSnapshot:
        try:
            with self._session_factory() as db:
                row = db.get(SaveSlotModel, self.slot)
                payload = row.payload if row is not None else None
        except SQLAlchemyError as e:
            raise SnapshotError(f"Cannot load slot {self.slot!r}: {e}") from e
        if payload is None:
            raise SnapshotError(f"No saved game in slot {self.slot!r}")
        return SessionSnapshot.from_text(payload)
