"""
Launch bridge: turns the current session into the configuration consumed by
the external game runtime and hands the process over to it.

Nothing here is recoverable. An unknown stall code means the server speaks a
newer protocol than this client, and a runtime that fails to start leaves
nothing for the launcher to fall back to; both errors propagate.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Sequence

from .errors import LaunchError, UnknownStallError
from .models import Character, Credentials, Session


logger = logging.getLogger(__name__)


class MezFesStall(IntEnum):
    TOKOTOKO_PARTNYA = 2
    PACHINKO = 3
    VOLPAKKUN_TOGETHER = 4
    NYANRENDO = 5
    GOOCOO_SCOOP = 6
    HONEY_PANIC = 7
    DOKKAN_BATTLE_CATS = 8
    POINT_STALL = 9
    STALL_MAP = 10

    @classmethod
    def from_code(cls, code: int) -> "MezFesStall":
        try:
            return cls(code)
        except ValueError:
            raise UnknownStallError(code) from None


@dataclass(frozen=True)
class Notification:
    data: str
    flags: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "flags": self.flags}


@dataclass
class LaunchConfig:
    entrance_count: int
    current_ts: int
    expiry_ts: int
    notifications: List[Notification]
    char_id: int
    char_new: bool
    char_name: str
    char_hr: int
    char_gr: int
    char_ids: List[int]
    user_name: str
    user_password: str = field(repr=False)
    user_rights: int
    user_token: str = field(repr=False)
    mhf_folder: Optional[str] = None
    mez_event_id: Optional[int] = None
    mez_start: Optional[int] = None
    mez_end: Optional[int] = None
    mez_solo_tickets: Optional[int] = None
    mez_group_tickets: Optional[int] = None
    mez_stalls: Optional[List[MezFesStall]] = None

    @property
    def has_event(self) -> bool:
        return self.mez_event_id is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with lowerCamelCase keys. Event keys are left out when there is no event."""
        out: Dict[str, Any] = {
            "entranceCount": self.entrance_count,
            "currentTs": self.current_ts,
            "expiryTs": self.expiry_ts,
            "notifications": [n.to_dict() for n in self.notifications],
            "charId": self.char_id,
            "charNew": self.char_new,
            "charName": self.char_name,
            "charHr": self.char_hr,
            "charGr": self.char_gr,
            "charIds": list(self.char_ids),
            "userName": self.user_name,
            "userPassword": self.user_password,
            "userRights": self.user_rights,
            "userToken": self.user_token,
            "mhfFolder": self.mhf_folder,
        }
        if self.has_event:
            out["mezEventId"] = self.mez_event_id
            out["mezStart"] = self.mez_start
            out["mezEnd"] = self.mez_end
            out["mezSoloTickets"] = self.mez_solo_tickets
            out["mezGroupTickets"] = self.mez_group_tickets
            out["mezStalls"] = [int(s) for s in self.mez_stalls or []]
        return out


def build_launch_config(
    session: Session,
    credentials: Credentials,
    character: Character,
    mhf_folder: Optional[str] = None,
) -> LaunchConfig:
    """Snapshot session, credentials and the chosen character into a LaunchConfig.

    Raises UnknownStallError if the active event lists a stall this client does
    not know.
    """
    config = LaunchConfig(
        entrance_count=session.entrance_count,
        current_ts=session.current_ts,
        expiry_ts=session.expiry_ts,
        notifications=[Notification(n) for n in session.notifications],
        char_id=character.id,
        char_new=character.is_new,
        char_name=character.name,
        char_hr=character.hr,
        char_gr=character.gr,
        char_ids=session.character_ids(),
        user_name=credentials.username,
        user_password=credentials.password,
        user_rights=session.user.rights,
        user_token=session.user.token,
    )
    mez = session.mez_fes
    if mez is not None:
        config.mez_event_id = mez.id
        config.mez_start = mez.start
        config.mez_end = mez.end
        config.mez_solo_tickets = mez.solo_tickets
        config.mez_group_tickets = mez.group_tickets
        config.mez_stalls = [MezFesStall.from_code(code) for code in mez.stalls]
    config.mhf_folder = mhf_folder
    return config


class ExternalRuntime:
    """Interface for the game runtime that takes over after launch."""

    def run(self, config: LaunchConfig) -> None:
        raise NotImplementedError


class ProcessRuntime(ExternalRuntime):
    """Runs the game runtime as a child process and exits with its status.

    The configuration is written as JSON to the child's stdin. The launcher
    process does not continue after the child ends.
    """

    def __init__(self, command: Sequence[str]):
        self.command = list(command)

    def run(self, config: LaunchConfig) -> None:
        if not self.command:
            raise LaunchError("No runtime command configured (set MHFLAUNCHER_RUNTIME_CMD or --runtime-cmd)")
        logger.info("Starting runtime: %s", self.command[0])
        try:
            proc = subprocess.Popen(self.command, stdin=subprocess.PIPE)
        except OSError as e:
            raise LaunchError(f"Failed to start runtime '{self.command[0]}': {e}") from e
        proc.communicate(json.dumps(config.to_dict()).encode("utf-8"))
        logger.info("Runtime exited with code %s", proc.returncode)
        raise SystemExit(proc.returncode)


def launch(config: LaunchConfig, runtime: ExternalRuntime) -> None:
    logger.info(
        "Launching character %s (%d) with %d notification(s)%s",
        config.char_name,
        config.char_id,
        len(config.notifications),
        f", MezFes event {config.mez_event_id}" if config.has_event else "",
    )
    runtime.run(config)
