"""
Workflow controller for the launcher.

Two states: LOGIN (login/register) and CHARACTER (create/delete/start/logout).
All calls block until the transport returns. The only failure state carried
between calls is the transport's single last-error slot, which each request
overwrites.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from . import config
from .api import LauncherAPI
from .errors import InvalidStateError
from .launch import ExternalRuntime, ProcessRuntime, build_launch_config, launch
from .models import Character, Credentials, Session


logger = logging.getLogger(__name__)


class LauncherState(Enum):
    LOGIN = "login"
    CHARACTER = "character"


class LauncherObserver:
    """Interface for front ends that redraw from controller state."""

    def on_state_changed(self, state: LauncherState) -> None:
        pass

    def on_session_updated(self, session: Session) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass


class LauncherController:
    def __init__(
        self,
        api: Optional[LauncherAPI] = None,
        runtime: Optional[ExternalRuntime] = None,
        mhf_folder: Optional[str] = config.MHF_FOLDER,
    ):
        self.api = api or LauncherAPI()
        self.runtime = runtime or ProcessRuntime(config.RUNTIME_CMD)
        self.mhf_folder = mhf_folder
        self.state = LauncherState.LOGIN
        self.session = Session.empty()
        self.credentials: Optional[Credentials] = None
        self._observers: List[LauncherObserver] = []

    @property
    def error_message(self) -> Optional[str]:
        return self.api.last_error

    def add_observer(self, observer: LauncherObserver) -> None:
        self._observers.append(observer)

    # --- Login state ---
    def login(self, credentials: Credentials) -> bool:
        self._require(LauncherState.LOGIN)
        logger.info("Logging in as %s", credentials.username)
        session = self.api.login(credentials.username, credentials.password)
        return self._authenticated(credentials, session)

    def register(self, credentials: Credentials) -> bool:
        self._require(LauncherState.LOGIN)
        logger.info("Registering %s", credentials.username)
        session = self.api.register(credentials.username, credentials.password)
        return self._authenticated(credentials, session)

    # --- Character state ---
    def create_character(self, token: Optional[str] = None) -> Optional[Character]:
        """Create a character and start it straight away.

        Returns None (error retained) when the server rejects the request.
        Under normal operation the runtime takes over and this never returns
        on success.
        """
        self._require(LauncherState.CHARACTER)
        character = self.api.create_character(self._token(token))
        if character is None:
            self._notify_error()
            return None
        logger.info("Created character %d", character.id)
        self.session.add_character(character)
        self._notify_session()
        self._start(character)
        return character

    def delete_character(self, char_id: int, token: Optional[str] = None) -> bool:
        self._require(LauncherState.CHARACTER)
        if not self.api.delete_character(self._token(token), char_id):
            self._notify_error()
            return False
        logger.info("Deleted character %d", char_id)
        self.session.remove_character(char_id)
        self._notify_session()
        return True

    def select_for_start(self, character: Character) -> None:
        self._require(LauncherState.CHARACTER)
        self._start(character)

    def logout(self) -> None:
        # Session data is kept; only the error and state reset.
        self.api.clear_error()
        self._set_state(LauncherState.LOGIN)

    # --- Internals ---
    def _authenticated(self, credentials: Credentials, session: Optional[Session]) -> bool:
        if session is None:
            self._notify_error()
            return False
        self.credentials = credentials
        self.session = session
        logger.info(
            "Authenticated %s: %d character(s)%s",
            credentials.username,
            len(session.characters),
            ", MezFes active" if session.mez_fes else "",
        )
        self._notify_session()
        self._set_state(LauncherState.CHARACTER)
        return True

    def _start(self, character: Character) -> None:
        if self.credentials is None:
            raise InvalidStateError("No credentials available to start a character")
        launch_config = build_launch_config(self.session, self.credentials, character, self.mhf_folder)
        launch(launch_config, self.runtime)

    def _token(self, token: Optional[str]) -> str:
        return token if token is not None else self.session.user.token

    def _require(self, state: LauncherState) -> None:
        if self.state is not state:
            raise InvalidStateError(f"Operation requires {state.value} state (current: {self.state.value})")

    def _set_state(self, state: LauncherState) -> None:
        if self.state is state:
            return
        logger.debug("State changed: %s -> %s", self.state.value, state.value)
        self.state = state
        for observer in list(self._observers):
            try:
                observer.on_state_changed(state)
            except Exception as e:
                logger.error("Observer notification failed: %s", e)

    def _notify_session(self) -> None:
        for observer in list(self._observers):
            try:
                observer.on_session_updated(self.session)
            except Exception as e:
                logger.error("Observer notification failed: %s", e)

    def _notify_error(self) -> None:
        message = self.error_message
        if not message:
            return
        for observer in list(self._observers):
            try:
                observer.on_error(message)
            except Exception as e:
                logger.error("Observer notification failed: %s", e)
