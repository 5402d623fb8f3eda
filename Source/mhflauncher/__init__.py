"""Launcher core for Monster Hunter Frontier servers.

Contains the HTTP client, the session model, the login/character workflow
controller and the bridge that hands a started character to the game runtime.
"""

from .api import LauncherAPI, Host  # re-export for convenience
from .controller import LauncherController, LauncherObserver, LauncherState
from .launch import LaunchConfig, MezFesStall, ExternalRuntime, ProcessRuntime, build_launch_config
from .models import Credentials, Character, MezFes, Session, User
