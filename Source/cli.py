import argparse
import getpass
import logging
import shlex
from datetime import datetime
from typing import Optional

from mhflauncher import config
from mhflauncher.api import Host, LauncherAPI
from mhflauncher.controller import LauncherController, LauncherObserver, LauncherState
from mhflauncher.launch import ProcessRuntime
from mhflauncher.logging_utils import setup_logging, install_excepthook, log_environment
from mhflauncher.models import Credentials, Session


class _ConsoleObserver(LauncherObserver):
    def on_error(self, message: str) -> None:
        print(f"[ERROR] {message}")


def _human_time(ts: int) -> str:
    if not ts:
        return "-"
    try:
        return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return "-"


def _print_characters(session: Session) -> None:
    if not session.characters:
        print("  (no characters)")
    for i, c in enumerate(session.characters, start=1):
        new = " [new]" if c.is_new else ""
        print(f"  {i}. ID: {c.id} | Name: {c.name}{new} | HR {c.hr} | GR {c.gr} | Last login: {_human_time(c.last_login)}")


def _print_notifications(session: Session) -> None:
    for n in session.notifications:
        print(f"  * {n}")
    if session.mez_fes:
        print(f"  MezFes event {session.mez_fes.id} is active")


def _ask_credentials(default_user: Optional[str]) -> Optional[Credentials]:
    prompt = f"Username [{default_user}]: " if default_user else "Username: "
    user = input(prompt).strip() or (default_user or "")
    if not user:
        print("Username is required")
        return None
    password = getpass.getpass(f"Password for {user}: ")
    return Credentials(user, password)


def _choose_host(api: LauncherAPI) -> None:
    print(f"1. {Host.LOCAL.label} ({config.LOCAL_URL})\n2. {Host.CUSTOM.label}")
    sel = input("Host (1/2): ").strip()
    if sel == "2":
        url = input(f"Custom host [{api.custom_host}]: ").strip()
        api.host = Host.CUSTOM
        if url:
            api.custom_host = url
    elif sel == "1":
        api.host = Host.LOCAL
    else:
        print("Unknown choice; host unchanged")


def _pick_index(prompt: str, session: Session) -> Optional[int]:
    raw = input(prompt).strip()
    try:
        idx = int(raw)
    except ValueError:
        print("Invalid number")
        return None
    if not 1 <= idx <= len(session.characters):
        print("No such character")
        return None
    return idx - 1


def login_menu(controller: LauncherController, default_user: Optional[str]) -> bool:
    """One round of the login screen. Returns False when the user exits."""
    api = controller.api
    print(f"\n<---- Login ---->  [Host: {api.host.label} {api.base_url}]")
    print("  1: Login\n  2: Register\n  3: Change host\n  0: Exit")
    cmd = input("Command: ").strip().lower()
    if cmd == "0":
        return False
    if cmd in ("1", "2"):
        creds = _ask_credentials(default_user)
        if creds is None:
            return True
        if cmd == "1":
            controller.login(creds)
        else:
            controller.register(creds)
    elif cmd == "3":
        _choose_host(api)
    else:
        print("Unknown command")
    return True


def character_menu(controller: LauncherController) -> bool:
    """One round of the character screen. Returns False when the user exits."""
    session = controller.session
    user = controller.credentials.username if controller.credentials else "-"
    print(f"\n<---- Characters ---->  [User: {user}]")
    _print_notifications(session)
    _print_characters(session)
    print("  s: Start character\n  d: Delete character\n  c: Create character\n  l: Logout\n  0: Exit")
    cmd = input("Command: ").strip().lower()
    if cmd == "0":
        return False
    if cmd == "s":
        idx = _pick_index("Character #: ", session)
        if idx is not None:
            controller.select_for_start(session.characters[idx])
    elif cmd == "d":
        idx = _pick_index("Character # to delete: ", session)
        if idx is None:
            return True
        target = session.characters[idx]
        if input(f"Delete {target.name} (ID {target.id})? (y/N): ").strip().lower() in ("y", "yes"):
            if controller.delete_character(target.id):
                print(f"Deleted {target.name}.")
        else:
            print("Cancelled.")
    elif cmd == "c":
        controller.create_character()
    elif cmd == "l":
        controller.logout()
    else:
        print("Unknown command")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monster Hunter Frontier launcher")
    parser.add_argument("--username", "--u", "-u", help="Username for automatic login")
    parser.add_argument("--password", "--p", "-p", help="Password for automatic login")
    parser.add_argument("--register", action="store_true", help="Register instead of login when auto-authenticating")
    parser.add_argument("--host", choices=[h.value for h in Host], default=None, help="Server selection")
    parser.add_argument("--custom-host", default=config.CUSTOM_HOST, help="Server URL used with --host custom")
    parser.add_argument("--mhf-folder", default=config.MHF_FOLDER, help="Game installation folder")
    parser.add_argument("--runtime-cmd", default=None, help="Command that runs the game (reads config JSON on stdin)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Console log level")
    return parser


def build_controller(args: argparse.Namespace) -> LauncherController:
    if args.host:
        host = Host(args.host)
    else:
        host = Host.CUSTOM if args.custom_host else Host.LOCAL
    api = LauncherAPI(host=host, custom_host=args.custom_host or "")
    command = shlex.split(args.runtime_cmd) if args.runtime_cmd else config.RUNTIME_CMD
    return LauncherController(api=api, runtime=ProcessRuntime(command), mhf_folder=args.mhf_folder)


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(console_level=getattr(logging, args.log_level))
    install_excepthook(logger)
    log_environment(logger)

    controller = build_controller(args)
    controller.add_observer(_ConsoleObserver())

    if args.username and args.password:
        print(f"Auto-login with username: {args.username}")
        creds = Credentials(args.username, args.password)
        if args.register:
            controller.register(creds)
        else:
            controller.login(creds)

    running = True
    while running:
        if controller.state is LauncherState.LOGIN:
            running = login_menu(controller, args.username)
        else:
            running = character_menu(controller)
    print("Bye!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
