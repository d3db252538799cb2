"""The application shell: wires the editor, workspace, output panel, runner and updates together."""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Callable, Optional

from itools.editor import Editor
from itools.output import OutputDisplay
from itools.plugins import AppContext, PluginLoadError, PluginManager
from itools.runner import CodeRunner
from itools.versioning import UpdateInfo, VersionRepository, format_release_notes
from itools.workspace import Workspace

log = logging.getLogger(__name__)

DEFAULT_PLUGIN = "power_shell"
UPDATER_NAME = "updater.exe"
STATUS_TIMEOUT = 5000
READY_TIMEOUT = 2000


def configure_app_context(search_path: str | Path, user_root: str | Path | None = None) -> AppContext:
    """Build the context shared with plugins.

    ``user_root`` defaults to an 'ITools' directory in the system temporary directory.
    """
    root = Path(user_root) if user_root is not None else Path(tempfile.gettempdir()) / "ITools"
    return AppContext(
        search_path=Path(search_path),
        plugins={},
        user_data_path=root / ".data",
        user_path=root,
    )


def build_updater_command(
    updater_path: str | Path,
    package_path: str | Path,
    install_path: str | Path,
    pid: int,
) -> list[str]:
    """The argument list that starts the updater for the given package and process."""
    return [str(Path(updater_path)), str(Path(package_path)), str(Path(install_path)), str(pid)]


def launch_updater_and_exit(
    updater_path: str | Path, package_path: str | Path, install_path: str | Path
) -> bool:
    """Start the updater in its own console and exit; returns False if it could not start."""
    command = build_updater_command(updater_path, package_path, install_path, os.getpid())
    options: dict = {}
    if sys.platform.startswith("win"):
        options["creationflags"] = getattr(subprocess, "CREATE_NEW_CONSOLE", 0)
    else:
        options["start_new_session"] = True
    try:
        subprocess.Popen(command, **options)
    except (OSError, ValueError) as exc:
        log.error("Failed to launch updater. Error: %s", exc)
        return False
    print("Updater launched. Exiting main application.")
    sys.exit(0)


class App:
    """The main window's behaviour without the window."""

    def __init__(
        self, context: Optional[AppContext] = None, plugin_manager: Optional[PluginManager] = None
    ) -> None:
        self.context = context if context is not None else configure_app_context(
            Path(sys.argv[0]).resolve().parent
        )
        self.status_log: list[tuple[str, int]] = []
        self.plugin_manager = plugin_manager if plugin_manager is not None else PluginManager(self.context)
        if DEFAULT_PLUGIN in self.context.plugins:
            try:
                self.plugin_manager.load_plugin(DEFAULT_PLUGIN)
            except PluginLoadError as exc:
                log.error("Cannot load plugin %s: %s", DEFAULT_PLUGIN, exc)

        self.editor = Editor(on_status=self.process_status)
        self.workspace = Workspace(self.editor)
        self.output = OutputDisplay()
        self.runner = CodeRunner(
            self.editor,
            self.plugin_manager,
            on_status=self.process_status,
            on_result=self.process_result,
        )
        self.process_status("Ready.", READY_TIMEOUT)

    @property
    def status(self) -> tuple[str, int]:
        """The latest status message and how long it is shown, in milliseconds."""
        return self.status_log[-1]

    def process_status(self, message: str, timeout: int = STATUS_TIMEOUT) -> None:
        """Show a temporary message in the status bar."""
        log.debug("status: %s", message)
        self.status_log.append((message, timeout))

    def process_result(self, exit_code: int, output: str, error: str) -> None:
        """Show the result of a script run in the output panel."""
        self.output.show()
        if exit_code == 0:
            self.output.log(output, error)
            self.process_status("Completed with errors." if error else "Completed!")
        else:
            self.process_status("Process failed!")
            self.output.log("", error)

    def toggle_drawer(self) -> bool:
        """Show or hide the workspace drawer; returns whether it is now visible."""
        self.workspace.toggle()
        return self.workspace.visible

    def toggle_output(self) -> bool:
        """Show or hide the output panel; returns whether it is now visible."""
        self.output.toggle()
        return self.output.visible

    def check_for_updates(
        self, repository: VersionRepository, confirm: Callable[[UpdateInfo], bool]
    ) -> Optional[UpdateInfo]:
        """Offer a newer release; on confirmation download it and hand over to the updater.

        Returns the update info when one is available, else None.
        """
        try:
            info = repository.check_for_updates()
        except (OSError, ValueError) as exc:
            log.error("Update check failed: %s", exc)
            return None
        if info is None or not info.latest_version:
            return None
        if not confirm(info):
            return info
        package = repository.download_new_version()
        if package is None:
            return info
        search_path = self.context.search_path
        launch_updater_and_exit(search_path / UPDATER_NAME, package, search_path.parent)
        return info


def _ask(info: UpdateInfo) -> bool:
    print(f"A new version {info.latest_version} is available!")
    for line in format_release_notes(info.release_notes):
        print(line)
    answer = input("Update now? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def main(argv: Optional[list[str]] = None) -> int:
    """Open files in the workspace, optionally run the active one and check for updates."""
    parser = argparse.ArgumentParser(prog="itools", description="Script workspace and runner.")
    parser.add_argument("files", nargs="*", help="files to open in the workspace")
    parser.add_argument("--run", action="store_true", help="run the active file and print the output")
    parser.add_argument("--update-endpoint", help="URL of the update manifest to check")
    args = parser.parse_args(argv)

    files = [Path(name).resolve() for name in args.files]
    context = configure_app_context(Path(sys.argv[0]).resolve().parent)

    # The user's home directory is the working directory while the app runs.
    os.chdir(Path.home())

    app = App(context)
    for path in files:
        app.workspace.add_file(path.as_posix())

    if args.update_endpoint:
        app.check_for_updates(VersionRepository(args.update_endpoint, context.user_path), _ask)

    if args.run:
        app.runner.run_code()
        app.runner.wait()
        print(app.output.html())

    print(app.status[0])
    app.plugin_manager.unload_all_plugins()
    return 0