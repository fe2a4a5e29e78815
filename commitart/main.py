# -*- coding: utf-8 -*-
import argparse
import json
import sys
from pathlib import Path
from typing import List, NoReturn, Optional


def _handle_qt_import_error(exc: ImportError) -> NoReturn:
    """Exit with a helpful message when the Qt bindings cannot be imported."""

    details = str(exc)
    message_lines = [
        "Unable to start CommitArt: importing PyQt5 failed.",
        "Check that PyQt5 is installed for this interpreter.",
    ]
    if "libGL.so.1" in details:
        message_lines.append("Hint: the system library libGL.so.1 is missing. Install the Mesa/OpenGL packages.")
    message_lines.append(f"Original error: {details}")
    raise SystemExit("\n".join(message_lines)) from exc


try:
    from PyQt5 import QtCore, QtWidgets
except ImportError as exc:  # pragma: no cover - environment dependent
    _handle_qt_import_error(exc)

from .config import load_settings
from .descriptor import RepositoryDescriptor, descriptor_from_mapping
from .diagnostics import set_debug, warn
from .fallback import synthetic_descriptor
from .view import CommitArtViewWidget


def load_descriptor(source: str) -> RepositoryDescriptor:
    """Read a descriptor JSON file, or synthesise one from a repository slug."""

    path = Path(source)
    if path.suffix.lower() == ".json" and path.is_file():
        with path.open("r", encoding="utf-8") as fh:
            return descriptor_from_mapping(json.load(fh))
    return synthetic_descriptor(source)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commitart", description="Open a window animating a repository.")
    parser.add_argument("source", help="owner/repo slug, GitHub URL, or path to a descriptor .json")
    parser.add_argument("--debug", action="store_true", help="print [CommitArt][DEBUG] lines")
    parser.add_argument("--no-overlay", action="store_true", help="hide the text overlay")
    return parser


class ViewWindow(QtWidgets.QMainWindow):
    def __init__(self, descriptor: RepositoryDescriptor, settings: dict):
        super().__init__(None)
        self.view = CommitArtViewWidget(self, settings=settings)
        self.setCentralWidget(self.view)
        surface = settings["surface"]
        self.resize(surface["width"], surface["height"])
        self.setWindowTitle(f"CommitArt - {descriptor.name}")
        QtWidgets.QShortcut(QtCore.Qt.Key_Escape, self, activated=self.close)
        self._descriptor = descriptor
        QtCore.QTimer.singleShot(0, self._start)

    def _start(self) -> None:
        signature = self.view.visualize(self._descriptor)
        self.setWindowTitle(f"CommitArt - {signature.repo_name} ({signature.style_profile.label})")


def main(argv: Optional[List[str]] = None, headless: bool = False) -> int:
    """Start the application and return the exit code.

    With ``headless`` the descriptor is loaded and validated but no Qt
    application or window is created.
    """

    args = _build_parser().parse_args(argv)
    settings = load_settings()
    if args.debug:
        settings["system"]["debug"] = True
    set_debug(settings["system"]["debug"])
    if args.no_overlay:
        settings["system"]["overlay"] = False

    try:
        descriptor = load_descriptor(args.source)
    except (OSError, ValueError) as exc:
        warn(f"cannot load {args.source!r}: {exc}")
        return 2
    if headless:
        return 0

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])
    window = ViewWindow(descriptor, settings)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
