"""
Main application window for railmap.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QFileSystemWatcher, QObject, Signal
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import QMainWindow, QWidget

from ..settings import AppSettings
from ..world import WorldData, WorldLoader, build_demo_world
from .map_view import DisplayMode, MapView, ModeStateStore


class ModeBroadcaster(QObject):
    """Host side of the display mode channel."""

    setMode = Signal(str, bool)


class MainWindow(QMainWindow):
    """Main application window hosting the map view."""

    def __init__(
        self,
        settings: AppSettings,
        world_path: Optional[Path] = None,
        overlay: bool = False,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setObjectName("main_window")
        self.settings = settings
        self.world_path = world_path
        self.loader = WorldLoader()

        self.broadcaster = ModeBroadcaster(self)
        self.mode_store = ModeStateStore.for_startup(
            overlay, settings.minimap.transparent
        )
        self.mode_store.attach(self.broadcaster.setMode)

        self.map_view = MapView(settings, self.mode_store, overlay=overlay, parent=self)
        self.setCentralWidget(self.map_view)

        self._setup_mode_actions()

        self.watcher: Optional[QFileSystemWatcher] = None
        self.setup_world()

        self.resize(1200, 800)
        self.setWindowTitle("railmap")
        self.logger.info("Main window initialized")

    def _setup_mode_actions(self) -> None:
        """Shortcuts broadcasting display mode changes."""
        bindings = [
            ("Normal view", "F5", DisplayMode.NORMAL),
            ("Full map", "F6", DisplayMode.MAP),
            ("Minimap", "F7", DisplayMode.MINIMAP),
        ]
        for title, shortcut, mode in bindings:
            action = QAction(title, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(
                lambda checked=False, m=mode: self.broadcast_mode(m, self.mode_store.transparent)
            )
            self.addAction(action)

        transparency = QAction("Toggle transparency", self)
        transparency.setShortcut(QKeySequence("F8"))
        transparency.triggered.connect(
            lambda checked=False: self.broadcast_mode(
                self.mode_store.mode, not self.mode_store.transparent
            )
        )
        self.addAction(transparency)

    def broadcast_mode(self, mode: DisplayMode, transparent: bool) -> None:
        self.broadcaster.setMode.emit(mode.value, transparent)

    def setup_world(self) -> None:
        """Show the world snapshot and watch it for updates."""
        if self.world_path is None:
            self.logger.info("No world snapshot given, showing demo world")
            self.map_view.set_world(build_demo_world())
            return

        self.map_view.set_world(self.loader.load_from_json(self.world_path))
        self.watcher = QFileSystemWatcher([str(self.world_path)], self)
        self.watcher.fileChanged.connect(self.reload_world)
        self.logger.info(f"Watching world snapshot: {self.world_path}")

    def reload_world(self, path: str) -> None:
        """Reload the snapshot after the simulation rewrote it."""
        # Editors and exporters often replace the file, dropping the watch
        if self.watcher is not None and path not in self.watcher.files():
            self.watcher.addPath(path)

        try:
            world: WorldData = self.loader.load_from_json(Path(path))
        except (FileNotFoundError, ValueError) as e:
            # Half-written file; the next change will retry
            self.logger.debug(f"Skipping world reload: {e}")
            return
        self.map_view.set_world(world)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Release map subscriptions before the window goes away."""
        try:
            self.map_view.shutdown()
        finally:
            self.mode_store.detach()
        self.logger.info("Main window closed")
        super().closeEvent(event)
