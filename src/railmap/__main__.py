"""
Main entry point for the railmap application.
Usage: python -m railmap [--world snapshot.json] [--overlay]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication, QMessageBox

from . import __version__
from .gui.main_window import MainWindow
from .settings import AppSettings
from .utils.logging_config import setup_logging


def show_error_dialog(title: str, message: str, details: Optional[str] = None) -> None:
    """Show error dialog to user."""
    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv)

    msg_box = QMessageBox()
    msg_box.setIcon(QMessageBox.Icon.Critical)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)

    if details:
        msg_box.setDetailedText(details)

    msg_box.exec()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="railmap", description="Live railroad world map")
    parser.add_argument(
        "--world", type=Path, default=None,
        help="world snapshot JSON; reloaded whenever it changes",
    )
    parser.add_argument(
        "--overlay", action="store_true",
        help="start as a minimap following the first player",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    logger = logging.getLogger(f"{__name__}.main")
    args = parse_args(argv)
    try:
        settings = AppSettings()

        app = QApplication(sys.argv[:1])
        app.setApplicationName("railmap")
        app.setApplicationVersion(__version__)

        setup_logging(settings)

        logger.info("Starting railmap")
        logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

        validation = settings.validate()
        if validation.warnings:
            logger.warning("Configuration warnings detected:")
            for warning in validation.warnings:
                logger.warning(f"  {warning}")

        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            show_error_dialog(
                "Configuration Error",
                "Configuration validation failed. Please check your settings.",
                "\n".join(validation.errors),
            )
            return 1

        app.setStyle("Fusion")

        main_window = MainWindow(settings, world_path=args.world, overlay=args.overlay)
        main_window.show()

        logger.info("Application started successfully")
        return app.exec()

    except Exception as e:
        logger.exception("Unhandled exception in main")
        show_error_dialog("Application Error", "An unexpected error occurred.", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
