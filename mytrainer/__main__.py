"""Allow running MyTrainer as a module: python -m mytrainer."""

import sys

from PyQt6.QtWidgets import QApplication

from .app import MainWindow
from .logging_utils import setup_logging
from .settings import load_settings


def main() -> None:
    settings = load_settings()
    logger = setup_logging(settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("MyTrainer")
    app.setOrganizationName("MyTrainer")

    window = MainWindow(settings)
    window.show()
    logger.info("MyTrainer ready!")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
