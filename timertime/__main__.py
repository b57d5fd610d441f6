"""Allow running Timer Time as a module: python -m timertime."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .settings import load_settings
from .app import TimerTimeApp


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logging.getLogger(__name__).info("Timer Time ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Timer Time")
    app.setOrganizationName("Timer Time")

    window = TimerTimeApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
