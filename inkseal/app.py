import logging
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QApplication

from inkseal import __version__
from inkseal.config import AppConfig, configure_logging, ensure_settings_file
from inkseal.ui.windows import MainWindow

logger = logging.getLogger(__name__)


def main():
    """
    Start the signing desk.
    An optional PDF path on the command line is opened right away.
    """
    config = AppConfig.load(ensure_settings_file())
    configure_logging(config)
    logger.info("Starting Inkseal PDF %s", __version__)

    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    app = QApplication(sys.argv)
    app.setApplicationName("Inkseal PDF")

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path, config)
    window.showMaximized()
    sys.exit(app.exec_())
