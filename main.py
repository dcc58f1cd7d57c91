# main.py

from PyQt5.QtWidgets import QApplication
from mainwindow import MainWindow
import logging
import os
import sys

def main():
    logging.basicConfig(
        level=os.environ.get("GRAF_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    window.resize(1200, 900)
    window.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
