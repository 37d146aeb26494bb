# ===== Part 1: Imports & Logging ============================================
import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from modules.certificates.schema import CatalogError
from utils.app_settings import DEV_MODE, load_settings

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.DEBUG if DEV_MODE else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)


# ===== Part 2: Application Entrypoint =======================================
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Birth certificate generator")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding app.ini and saved state")
    parser.add_argument("--renderer", choices=("print", "pdf", "html"), default=None, help="Override the export renderer")
    args, qt_args = parser.parse_known_args(argv)

    app = QApplication([sys.argv[0], *qt_args])

    settings = load_settings(args.data_dir)
    if args.renderer:
        from dataclasses import replace

        settings = replace(settings, renderer=args.renderer)
    logger.info("Using storage %s, renderer %s", settings.storage_file, settings.renderer)

    from modules.certificates.panels import get_certificate_window

    try:
        win = get_certificate_window(settings)
    except CatalogError as e:
        logger.error("Invalid field catalog: %s", e)
        QMessageBox.critical(None, "Birth Certificate Generator", f"Invalid field catalog:\n{e}")
        return 1
    win.resize(1200, 760)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
