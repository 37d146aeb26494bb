import json
import logging
import os

logger = logging.getLogger(__name__)


class SettingsManager:
    """Small string key/value store persisted to a single JSON file.

    Every ``set_item``/``remove_item`` rewrites the file so the last write always
    wins.  An unreadable file is treated as empty and replaced on the next save.
    """

    def __init__(self, filename="settings.json"):
        self.filename = filename
        self.settings = {}
        self.load()

    def load(self):
        if os.path.exists(self.filename):
            try:
                with open(self.filename, "r", encoding="utf-8") as f:
                    data = json.load(f)
                self.settings = data if isinstance(data, dict) else {}
            except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
                logger.warning("[settings] failed to read %s (%s); starting empty", self.filename, e)
                self.settings = {}
        else:
            self.settings = {}

    def save(self):
        folder = os.path.dirname(self.filename)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.filename, "w", encoding="utf-8") as f:
            json.dump(self.settings, f, indent=4)

    def get_item(self, key, default=None):
        return self.settings.get(key, default)

    def set_item(self, key, value):
        self.settings[key] = value
        self.save()

    def remove_item(self, key):
        if self.settings.pop(key, None) is not None:
            self.save()
