"""Application settings for the certificate generator.

Values come from environment variables and an optional INI file at
``<data dir>/app.ini``.  The data directory is ``data`` unless
``CERTGEN_DATA_DIR`` says otherwise.  ``DEV_MODE`` is True when
``CERTGEN_DEV=1`` is set or the INI contains ``[app] dev = true``.

Recognised INI keys, all under ``[certificates]``::

    storage_file       JSON file holding the saved form (default: <data dir>/certificate_state.json)
    catalog            YAML field catalog (default: bundled birth certificate catalog)
    print_delay_ms     settle delay before printing (default: 500)
    toast_duration_ms  how long notifications stay visible (default: 3000)
    renderer           print | pdf | html (default: print)
    output_dir         where the pdf/html renderers write (default: <data dir>/exports)
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

RENDERERS = ("print", "pdf", "html")


def data_dir() -> Path:
    return Path(os.environ.get("CERTGEN_DATA_DIR", "data"))


def _read_ini(data_path: Path | None = None) -> configparser.ConfigParser:
    cp = configparser.ConfigParser()
    ini_path = (data_path or data_dir()) / "app.ini"
    if not ini_path.exists():
        return cp
    try:
        cp.read(ini_path, encoding="utf-8")
    except configparser.Error as e:
        logger.warning("[settings] ignoring unreadable %s: %s", ini_path, e)
        return configparser.ConfigParser()
    return cp


def _read_ini_flag() -> bool:
    """Read ``dev`` from the ``[app]`` section of ``app.ini`` if present."""
    raw = _read_ini().get("app", "dev", fallback="0").strip().lower()
    return raw in {"1", "true", "yes", "on"}


DEV_MODE: bool = (
    str(os.environ.get("CERTGEN_DEV", "0")).strip() in {"1", "true", "True"}
    or _read_ini_flag()
)


@dataclass(frozen=True)
class CertificateSettings:
    storage_file: Path
    catalog: Path | None
    print_delay_ms: int = 500
    toast_duration_ms: int = 3000
    renderer: str = "print"
    output_dir: Path = Path("data") / "exports"


def _int_option(cp: configparser.ConfigParser, key: str, default: int) -> int:
    try:
        value = cp.getint("certificates", key, fallback=default)
    except ValueError:
        logger.warning("[settings] %s is not an integer; using %d", key, default)
        return default
    return value if value >= 0 else default


def load_settings(data_path: Path | None = None) -> CertificateSettings:
    """Return the effective :class:`CertificateSettings`."""

    base = data_path or data_dir()
    cp = _read_ini(base)

    storage = cp.get("certificates", "storage_file", fallback="") or str(base / "certificate_state.json")
    catalog = cp.get("certificates", "catalog", fallback="") or None
    renderer = cp.get("certificates", "renderer", fallback="print").strip().lower()
    if renderer not in RENDERERS:
        logger.warning("[settings] unknown renderer %r; using 'print'", renderer)
        renderer = "print"
    output_dir = cp.get("certificates", "output_dir", fallback="") or str(base / "exports")

    return CertificateSettings(
        storage_file=Path(storage),
        catalog=Path(catalog) if catalog else None,
        print_delay_ms=_int_option(cp, "print_delay_ms", 500),
        toast_duration_ms=_int_option(cp, "toast_duration_ms", 3000),
        renderer=renderer,
        output_dir=Path(output_dir),
    )


__all__ = ["DEV_MODE", "RENDERERS", "CertificateSettings", "data_dir", "load_settings"]
