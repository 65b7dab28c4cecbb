from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from waitlist_admin.config.model import BACKEND_HTTP, BACKENDS, GlobalConfig
from waitlist_admin.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_BACKEND = "WAITLIST_ADMIN_BACKEND"
ENV_API_URL = "WAITLIST_ADMIN_API_URL"
ENV_DATA_FILE = "WAITLIST_ADMIN_DATA_FILE"
ENV_PAGE_SIZE = "WAITLIST_ADMIN_PAGE_SIZE"


def _positive_int(raw: Any, name: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ConfigError(f"{name} must be >= 1, got {value}")
    return value


def _resolve_path(root: Path, raw: Optional[str]) -> Optional[Path]:
    # Relative paths are resolved against the config root directory.
    if not raw:
        return None
    path = Path(raw)
    return path if path.is_absolute() else (root / path).resolve()


def load_global_config(root: Path | str, env: Optional[Mapping[str, str]] = None) -> GlobalConfig:
    """
    Load ``root/global.json`` and apply environment overrides.

    Expected structure:

        root/
            global.json
            data/applicants.json   (memory backend only)

    A missing global.json yields the defaults of GlobalConfig.

    :param root: directory containing global.json
    :param env: environment mapping, defaults to os.environ
    :raises ConfigError: on unreadable JSON or invalid values
    """
    root = Path(root)
    env = os.environ if env is None else env

    logger.info("Loading global config", extra={"config_root": str(root)})

    raw: Dict[str, Any] = {}
    global_path = root / "global.json"
    if global_path.is_file():
        try:
            with global_path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{global_path} must contain a JSON object")
    else:
        logger.warning(f"No global.json found at {global_path}, using defaults")

    defaults = GlobalConfig()

    backend = str(env.get(ENV_BACKEND) or raw.get("backend") or defaults.backend).lower()
    if backend not in BACKENDS:
        raise ConfigError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")

    api_base_url = env.get(ENV_API_URL) or raw.get("api_base_url") or None
    if backend == BACKEND_HTTP and not api_base_url:
        raise ConfigError("The http backend needs api_base_url (or WAITLIST_ADMIN_API_URL)")

    page_size = _positive_int(env.get(ENV_PAGE_SIZE) or raw.get("page_size", defaults.page_size), "page_size")
    fetch_limit = _positive_int(raw.get("fetch_limit", defaults.fetch_limit), "fetch_limit")

    data_file_raw = env.get(ENV_DATA_FILE) or raw.get("data_file")
    export_fields = raw.get("export_fields") or defaults.export_fields
    if not isinstance(export_fields, list):
        raise ConfigError("export_fields must be a list of field keys")

    return GlobalConfig(
        ui_title=raw.get("ui_title", defaults.ui_title),
        subtitle=str(raw.get("subtitle", defaults.subtitle)),
        page_size=page_size,
        auto_select_first=bool(raw.get("auto_select_first", defaults.auto_select_first)),
        backend=backend,
        api_base_url=api_base_url,
        api_timeout_s=float(raw.get("api_timeout_s", defaults.api_timeout_s)),
        data_file=_resolve_path(root, data_file_raw),
        fetch_limit=fetch_limit,
        export_fields=[str(f) for f in export_fields],
    )
