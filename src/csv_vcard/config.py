from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .fields import DEFAULT_CATALOG, FieldCatalog
from .io import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

DEFAULT_CONF_NAME = "csv-vcard.toml"

DEFAULT_CONF = """# csv-vcard local config (TOML)
encoding = "utf-8-sig"
split = false
# ISO-2 region for phone formatting, e.g. "GB"; empty leaves numbers as-is
phone_region = ""

# Override the column each single-value attribute is read from.
[columns]
# display_name = "display_name"
# given_name = "profile.name.first"
# family_name = "profile.name.surname"
# skype_handle = "profile.skype_handle"
# website = "profile.website"
# note = "profile.about"
# avatar_url = "profile.avatar_url"
# country = "profile.location.country"
# created_at = "creation_time"
"""


@dataclass
class Settings:
    encoding: str = DEFAULT_ENCODING
    split: bool = False
    phone_region: str = ""
    columns: dict[str, str] = field(default_factory=dict)

    def catalog(self) -> FieldCatalog:
        return DEFAULT_CATALOG.with_columns(self.columns)


def load_settings(conf_path: Path | None = None) -> Settings:
    """Read settings from a TOML file; missing or malformed files give defaults."""
    path = Path(conf_path or DEFAULT_CONF_NAME)
    settings = Settings()
    if not path.exists():
        return settings
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring config %s: %s", path, e)
        return settings

    settings.encoding = str(data.get("encoding", settings.encoding))
    settings.split = bool(data.get("split", settings.split))
    settings.phone_region = str(data.get("phone_region", settings.phone_region)).strip()
    columns = data.get("columns", {})
    if isinstance(columns, dict):
        settings.columns = {str(k): str(v) for k, v in columns.items()}
    return settings


def write_default_config(conf_path: Path) -> bool:
    """Create a commented config file. Returns False if one already exists."""
    conf_path = Path(conf_path)
    if conf_path.exists():
        return False
    conf_path.parent.mkdir(parents=True, exist_ok=True)
    conf_path.write_text(DEFAULT_CONF, encoding="utf-8")
    return True
