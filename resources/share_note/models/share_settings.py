"""
Share settings model for Share Note.

This module declares the user-facing settings record, its default values and
the rules that turn persisted or user-entered values into stored ones:

- ``load_or_default`` merges a persisted (possibly partial) record over the
  defaults, field by field.
- ``coerce_or_default`` normalizes a single edited value, replacing cleared
  text fields with their documented default.
- ``ShareSettings.update`` is the one mutation path used by the settings form.

Settings are persisted with the camelCase keys of the plugin's ``data.json``.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class ThemeMode(Enum):
    """Visual theme variant applied to a shared note."""
    SAME_AS_THEME = (0, "Same as theme")
    DARK = (1, "Dark")
    LIGHT = (2, "Light")

    def __init__(self, code: int, label: str):
        self.code = code
        self.label = label

    @classmethod
    def labels(cls) -> List[str]:
        """Dropdown labels in display order."""
        return [mode.label for mode in cls]

    @classmethod
    def from_label(cls, label: str) -> Optional['ThemeMode']:
        """Get theme mode from its dropdown label."""
        label_mapping = {
            "Same as theme": cls.SAME_AS_THEME,
            "Dark": cls.DARK,
            "Light": cls.LIGHT,
        }
        return label_mapping.get(label)

    @classmethod
    def from_code(cls, code: int) -> Optional['ThemeMode']:
        """Get theme mode from its persisted integer code."""
        code_mapping = {
            0: cls.SAME_AS_THEME,
            1: cls.DARK,
            2: cls.LIGHT,
        }
        return code_mapping.get(code)

    @classmethod
    def from_value(cls, raw: Any) -> Optional['ThemeMode']:
        """
        Resolve a member from a member, persisted code or label.

        Returns None for anything that does not name one of the three modes.
        """
        if isinstance(raw, ThemeMode):
            return raw
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return cls.from_code(raw)
        if isinstance(raw, str):
            return cls.from_label(raw)
        return None


# Python attribute name -> key in the persisted record
FIELD_KEYS: Dict[str, str] = {
    "server": "server",
    "uid": "uid",
    "api_key": "apiKey",
    "yaml_field": "yamlField",
    "note_width": "noteWidth",
    "theme_mode": "themeMode",
    "show_footer": "showFooter",
    "remove_yaml": "removeYaml",
    "clipboard": "clipboard",
}

FALLBACK_ON_EMPTY = ("yaml_field", "note_width")
READ_ONLY_FIELDS = ("uid",)
BOOLEAN_FIELDS = ("show_footer", "remove_yaml", "clipboard")

_KEY_TO_FIELD = {key: name for name, key in FIELD_KEYS.items()}


@dataclass
class ShareSettings:
    """The complete set of user-configurable options."""
    server: str = "https://api.obsidianshare.com"
    uid: str = ""
    api_key: str = ""
    yaml_field: str = "share"
    note_width: str = "700px"
    theme_mode: ThemeMode = ThemeMode.SAME_AS_THEME
    show_footer: bool = True
    remove_yaml: bool = True
    clipboard: bool = True

    def update(self, field_name: str, raw: Any) -> bool:
        """
        Coerce and store one edited value in place.

        Args:
            field_name: Attribute name or persisted key
            raw: Value as delivered by the form control

        Returns:
            True if the stored value changed
        """
        name = resolve_field(field_name)
        if name in READ_ONLY_FIELDS:
            logger.warning(f"Refusing to edit read-only setting '{name}'")
            return False

        value = coerce_or_default(name, raw)
        if getattr(self, name) == value:
            return False
        setattr(self, name, value)
        logger.debug(f"Setting '{name}' updated")
        return True

    def assign_uid(self, uid: str) -> None:
        """Set the externally issued user ID. Not reachable from the form."""
        self.uid = uid

    def apply(self, other: 'ShareSettings') -> None:
        """Copy every field of another record into this instance."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON shape."""
        record = {}
        for name, key in FIELD_KEYS.items():
            value = getattr(self, name)
            record[key] = value.code if isinstance(value, ThemeMode) else value
        return record


DEFAULT_SETTINGS = ShareSettings()


def resolve_field(field_name: str) -> str:
    """
    Map an attribute name or persisted key to the attribute name.

    Raises:
        KeyError: If the name is not part of the settings schema
    """
    if field_name in FIELD_KEYS:
        return field_name
    if field_name in _KEY_TO_FIELD:
        return _KEY_TO_FIELD[field_name]
    raise KeyError(f"Unknown setting: {field_name}")


def default_for(field_name: str) -> Any:
    """Get the documented default value of a field."""
    return getattr(DEFAULT_SETTINGS, resolve_field(field_name))


def coerce_or_default(field_name: str, raw: Any) -> Any:
    """
    Normalize an edited value into the value actually stored.

    Cleared text fields that must never be empty fall back to their default,
    the theme mode is resolved to a valid member (unknown input becomes the
    default), and everything else is stored unchanged.
    """
    name = resolve_field(field_name)

    if name in FALLBACK_ON_EMPTY:
        return raw if raw else default_for(name)

    if name == "theme_mode":
        return ThemeMode.from_value(raw) or default_for(name)

    if name in BOOLEAN_FIELDS:
        return bool(raw)

    return raw


def _persisted_value(persisted: Mapping[str, Any], name: str) -> Any:
    """Look a field up by persisted key first, then by attribute name."""
    key = FIELD_KEYS[name]
    if persisted.get(key) is not None:
        return persisted[key]
    return persisted.get(name)


def load_or_default(persisted: Optional[Mapping[str, Any]]) -> ShareSettings:
    """
    Build a fully populated record from a persisted partial one.

    Present values win field by field; absent or null fields take the default.
    Values of the wrong type, and theme modes that name no member, are
    dropped in favour of the default.

    Args:
        persisted: Record as loaded from the store, possibly empty

    Returns:
        New ShareSettings instance
    """
    settings = ShareSettings()
    if not persisted:
        return settings

    unknown = [key for key in persisted if key not in FIELD_KEYS and key not in _KEY_TO_FIELD]
    if unknown:
        logger.debug(f"Ignoring unknown persisted settings: {', '.join(sorted(unknown))}")

    for name in FIELD_KEYS:
        raw = _persisted_value(persisted, name)
        if raw is None:
            continue

        if name == "theme_mode":
            mode = ThemeMode.from_value(raw)
            if mode is None:
                logger.warning(f"Invalid theme mode in settings: {raw!r}")
                continue
            settings.theme_mode = mode
        elif name in BOOLEAN_FIELDS:
            if not isinstance(raw, bool):
                logger.warning(f"Invalid value for '{name}' in settings: {raw!r}")
                continue
            setattr(settings, name, raw)
        else:
            if not isinstance(raw, str):
                logger.warning(f"Invalid value for '{name}' in settings: {raw!r}")
                continue
            setattr(settings, name, raw)

    return settings
