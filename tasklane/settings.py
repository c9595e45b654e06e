"""Visual settings: split orientation and the colour palette cycle."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from tasklane.fileio import read_json, write_json_atomic
from tasklane.workspace import settings_path as _settings_path

logger = logging.getLogger(__name__)


class Colour(str, Enum):
    WHITE = "White"
    CYAN = "Cyan"
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"
    YELLOW = "Yellow"
    GRAY = "Gray"
    DARK_GRAY = "DarkGray"
    BLACK = "Black"

    @property
    def label(self) -> str:
        return "Dark gray" if self is Colour.DARK_GRAY else self.value


PALETTE: list[Colour] = list(Colour)


def next_colour(colour: Colour) -> Colour:
    return PALETTE[(PALETTE.index(colour) + 1) % len(PALETTE)]


def prev_colour(colour: Colour) -> Colour:
    return PALETTE[(PALETTE.index(colour) - 1) % len(PALETTE)]


class SettingField(Enum):
    SPLIT = "split"
    NORMAL_FG = "normal_fg_colour"
    NORMAL_BG = "normal_bg_colour"
    SELECTION_FG = "select_fg_colour"
    SELECTION_BG = "select_bg_colour"
    ACTIVE = "active_fg_colour"
    TITLE = "title_fg_colour"
    BORDER = "border_colour"


SETTING_FIELDS: list[SettingField] = list(SettingField)

SETTING_LABELS = {
    SettingField.SPLIT: "Split",
    SettingField.NORMAL_FG: "Main foreground colour",
    SettingField.NORMAL_BG: "Main background colour",
    SettingField.SELECTION_FG: "Selected foreground colour",
    SettingField.SELECTION_BG: "Selected background colour",
    SettingField.ACTIVE: "Active task colour",
    SettingField.TITLE: "Title colour",
    SettingField.BORDER: "Border colour",
}

COLOUR_FIELDS = [f.value for f in SETTING_FIELDS[1:]]


def next_setting_field(current: SettingField) -> SettingField:
    i = SETTING_FIELDS.index(current)
    return SETTING_FIELDS[min(i + 1, len(SETTING_FIELDS) - 1)]


def prev_setting_field(current: SettingField) -> SettingField:
    i = SETTING_FIELDS.index(current)
    return SETTING_FIELDS[max(i - 1, 0)]


@dataclass(frozen=True)
class StylePair:
    fg: Colour
    bg: Colour


_DEFAULT_PAIR = StylePair(Colour.WHITE, Colour.BLACK)


@dataclass
class Settings:
    is_horizontal: bool = True

    normal_fg_colour: Colour = Colour.WHITE
    normal_bg_colour: Colour = Colour.BLACK
    select_fg_colour: Colour = Colour.BLACK
    select_bg_colour: Colour = Colour.WHITE
    active_fg_colour: Colour = Colour.GREEN
    title_fg_colour: Colour = Colour.GREEN
    border_colour: Colour = Colour.GREEN

    # Derived from the colours above by set_colours()
    default: StylePair = field(default=_DEFAULT_PAIR, compare=False)
    highlight: StylePair = field(default=_DEFAULT_PAIR, compare=False)
    active_normal: StylePair = field(default=_DEFAULT_PAIR, compare=False)
    active_highlight: StylePair = field(default=_DEFAULT_PAIR, compare=False)
    title: StylePair = field(default=_DEFAULT_PAIR, compare=False)
    border: StylePair = field(default=_DEFAULT_PAIR, compare=False)

    def __post_init__(self) -> None:
        self.set_colours()

    def set_colours(self) -> None:
        self.default = StylePair(self.normal_fg_colour, self.normal_bg_colour)
        self.highlight = StylePair(self.select_fg_colour, self.select_bg_colour)
        self.active_normal = StylePair(self.active_fg_colour, self.normal_bg_colour)
        self.active_highlight = StylePair(self.active_fg_colour, self.select_bg_colour)
        self.title = StylePair(self.title_fg_colour, self.normal_bg_colour)
        self.border = StylePair(self.border_colour, self.normal_bg_colour)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        kwargs: dict[str, Any] = {"is_horizontal": bool(d.get("is_horizontal", True))}
        for name in COLOUR_FIELDS:
            if name in d:
                kwargs[name] = Colour(d[name])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"is_horizontal": self.is_horizontal}
        for name in COLOUR_FIELDS:
            d[name] = getattr(self, name).value
        return d

    def value_label(self, setting: SettingField) -> str:
        if setting is SettingField.SPLIT:
            return "Horizontal" if self.is_horizontal else "Vertical"
        return getattr(self, setting.value).label

    def preview_rows(self) -> list[tuple[str, StylePair]]:
        """Sample task lines with the style each would be drawn in."""
        calm = "[ ] This task is none of the above, just sitting here calmly"
        return [
            ("[ ] This task is selected", self.highlight),
            (calm, self.default),
            (calm, self.default),
            ("[ ] This task is the active one", self.active_normal),
            (calm, self.default),
            ("[X] This task is selected and active", self.active_highlight),
            (calm, self.default),
        ]


def step_setting(settings: Settings, setting: SettingField, forward: bool = True) -> None:
    """Flip the split orientation or step one colour along the palette."""
    if setting is SettingField.SPLIT:
        settings.is_horizontal = not settings.is_horizontal
        return
    current = getattr(settings, setting.value)
    setattr(settings, setting.value, next_colour(current) if forward else prev_colour(current))
    settings.set_colours()


# ── Persistence ───────────────────────────────────────────────


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.json; absent → write defaults, malformed → defaults with a warning."""
    path = _settings_path(root)
    if not path.exists():
        settings = Settings()
        try:
            save_settings(settings, root)
        except OSError as e:
            logger.warning("Could not create %s: %s", path, e)
        return settings
    try:
        return Settings.from_dict(read_json(path, default={}))
    except (json.JSONDecodeError, ValueError, TypeError) as e:
        logger.warning("Ignoring malformed settings %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings, root: Path | None = None) -> None:
    path = _settings_path(root)
    write_json_atomic(path, settings.to_dict())
    logger.info("Saved settings to %s", path)
