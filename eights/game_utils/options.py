"""
Declarative options system for games.

Options are declared as dataclass fields carrying an OptionMeta, which
knows how to validate string input and how to describe the option.

Usage:
    @dataclass
    class MyGameOptions(GameOptions):
        deal_size: int = option_field(
            IntOption(default=8, min_val=1, max_val=20,
                      label="crazyeights-option-deal-size"))
"""

from dataclasses import dataclass, field, fields
from typing import Any

from mashumaro.mixins.json import DataClassJSONMixin

from ..messages.localization import Localization


@dataclass
class OptionMeta:
    """Metadata for a game option."""

    default: Any
    label: str  # Localization key for the option label

    def get_label_kwargs(self, value: Any) -> dict[str, Any]:
        """Get kwargs for label localization."""
        raise NotImplementedError

    def get_label(self, locale: str, value: Any) -> str:
        """Get the localized label with current value interpolated."""
        return Localization.get(locale, self.label, **self.get_label_kwargs(value))

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        """Validate and convert input string to the option's type.

        Returns (success, converted_value). If success is False, converted_value
        is the original string.
        """
        raise NotImplementedError


@dataclass
class IntOption(OptionMeta):
    """Integer option with min/max validation."""

    min_val: int = 0
    max_val: int = 100
    value_key: str = "value"  # Key used in localization (e.g., "count", "seconds")

    def get_label_kwargs(self, value: Any) -> dict[str, Any]:
        return {self.value_key: value}

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        try:
            int_val = int(value)
            int_val = max(self.min_val, min(self.max_val, int_val))
            return True, int_val
        except ValueError:
            return False, value


@dataclass
class MenuOption(OptionMeta):
    """Menu selection option."""

    choices: list[str] = field(default_factory=list)
    value_key: str = "mode"  # Key used in localization

    def get_label_kwargs(self, value: Any) -> dict[str, Any]:
        return {self.value_key: value}

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        if value in self.choices:
            return True, value
        return False, value


def option_field(meta: OptionMeta) -> Any:
    """Create a dataclass field with option metadata attached.

    Usage:
        deal_size: int = option_field(IntOption(default=8, ...))
    """
    return field(default=meta.default, metadata={"option_meta": meta})


def get_option_meta(options_class: type, field_name: str) -> OptionMeta | None:
    """Get the OptionMeta for a field, if it has one."""
    for f in fields(options_class):
        if f.name == field_name:
            return f.metadata.get("option_meta")
    return None


def get_all_option_metas(options_class: type) -> dict[str, OptionMeta]:
    """Get all OptionMeta instances from an options class."""
    result = {}
    for f in fields(options_class):
        meta = f.metadata.get("option_meta")
        if meta is not None:
            result[f.name] = meta
    return result


@dataclass
class GameOptions(DataClassJSONMixin):
    """Base class for game options with declarative option support.

    Subclasses should use option_field() for options that can be set from
    string input:

        @dataclass
        class MyOptions(GameOptions):
            deal_size: int = option_field(IntOption(...))

            # Regular fields without option_field work normally
            seed: int | None = None
    """

    def get_option_metas(self) -> dict[str, OptionMeta]:
        """Get all option metadata for this options instance."""
        return get_all_option_metas(type(self))

    def set_option(self, name: str, value: str) -> bool:
        """Set an option from string input. Returns False if rejected."""
        meta = self.get_option_metas().get(name)
        if meta is None:
            return False
        ok, converted = meta.validate_and_convert(value)
        if not ok:
            return False
        setattr(self, name, converted)
        return True

    def describe(self, locale: str = "en") -> list[str]:
        """One localized line per declared option, showing its current value."""
        return [
            meta.get_label(locale, getattr(self, name))
            for name, meta in self.get_option_metas().items()
        ]
