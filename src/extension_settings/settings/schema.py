"""Setting definitions announced by extensions.

A definition describes one setting: how it is labelled, its default, and
which editor the settings UI should use for it (cycling through fixed
values, an ordered multi-select over options, or free text).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Optional

from ..errors import InvalidDefinitionError
from .codec import encode_value, parse_ordered_value

SettingKind = Literal["cycle", "ordered", "text"]


@dataclass(frozen=True)
class OrderedListOption:
    """One candidate in an ordered multi-select.

    Attributes:
        id: Token stored in the comma-separated setting value.
        label: Display label in the menu.
    """

    id: str
    label: str


@dataclass
class SettingDefinition:
    """Definition of a single extension setting.

    Attributes:
        id: Identifier, unique within the extension.
        label: Human-readable label.
        default: Default value used when nothing is stored.
        description: Help text shown while the setting is selected.
        values: Values to cycle through. Mutually exclusive with options.
        options: Options for an ordered multi-select. The stored value is
            the comma-separated ids of the selected options, in order.
        validation: Optional check returning False or an error message for
            rejected values.
    """

    id: str
    label: str
    default: str = ""
    description: str = ""
    values: Optional[List[str]] = None
    options: Optional[List[OrderedListOption]] = None
    validation: Optional[Callable[[str], bool | str]] = field(
        default=None, repr=False
    )

    def __post_init__(self):
        """Validate definition shape."""
        if not self.id:
            raise InvalidDefinitionError(self.id, "id must not be empty")
        if self.values is not None and len(self.values) == 0:
            self.values = None
        if self.values and self.options:
            raise InvalidDefinitionError(
                self.id, "values and options are mutually exclusive"
            )
        if self.values and len(set(self.values)) != len(self.values):
            raise InvalidDefinitionError(self.id, "values must be unique")
        if self.options:
            ids = [option.id for option in self.options]
            if len(set(ids)) != len(ids):
                raise InvalidDefinitionError(self.id, "option ids must be unique")
            for option_id in ids:
                # Stored as a comma-separated list, trimmed on parse
                if not option_id or "," in option_id or option_id != option_id.strip():
                    raise InvalidDefinitionError(
                        self.id, f"invalid option id {option_id!r}"
                    )

    @property
    def kind(self) -> SettingKind:
        """Which editor the settings UI uses for this setting."""
        if self.options:
            return "ordered"
        if self.values:
            return "cycle"
        return "text"

    def validate(self, value: Any) -> Optional[str]:
        """Validate a value against this definition.

        Args:
            value: The candidate value.

        Returns:
            Error message if invalid, None if valid.
        """
        if not isinstance(value, str):
            return f"{self.label} must be a string"

        if self.values and value not in self.values:
            return f"{self.label} must be one of: {', '.join(self.values)}"

        if self.options:
            ids = parse_ordered_value(value)
            if len(set(ids)) != len(ids):
                return f"{self.label} lists an option more than once"

        if self.validation:
            return self._validate_custom(value)

        return None

    def _validate_custom(self, value: str) -> Optional[str]:
        """Run the custom validation callable."""
        try:
            result = self.validation(value)
            if isinstance(result, str):
                return result
            if not result:
                return f"Invalid value for {self.label}"
        except Exception as e:
            return str(e)
        return None


def definition_from_dict(data: Dict[str, Any]) -> SettingDefinition:
    """Build a definition from a plain mapping (e.g. parsed YAML).

    Args:
        data: Mapping with id, label and optional default, description,
            values and options keys. Options may be mappings with id/label
            or bare ids.

    Returns:
        The SettingDefinition.

    Raises:
        InvalidDefinitionError: If required keys are missing or malformed.
    """
    if not isinstance(data, dict):
        raise InvalidDefinitionError(str(data), "definition must be a mapping")

    setting_id = str(data.get("id") or "")
    if "label" not in data:
        raise InvalidDefinitionError(setting_id, "label is required")

    values = data.get("values")
    options = None
    if data.get("options") is not None:
        options = []
        for raw in data["options"]:
            if isinstance(raw, dict):
                option_id = str(raw.get("id", ""))
                options.append(OrderedListOption(option_id, str(raw.get("label", option_id))))
            else:
                options.append(OrderedListOption(str(raw), str(raw)))

    return SettingDefinition(
        id=setting_id,
        label=str(data["label"]),
        default=encode_value(data.get("default")),
        description=str(data.get("description") or ""),
        values=[encode_value(v) for v in values] if values is not None else None,
        options=options,
    )
