"""Typed, validated access to one extension's settings.

Extensions describe their settings with a pydantic model and get a store
that converts the stored strings to and from the model's field types.

Example:
    class ExampleSettings(BaseModel):
        theme: Literal["light", "dark"] = "light"
        username: str = ""

    create_store = create_settings_store_factory("example-extension", ExampleSettings)
    store = create_store(settings_manager)

    if store.get("theme", "light") == "dark":
        store.set("username", "dark-mode-user")
"""

import logging
import typing
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import SettingValidationError
from .codec import encode_value, parse_ordered_value
from .manager import SettingsManager

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class TypedSettingsStore(Generic[ModelT]):
    """Namespace-bound settings store validated by a pydantic model.

    Args:
        manager: The SettingsManager holding the values.
        namespace: The extension namespace.
        model: pydantic model whose fields name the settings and their types.
    """

    def __init__(self, manager: SettingsManager, namespace: str, model: Type[ModelT]):
        self._manager = manager
        self._namespace = namespace
        self._model = model
        self._adapters: Dict[str, TypeAdapter] = {}

    @property
    def namespace(self) -> str:
        """The extension namespace this store reads and writes."""
        return self._namespace

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting converted to its model type.

        Args:
            key: Field name in the model.
            default: Returned when nothing is stored or the stored string
                does not convert.

        Raises:
            KeyError: If the model has no such field.
        """
        adapter = self._adapter(key)
        raw = self._manager.get(self._namespace, key)
        if raw is None:
            return default
        try:
            return adapter.validate_python(self._decode(key, raw))
        except ValidationError as e:
            logger.warning(
                f"Stored value for {self._namespace}.{key} is invalid, using default: "
                f"{e.errors()[0]['msg'] if e.errors() else e}"
            )
            return default

    def set(self, key: str, value: Any) -> None:
        """Validate, encode, and store a setting.

        Raises:
            KeyError: If the model has no such field.
            SettingValidationError: If the model or the manager rejects it.
        """
        adapter = self._adapter(key)
        try:
            validated = adapter.validate_python(value)
        except ValidationError as e:
            raise SettingValidationError(self._namespace, key, str(e)) from e

        error = self._manager.set(self._namespace, key, encode_value(validated))
        if error:
            raise SettingValidationError(self._namespace, key, error)

    def load(self) -> ModelT:
        """Build a model instance from all stored values.

        Fields with no stored value, or an invalid one, keep the model default.
        """
        data = {}
        for key in self._model.model_fields:
            value = self.get(key)
            if value is not None:
                data[key] = value
        return self._model(**data)

    def _adapter(self, key: str) -> TypeAdapter:
        """Get (and cache) the pydantic adapter for a model field."""
        if key not in self._adapters:
            model_field = self._model.model_fields.get(key)
            if model_field is None:
                raise KeyError(f"'{self._model.__name__}' has no setting '{key}'")
            self._adapters[key] = TypeAdapter(model_field.annotation)
        return self._adapters[key]

    def _decode(self, key: str, raw: str) -> Any:
        """Turn a stored string into input for the field's adapter."""
        annotation = self._model.model_fields[key].annotation
        if typing.get_origin(annotation) in _SEQUENCE_ORIGINS or annotation in _SEQUENCE_ORIGINS:
            return parse_ordered_value(raw)
        return raw


def create_settings_store_factory(
    namespace: str,
    model: Type[ModelT],
) -> Callable[[SettingsManager], TypedSettingsStore[ModelT]]:
    """Create a factory that binds a typed store to a manager.

    Args:
        namespace: The extension namespace.
        model: pydantic model describing the settings.

    Returns:
        Callable taking a SettingsManager (the global one when None) and
        returning a TypedSettingsStore.
    """

    def factory(manager: Optional[SettingsManager] = None) -> TypedSettingsStore[ModelT]:
        if manager is None:
            from .manager import get_settings_manager

            manager = get_settings_manager()
            if manager is None:
                raise RuntimeError("Settings manager not initialized")
        return TypedSettingsStore(manager, namespace, model)

    return factory
