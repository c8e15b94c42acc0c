from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from cmisclient.clients.cmis.errors import InvalidPropertyError
from cmisclient.clients.cmis.models.Extension import ExtensionElement, ExtensionsData

M = TypeVar("M", bound=ExtensionsData)
B = TypeVar("B", bound=BaseModel)


class ExtensionCollector:
    """
    Turns the keys of a wire object that are not part of its schema into ExtensionElement trees.

    Rules:
        object value -> element with children built from every key of the nested object
        array value  -> one element per item, all named after the key (nested arrays flatten)
        scalar value -> leaf element with the JSON spelling of the value ("true", "1.5", ...)
        null value   -> leaf element without value
    """

    @classmethod
    def convert_extensions(cls, json: Any, schema_keys: Iterable[str]) -> list[ExtensionElement] | None:
        """
        Collects the extension elements of one wire object.

        Args:
            json (Any): The wire object. Anything that is not a JSON object has no extensions.
            schema_keys (Iterable[str]): The keys belonging to the schema of this level.

        Returns:
            list[ExtensionElement] | None: The elements in wire order, or None if no key falls outside the schema.
        """
        if not isinstance(json, dict):
            return None
        known = set(schema_keys)
        elements: list[ExtensionElement] = []
        for key, value in json.items():
            if key in known:
                continue
            elements.extend(cls._convert_value(key, value))
        return elements or None

    @classmethod
    def build(cls, model_class: type[M], json: Any, schema_keys: Iterable[str], **fields: Any) -> M:
        """
        Builds an entity from its converted fields plus the extensions of its wire object.

        Raises:
            InvalidPropertyError: If a wire field has a shape the entity does not accept.
        """
        return cls.build_model(model_class, extensions=cls.convert_extensions(json, schema_keys), **fields)

    @staticmethod
    def build_model(model_class: type[B], **fields: Any) -> B:
        """
        Builds a model, reporting the first rejected field as InvalidPropertyError.
        """
        try:
            return model_class(**fields)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or model_class.__name__
            raise InvalidPropertyError(
                f"Invalid {model_class.__name__}: field '{field}' rejects {error.get('input')!r} ({error['msg']})."
            ) from e

    @classmethod
    def _convert_value(cls, name: str, value: Any) -> list[ExtensionElement]:
        if isinstance(value, dict):
            children: list[ExtensionElement] = []
            for key, child in value.items():
                children.extend(cls._convert_value(key, child))
            return [ExtensionElement(name=name, children=children)]
        if isinstance(value, list):
            elements: list[ExtensionElement] = []
            for item in value:
                elements.extend(cls._convert_value(name, item))
            return elements
        return [ExtensionElement(name=name, value=cls._format_scalar(value))]

    @staticmethod
    def _format_scalar(value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
