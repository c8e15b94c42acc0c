"""Typed property instances and property collections."""

from typing import Any

from cmisclient.clients.cmis.models.Enums import PropertyType
from cmisclient.clients.cmis.models.Extension import ExtensionsData


class PropertyData(ExtensionsData):
    """
    A single typed property of a CMIS object.

    Every value in `values` has passed the type check of `property_type`; null wire values are not stored.
    """
    id: str
    property_type: PropertyType
    values: list[Any] = []
    display_name: str | None = None
    query_name: str | None = None
    local_name: str | None = None

    @property
    def first_value(self) -> Any:
        return self.values[0] if self.values else None


class PropertiesCollection(ExtensionsData):
    """
    Insertion-ordered mapping from property id to PropertyData.
    """
    properties: dict[str, PropertyData] = {}

    def add_property(self, property_data: PropertyData) -> None:
        self.properties[property_data.id] = property_data

    def get_property(self, property_id: str) -> PropertyData | None:
        return self.properties.get(property_id)

    def get_value(self, property_id: str) -> Any:
        """Returns the first value of a property, or None if the property is absent or empty."""
        property_data = self.properties.get(property_id)
        return property_data.first_value if property_data else None

    def get_values(self, property_id: str) -> list[Any]:
        property_data = self.properties.get(property_id)
        return list(property_data.values) if property_data else []

    @property
    def property_list(self) -> list[PropertyData]:
        return list(self.properties.values())

    def __contains__(self, property_id: object) -> bool:
        return property_id in self.properties

    def __len__(self) -> int:
        return len(self.properties)
