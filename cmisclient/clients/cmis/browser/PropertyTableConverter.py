from collections.abc import Callable
from typing import Any

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.ExtensionCollector import ExtensionCollector
from cmisclient.clients.cmis.browser.PropertyValueCodec import PropertyValueCodec
from cmisclient.clients.cmis.errors import InvalidPropertyError, UnsupportedPropertyTypeError
from cmisclient.clients.cmis.models.Enums import BaseTypeId, PropertyType
from cmisclient.clients.cmis.models.Property import PropertiesCollection, PropertyData
from cmisclient.clients.cmis.models.TypeDefinition import PropertyDefinition, TypeDefinition
from cmisclient.clients.cmis.TypeDefinitionResolver import TypeDefinitionResolver

PropertyDefinitionLookup = Callable[[str], PropertyDefinition | None]


class PropertyTableConverter:
    """
    Converts the property set of a wire object into a PropertiesCollection.

    Explicit properties are self describing and need no type lookup. Succinct properties are a flat
    id -> value map, so the type of every key is resolved against the type definitions cached in the
    resolver:

        primary type -> secondary types (listed order) -> cmis:document -> cmis:folder -> heuristic

    The heuristic is the only recovered failure. Every other problem aborts the whole collection.
    """

    def __init__(self, resolver: TypeDefinitionResolver | None = None):
        self._resolver = resolver

    ##########################################
    ############### EXPLICIT #################
    ##########################################

    def convert_properties(self, json: Any, json_extension: Any = None) -> PropertiesCollection | None:
        """
        Converts explicit properties, either an object keyed by property id or an array of property objects.

        Args:
            json (Any): The "properties" value of a wire object.
            json_extension (Any): The sibling "propertiesExtension" value, if any.

        Returns:
            PropertiesCollection | None: The typed properties in wire order, or None if json is neither object nor array.

        Raises:
            InvalidPropertyError: If a property object is not an object or has no id or no type,
                or if one of its names is not a string.
            UnsupportedPropertyTypeError: If a property names a type outside the CMIS property types.
            InvalidPropertyValueError: If a value does not match its property type.
        """
        if isinstance(json, dict):
            wire_properties = list(json.values())
        elif isinstance(json, list):
            wire_properties = json
        else:
            return None

        result = PropertiesCollection()
        for wire_property in wire_properties:
            result.add_property(self._convert_explicit_property(wire_property))
        result.extensions = self._convert_properties_extension(json_extension)
        return result

    def _convert_explicit_property(self, wire_property: Any) -> PropertyData:
        if not isinstance(wire_property, dict):
            raise InvalidPropertyError(f"Invalid property: expected a JSON object, got {wire_property!r}.")

        property_id = wire_property.get(bc.PROPERTY_ID)
        if not isinstance(property_id, str) or not property_id:
            raise InvalidPropertyError(f"Invalid property: missing '{bc.PROPERTY_ID}' in {wire_property!r}.")

        raw_type = wire_property.get(bc.PROPERTY_DATATYPE)
        if raw_type is None:
            raise InvalidPropertyError(f"Invalid property '{property_id}': missing '{bc.PROPERTY_DATATYPE}'.")
        try:
            property_type = PropertyType(raw_type)
        except ValueError:
            raise UnsupportedPropertyTypeError(raw_type, property_id=property_id)

        return ExtensionCollector.build(
            PropertyData,
            wire_property,
            bc.PROPERTY_KEYS,
            id=property_id,
            property_type=property_type,
            values=self._decode_checked(property_type, wire_property.get(bc.PROPERTY_VALUE), property_id),
            display_name=wire_property.get(bc.PROPERTY_DISPLAY_NAME),
            query_name=wire_property.get(bc.PROPERTY_QUERY_NAME),
            local_name=wire_property.get(bc.PROPERTY_LOCAL_NAME),
        )

    ##########################################
    ############### SUCCINCT #################
    ##########################################

    def convert_succinct_properties(self, json: Any, json_extension: Any = None) -> PropertiesCollection | None:
        """
        Converts a succinct property map.

        Keys that no resolvable type declares are typed heuristically from their value, with the key as
        display name. The type id keys themselves are kept only when a resolvable type declares them.

        Raises:
            InvalidPropertyValueError: If a value does not match its resolved property type.
        """
        if not isinstance(json, dict):
            return None

        type_definitions = self._get_candidate_types(json)
        lookups = self._build_lookup_chain(type_definitions)

        result = PropertiesCollection()
        for property_id, raw in json.items():
            property_definition = self._resolve_property_definition(property_id, lookups)
            if property_definition is None and property_id in (bc.PROPERTY_OBJECT_TYPE_ID, bc.PROPERTY_SECONDARY_OBJECT_TYPE_IDS):
                continue
            result.add_property(self._convert_succinct_property(property_id, raw, property_definition))
        result.extensions = self._convert_properties_extension(json_extension)
        return result

    def _convert_succinct_property(self, property_id: str, raw: Any, property_definition: PropertyDefinition | None) -> PropertyData:
        if property_definition is not None:
            return PropertyData(
                id=property_id,
                property_type=property_definition.property_type,
                values=self._decode_checked(property_definition.property_type, raw, property_id),
                display_name=property_definition.display_name,
                query_name=property_definition.query_name,
                local_name=property_definition.local_name,
            )

        property_type = PropertyValueCodec.infer_property_type(raw)
        return PropertyData(
            id=property_id,
            property_type=property_type,
            values=self._decode_checked(property_type, raw, property_id),
            display_name=property_id,
        )

    def _get_candidate_types(self, json: dict) -> list[TypeDefinition]:
        """
        Primary type first, then the secondary types in listed order. Types missing from the cache are left out.
        """
        if self._resolver is None:
            return []
        type_ids = TypeDefinitionResolver.collect_type_ids({bc.OBJECT_SUCCINCT_PROPERTIES: json})
        candidates = [self._resolver.get_type_definition(type_id) for type_id in type_ids]
        return [type_definition for type_definition in candidates if type_definition is not None]

    def _build_lookup_chain(self, type_definitions: list[TypeDefinition]) -> list[PropertyDefinitionLookup]:
        lookups: list[PropertyDefinitionLookup] = [type_definition.get_property_definition for type_definition in type_definitions]
        if self._resolver is not None:
            for base_type_id in (BaseTypeId.DOCUMENT, BaseTypeId.FOLDER):
                base_type = self._resolver.get_type_definition(base_type_id.value)
                if base_type is not None:
                    lookups.append(base_type.get_property_definition)
        return lookups

    @staticmethod
    def _resolve_property_definition(property_id: str, lookups: list[PropertyDefinitionLookup]) -> PropertyDefinition | None:
        for lookup in lookups:
            property_definition = lookup(property_id)
            if property_definition is not None:
                return property_definition
        return None

    ##########################################
    ################ SHARED ##################
    ##########################################

    @staticmethod
    def _decode_checked(property_type: PropertyType, raw: Any, property_id: str) -> list[Any]:
        values = PropertyValueCodec.decode_values(property_type, raw, property_id=property_id)
        for value in values:
            PropertyValueCodec.check_value(property_type, value, property_id=property_id)
        return values

    @staticmethod
    def _convert_properties_extension(json_extension: Any):
        return ExtensionCollector.convert_extensions(json_extension, ())
