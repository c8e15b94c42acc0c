from decimal import Decimal
from typing import Any

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.ExtensionCollector import ExtensionCollector
from cmisclient.clients.cmis.browser.PropertyValueCodec import PropertyValueCodec
from cmisclient.clients.cmis.errors import InvalidPropertyError, UnsupportedBaseTypeError, UnsupportedPropertyTypeError
from cmisclient.clients.cmis.models.Enums import (
    BaseTypeId,
    Cardinality,
    ContentStreamAllowed,
    DateTimeResolution,
    DecimalPrecision,
    PropertyType,
    Updatability,
    enum_or_none,
)
from cmisclient.clients.cmis.models.TypeDefinition import (
    Choice,
    DocumentTypeDefinition,
    FolderTypeDefinition,
    ItemTypeDefinition,
    PolicyTypeDefinition,
    PropertyBooleanDefinition,
    PropertyDateTimeDefinition,
    PropertyDecimalDefinition,
    PropertyDefinition,
    PropertyHtmlDefinition,
    PropertyIdDefinition,
    PropertyIntegerDefinition,
    PropertyStringDefinition,
    PropertyUriDefinition,
    RelationshipTypeDefinition,
    SecondaryTypeDefinition,
    TypeDefinition,
    TypeDefinitionContainer,
    TypeDefinitionList,
)

TYPE_DEFINITION_CLASSES: dict[BaseTypeId, type[TypeDefinition]] = {
    BaseTypeId.DOCUMENT: DocumentTypeDefinition,
    BaseTypeId.FOLDER: FolderTypeDefinition,
    BaseTypeId.RELATIONSHIP: RelationshipTypeDefinition,
    BaseTypeId.POLICY: PolicyTypeDefinition,
    BaseTypeId.ITEM: ItemTypeDefinition,
    BaseTypeId.SECONDARY: SecondaryTypeDefinition,
}

PROPERTY_DEFINITION_CLASSES: dict[PropertyType, type[PropertyDefinition]] = {
    PropertyType.STRING: PropertyStringDefinition,
    PropertyType.ID: PropertyIdDefinition,
    PropertyType.BOOLEAN: PropertyBooleanDefinition,
    PropertyType.INTEGER: PropertyIntegerDefinition,
    PropertyType.DATETIME: PropertyDateTimeDefinition,
    PropertyType.DECIMAL: PropertyDecimalDefinition,
    PropertyType.HTML: PropertyHtmlDefinition,
    PropertyType.URI: PropertyUriDefinition,
}


class TypeDefinitionConverter:
    """
    Converts browser binding type definitions into TypeDefinition entities.

    Both dispatches are closed: a base type outside BaseTypeId raises UnsupportedBaseTypeError and a
    property type outside PropertyType raises UnsupportedPropertyTypeError.
    """

    ##########################################
    ############ TYPE DEFINITIONS ############
    ##########################################

    @classmethod
    def convert_type_definition(cls, json: Any) -> TypeDefinition | None:
        """
        Converts one type definition.

        Args:
            json (Any): The wire type definition.

        Returns:
            TypeDefinition | None: The concrete subclass selected by "baseId", or None if json is not an object.

        Raises:
            InvalidPropertyError: If the type has no id or one of its fields has the wrong JSON type.
            UnsupportedBaseTypeError: If "baseId" is not a CMIS base type.
            UnsupportedPropertyTypeError: If a property definition has an unknown property type.
        """
        if not isinstance(json, dict):
            return None

        raw_base_id = json.get(bc.TYPE_BASE_ID)
        base_type_id = enum_or_none(BaseTypeId, raw_base_id)
        if base_type_id is None:
            raise UnsupportedBaseTypeError(raw_base_id)

        type_id = json.get(bc.TYPE_ID)
        if not isinstance(type_id, str) or not type_id:
            raise InvalidPropertyError(f"Invalid type definition: missing '{bc.TYPE_ID}' in type with base '{raw_base_id}'.")

        fields: dict[str, Any] = {
            "id": type_id,
            "base_type_id": base_type_id,
            "parent_type_id": json.get(bc.TYPE_PARENT_ID),
            "local_name": json.get(bc.TYPE_LOCAL_NAME),
            "local_namespace": json.get(bc.TYPE_LOCAL_NAMESPACE),
            "query_name": json.get(bc.TYPE_QUERY_NAME),
            "display_name": json.get(bc.TYPE_DISPLAY_NAME),
            "description": json.get(bc.TYPE_DESCRIPTION),
            "creatable": json.get(bc.TYPE_CREATABLE),
            "fileable": json.get(bc.TYPE_FILEABLE),
            "queryable": json.get(bc.TYPE_QUERYABLE),
            "fulltext_indexed": json.get(bc.TYPE_FULLTEXT_INDEXED),
            "included_in_supertype_query": json.get(bc.TYPE_INCLUDED_IN_SUPERTYPE_QUERY),
            "controllable_acl": json.get(bc.TYPE_CONTROLLABLE_ACL),
            "controllable_policy": json.get(bc.TYPE_CONTROLLABLE_POLICY),
        }

        if base_type_id == BaseTypeId.DOCUMENT:
            fields["is_versionable"] = json.get(bc.TYPE_VERSIONABLE)
            fields["content_stream_allowed"] = enum_or_none(ContentStreamAllowed, json.get(bc.TYPE_CONTENT_STREAM_ALLOWED))
        elif base_type_id == BaseTypeId.RELATIONSHIP:
            fields["allowed_source_type_ids"] = cls._convert_id_list(json.get(bc.TYPE_ALLOWED_SOURCE_TYPES))
            fields["allowed_target_type_ids"] = cls._convert_id_list(json.get(bc.TYPE_ALLOWED_TARGET_TYPES))

        property_definitions: dict[str, PropertyDefinition] = {}
        json_property_definitions = json.get(bc.TYPE_PROPERTY_DEFINITIONS)
        if isinstance(json_property_definitions, dict):
            for json_property_definition in json_property_definitions.values():
                property_definition = cls.convert_property_definition(json_property_definition)
                if property_definition is not None:
                    property_definitions[property_definition.id] = property_definition
        fields["property_definitions"] = property_definitions

        return ExtensionCollector.build(TYPE_DEFINITION_CLASSES[base_type_id], json, bc.TYPE_KEYS, **fields)

    @staticmethod
    def _convert_id_list(json: Any) -> list[str] | None:
        if not isinstance(json, list):
            return None
        return [str(type_id) for type_id in json if type_id is not None]

    ##########################################
    ########## PROPERTY DEFINITIONS ##########
    ##########################################

    @classmethod
    def convert_property_definition(cls, json: Any) -> PropertyDefinition | None:
        """
        Converts one property definition, selecting the subclass by "propertyType".

        Raises:
            InvalidPropertyError: If the definition has no id or one of its fields has the wrong JSON type.
            UnsupportedPropertyTypeError: If "propertyType" is not a CMIS property type.
            InvalidPropertyValueError: If the default value or a choice value does not match the property type.
        """
        if not isinstance(json, dict):
            return None

        property_id = json.get(bc.PROPERTY_TYPE_ID)
        raw_property_type = json.get(bc.PROPERTY_TYPE_PROPERTY_TYPE)
        property_type = enum_or_none(PropertyType, raw_property_type)
        if property_type is None:
            raise UnsupportedPropertyTypeError(raw_property_type, property_id=property_id)
        if not isinstance(property_id, str) or not property_id:
            raise InvalidPropertyError(f"Invalid property definition: missing '{bc.PROPERTY_TYPE_ID}'.")

        fields: dict[str, Any] = {
            "id": property_id,
            "property_type": property_type,
            "cardinality": enum_or_none(Cardinality, json.get(bc.PROPERTY_TYPE_CARDINALITY)),
            "updatability": enum_or_none(Updatability, json.get(bc.PROPERTY_TYPE_UPDATABILITY)),
            "local_name": json.get(bc.PROPERTY_TYPE_LOCAL_NAME),
            "local_namespace": json.get(bc.PROPERTY_TYPE_LOCAL_NAMESPACE),
            "query_name": json.get(bc.PROPERTY_TYPE_QUERY_NAME),
            "display_name": json.get(bc.PROPERTY_TYPE_DISPLAY_NAME),
            "description": json.get(bc.PROPERTY_TYPE_DESCRIPTION),
            "inherited": json.get(bc.PROPERTY_TYPE_INHERITED),
            "open_choice": json.get(bc.PROPERTY_TYPE_OPEN_CHOICE),
            "orderable": json.get(bc.PROPERTY_TYPE_ORDERABLE),
            "queryable": json.get(bc.PROPERTY_TYPE_QUERYABLE),
            "required": json.get(bc.PROPERTY_TYPE_REQUIRED),
            "choices": cls.convert_choices(json.get(bc.PROPERTY_TYPE_CHOICE), property_type),
        }

        if bc.PROPERTY_TYPE_DEFAULT_VALUE in json:
            fields["default_value"] = PropertyValueCodec.decode_values(
                property_type, json.get(bc.PROPERTY_TYPE_DEFAULT_VALUE), property_id=property_id
            )

        if property_type == PropertyType.STRING:
            fields["max_length"] = cls._to_int(json.get(bc.PROPERTY_TYPE_MAX_LENGTH))
        elif property_type == PropertyType.INTEGER:
            fields["min_value"] = cls._to_int(json.get(bc.PROPERTY_TYPE_MIN_VALUE))
            fields["max_value"] = cls._to_int(json.get(bc.PROPERTY_TYPE_MAX_VALUE))
        elif property_type == PropertyType.DECIMAL:
            fields["min_value"] = cls._to_decimal(json.get(bc.PROPERTY_TYPE_MIN_VALUE))
            fields["max_value"] = cls._to_decimal(json.get(bc.PROPERTY_TYPE_MAX_VALUE))
            fields["precision"] = enum_or_none(DecimalPrecision, json.get(bc.PROPERTY_TYPE_PRECISION))
        elif property_type == PropertyType.DATETIME:
            fields["resolution"] = enum_or_none(DateTimeResolution, json.get(bc.PROPERTY_TYPE_RESOLUTION))

        return ExtensionCollector.build(PROPERTY_DEFINITION_CLASSES[property_type], json, bc.PROPERTY_TYPE_KEYS, **fields)

    @classmethod
    def convert_choices(cls, json: Any, property_type: PropertyType) -> list[Choice] | None:
        """
        Converts a (possibly nested) choice list. Values are decoded with the rules of property_type.
        """
        if not isinstance(json, list):
            return None

        result: list[Choice] = []
        for json_choice in json:
            if not isinstance(json_choice, dict):
                continue
            result.append(ExtensionCollector.build_model(
                Choice,
                display_name=json_choice.get(bc.PROPERTY_TYPE_CHOICE_DISPLAY_NAME),
                values=PropertyValueCodec.decode_values(property_type, json_choice.get(bc.PROPERTY_TYPE_CHOICE_VALUE)),
                choices=cls.convert_choices(json_choice.get(bc.PROPERTY_TYPE_CHOICE_CHOICE), property_type),
            ))
        return result

    @staticmethod
    def _to_int(raw: Any) -> int | None:
        if raw is None or isinstance(raw, bool):
            return None
        try:
            return int(raw)
        except (TypeError, ValueError, OverflowError):
            return None

    @staticmethod
    def _to_decimal(raw: Any) -> Decimal | None:
        if raw is None or isinstance(raw, bool):
            return None
        try:
            value = Decimal(str(raw))
        except ArithmeticError:
            return None
        return value if value.is_finite() else None

    ##########################################
    ########## LISTINGS / HIERARCHY ##########
    ##########################################

    @classmethod
    def convert_type_children(cls, json: Any) -> TypeDefinitionList | None:
        if not isinstance(json, dict):
            return None

        json_types = json.get(bc.TYPES_LIST_TYPES)
        types = [cls.convert_type_definition(json_type) for json_type in json_types] if isinstance(json_types, list) else []
        return ExtensionCollector.build(
            TypeDefinitionList,
            json,
            bc.TYPES_LIST_KEYS,
            types=[type_definition for type_definition in types if type_definition is not None],
            has_more_items=json.get(bc.TYPES_LIST_HAS_MORE_ITEMS),
            num_items=json.get(bc.TYPES_LIST_NUM_ITEMS),
        )

    @classmethod
    def convert_type_descendants(cls, json: Any) -> list[TypeDefinitionContainer] | None:
        """
        Converts a type descendants tree. Each node is {"type": ..., "children": [...]}.
        """
        if not isinstance(json, list):
            return None

        result: list[TypeDefinitionContainer] = []
        for json_container in json:
            if not isinstance(json_container, dict):
                continue
            result.append(ExtensionCollector.build(
                TypeDefinitionContainer,
                json_container,
                bc.TYPES_CONTAINER_KEYS,
                type_definition=cls.convert_type_definition(json_container.get(bc.TYPES_CONTAINER_TYPE)),
                children=cls.convert_type_descendants(json_container.get(bc.TYPES_CONTAINER_CHILDREN)) or [],
            ))
        return result
