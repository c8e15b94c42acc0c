"""CMIS type and property definitions."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from cmisclient.clients.cmis.models.Enums import (
    BaseTypeId,
    Cardinality,
    ContentStreamAllowed,
    DateTimeResolution,
    DecimalPrecision,
    PropertyType,
    Updatability,
)
from cmisclient.clients.cmis.models.Extension import ExtensionsData


##########################################
########## PROPERTY DEFINITIONS ##########
##########################################

class Choice(BaseModel):
    """
    One entry of a property's choice list. Choices nest to build hierarchical pick lists.
    """
    model_config = ConfigDict(frozen=True)

    display_name: str | None = None
    values: list[Any] = []
    choices: list["Choice"] | None = None


class PropertyDefinition(ExtensionsData):
    """
    Definition of a single property of a type, as returned in the type's propertyDefinitions.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    property_type: PropertyType
    cardinality: Cardinality | None = None
    updatability: Updatability | None = None
    local_name: str | None = None
    local_namespace: str | None = None
    query_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    inherited: bool | None = None
    open_choice: bool | None = None
    orderable: bool | None = None
    queryable: bool | None = None
    required: bool | None = None
    default_value: list[Any] | None = None
    choices: list[Choice] | None = None

    @property
    def is_multi_valued(self) -> bool:
        return self.cardinality == Cardinality.MULTI


class PropertyStringDefinition(PropertyDefinition):
    max_length: int | None = None


class PropertyIdDefinition(PropertyDefinition):
    pass


class PropertyBooleanDefinition(PropertyDefinition):
    pass


class PropertyIntegerDefinition(PropertyDefinition):
    min_value: int | None = None
    max_value: int | None = None


class PropertyDateTimeDefinition(PropertyDefinition):
    resolution: DateTimeResolution | None = None


class PropertyDecimalDefinition(PropertyDefinition):
    min_value: Decimal | None = None
    max_value: Decimal | None = None
    precision: DecimalPrecision | None = None


class PropertyHtmlDefinition(PropertyDefinition):
    pass


class PropertyUriDefinition(PropertyDefinition):
    pass


##########################################
############ TYPE DEFINITIONS ############
##########################################

class TypeDefinition(ExtensionsData):
    """
    Common part of every CMIS type definition. Subclasses add the base-type specific fields.
    Instances are read-only; a cached definition is shared by every lookup.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    base_type_id: BaseTypeId
    parent_type_id: str | None = None
    local_name: str | None = None
    local_namespace: str | None = None
    query_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    creatable: bool | None = None
    fileable: bool | None = None
    queryable: bool | None = None
    fulltext_indexed: bool | None = None
    included_in_supertype_query: bool | None = None
    controllable_acl: bool | None = None
    controllable_policy: bool | None = None
    property_definitions: dict[str, PropertyDefinition] = {}

    def get_property_definition(self, property_id: str) -> PropertyDefinition | None:
        return self.property_definitions.get(property_id)


class DocumentTypeDefinition(TypeDefinition):
    is_versionable: bool | None = None
    content_stream_allowed: ContentStreamAllowed | None = None


class FolderTypeDefinition(TypeDefinition):
    pass


class RelationshipTypeDefinition(TypeDefinition):
    allowed_source_type_ids: list[str] | None = None
    allowed_target_type_ids: list[str] | None = None


class PolicyTypeDefinition(TypeDefinition):
    pass


class ItemTypeDefinition(TypeDefinition):
    pass


class SecondaryTypeDefinition(TypeDefinition):
    pass


##########################################
########## LISTINGS / HIERARCHY ##########
##########################################

class TypeDefinitionList(ExtensionsData):
    """
    One page of type children.
    """
    types: list[TypeDefinition] = []
    has_more_items: bool | None = None
    num_items: int | None = None


class TypeDefinitionContainer(ExtensionsData):
    """
    A node of a type descendants tree.
    """
    type_definition: TypeDefinition | None = None
    children: list["TypeDefinitionContainer"] = []


Choice.model_rebuild()
TypeDefinitionContainer.model_rebuild()

__all__ = [
    "Choice",
    "PropertyDefinition",
    "PropertyStringDefinition",
    "PropertyIdDefinition",
    "PropertyBooleanDefinition",
    "PropertyIntegerDefinition",
    "PropertyDateTimeDefinition",
    "PropertyDecimalDefinition",
    "PropertyHtmlDefinition",
    "PropertyUriDefinition",
    "TypeDefinition",
    "DocumentTypeDefinition",
    "FolderTypeDefinition",
    "RelationshipTypeDefinition",
    "PolicyTypeDefinition",
    "ItemTypeDefinition",
    "SecondaryTypeDefinition",
    "TypeDefinitionList",
    "TypeDefinitionContainer",
]
