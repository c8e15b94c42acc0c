"""Converted CMIS objects and the listing / tree wrappers around them."""

from datetime import datetime
from typing import Any

from cmisclient.clients.cmis.models.Enums import BaseTypeId, ChangeType, enum_or_none
from cmisclient.clients.cmis.models.Extension import ExtensionsData
from cmisclient.clients.cmis.models.Property import PropertiesCollection


##########################################
################## ACL ###################
##########################################

class Principal(ExtensionsData):
    id: str | None = None


class Ace(ExtensionsData):
    """
    Access control entry: one principal and the permissions granted to it, in server order.
    """
    principal: Principal | None = None
    permissions: list[str] = []
    is_direct: bool = False

    @property
    def principal_id(self) -> str | None:
        return self.principal.id if self.principal else None


class Acl(ExtensionsData):
    aces: list[Ace] = []
    is_exact: bool | None = None


##########################################
############# OBJECT PARTS ###############
##########################################

class AllowableActions(ExtensionsData):
    """
    The actions the current principal may perform on an object. Only actions reported as true are kept.
    """
    allowable_actions: set[str] = set()

    def __contains__(self, action: object) -> bool:
        return action in self.allowable_actions


class RenditionData(ExtensionsData):
    stream_id: str | None = None
    mime_type: str | None = None
    length: int | None = None
    kind: str | None = None
    title: str | None = None
    height: int | None = None
    width: int | None = None
    rendition_document_id: str | None = None


class ChangeEventInfo(ExtensionsData):
    change_type: ChangeType | None = None
    change_time: datetime | None = None


class PolicyIdList(ExtensionsData):
    policy_ids: list[str] = []


class FailedToDeleteData(ExtensionsData):
    """
    Ids of the objects a deleteTree call could not remove.
    """
    ids: list[str] = []


##########################################
################ OBJECT ##################
##########################################

class ObjectData(ExtensionsData):
    """
    A fully converted CMIS object. Built fresh by every conversion call; a refresh replaces the instance.
    """
    properties: PropertiesCollection | None = None
    allowable_actions: AllowableActions | None = None
    relationships: list["ObjectData"] | None = None
    change_event_info: ChangeEventInfo | None = None
    acl: Acl | None = None
    is_exact_acl: bool | None = None
    policy_ids: PolicyIdList | None = None
    renditions: list[RenditionData] | None = None

    def _get_property_value(self, property_id: str) -> Any:
        if self.properties is None:
            return None
        return self.properties.get_value(property_id)

    @property
    def id(self) -> str | None:
        return self._get_property_value("cmis:objectId")

    @property
    def object_type_id(self) -> str | None:
        return self._get_property_value("cmis:objectTypeId")

    @property
    def base_type_id(self) -> BaseTypeId | None:
        return enum_or_none(BaseTypeId, self._get_property_value("cmis:baseTypeId"))

    @property
    def change_token(self) -> str | None:
        return self._get_property_value("cmis:changeToken")

    @property
    def name(self) -> str | None:
        return self._get_property_value("cmis:name")


##########################################
########## LISTINGS / HIERARCHY ##########
##########################################

class ObjectInFolderData(ExtensionsData):
    object: ObjectData | None = None
    path_segment: str | None = None


class ObjectInFolderList(ExtensionsData):
    """
    One page of folder children. Paging values stay None when the server does not report them.
    """
    objects: list[ObjectInFolderData] = []
    has_more_items: bool | None = None
    num_items: int | None = None


class ObjectInFolderContainer(ExtensionsData):
    """
    A node of a descendants or folder tree.
    """
    object: ObjectInFolderData | None = None
    children: list["ObjectInFolderContainer"] = []


class ObjectParentData(ExtensionsData):
    object: ObjectData | None = None
    relative_path_segment: str | None = None


class ObjectList(ExtensionsData):
    """
    A page of objects, used for query results, content changes and checked-out documents.
    """
    objects: list[ObjectData] = []
    has_more_items: bool | None = None
    num_items: int | None = None
    change_log_token: str | None = None


ObjectData.model_rebuild()
ObjectInFolderContainer.model_rebuild()
