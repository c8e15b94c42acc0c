from typing import Any

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.ExtensionCollector import ExtensionCollector
from cmisclient.clients.cmis.browser.PropertyTableConverter import PropertyTableConverter
from cmisclient.clients.cmis.browser.PropertyValueCodec import PropertyValueCodec
from cmisclient.clients.cmis.models.Enums import ChangeType, PropertyType, enum_or_none
from cmisclient.clients.cmis.models.ObjectData import (
    Ace,
    Acl,
    AllowableActions,
    ChangeEventInfo,
    FailedToDeleteData,
    ObjectData,
    ObjectInFolderContainer,
    ObjectInFolderData,
    ObjectInFolderList,
    ObjectList,
    ObjectParentData,
    PolicyIdList,
    Principal,
    RenditionData,
)
from cmisclient.clients.cmis.TypeDefinitionResolver import TypeDefinitionResolver


class ObjectGraphConverter:
    """
    Converts browser binding object payloads into ObjectData graphs, including the paging and tree
    wrappers of the navigation services.

    Every sub-converter returns None when its wire part is absent and collects extensions using only
    the schema keys of its own level. Server order is preserved everywhere.
    """

    def __init__(self, resolver: TypeDefinitionResolver | None = None):
        self._property_converter = PropertyTableConverter(resolver)

    ##########################################
    ################ OBJECTS #################
    ##########################################

    def convert_object_data(self, json: Any) -> ObjectData | None:
        """
        Converts one object. Succinct properties take precedence over explicit ones.

        Raises:
            InvalidPropertyError: If an explicit property is malformed.
            InvalidPropertyValueError: If a property value does not match its type.
            UnsupportedPropertyTypeError: If an explicit property names an unknown type.
        """
        if not isinstance(json, dict):
            return None

        json_properties_extension = json.get(bc.OBJECT_PROPERTIES_EXTENSION)
        if bc.OBJECT_SUCCINCT_PROPERTIES in json:
            properties = self._property_converter.convert_succinct_properties(
                json.get(bc.OBJECT_SUCCINCT_PROPERTIES), json_properties_extension
            )
        else:
            properties = self._property_converter.convert_properties(
                json.get(bc.OBJECT_PROPERTIES), json_properties_extension
            )

        return ExtensionCollector.build(
            ObjectData,
            json,
            bc.OBJECT_KEYS,
            properties=properties,
            allowable_actions=self.convert_allowable_actions(json.get(bc.OBJECT_ALLOWABLE_ACTIONS)),
            relationships=self.convert_objects(json.get(bc.OBJECT_RELATIONSHIPS)),
            change_event_info=self.convert_change_event_info(json.get(bc.OBJECT_CHANGE_EVENT_INFO)),
            acl=self.convert_acl(json.get(bc.OBJECT_ACL)),
            is_exact_acl=json.get(bc.OBJECT_EXACT_ACL),
            policy_ids=self.convert_policy_id_list(json.get(bc.OBJECT_POLICY_IDS)),
            renditions=self.convert_renditions(json.get(bc.OBJECT_RENDITIONS)),
        )

    def convert_objects(self, json: Any) -> list[ObjectData] | None:
        if not isinstance(json, list):
            return None
        objects = [self.convert_object_data(json_object) for json_object in json]
        return [obj for obj in objects if obj is not None]

    def convert_object_list(self, json: Any, is_query_result: bool = False) -> ObjectList | None:
        """
        Converts a page of objects. Query results list their objects under "results", every other
        object list under "objects".
        """
        if not isinstance(json, dict):
            return None

        if is_query_result:
            objects = self.convert_objects(json.get(bc.QUERY_RESULT_LIST_RESULTS))
            schema_keys = bc.QUERY_RESULT_LIST_KEYS
        else:
            objects = self.convert_objects(json.get(bc.OBJECT_LIST_OBJECTS))
            schema_keys = bc.OBJECT_LIST_KEYS

        return ExtensionCollector.build(
            ObjectList,
            json,
            schema_keys,
            objects=objects or [],
            has_more_items=json.get(bc.OBJECT_LIST_HAS_MORE_ITEMS),
            num_items=json.get(bc.OBJECT_LIST_NUM_ITEMS),
            change_log_token=json.get(bc.OBJECT_LIST_CHANGE_LOG_TOKEN),
        )

    ##########################################
    ############### NAVIGATION ###############
    ##########################################

    def convert_object_in_folder(self, json: Any) -> ObjectInFolderData | None:
        if not isinstance(json, dict):
            return None
        return ExtensionCollector.build(
            ObjectInFolderData,
            json,
            bc.OBJECT_IN_FOLDER_KEYS,
            object=self.convert_object_data(json.get(bc.OBJECT_IN_FOLDER_OBJECT)),
            path_segment=json.get(bc.OBJECT_IN_FOLDER_PATH_SEGMENT),
        )

    def convert_object_in_folder_list(self, json: Any) -> ObjectInFolderList | None:
        if not isinstance(json, dict):
            return None

        json_objects = json.get(bc.OBJECT_IN_FOLDER_LIST_OBJECTS)
        objects = []
        if isinstance(json_objects, list):
            objects = [self.convert_object_in_folder(json_object) for json_object in json_objects]

        return ExtensionCollector.build(
            ObjectInFolderList,
            json,
            bc.OBJECT_IN_FOLDER_LIST_KEYS,
            objects=[obj for obj in objects if obj is not None],
            has_more_items=json.get(bc.OBJECT_IN_FOLDER_LIST_HAS_MORE_ITEMS),
            num_items=json.get(bc.OBJECT_IN_FOLDER_LIST_NUM_ITEMS),
        )

    def convert_descendants(self, json: Any) -> list[ObjectInFolderContainer] | None:
        if not isinstance(json, list):
            return None
        containers = [self.convert_descendant(json_container) for json_container in json]
        return [container for container in containers if container is not None]

    def convert_descendant(self, json: Any) -> ObjectInFolderContainer | None:
        """
        Converts one node of a descendants or folder tree, recursing into its children.
        """
        if not isinstance(json, dict):
            return None
        return ExtensionCollector.build(
            ObjectInFolderContainer,
            json,
            bc.OBJECT_IN_FOLDER_CONTAINER_KEYS,
            object=self.convert_object_in_folder(json.get(bc.OBJECT_IN_FOLDER_CONTAINER_OBJECT)),
            children=self.convert_descendants(json.get(bc.OBJECT_IN_FOLDER_CONTAINER_CHILDREN)) or [],
        )

    def convert_object_parents(self, json: Any) -> list[ObjectParentData] | None:
        if not isinstance(json, list):
            return None

        result: list[ObjectParentData] = []
        for json_parent in json:
            if not isinstance(json_parent, dict):
                continue
            result.append(ExtensionCollector.build(
                ObjectParentData,
                json_parent,
                bc.OBJECT_PARENTS_KEYS,
                object=self.convert_object_data(json_parent.get(bc.OBJECT_PARENTS_OBJECT)),
                relative_path_segment=json_parent.get(bc.OBJECT_PARENTS_RELATIVE_PATH_SEGMENT),
            ))
        return result

    ##########################################
    ############## OBJECT PARTS ##############
    ##########################################

    @staticmethod
    def convert_acl(json: Any) -> Acl | None:
        """
        Converts an ACL. ACE order and permission order are kept as sent.
        """
        if not isinstance(json, dict):
            return None

        aces: list[Ace] = []
        json_aces = json.get(bc.ACL_ACES)
        if isinstance(json_aces, list):
            for json_ace in json_aces:
                if not isinstance(json_ace, dict):
                    continue
                principal = None
                json_principal = json_ace.get(bc.ACE_PRINCIPAL)
                if isinstance(json_principal, dict):
                    principal = ExtensionCollector.build(
                        Principal, json_principal, bc.ACE_PRINCIPAL_KEYS, id=json_principal.get(bc.ACE_PRINCIPAL_ID)
                    )
                elif json_ace.get(bc.ACE_PRINCIPAL_ID) is not None:
                    principal = ExtensionCollector.build_model(Principal, id=json_ace.get(bc.ACE_PRINCIPAL_ID))

                json_permissions = json_ace.get(bc.ACE_PERMISSIONS)
                aces.append(ExtensionCollector.build(
                    Ace,
                    json_ace,
                    bc.ACE_KEYS,
                    principal=principal,
                    permissions=[str(p) for p in json_permissions if p is not None] if isinstance(json_permissions, list) else [],
                    is_direct=bool(json_ace.get(bc.ACE_IS_DIRECT) or False),
                ))

        return ExtensionCollector.build(Acl, json, bc.ACL_KEYS, aces=aces, is_exact=json.get(bc.ACL_IS_EXACT))

    @staticmethod
    def convert_allowable_actions(json: Any) -> AllowableActions | None:
        """
        Keeps only the actions whose value is literally true.
        """
        if not isinstance(json, dict):
            return None
        return ExtensionCollector.build_model(
            AllowableActions, allowable_actions={action for action, allowed in json.items() if allowed is True}
        )

    @staticmethod
    def convert_change_event_info(json: Any) -> ChangeEventInfo | None:
        if not isinstance(json, dict):
            return None

        change_time = None
        raw_change_time = json.get(bc.CHANGE_EVENT_TIME)
        if raw_change_time is not None:
            change_time = PropertyValueCodec.decode_value(PropertyType.DATETIME, raw_change_time, property_id=bc.CHANGE_EVENT_TIME)

        return ExtensionCollector.build(
            ChangeEventInfo,
            json,
            bc.CHANGE_EVENT_KEYS,
            change_type=enum_or_none(ChangeType, json.get(bc.CHANGE_EVENT_TYPE)),
            change_time=change_time,
        )

    @staticmethod
    def convert_policy_id_list(json: Any) -> PolicyIdList | None:
        if not isinstance(json, dict):
            return None
        json_ids = json.get(bc.OBJECT_POLICY_IDS_IDS)
        return ExtensionCollector.build(
            PolicyIdList,
            json,
            bc.POLICY_IDS_KEYS,
            policy_ids=[str(policy_id) for policy_id in json_ids if policy_id is not None] if isinstance(json_ids, list) else [],
        )

    @staticmethod
    def convert_failed_to_delete(json: Any) -> FailedToDeleteData | None:
        if not isinstance(json, dict):
            return None
        json_ids = json.get(bc.FAILED_TO_DELETE_ID)
        return ExtensionCollector.build(
            FailedToDeleteData,
            json,
            bc.FAILED_TO_DELETE_KEYS,
            ids=[str(object_id) for object_id in json_ids if object_id is not None] if isinstance(json_ids, list) else [],
        )

    @staticmethod
    def convert_rendition(json: Any) -> RenditionData | None:
        if not isinstance(json, dict):
            return None
        return ExtensionCollector.build(
            RenditionData,
            json,
            bc.RENDITION_KEYS,
            stream_id=json.get(bc.RENDITION_STREAM_ID),
            mime_type=json.get(bc.RENDITION_MIME_TYPE),
            length=json.get(bc.RENDITION_LENGTH),
            kind=json.get(bc.RENDITION_KIND),
            title=json.get(bc.RENDITION_TITLE),
            height=json.get(bc.RENDITION_HEIGHT),
            width=json.get(bc.RENDITION_WIDTH),
            rendition_document_id=json.get(bc.RENDITION_DOCUMENT_ID),
        )

    @classmethod
    def convert_renditions(cls, json: Any) -> list[RenditionData] | None:
        if not isinstance(json, list):
            return None
        renditions = [cls.convert_rendition(json_rendition) for json_rendition in json]
        return [rendition for rendition in renditions if rendition is not None]
