from typing import Any

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.ExtensionCollector import ExtensionCollector
from cmisclient.clients.cmis.errors import ConnectionFailureError, InvalidPropertyError
from cmisclient.clients.cmis.models.Enums import (
    AclPropagation,
    BaseTypeId,
    CapabilityAcl,
    CapabilityChanges,
    CapabilityContentStreamUpdates,
    CapabilityJoin,
    CapabilityQuery,
    CapabilityRenditions,
    SupportedPermissions,
    enum_or_none,
)
from cmisclient.clients.cmis.models.RepositoryInfo import (
    AclCapabilities,
    PermissionDefinition,
    PermissionMapping,
    RepositoryCapabilities,
    RepositoryInfo,
    RepositoryInfoList,
)


class RepositoryInfoConverter:
    """
    Converts the browser binding service document and single repository infos.
    """

    @classmethod
    def convert_repository_infos(cls, json: Any) -> RepositoryInfoList:
        """
        Converts the service document, an object keyed by repository id.

        Raises:
            ConnectionFailureError: If the payload is not a JSON object.
        """
        if not isinstance(json, dict):
            raise ConnectionFailureError("Unexpected service document: expected a JSON object.")

        repositories = [cls.convert_repository_info(json_repository) for json_repository in json.values()]
        return ExtensionCollector.build_model(
            RepositoryInfoList, repositories=[repository for repository in repositories if repository is not None]
        )

    @classmethod
    def convert_repository_info(cls, json: Any) -> RepositoryInfo | None:
        if not isinstance(json, dict):
            return None
        if not isinstance(json.get(bc.REPO_INFO_ID), str):
            raise InvalidPropertyError(f"Invalid repository info: missing '{bc.REPO_INFO_ID}'.")

        changes_on_type = None
        json_changes_on_type = json.get(bc.REPO_INFO_CHANGES_ON_TYPE)
        if isinstance(json_changes_on_type, list):
            changes_on_type = [
                base_type_id
                for base_type_id in (enum_or_none(BaseTypeId, raw) for raw in json_changes_on_type)
                if base_type_id is not None
            ]

        return ExtensionCollector.build(
            RepositoryInfo,
            json,
            bc.REPO_INFO_KEYS,
            id=json.get(bc.REPO_INFO_ID),
            name=json.get(bc.REPO_INFO_NAME),
            description=json.get(bc.REPO_INFO_DESCRIPTION),
            vendor_name=json.get(bc.REPO_INFO_VENDOR),
            product_name=json.get(bc.REPO_INFO_PRODUCT),
            product_version=json.get(bc.REPO_INFO_PRODUCT_VERSION),
            root_folder_id=json.get(bc.REPO_INFO_ROOT_FOLDER_ID),
            capabilities=cls.convert_repository_capabilities(json.get(bc.REPO_INFO_CAPABILITIES)),
            acl_capabilities=cls.convert_acl_capabilities(json.get(bc.REPO_INFO_ACL_CAPABILITIES)),
            latest_change_log_token=json.get(bc.REPO_INFO_CHANGE_LOG_TOKEN),
            cmis_version_supported=json.get(bc.REPO_INFO_CMIS_VERSION_SUPPORTED),
            thin_client_uri=json.get(bc.REPO_INFO_THIN_CLIENT_URI),
            changes_incomplete=json.get(bc.REPO_INFO_CHANGES_INCOMPLETE),
            changes_on_type=changes_on_type,
            principal_id_anonymous=json.get(bc.REPO_INFO_PRINCIPAL_ID_ANONYMOUS),
            principal_id_anyone=json.get(bc.REPO_INFO_PRINCIPAL_ID_ANYONE),
            repository_url=json.get(bc.REPO_INFO_REPOSITORY_URL),
            root_folder_url=json.get(bc.REPO_INFO_ROOT_FOLDER_URL),
        )

    @staticmethod
    def convert_repository_capabilities(json: Any) -> RepositoryCapabilities | None:
        if not isinstance(json, dict):
            return None
        return ExtensionCollector.build(
            RepositoryCapabilities,
            json,
            bc.CAP_KEYS,
            content_stream_updates_capability=enum_or_none(CapabilityContentStreamUpdates, json.get(bc.CAP_CONTENT_STREAM_UPDATABILITY)),
            changes_capability=enum_or_none(CapabilityChanges, json.get(bc.CAP_CHANGES)),
            renditions_capability=enum_or_none(CapabilityRenditions, json.get(bc.CAP_RENDITIONS)),
            is_get_descendants_supported=json.get(bc.CAP_GET_DESCENDANTS),
            is_get_folder_tree_supported=json.get(bc.CAP_GET_FOLDER_TREE),
            is_multifiling_supported=json.get(bc.CAP_MULTIFILING),
            is_unfiling_supported=json.get(bc.CAP_UNFILING),
            is_version_specific_filing_supported=json.get(bc.CAP_VERSION_SPECIFIC_FILING),
            is_pwc_searchable_supported=json.get(bc.CAP_PWC_SEARCHABLE),
            is_pwc_updatable_supported=json.get(bc.CAP_PWC_UPDATABLE),
            is_all_versions_searchable_supported=json.get(bc.CAP_ALL_VERSIONS_SEARCHABLE),
            query_capability=enum_or_none(CapabilityQuery, json.get(bc.CAP_QUERY)),
            join_capability=enum_or_none(CapabilityJoin, json.get(bc.CAP_JOIN)),
            acl_capability=enum_or_none(CapabilityAcl, json.get(bc.CAP_ACL)),
        )

    @staticmethod
    def convert_acl_capabilities(json: Any) -> AclCapabilities | None:
        """
        Converts the ACL capabilities including permission definitions and the permission mapping
        (keyed by mapping key).
        """
        if not isinstance(json, dict):
            return None

        permissions = None
        json_permissions = json.get(bc.ACL_CAP_PERMISSIONS)
        if isinstance(json_permissions, list):
            permissions = []
            for json_permission in json_permissions:
                if not isinstance(json_permission, dict) or json_permission.get(bc.ACL_CAP_PERMISSION_PERMISSION) is None:
                    continue
                permissions.append(ExtensionCollector.build(
                    PermissionDefinition,
                    json_permission,
                    bc.ACL_CAP_PERMISSION_KEYS,
                    id=json_permission.get(bc.ACL_CAP_PERMISSION_PERMISSION),
                    description=json_permission.get(bc.ACL_CAP_PERMISSION_DESCRIPTION),
                ))

        permission_mapping = None
        json_mapping = json.get(bc.ACL_CAP_PERMISSION_MAPPING)
        if isinstance(json_mapping, list):
            permission_mapping = {}
            for json_entry in json_mapping:
                if not isinstance(json_entry, dict) or json_entry.get(bc.ACL_CAP_MAPPING_KEY) is None:
                    continue
                json_entry_permissions = json_entry.get(bc.ACL_CAP_MAPPING_PERMISSION)
                mapping = ExtensionCollector.build(
                    PermissionMapping,
                    json_entry,
                    bc.ACL_CAP_MAPPING_KEYS,
                    key=json_entry.get(bc.ACL_CAP_MAPPING_KEY),
                    permissions=[str(p) for p in json_entry_permissions if p is not None] if isinstance(json_entry_permissions, list) else [],
                )
                permission_mapping[mapping.key] = mapping

        return ExtensionCollector.build(
            AclCapabilities,
            json,
            bc.ACL_CAP_KEYS,
            supported_permissions=enum_or_none(SupportedPermissions, json.get(bc.ACL_CAP_SUPPORTED_PERMISSIONS)),
            acl_propagation=enum_or_none(AclPropagation, json.get(bc.ACL_CAP_ACL_PROPAGATION)),
            permissions=permissions,
            permission_mapping=permission_mapping,
        )
