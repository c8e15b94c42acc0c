"""Repository description as returned by the browser binding service document."""

from pydantic import BaseModel

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
)
from cmisclient.clients.cmis.models.Extension import ExtensionsData


class RepositoryCapabilities(ExtensionsData):
    content_stream_updates_capability: CapabilityContentStreamUpdates | None = None
    changes_capability: CapabilityChanges | None = None
    renditions_capability: CapabilityRenditions | None = None
    is_get_descendants_supported: bool | None = None
    is_get_folder_tree_supported: bool | None = None
    is_multifiling_supported: bool | None = None
    is_unfiling_supported: bool | None = None
    is_version_specific_filing_supported: bool | None = None
    is_pwc_searchable_supported: bool | None = None
    is_pwc_updatable_supported: bool | None = None
    is_all_versions_searchable_supported: bool | None = None
    query_capability: CapabilityQuery | None = None
    join_capability: CapabilityJoin | None = None
    acl_capability: CapabilityAcl | None = None


class PermissionDefinition(ExtensionsData):
    id: str
    description: str | None = None


class PermissionMapping(ExtensionsData):
    key: str
    permissions: list[str] = []


class AclCapabilities(ExtensionsData):
    supported_permissions: SupportedPermissions | None = None
    acl_propagation: AclPropagation | None = None
    permissions: list[PermissionDefinition] | None = None
    permission_mapping: dict[str, PermissionMapping] | None = None


class RepositoryInfo(ExtensionsData):
    """
    Describes one repository of a CMIS endpoint.

    `repository_url` and `root_folder_url` are browser binding specific; they are the base URLs for
    repository and object requests.
    """
    id: str
    name: str | None = None
    description: str | None = None
    vendor_name: str | None = None
    product_name: str | None = None
    product_version: str | None = None
    root_folder_id: str | None = None
    capabilities: RepositoryCapabilities | None = None
    acl_capabilities: AclCapabilities | None = None
    latest_change_log_token: str | None = None
    cmis_version_supported: str | None = None
    thin_client_uri: str | None = None
    changes_incomplete: bool | None = None
    changes_on_type: list[BaseTypeId] | None = None
    principal_id_anonymous: str | None = None
    principal_id_anyone: str | None = None
    repository_url: str | None = None
    root_folder_url: str | None = None


class RepositoryInfoList(BaseModel):
    repositories: list[RepositoryInfo] = []

    def get_repository(self, repository_id: str) -> RepositoryInfo | None:
        for repository in self.repositories:
            if repository.id == repository_id:
                return repository
        return None
