import pytest

from cmisclient.clients.cmis.browser.RepositoryInfoConverter import RepositoryInfoConverter
from cmisclient.clients.cmis.errors import ConnectionFailureError, InvalidPropertyError
from cmisclient.clients.cmis.models.Enums import (
    AclPropagation,
    BaseTypeId,
    CapabilityAcl,
    CapabilityChanges,
    CapabilityQuery,
    SupportedPermissions,
)

from conftest import REPOSITORY_URL, ROOT_FOLDER_URL, repository_info_json


def test_service_document():
    json = {"repo1": repository_info_json("repo1"), "repo2": repository_info_json("repo2")}
    result = RepositoryInfoConverter.convert_repository_infos(json)
    assert [repository.id for repository in result.repositories] == ["repo1", "repo2"]
    assert result.get_repository("repo2").repository_url.endswith("/repo2")
    assert result.get_repository("repo3") is None


def test_service_document_must_be_an_object():
    with pytest.raises(ConnectionFailureError):
        RepositoryInfoConverter.convert_repository_infos(["repo1"])


def test_repository_info_fields():
    info = RepositoryInfoConverter.convert_repository_info(repository_info_json())
    assert info.id == "repo1"
    assert info.name == "Test repository"
    assert info.product_version == "1.0"
    assert info.root_folder_id == "root-id"
    assert info.latest_change_log_token == "token-1"
    assert info.changes_on_type == [BaseTypeId.DOCUMENT, BaseTypeId.FOLDER]
    assert info.principal_id_anyone == "anyone"
    assert info.repository_url == REPOSITORY_URL
    assert info.root_folder_url == ROOT_FOLDER_URL
    assert info.extensions is None


def test_capabilities():
    capabilities = RepositoryInfoConverter.convert_repository_info(repository_info_json()).capabilities
    assert capabilities.changes_capability == CapabilityChanges.OBJECTIDSONLY
    assert capabilities.query_capability == CapabilityQuery.BOTHCOMBINED
    assert capabilities.acl_capability == CapabilityAcl.MANAGE
    assert capabilities.is_get_descendants_supported is True
    assert capabilities.is_unfiling_supported is False
    assert capabilities.is_pwc_updatable_supported is True


def test_unknown_capability_values_become_none():
    json = repository_info_json()
    json["capabilities"]["capabilityQuery"] = "telepathic"
    json["capabilities"]["capabilityNewThing"] = True
    capabilities = RepositoryInfoConverter.convert_repository_info(json).capabilities
    assert capabilities.query_capability is None
    assert capabilities.get_extension("capabilityNewThing").value == "true"


def test_acl_capabilities():
    acl_capabilities = RepositoryInfoConverter.convert_repository_info(repository_info_json()).acl_capabilities
    assert acl_capabilities.supported_permissions == SupportedPermissions.BASIC
    assert acl_capabilities.acl_propagation == AclPropagation.OBJECTONLY
    assert [permission.id for permission in acl_capabilities.permissions] == ["cmis:read", "cmis:write"]
    assert acl_capabilities.permissions[0].description == "Read"
    assert acl_capabilities.permission_mapping["canDelete.Object"].permissions == ["cmis:write", "cmis:all"]


def test_missing_repository_id_raises():
    json = repository_info_json()
    del json["repositoryId"]
    with pytest.raises(InvalidPropertyError):
        RepositoryInfoConverter.convert_repository_info(json)


def test_repository_extensions():
    json = repository_info_json()
    json["vendorFeature"] = {"enabled": True}
    info = RepositoryInfoConverter.convert_repository_info(json)
    assert info.get_extension("vendorFeature").find("enabled").value == "true"
