import base64
from collections.abc import Iterable
from typing import Any

import httpx

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.ObjectGraphConverter import ObjectGraphConverter
from cmisclient.clients.cmis.browser.PropertyTableConverter import PropertyTableConverter
from cmisclient.clients.cmis.browser.RepositoryInfoConverter import RepositoryInfoConverter
from cmisclient.clients.cmis.browser.RepositoryUrlCache import RepositoryUrlCache
from cmisclient.clients.cmis.browser.RequestFormEncoder import FormData
from cmisclient.clients.cmis.browser.TypeDefinitionConverter import TypeDefinitionConverter
from cmisclient.clients.cmis.CMISClientInterface import CMISClientInterface, PropertiesInput
from cmisclient.clients.cmis.errors import (
    CMISError,
    ConnectionFailureError,
    ConstraintError,
    ContentAlreadyExistsError,
    FilterNotValidError,
    InvalidArgumentError,
    NameConstraintViolationError,
    NotSupportedError,
    ObjectNotFoundError,
    PermissionDeniedError,
    ServerError,
    StorageError,
    StreamNotSupportedError,
    UpdateConflictError,
    VersioningError,
)
from cmisclient.clients.cmis.models.ObjectData import (
    Acl,
    AllowableActions,
    FailedToDeleteData,
    ObjectData,
    ObjectInFolderContainer,
    ObjectInFolderList,
    ObjectList,
    ObjectParentData,
    RenditionData,
)
from cmisclient.clients.cmis.models.Property import PropertiesCollection
from cmisclient.clients.cmis.models.RepositoryInfo import RepositoryInfoList
from cmisclient.clients.cmis.models.TypeDefinition import TypeDefinition, TypeDefinitionContainer, TypeDefinitionList
from cmisclient.clients.cmis.TypeDefinitionCache import TypeDefinitionCacheInterface
from cmisclient.helper.HelperConfig import HelperConfig
from cmisclient.models.config import EnvConfig

# exception names of the browser binding error body, per status code
CONFLICT_ERRORS: dict[str, type[CMISError]] = {
    "nameConstraintViolation": NameConstraintViolationError,
    "versioning": VersioningError,
    "contentAlreadyExists": ContentAlreadyExistsError,
    "updateConflict": UpdateConflictError,
}

REDIRECT_STATUS_CODES = (301, 302, 303, 307)


class CMISClientBrowser(CMISClientInterface):
    def __init__(self, helper_config: HelperConfig, type_cache: TypeDefinitionCacheInterface | None = None):
        super().__init__(helper_config=helper_config, type_cache=type_cache)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._username = self.get_config_val("USERNAME", default="", val_type="string")
        self._password = self.get_config_val("PASSWORD", default="", val_type="string")
        self._succinct = self.get_config_val("SUCCINCT", default=True, val_type="bool")
        self._url_cache = RepositoryUrlCache()

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Browser"

    def is_succinct(self) -> bool:
        return self._succinct

    def get_url_cache(self) -> RepositoryUrlCache:
        return self._url_cache

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="USERNAME", val_type="string", default=""),
            EnvConfig(env_key="PASSWORD", val_type="string", default=""),
            EnvConfig(env_key="SUCCINCT", val_type="bool", default=True),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._username:
            credentials = base64.b64encode(f"{self._username}:{self._password}".encode("utf-8")).decode("ascii")
            return {"Authorization": f"Basic {credentials}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return ""

    async def _ensure_repository(self, repository_id: str) -> None:
        """
        Loads the repository and root folder URLs from the service document if they are not cached yet.

        Raises:
            ObjectNotFoundError: If the service document does not list the repository.
        """
        if self._url_cache.has_repository(repository_id):
            return
        self.logging.debug("Repository '%s' not in URL cache, fetching service document", repository_id)
        await self.do_fetch_repository_infos()
        if not self._url_cache.has_repository(repository_id):
            raise ObjectNotFoundError(f"Unknown repository '{repository_id}'.")

    async def _get_endpoint_repository(self, repository_id: str, selector: str | None = None) -> httpx.URL:
        await self._ensure_repository(repository_id)
        return self._url_cache.get_repository_url(repository_id, selector)

    async def _get_endpoint_object(self, repository_id: str, object_id: str, selector: str | None = None) -> httpx.URL:
        await self._ensure_repository(repository_id)
        return self._url_cache.get_object_url(repository_id, object_id, selector)

    async def _get_endpoint_path(self, repository_id: str, path: str, selector: str | None = None) -> httpx.URL:
        await self._ensure_repository(repository_id)
        return self._url_cache.get_path_url(repository_id, path, selector)

    ################ FORMS ##################
    def _get_form(
        self,
        action: str,
        parameters: dict[str, Any] | None = None,
        properties: PropertiesInput | None = None,
        policies: Iterable[str] | None = None,
        add_aces: Acl | None = None,
        remove_aces: Acl | None = None,
    ) -> dict[str, str]:
        form = FormData(action)
        for name, value in (parameters or {}).items():
            form.add_parameter(name, value)
        form.add_properties(properties)
        form.add_policies(policies)
        form.add_add_aces(add_aces)
        form.add_remove_aces(remove_aces)
        form.add_succinct_flag(self._succinct)
        return form.get_parameters()

    ################ ERRORS ##################
    def _build_request_error(self, url: str, response: httpx.Response) -> Exception:
        """
        Maps an unsuccessful browser binding response to a CMIS error, using the status code and the
        "exception" name of the JSON error body.
        """
        status_code = response.status_code
        exception_name, message = self._read_error_body(response)
        message = message or f"Request to {url} failed with status {status_code}"
        kwargs = {"status_code": status_code, "error_content": response.text}

        if status_code in REDIRECT_STATUS_CODES:
            location = response.headers.get("Location")
            return ConnectionFailureError(f"Redirects are not supported (Location: {location}).", **kwargs)
        if status_code == 400:
            if exception_name == "filterNotValid":
                return FilterNotValidError(message, **kwargs)
            return InvalidArgumentError(message, **kwargs)
        if status_code == 401:
            return PermissionDeniedError(message, **kwargs)
        if status_code == 403:
            if exception_name == "streamNotSupported":
                return StreamNotSupportedError(message, **kwargs)
            return PermissionDeniedError(message, **kwargs)
        if status_code == 404:
            return ObjectNotFoundError(message, **kwargs)
        if status_code == 405:
            return NotSupportedError(message, **kwargs)
        if status_code == 409:
            return CONFLICT_ERRORS.get(exception_name, ConstraintError)(message, **kwargs)
        if status_code == 500 and exception_name == "storage":
            return StorageError(message, **kwargs)
        return ServerError(message, **kwargs)

    def _build_transport_error(self, url: str, error: httpx.HTTPError) -> Exception:
        return ConnectionFailureError(f"Cannot access {url}: {error}")

    @staticmethod
    def _read_error_body(response: httpx.Response) -> tuple[str | None, str | None]:
        try:
            body = response.json()
        except ValueError:
            return None, None
        if not isinstance(body, dict):
            return None, None
        exception_name = body.get(bc.ERROR_EXCEPTION)
        message = body.get(bc.ERROR_MESSAGE)
        return (
            exception_name if isinstance(exception_name, str) else None,
            message if isinstance(message, str) else None,
        )

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _get_object_converter(self, repository_id: str) -> ObjectGraphConverter:
        return ObjectGraphConverter(self.get_type_resolver(repository_id))

    @staticmethod
    def _require(result: Any, what: str) -> Any:
        if result is None:
            raise ConnectionFailureError(f"Unexpected response: cannot read {what}.")
        return result

    ############### REPOSITORY ###############
    def _parse_endpoint_repository_infos(self, response: Any) -> RepositoryInfoList:
        repository_infos = RepositoryInfoConverter.convert_repository_infos(response)
        for repository_info in repository_infos.repositories:
            if repository_info.repository_url and repository_info.root_folder_url:
                self._url_cache.add_repository(repository_info.id, repository_info.repository_url, repository_info.root_folder_url)
            else:
                self.logging.warning("Repository '%s' reports no repository or root folder URL and cannot be addressed", repository_info.id)
        return repository_infos

    ################# TYPES ##################
    def _parse_endpoint_type_definition(self, response: Any) -> TypeDefinition | None:
        return TypeDefinitionConverter.convert_type_definition(response)

    def _parse_endpoint_type_children(self, response: Any) -> TypeDefinitionList:
        return self._require(TypeDefinitionConverter.convert_type_children(response), "type children")

    def _parse_endpoint_type_descendants(self, response: Any) -> list[TypeDefinitionContainer]:
        return self._require(TypeDefinitionConverter.convert_type_descendants(response), "type descendants")

    ################ OBJECTS #################
    def _parse_endpoint_object(self, repository_id: str, response: Any) -> ObjectData:
        return self._require(self._get_object_converter(repository_id).convert_object_data(response), "object")

    def _parse_endpoint_children(self, repository_id: str, response: Any) -> ObjectInFolderList:
        return self._require(self._get_object_converter(repository_id).convert_object_in_folder_list(response), "children")

    def _parse_endpoint_descendants(self, repository_id: str, response: Any) -> list[ObjectInFolderContainer]:
        return self._require(self._get_object_converter(repository_id).convert_descendants(response), "descendants")

    def _parse_endpoint_object_parents(self, repository_id: str, response: Any) -> list[ObjectParentData]:
        return self._require(self._get_object_converter(repository_id).convert_object_parents(response), "object parents")

    def _parse_endpoint_properties(self, repository_id: str, response: Any) -> PropertiesCollection:
        converter = PropertyTableConverter(self.get_type_resolver(repository_id))
        if self._succinct:
            properties = converter.convert_succinct_properties(response)
        else:
            properties = converter.convert_properties(response)
        return self._require(properties, "properties")

    def _parse_endpoint_allowable_actions(self, response: Any) -> AllowableActions:
        return self._require(ObjectGraphConverter.convert_allowable_actions(response), "allowable actions")

    def _parse_endpoint_renditions(self, response: Any) -> list[RenditionData]:
        return self._require(ObjectGraphConverter.convert_renditions(response), "renditions")

    def _parse_endpoint_acl(self, response: Any) -> Acl:
        return self._require(ObjectGraphConverter.convert_acl(response), "ACL")

    def _parse_endpoint_object_list(self, repository_id: str, response: Any, is_query_result: bool = False) -> ObjectList:
        converter = self._get_object_converter(repository_id)
        return self._require(converter.convert_object_list(response, is_query_result=is_query_result), "object list")

    def _parse_endpoint_failed_to_delete(self, response: Any) -> FailedToDeleteData | None:
        return ObjectGraphConverter.convert_failed_to_delete(response)
