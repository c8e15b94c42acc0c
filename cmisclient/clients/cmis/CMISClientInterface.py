from abc import abstractmethod
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

import httpx

from cmisclient.clients.ClientInterface import ClientInterface
from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.errors import (
    ConnectionFailureError,
    ObjectNotFoundError,
)
from cmisclient.clients.cmis.models.Enums import AclPropagation, IncludeRelationships, UnfileObject, VersioningState
from cmisclient.clients.cmis.models.ObjectData import (
    Acl,
    AllowableActions,
    FailedToDeleteData,
    ObjectData,
    ObjectInFolderContainer,
    ObjectInFolderData,
    ObjectInFolderList,
    ObjectList,
    ObjectParentData,
    RenditionData,
)
from cmisclient.clients.cmis.models.Property import PropertiesCollection, PropertyData
from cmisclient.clients.cmis.models.RepositoryInfo import RepositoryInfo, RepositoryInfoList
from cmisclient.clients.cmis.models.TypeDefinition import TypeDefinition, TypeDefinitionContainer, TypeDefinitionList
from cmisclient.clients.cmis.TypeDefinitionCache import InMemoryTypeDefinitionCache, TypeDefinitionCacheInterface
from cmisclient.clients.cmis.TypeDefinitionResolver import TypeDefinitionResolver
from cmisclient.helper.HelperConfig import HelperConfig

PropertiesInput = PropertiesCollection | Iterable[PropertyData] | Mapping[str, Any]


class CMISClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, type_cache: TypeDefinitionCacheInterface | None = None):
        super().__init__(helper_config=helper_config)

        # cache
        self._type_cache: TypeDefinitionCacheInterface = type_cache or InMemoryTypeDefinitionCache()
        self._resolvers: dict[str, TypeDefinitionResolver] = {}

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "cmis"

    def get_type_cache(self) -> TypeDefinitionCacheInterface:
        return self._type_cache

    def get_type_resolver(self, repository_id: str) -> TypeDefinitionResolver:
        """
        Returns the type definition resolver of a repository. Resolvers share the client's type cache and
        fetch missing types through this client.
        """
        resolver = self._resolvers.get(repository_id)
        if resolver is None:
            async def fetcher(type_id: str) -> TypeDefinition | None:
                return await self._request_type_definition(repository_id, type_id)

            resolver = TypeDefinitionResolver(repository_id, self._type_cache, fetcher=fetcher, logger=self.logging)
            self._resolvers[repository_id] = resolver
        return resolver

    @abstractmethod
    def is_succinct(self) -> bool:
        """
        Returns whether object payloads are requested in succinct form.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    async def _get_endpoint_repository(self, repository_id: str, selector: str | None = None) -> httpx.URL:
        """
        Returns the URL for repository level requests (types, query, content changes, unfiled creation).

        Args:
            repository_id (str): The repository id.
            selector (str | None): The browser binding selector, e.g. "typeDefinition".

        Raises:
            ObjectNotFoundError: If the repository is unknown to the endpoint.
        """
        pass

    @abstractmethod
    async def _get_endpoint_object(self, repository_id: str, object_id: str, selector: str | None = None) -> httpx.URL:
        """
        Returns the URL for object level requests and object actions.

        Raises:
            ObjectNotFoundError: If the repository is unknown to the endpoint.
        """
        pass

    @abstractmethod
    async def _get_endpoint_path(self, repository_id: str, path: str, selector: str | None = None) -> httpx.URL:
        """
        Returns the URL of an object addressed by its path below the root folder.

        Raises:
            ObjectNotFoundError: If the repository is unknown to the endpoint.
        """
        pass

    ################ FORMS ##################
    @abstractmethod
    def _get_form(
        self,
        action: str,
        parameters: dict[str, Any] | None = None,
        properties: PropertiesInput | None = None,
        policies: Iterable[str] | None = None,
        add_aces: Acl | None = None,
        remove_aces: Acl | None = None,
    ) -> dict[str, str]:
        """
        Builds the form fields of a mutation request.

        Returns:
            dict[str, str]: The form fields in wire order, ready to be sent url-encoded.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_endpoint_repository_infos(self, response: Any) -> RepositoryInfoList:
        pass

    @abstractmethod
    def _parse_endpoint_type_definition(self, response: Any) -> TypeDefinition | None:
        pass

    @abstractmethod
    def _parse_endpoint_type_children(self, response: Any) -> TypeDefinitionList:
        pass

    @abstractmethod
    def _parse_endpoint_type_descendants(self, response: Any) -> list[TypeDefinitionContainer]:
        pass

    @abstractmethod
    def _parse_endpoint_object(self, repository_id: str, response: Any) -> ObjectData:
        pass

    @abstractmethod
    def _parse_endpoint_children(self, repository_id: str, response: Any) -> ObjectInFolderList:
        pass

    @abstractmethod
    def _parse_endpoint_descendants(self, repository_id: str, response: Any) -> list[ObjectInFolderContainer]:
        pass

    @abstractmethod
    def _parse_endpoint_object_parents(self, repository_id: str, response: Any) -> list[ObjectParentData]:
        pass

    @abstractmethod
    def _parse_endpoint_properties(self, repository_id: str, response: Any) -> PropertiesCollection:
        pass

    @abstractmethod
    def _parse_endpoint_allowable_actions(self, response: Any) -> AllowableActions:
        pass

    @abstractmethod
    def _parse_endpoint_renditions(self, response: Any) -> list[RenditionData]:
        pass

    @abstractmethod
    def _parse_endpoint_acl(self, response: Any) -> Acl:
        pass

    @abstractmethod
    def _parse_endpoint_object_list(self, repository_id: str, response: Any, is_query_result: bool = False) -> ObjectList:
        pass

    @abstractmethod
    def _parse_endpoint_failed_to_delete(self, response: Any) -> FailedToDeleteData | None:
        pass

    ##########################################
    ################ HELPERS #################
    ##########################################

    async def _get_json(self, url: httpx.URL, params: dict[str, Any] | None = None) -> Any:
        resp = await self.do_request(method="GET", url=url, params=self._clean_params(params), raise_on_error=True)
        return self._read_json(resp)

    async def _post_form(self, url: httpx.URL, form: dict[str, str]) -> Any:
        resp = await self.do_request(method="POST", url=url, data=form, raise_on_error=True)
        return self._read_json(resp)

    @staticmethod
    def _read_json(resp: httpx.Response) -> Any:
        """
        Returns the decoded JSON body, or None for an empty body.

        Raises:
            ConnectionFailureError: If the body is not JSON.
        """
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ConnectionFailureError(
                f"Response from {resp.request.url} is not valid JSON: {e}",
                status_code=resp.status_code,
                error_content=resp.text,
            )

    @staticmethod
    def _clean_params(params: dict[str, Any] | None) -> dict[str, str] | None:
        """Drops None values and writes booleans and enums the way CMIS expects them."""
        if not params:
            return None
        cleaned: dict[str, str] = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                cleaned[key] = "true" if value else "false"
            elif isinstance(value, Enum):
                cleaned[key] = value.value
            else:
                cleaned[key] = str(value)
        return cleaned

    async def _prepare_types(self, repository_id: str, payload: Any) -> None:
        """
        Caches every type definition a succinct payload references, plus the document and folder base
        types, so that the synchronous converters can resolve property types.
        """
        if not self.is_succinct():
            return
        resolver = self.get_type_resolver(repository_id)
        await resolver.prefetch(TypeDefinitionResolver.collect_type_ids(payload))
        await resolver.fetch_base_types()

    async def _request_type_definition(self, repository_id: str, type_id: str) -> TypeDefinition | None:
        """
        Fetches a type definition from the repository, bypassing the cache. Returns None if the
        repository reports that the type does not exist.
        """
        url = await self._get_endpoint_repository(repository_id, bc.SELECTOR_TYPE_DEFINITION)
        try:
            response = await self._get_json(url, {bc.PARAM_TYPE_ID: type_id})
        except ObjectNotFoundError:
            return None
        return self._parse_endpoint_type_definition(response)

    ##########################################
    ############### REQUESTS #################
    ##########################################

    ############# REPOSITORY REQUESTS ##############
    async def do_fetch_repository_infos(self) -> RepositoryInfoList:
        """
        Fetches the service document listing every repository of the endpoint.

        Returns:
            RepositoryInfoList: All repositories.

        Raises:
            CMISError: If the request fails or the response cannot be converted.
        """
        resp = await self.do_request(method="GET", url=self._get_base_url(), raise_on_error=True)
        repository_infos = self._parse_endpoint_repository_infos(self._read_json(resp))
        self.logging.info("Fetched %d repositories from %s", len(repository_infos.repositories), self.get_engine_name(), color="cyan")
        return repository_infos

    async def do_fetch_repository_info(self, repository_id: str) -> RepositoryInfo:
        """
        Fetches the info of one repository.

        Raises:
            ObjectNotFoundError: If the repository does not exist.
        """
        url = await self._get_endpoint_repository(repository_id, bc.SELECTOR_REPOSITORY_INFO)
        repository_infos = self._parse_endpoint_repository_infos(await self._get_json(url))
        repository_info = repository_infos.get_repository(repository_id)
        if repository_info is None:
            raise ObjectNotFoundError(f"Unknown repository '{repository_id}'.")
        return repository_info

    ################ TYPE REQUESTS ###############
    async def do_fetch_type_definition(self, repository_id: str, type_id: str) -> TypeDefinition:
        """
        Returns a type definition, from the type cache if possible.

        Raises:
            TypeNotFoundError: If the repository does not know the type.
        """
        return await self.get_type_resolver(repository_id).fetch_type_definition(type_id)

    async def do_fetch_type_children(
        self,
        repository_id: str,
        type_id: str | None = None,
        include_property_definitions: bool = False,
        max_items: int | None = None,
        skip_count: int | None = None,
    ) -> TypeDefinitionList:
        """
        Fetches the direct subtypes of a type, or the base types if type_id is None. Types fetched with
        their property definitions are put into the type cache.
        """
        url = await self._get_endpoint_repository(repository_id, bc.SELECTOR_TYPE_CHILDREN)
        response = await self._get_json(url, {
            bc.PARAM_TYPE_ID: type_id,
            bc.PARAM_PROPERTY_DEFINITIONS: include_property_definitions,
            bc.PARAM_MAX_ITEMS: max_items,
            bc.PARAM_SKIP_COUNT: skip_count,
        })
        type_children = self._parse_endpoint_type_children(response)
        if include_property_definitions:
            for type_definition in type_children.types:
                self._type_cache.put(repository_id, type_definition)
        return type_children

    async def do_fetch_type_descendants(
        self,
        repository_id: str,
        type_id: str | None = None,
        depth: int | None = None,
        include_property_definitions: bool = False,
    ) -> list[TypeDefinitionContainer]:
        url = await self._get_endpoint_repository(repository_id, bc.SELECTOR_TYPE_DESCENDANTS)
        response = await self._get_json(url, {
            bc.PARAM_TYPE_ID: type_id,
            bc.PARAM_DEPTH: depth,
            bc.PARAM_PROPERTY_DEFINITIONS: include_property_definitions,
        })
        return self._parse_endpoint_type_descendants(response)

    ############# NAVIGATION REQUESTS ##############
    async def do_fetch_children(
        self,
        repository_id: str,
        folder_id: str,
        filter: str | None = None,
        include_allowable_actions: bool | None = None,
        include_relationships: IncludeRelationships | None = None,
        rendition_filter: str | None = None,
        include_path_segment: bool | None = None,
        max_items: int | None = None,
        skip_count: int | None = None,
    ) -> ObjectInFolderList:
        """
        Fetches one page of the children of a folder.

        Args:
            repository_id (str): The repository id.
            folder_id (str): The object id of the folder.
            filter (str | None): Comma separated property query names to return.
            max_items (int | None): Page size.
            skip_count (int | None): Number of children to skip.

        Returns:
            ObjectInFolderList: The children in server order plus the paging info the server reports.
        """
        url = await self._get_endpoint_object(repository_id, folder_id, bc.SELECTOR_CHILDREN)
        response = await self._get_json(url, {
            bc.PARAM_FILTER: filter,
            bc.PARAM_ALLOWABLE_ACTIONS: include_allowable_actions,
            bc.PARAM_RELATIONSHIPS: include_relationships,
            bc.PARAM_RENDITION_FILTER: rendition_filter,
            bc.PARAM_PATH_SEGMENT: include_path_segment,
            bc.PARAM_MAX_ITEMS: max_items,
            bc.PARAM_SKIP_COUNT: skip_count,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        })
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_children(repository_id, response)

    async def do_fetch_all_children(self, repository_id: str, folder_id: str, page_size: int = 100, filter: str | None = None) -> list[ObjectInFolderData]:
        """
        Fetches all children of a folder by paging with skipCount / maxItems until the server reports
        no more items.

        Returns:
            list[ObjectInFolderData]: All children in server order.
        """
        children: list[ObjectInFolderData] = []
        skip_count = 0
        page = 1
        while True:
            children_page = await self.do_fetch_children(
                repository_id, folder_id, filter=filter, max_items=page_size, skip_count=skip_count
            )
            children.extend(children_page.objects)
            self.logging.info("Fetched children page %d of folder %s from %s, total children so far: %d of %s", page, folder_id, self.get_engine_name(), len(children), children_page.num_items)
            if not children_page.has_more_items or not children_page.objects:
                break
            skip_count += len(children_page.objects)
            page += 1
        return children

    async def do_fetch_descendants(self, repository_id: str, folder_id: str, depth: int | None = None, filter: str | None = None, folder_tree_only: bool = False) -> list[ObjectInFolderContainer]:
        """
        Fetches the descendants of a folder, or only its subfolders if folder_tree_only is set.
        """
        selector = bc.SELECTOR_FOLDER_TREE if folder_tree_only else bc.SELECTOR_DESCENDANTS
        url = await self._get_endpoint_object(repository_id, folder_id, selector)
        response = await self._get_json(url, {
            bc.PARAM_DEPTH: depth,
            bc.PARAM_FILTER: filter,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        })
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_descendants(repository_id, response)

    async def do_fetch_object_parents(self, repository_id: str, object_id: str, filter: str | None = None, include_relative_path_segment: bool | None = None) -> list[ObjectParentData]:
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_PARENTS)
        response = await self._get_json(url, {
            bc.PARAM_FILTER: filter,
            bc.PARAM_RELATIVE_PATH_SEGMENT: include_relative_path_segment,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        })
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object_parents(repository_id, response)

    ############### OBJECT REQUESTS ################
    def _get_object_params(
        self,
        filter: str | None,
        include_allowable_actions: bool | None,
        include_relationships: IncludeRelationships | None,
        rendition_filter: str | None,
        include_policy_ids: bool | None,
        include_acl: bool | None,
    ) -> dict[str, Any]:
        return {
            bc.PARAM_FILTER: filter,
            bc.PARAM_ALLOWABLE_ACTIONS: include_allowable_actions,
            bc.PARAM_RELATIONSHIPS: include_relationships,
            bc.PARAM_RENDITION_FILTER: rendition_filter,
            bc.PARAM_POLICY_IDS: include_policy_ids,
            bc.PARAM_ACL: include_acl,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        }

    async def do_fetch_object(
        self,
        repository_id: str,
        object_id: str,
        filter: str | None = None,
        include_allowable_actions: bool | None = None,
        include_relationships: IncludeRelationships | None = None,
        rendition_filter: str | None = None,
        include_policy_ids: bool | None = None,
        include_acl: bool | None = None,
    ) -> ObjectData:
        """
        Fetches and converts one object.

        Returns:
            ObjectData: A freshly converted object. Refreshing means calling this again.

        Raises:
            ObjectNotFoundError: If the object does not exist.
            InvalidPropertyValueError: If a property value does not match its type.
        """
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_OBJECT)
        response = await self._get_json(url, self._get_object_params(
            filter, include_allowable_actions, include_relationships, rendition_filter, include_policy_ids, include_acl
        ))
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object(repository_id, response)

    async def do_fetch_object_by_path(
        self,
        repository_id: str,
        path: str,
        filter: str | None = None,
        include_allowable_actions: bool | None = None,
        include_relationships: IncludeRelationships | None = None,
        rendition_filter: str | None = None,
        include_policy_ids: bool | None = None,
        include_acl: bool | None = None,
    ) -> ObjectData:
        url = await self._get_endpoint_path(repository_id, path, bc.SELECTOR_OBJECT)
        response = await self._get_json(url, self._get_object_params(
            filter, include_allowable_actions, include_relationships, rendition_filter, include_policy_ids, include_acl
        ))
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object(repository_id, response)

    async def do_fetch_properties(self, repository_id: str, object_id: str, filter: str | None = None) -> PropertiesCollection:
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_PROPERTIES)
        response = await self._get_json(url, {
            bc.PARAM_FILTER: filter,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        })
        # the properties selector returns the bare property map
        await self._prepare_types(repository_id, {bc.OBJECT_SUCCINCT_PROPERTIES: response})
        return self._parse_endpoint_properties(repository_id, response)

    async def do_fetch_allowable_actions(self, repository_id: str, object_id: str) -> AllowableActions:
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_ALLOWABLE_ACTIONS)
        return self._parse_endpoint_allowable_actions(await self._get_json(url))

    async def do_fetch_renditions(
        self,
        repository_id: str,
        object_id: str,
        rendition_filter: str | None = None,
        max_items: int | None = None,
        skip_count: int | None = None,
    ) -> list[RenditionData]:
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_RENDITIONS)
        response = await self._get_json(url, {
            bc.PARAM_RENDITION_FILTER: rendition_filter,
            bc.PARAM_MAX_ITEMS: max_items,
            bc.PARAM_SKIP_COUNT: skip_count,
        })
        return self._parse_endpoint_renditions(response)

    async def do_fetch_acl(self, repository_id: str, object_id: str, only_basic_permissions: bool | None = None) -> Acl:
        url = await self._get_endpoint_object(repository_id, object_id, bc.SELECTOR_ACL)
        response = await self._get_json(url, {bc.PARAM_ONLY_BASIC_PERMISSIONS: only_basic_permissions})
        return self._parse_endpoint_acl(response)

    ############## DISCOVERY REQUESTS ##############
    async def do_query(
        self,
        repository_id: str,
        statement: str,
        search_all_versions: bool | None = None,
        include_allowable_actions: bool | None = None,
        max_items: int | None = None,
        skip_count: int | None = None,
    ) -> ObjectList:
        """
        Runs a CMIS query. The statement is sent as is.

        Returns:
            ObjectList: One page of query results.
        """
        url = await self._get_endpoint_repository(repository_id)
        form = self._get_form(bc.ACTION_QUERY, parameters={
            bc.PARAM_STATEMENT: statement,
            bc.PARAM_SEARCH_ALL_VERSIONS: search_all_versions,
            bc.PARAM_ALLOWABLE_ACTIONS: include_allowable_actions,
            bc.PARAM_MAX_ITEMS: max_items,
            bc.PARAM_SKIP_COUNT: skip_count,
        })
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object_list(repository_id, response, is_query_result=True)

    async def do_fetch_content_changes(
        self,
        repository_id: str,
        change_log_token: str | None = None,
        include_properties: bool | None = None,
        include_policy_ids: bool | None = None,
        include_acl: bool | None = None,
        max_items: int | None = None,
    ) -> ObjectList:
        url = await self._get_endpoint_repository(repository_id, bc.SELECTOR_CONTENT_CHANGES)
        response = await self._get_json(url, {
            bc.PARAM_CHANGE_LOG_TOKEN: change_log_token,
            bc.PARAM_PROPERTIES: include_properties,
            bc.PARAM_POLICY_IDS: include_policy_ids,
            bc.PARAM_ACL: include_acl,
            bc.PARAM_MAX_ITEMS: max_items,
            bc.PARAM_SUCCINCT: self.is_succinct() or None,
        })
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object_list(repository_id, response)

    ############### MUTATION REQUESTS ################
    async def do_create_document(
        self,
        repository_id: str,
        properties: PropertiesInput,
        folder_id: str | None = None,
        versioning_state: VersioningState | None = None,
        policies: Iterable[str] | None = None,
        add_aces: Acl | None = None,
        remove_aces: Acl | None = None,
    ) -> ObjectData:
        """
        Creates a document without content stream, filed in folder_id or unfiled if folder_id is None.

        Returns:
            ObjectData: The created document as returned by the repository.
        """
        if folder_id:
            url = await self._get_endpoint_object(repository_id, folder_id)
        else:
            url = await self._get_endpoint_repository(repository_id)
        form = self._get_form(
            bc.ACTION_CREATE_DOCUMENT,
            parameters={bc.PARAM_VERSIONING_STATE: versioning_state},
            properties=properties,
            policies=policies,
            add_aces=add_aces,
            remove_aces=remove_aces,
        )
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        created = self._parse_endpoint_object(repository_id, response)
        self.logging.info("Created document %s in repository %s", created.id, repository_id, color="green")
        return created

    async def do_create_folder(
        self,
        repository_id: str,
        properties: PropertiesInput,
        folder_id: str,
        policies: Iterable[str] | None = None,
        add_aces: Acl | None = None,
        remove_aces: Acl | None = None,
    ) -> ObjectData:
        url = await self._get_endpoint_object(repository_id, folder_id)
        form = self._get_form(
            bc.ACTION_CREATE_FOLDER,
            properties=properties,
            policies=policies,
            add_aces=add_aces,
            remove_aces=remove_aces,
        )
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        created = self._parse_endpoint_object(repository_id, response)
        self.logging.info("Created folder %s in repository %s", created.id, repository_id, color="green")
        return created

    async def do_update_properties(self, repository_id: str, object_id: str, properties: PropertiesInput, change_token: str | None = None) -> ObjectData:
        """
        Updates properties of an object. Only the given properties are sent.

        Returns:
            ObjectData: The updated object. Its id may differ from object_id for versioned documents.

        Raises:
            UpdateConflictError: If change_token is outdated.
        """
        url = await self._get_endpoint_object(repository_id, object_id)
        form = self._get_form(
            bc.ACTION_UPDATE_PROPERTIES,
            parameters={bc.PARAM_CHANGE_TOKEN: change_token},
            properties=properties,
        )
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object(repository_id, response)

    async def do_delete_object(self, repository_id: str, object_id: str, all_versions: bool = True) -> None:
        url = await self._get_endpoint_object(repository_id, object_id)
        form = self._get_form(bc.ACTION_DELETE, parameters={bc.PARAM_ALL_VERSIONS: all_versions})
        await self._post_form(url, form)
        self.logging.info("Deleted object %s in repository %s", object_id, repository_id)

    async def do_delete_tree(
        self,
        repository_id: str,
        folder_id: str,
        all_versions: bool = True,
        unfile_objects: UnfileObject | None = None,
        continue_on_failure: bool = False,
    ) -> FailedToDeleteData | None:
        """
        Deletes a folder and everything below it.

        Returns:
            FailedToDeleteData | None: The ids that could not be deleted, or None if the server reports none.
        """
        url = await self._get_endpoint_object(repository_id, folder_id)
        form = self._get_form(bc.ACTION_DELETE_TREE, parameters={
            bc.PARAM_ALL_VERSIONS: all_versions,
            bc.PARAM_UNFILE_OBJECTS: unfile_objects,
            bc.PARAM_CONTINUE_ON_FAILURE: continue_on_failure,
        })
        failed = self._parse_endpoint_failed_to_delete(await self._post_form(url, form))
        if failed is not None and failed.ids:
            self.logging.warning("Could not delete %d objects below folder %s in repository %s", len(failed.ids), folder_id, repository_id)
        return failed

    async def do_apply_acl(
        self,
        repository_id: str,
        object_id: str,
        add_aces: Acl | None = None,
        remove_aces: Acl | None = None,
        acl_propagation: AclPropagation | None = None,
    ) -> Acl:
        url = await self._get_endpoint_object(repository_id, object_id)
        form = self._get_form(
            bc.ACTION_APPLY_ACL,
            parameters={bc.PARAM_ACL_PROPAGATION: acl_propagation},
            add_aces=add_aces,
            remove_aces=remove_aces,
        )
        return self._parse_endpoint_acl(await self._post_form(url, form))

    async def do_apply_policy(self, repository_id: str, policy_id: str, object_id: str) -> ObjectData:
        url = await self._get_endpoint_object(repository_id, object_id)
        form = self._get_form(bc.ACTION_APPLY_POLICY, parameters={bc.PARAM_POLICY_ID: policy_id})
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object(repository_id, response)

    async def do_remove_policy(self, repository_id: str, policy_id: str, object_id: str) -> ObjectData:
        url = await self._get_endpoint_object(repository_id, object_id)
        form = self._get_form(bc.ACTION_REMOVE_POLICY, parameters={bc.PARAM_POLICY_ID: policy_id})
        response = await self._post_form(url, form)
        await self._prepare_types(repository_id, response)
        return self._parse_endpoint_object(repository_id, response)


