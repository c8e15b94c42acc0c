import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.errors import TypeNotFoundError
from cmisclient.clients.cmis.models.Enums import BaseTypeId
from cmisclient.clients.cmis.models.TypeDefinition import TypeDefinition
from cmisclient.clients.cmis.TypeDefinitionCache import TypeDefinitionCacheInterface

TypeDefinitionFetcher = Callable[[str], Awaitable[TypeDefinition | None]]


class TypeDefinitionResolver:
    """
    Resolves type ids of one repository to type definitions through an injected cache.

    Fetching is asynchronous and happens only in fetch_type_definition() and prefetch(). The
    converters run synchronously and use get_type_definition(), which only reads the cache; the
    binding client therefore prefetches every type id a payload references before converting it.
    """

    def __init__(
        self,
        repository_id: str,
        cache: TypeDefinitionCacheInterface,
        fetcher: TypeDefinitionFetcher | None = None,
        logger: logging.Logger | None = None,
    ):
        self.repository_id = repository_id
        self._cache = cache
        self._fetcher = fetcher
        self.logging = logger or logging.getLogger(__name__)

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_type_definition(self, type_id: str | None) -> TypeDefinition | None:
        """
        Returns the cached type definition or None. Never fetches.
        """
        if not type_id:
            return None
        return self._cache.get(self.repository_id, type_id)

    def get_cache(self) -> TypeDefinitionCacheInterface:
        return self._cache

    ##########################################
    ################ FETCHING ################
    ##########################################

    async def fetch_type_definition(self, type_id: str) -> TypeDefinition:
        """
        Returns the type definition from the cache, fetching and caching it on a miss.

        Args:
            type_id (str): The id of the type, e.g. "cmis:document".

        Returns:
            TypeDefinition: The resolved type definition.

        Raises:
            TypeNotFoundError: If the repository reports that the type does not exist. Nothing is cached.
            ConnectionFailureError: If the fetch itself fails.
        """
        cached = self._cache.get(self.repository_id, type_id)
        if cached is not None:
            self.logging.debug("Type definition cache hit for '%s' in repository '%s'", type_id, self.repository_id)
            return cached

        self.logging.debug("Type definition cache miss for '%s' in repository '%s'", type_id, self.repository_id)
        if self._fetcher is None:
            self.logging.warning("No fetcher configured, type '%s' cannot be resolved in repository '%s'", type_id, self.repository_id)
            raise TypeNotFoundError(self.repository_id, type_id)

        type_definition = await self._fetcher(type_id)
        if type_definition is None:
            self.logging.warning("Type '%s' not found in repository '%s'", type_id, self.repository_id)
            raise TypeNotFoundError(self.repository_id, type_id)

        self._cache.put(self.repository_id, type_definition)
        return type_definition

    async def prefetch(self, type_ids: Iterable[str]) -> list[TypeDefinition]:
        """
        Makes sure every given type id is cached. Unknown types are skipped with a warning so that
        the converters can fall back to their heuristic.

        Returns:
            list[TypeDefinition]: The resolved type definitions in input order, without duplicates.
        """
        resolved: list[TypeDefinition] = []
        seen: set[str] = set()
        for type_id in type_ids:
            if not type_id or type_id in seen:
                continue
            seen.add(type_id)
            try:
                resolved.append(await self.fetch_type_definition(type_id))
            except TypeNotFoundError:
                continue
        return resolved

    async def fetch_base_types(self) -> list[TypeDefinition]:
        """
        Caches the document and folder base types, the last resort of succinct property resolution.
        """
        return await self.prefetch([BaseTypeId.DOCUMENT.value, BaseTypeId.FOLDER.value])

    ##########################################
    ############### PAYLOAD SCAN #############
    ##########################################

    @classmethod
    def collect_type_ids(cls, payload: Any) -> list[str]:
        """
        Collects every primary and secondary type id referenced by succinct property maps anywhere in
        a wire payload, in the order they appear.
        """
        found: list[str] = []
        cls._collect(payload, found)
        return list(dict.fromkeys(found))

    @classmethod
    def _collect(cls, node: Any, found: list[str]) -> None:
        if isinstance(node, list):
            for item in node:
                cls._collect(item, found)
            return
        if not isinstance(node, dict):
            return
        for key, value in node.items():
            if key == bc.OBJECT_SUCCINCT_PROPERTIES and isinstance(value, dict):
                found.extend(cls._type_ids_of(value))
            else:
                cls._collect(value, found)

    @staticmethod
    def _type_ids_of(succinct_properties: dict) -> list[str]:
        type_ids: list[str] = []
        object_type_id = succinct_properties.get(bc.PROPERTY_OBJECT_TYPE_ID)
        if isinstance(object_type_id, list):
            object_type_id = object_type_id[0] if object_type_id else None
        if isinstance(object_type_id, str):
            type_ids.append(object_type_id)
        secondary = succinct_properties.get(bc.PROPERTY_SECONDARY_OBJECT_TYPE_IDS)
        if isinstance(secondary, str):
            secondary = [secondary]
        if isinstance(secondary, list):
            type_ids.extend(type_id for type_id in secondary if isinstance(type_id, str))
        return type_ids
