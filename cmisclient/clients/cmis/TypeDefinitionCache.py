import threading
from abc import ABC, abstractmethod

from cmisclient.clients.cmis.models.TypeDefinition import TypeDefinition


class TypeDefinitionCacheInterface(ABC):
    """
    Store for type definitions keyed by repository id and type id. Implementations must tolerate
    concurrent put calls for the same key; the last one wins.
    """

    @abstractmethod
    def get(self, repository_id: str, type_id: str) -> TypeDefinition | None:
        """
        Returns the cached type definition, or None on a miss.
        """
        pass

    @abstractmethod
    def put(self, repository_id: str, type_definition: TypeDefinition) -> None:
        """
        Stores a type definition under its own id. Overwrites an existing entry.
        """
        pass

    @abstractmethod
    def remove(self, repository_id: str, type_id: str) -> None:
        pass

    @abstractmethod
    def clear(self, repository_id: str | None = None) -> None:
        """
        Drops every entry of one repository, or of all repositories if repository_id is None.
        """
        pass


class InMemoryTypeDefinitionCache(TypeDefinitionCacheInterface):
    def __init__(self):
        self._lock = threading.Lock()
        self._cache: dict[str, dict[str, TypeDefinition]] = {}

    def get(self, repository_id: str, type_id: str) -> TypeDefinition | None:
        with self._lock:
            return self._cache.get(repository_id, {}).get(type_id)

    def put(self, repository_id: str, type_definition: TypeDefinition) -> None:
        with self._lock:
            self._cache.setdefault(repository_id, {})[type_definition.id] = type_definition

    def remove(self, repository_id: str, type_id: str) -> None:
        with self._lock:
            self._cache.get(repository_id, {}).pop(type_id, None)

    def clear(self, repository_id: str | None = None) -> None:
        with self._lock:
            if repository_id is None:
                self._cache.clear()
            else:
                self._cache.pop(repository_id, None)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(types) for types in self._cache.values())
