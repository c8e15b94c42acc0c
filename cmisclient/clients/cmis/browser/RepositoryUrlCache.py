import threading
from urllib.parse import quote

import httpx

from cmisclient.clients.cmis.browser import BrowserConstants as bc


class RepositoryUrlCache:
    """
    Remembers the repository URL and root folder URL the service document reports per repository and
    builds request URLs from them.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._repository_urls: dict[str, str] = {}
        self._root_urls: dict[str, str] = {}

    def add_repository(self, repository_id: str, repository_url: str, root_url: str) -> None:
        """
        Raises:
            ValueError: If any of the arguments is missing.
        """
        if not repository_id or not repository_url or not root_url:
            raise ValueError("Repository id, repository URL and root folder URL must be set.")
        with self._lock:
            self._repository_urls[repository_id] = repository_url
            self._root_urls[repository_id] = root_url

    def remove_repository(self, repository_id: str) -> None:
        with self._lock:
            self._repository_urls.pop(repository_id, None)
            self._root_urls.pop(repository_id, None)

    def has_repository(self, repository_id: str) -> bool:
        with self._lock:
            return repository_id in self._repository_urls

    def get_repository_url(self, repository_id: str, selector: str | None = None) -> httpx.URL | None:
        with self._lock:
            base = self._repository_urls.get(repository_id)
        if base is None:
            return None
        url = httpx.URL(base)
        if selector:
            url = url.copy_add_param(bc.PARAM_SELECTOR, selector)
        return url

    def get_root_url(self, repository_id: str) -> httpx.URL | None:
        with self._lock:
            base = self._root_urls.get(repository_id)
        return httpx.URL(base) if base is not None else None

    def get_object_url(self, repository_id: str, object_id: str, selector: str | None = None) -> httpx.URL | None:
        """
        Builds <root folder URL>?objectId=<object_id>[&cmisselector=<selector>].
        """
        url = self.get_root_url(repository_id)
        if url is None:
            return None
        url = url.copy_add_param(bc.PARAM_OBJECT_ID, object_id)
        if selector:
            url = url.copy_add_param(bc.PARAM_SELECTOR, selector)
        return url

    def get_path_url(self, repository_id: str, path: str, selector: str | None = None) -> httpx.URL | None:
        """
        Builds <root folder URL>/<path>[?cmisselector=<selector>]. Path segments are percent-encoded.
        """
        with self._lock:
            base = self._root_urls.get(repository_id)
        if base is None:
            return None
        url = httpx.URL(base.rstrip("/") + "/" + quote(path.lstrip("/"), safe="/"))
        if selector:
            url = url.copy_add_param(bc.PARAM_SELECTOR, selector)
        return url
