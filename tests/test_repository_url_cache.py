import pytest

from cmisclient.clients.cmis.browser.RepositoryUrlCache import RepositoryUrlCache

from conftest import REPOSITORY_ID, REPOSITORY_URL, ROOT_FOLDER_URL


@pytest.fixture
def url_cache():
    cache = RepositoryUrlCache()
    cache.add_repository(REPOSITORY_ID, REPOSITORY_URL, ROOT_FOLDER_URL)
    return cache


def test_repository_url(url_cache):
    assert str(url_cache.get_repository_url(REPOSITORY_ID)) == REPOSITORY_URL
    url = url_cache.get_repository_url(REPOSITORY_ID, "typeDefinition")
    assert url.params["cmisselector"] == "typeDefinition"


def test_object_url(url_cache):
    url = url_cache.get_object_url(REPOSITORY_ID, "doc 1", "properties")
    assert url.path == "/browser/repo1/root"
    assert url.params["objectId"] == "doc 1"
    assert url.params["cmisselector"] == "properties"
    assert list(url.params.keys()) == ["objectId", "cmisselector"]


def test_path_url_quotes_segments(url_cache):
    url = url_cache.get_path_url(REPOSITORY_ID, "/Invoices 2024/a.pdf", "object")
    assert url.raw_path.startswith(b"/browser/repo1/root/Invoices%202024/a.pdf")
    assert url.params["cmisselector"] == "object"


def test_root_url(url_cache):
    assert str(url_cache.get_root_url(REPOSITORY_ID)) == ROOT_FOLDER_URL


def test_unknown_repository(url_cache):
    assert url_cache.get_repository_url("other") is None
    assert url_cache.get_object_url("other", "x") is None
    assert url_cache.get_path_url("other", "/x") is None
    assert url_cache.has_repository("other") is False


def test_remove_repository(url_cache):
    url_cache.remove_repository(REPOSITORY_ID)
    assert url_cache.has_repository(REPOSITORY_ID) is False
    url_cache.remove_repository(REPOSITORY_ID)


@pytest.mark.parametrize("args", [
    ("", REPOSITORY_URL, ROOT_FOLDER_URL),
    (REPOSITORY_ID, None, ROOT_FOLDER_URL),
    (REPOSITORY_ID, REPOSITORY_URL, ""),
])
def test_add_repository_requires_all_arguments(args):
    with pytest.raises(ValueError):
        RepositoryUrlCache().add_repository(*args)
