import logging
from typing import Any, Callable
from urllib.parse import parse_qsl

import httpx
import pytest
import pytest_asyncio

from cmisclient.clients.cmis.browser.CMISClientBrowser import CMISClientBrowser
from cmisclient.clients.cmis.browser.ObjectGraphConverter import ObjectGraphConverter
from cmisclient.clients.cmis.browser.TypeDefinitionConverter import TypeDefinitionConverter
from cmisclient.clients.cmis.TypeDefinitionCache import InMemoryTypeDefinitionCache
from cmisclient.clients.cmis.TypeDefinitionResolver import TypeDefinitionResolver
from cmisclient.helper.HelperConfig import HelperConfig
from cmisclient.logging.logging_setup import ColorLogger

REPOSITORY_ID = "repo1"
BASE_URL = "http://cmis.test/browser"
REPOSITORY_URL = f"{BASE_URL}/{REPOSITORY_ID}"
ROOT_FOLDER_URL = f"{REPOSITORY_URL}/root"


##########################################
############ PAYLOAD BUILDERS ############
##########################################

def property_definition_json(property_id: str, property_type: str, cardinality: str = "single", **extra: Any) -> dict:
    result = {
        "id": property_id,
        "localName": property_id.split(":")[-1],
        "localNamespace": "http://cmis.test/ns",
        "queryName": property_id,
        "displayName": f"{property_id.split(':')[-1]} label",
        "description": f"Definition of {property_id}",
        "propertyType": property_type,
        "cardinality": cardinality,
        "updatability": "readwrite",
        "inherited": False,
        "required": False,
        "queryable": True,
        "orderable": True,
        "openChoice": False,
    }
    result.update(extra)
    return result


def type_definition_json(type_id: str, base_id: str, parent_id: str | None = None, property_definitions: list[dict] | None = None, **extra: Any) -> dict:
    result = {
        "id": type_id,
        "localName": type_id.split(":")[-1],
        "localNamespace": "http://cmis.test/ns",
        "displayName": type_id,
        "queryName": type_id,
        "description": f"Type {type_id}",
        "baseId": base_id,
        "parentId": parent_id,
        "creatable": True,
        "fileable": True,
        "queryable": True,
        "fulltextIndexed": False,
        "includedInSupertypeQuery": True,
        "controllablePolicy": False,
        "controllableACL": True,
        "propertyDefinitions": {definition["id"]: definition for definition in property_definitions or []},
    }
    result.update(extra)
    return result


BASE_PROPERTY_DEFINITIONS = [
    property_definition_json("cmis:objectId", "id", updatability="readonly"),
    property_definition_json("cmis:objectTypeId", "id", updatability="oncreate"),
    property_definition_json("cmis:baseTypeId", "id", updatability="readonly"),
    property_definition_json("cmis:name", "string", maxLength=255),
    property_definition_json("cmis:changeToken", "string", updatability="readonly"),
    property_definition_json("cmis:creationDate", "datetime", updatability="readonly", resolution="time"),
    property_definition_json("cmis:secondaryObjectTypeIds", "id", cardinality="multi"),
]

DOCUMENT_TYPE_JSON = type_definition_json(
    "cmis:document",
    "cmis:document",
    property_definitions=BASE_PROPERTY_DEFINITIONS + [
        property_definition_json("cmis:contentStreamLength", "integer", updatability="readonly"),
    ],
    versionable=False,
    contentStreamAllowed="allowed",
)

FOLDER_TYPE_JSON = type_definition_json(
    "cmis:folder",
    "cmis:folder",
    property_definitions=BASE_PROPERTY_DEFINITIONS + [
        property_definition_json("cmis:path", "string", updatability="readonly"),
        property_definition_json("cmis:parentId", "id", updatability="readonly"),
    ],
)

INVOICE_TYPE_JSON = type_definition_json(
    "custom:invoice",
    "cmis:document",
    parent_id="cmis:document",
    property_definitions=BASE_PROPERTY_DEFINITIONS + [
        property_definition_json("count", "integer", minValue=0, maxValue=1000),
        property_definition_json("amount", "decimal", minValue="0.00", maxValue="100000.00", precision="64"),
    ],
    versionable=True,
    contentStreamAllowed="required",
)

TAGGABLE_TYPE_JSON = type_definition_json(
    "custom:taggable",
    "cmis:secondary",
    property_definitions=[
        property_definition_json("tags", "string", cardinality="multi"),
        property_definition_json("count", "string"),
        property_definition_json("reviewed", "boolean"),
    ],
    creatable=False,
    fileable=False,
)

TYPE_JSONS = {
    type_json["id"]: type_json
    for type_json in (DOCUMENT_TYPE_JSON, FOLDER_TYPE_JSON, INVOICE_TYPE_JSON, TAGGABLE_TYPE_JSON)
}


def succinct_object_json(
    object_id: str,
    type_id: str = "custom:invoice",
    base_type_id: str = "cmis:document",
    name: str = "invoice.pdf",
    properties: dict | None = None,
    **parts: Any,
) -> dict:
    succinct_properties = {
        "cmis:objectId": object_id,
        "cmis:objectTypeId": type_id,
        "cmis:baseTypeId": base_type_id,
        "cmis:name": name,
    }
    succinct_properties.update(properties or {})
    result: dict = {"succinctProperties": succinct_properties}
    result.update(parts)
    return result


def explicit_property_json(property_id: str, property_type: str, value: Any, **extra: Any) -> dict:
    result = {
        "id": property_id,
        "localName": property_id.split(":")[-1],
        "displayName": property_id.split(":")[-1],
        "queryName": property_id,
        "type": property_type,
        "cardinality": "single",
        "value": value,
    }
    result.update(extra)
    return result


def explicit_object_json(object_id: str, type_id: str = "cmis:document", name: str = "file.txt", **parts: Any) -> dict:
    properties = [
        explicit_property_json("cmis:objectId", "id", object_id),
        explicit_property_json("cmis:objectTypeId", "id", type_id),
        explicit_property_json("cmis:baseTypeId", "id", "cmis:document"),
        explicit_property_json("cmis:name", "string", name),
    ]
    result: dict = {"properties": {prop["id"]: prop for prop in properties}}
    result.update(parts)
    return result


def repository_info_json(repository_id: str = REPOSITORY_ID) -> dict:
    return {
        "repositoryId": repository_id,
        "repositoryName": "Test repository",
        "repositoryDescription": "Repository used in tests",
        "vendorName": "Test vendor",
        "productName": "Test server",
        "productVersion": "1.0",
        "rootFolderId": "root-id",
        "capabilities": {
            "capabilityContentStreamUpdatability": "anytime",
            "capabilityChanges": "objectidsonly",
            "capabilityRenditions": "read",
            "capabilityGetDescendants": True,
            "capabilityGetFolderTree": True,
            "capabilityMultifiling": True,
            "capabilityUnfiling": False,
            "capabilityVersionSpecificFiling": False,
            "capabilityPWCSearchable": False,
            "capabilityPWCUpdatable": True,
            "capabilityAllVersionsSearchable": False,
            "capabilityQuery": "bothcombined",
            "capabilityJoin": "none",
            "capabilityACL": "manage",
        },
        "aclCapabilities": {
            "supportedPermissions": "basic",
            "propagation": "objectonly",
            "permissions": [
                {"permission": "cmis:read", "description": "Read"},
                {"permission": "cmis:write", "description": "Write"},
            ],
            "permissionMapping": [
                {"key": "canGetProperties.Object", "permission": ["cmis:read"]},
                {"key": "canDelete.Object", "permission": ["cmis:write", "cmis:all"]},
            ],
        },
        "latestChangeLogToken": "token-1",
        "cmisVersionSupported": "1.1",
        "changesIncomplete": False,
        "changesOnType": ["cmis:document", "cmis:folder"],
        "principalIdAnonymous": "anonymous",
        "principalIdAnyone": "anyone",
        "repositoryUrl": f"{BASE_URL}/{repository_id}",
        "rootFolderUrl": f"{BASE_URL}/{repository_id}/root",
    }


##########################################
############## MOCK SERVER ###############
##########################################

RouteHandler = Callable[[httpx.Request], httpx.Response]


class MockBrowserServer:
    """
    Serves browser binding responses to an httpx.MockTransport.

    Routes are keyed by HTTP method and the cmisselector (GET) or cmisaction (POST) of a request.
    The service document and type definitions of TYPE_JSONS are served without registration.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.types: dict[str, dict] = dict(TYPE_JSONS)
        self._routes: dict[tuple[str, str | None], RouteHandler] = {}
        self.on("GET", None, {REPOSITORY_ID: repository_info_json()})

    def on(self, method: str, marker: str | None, payload: Any = None, status_code: int = 200) -> None:
        self._routes[(method, marker)] = lambda request: self.response(payload, status_code)

    def on_request(self, method: str, marker: str | None, handler: RouteHandler) -> None:
        self._routes[(method, marker)] = handler

    @staticmethod
    def response(payload: Any = None, status_code: int = 200) -> httpx.Response:
        if payload is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=payload)

    @staticmethod
    def form(request: httpx.Request) -> dict[str, str]:
        return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))

    def requests_for(self, method: str, marker: str | None) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method and self._marker(request) == marker]

    def _marker(self, request: httpx.Request) -> str | None:
        if request.method == "POST":
            return self.form(request).get("cmisaction")
        return request.url.params.get("cmisselector")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        marker = self._marker(request)
        route = self._routes.get((request.method, marker))
        if route is not None:
            return route(request)
        if request.method == "GET" and marker == "typeDefinition":
            type_json = self.types.get(request.url.params.get("typeId"))
            if type_json is not None:
                return self.response(type_json)
        return self.response({"exception": "objectNotFound", "message": f"Nothing at {request.url}"}, status_code=404)


##########################################
################ FIXTURES ################
##########################################

@pytest.fixture
def type_definitions():
    return {type_id: TypeDefinitionConverter.convert_type_definition(type_json) for type_id, type_json in TYPE_JSONS.items()}


@pytest.fixture
def type_cache(type_definitions):
    cache = InMemoryTypeDefinitionCache()
    for type_definition in type_definitions.values():
        cache.put(REPOSITORY_ID, type_definition)
    return cache


@pytest.fixture
def resolver(type_cache):
    return TypeDefinitionResolver(REPOSITORY_ID, type_cache)


@pytest.fixture
def object_converter(resolver):
    return ObjectGraphConverter(resolver)


@pytest.fixture
def helper_config():
    return HelperConfig(ColorLogger(logging.getLogger("cmisclient.tests")))


@pytest.fixture
def browser_env(monkeypatch):
    monkeypatch.setenv("CMIS_BROWSER_BASE_URL", BASE_URL)
    monkeypatch.setenv("CMIS_BROWSER_USERNAME", "admin")
    monkeypatch.setenv("CMIS_BROWSER_PASSWORD", "secret")
    monkeypatch.delenv("CMIS_BROWSER_SUCCINCT", raising=False)
    monkeypatch.delenv("CMIS_TIMEOUT", raising=False)
    monkeypatch.delenv("CMIS_BINDINGS", raising=False)
    return monkeypatch


@pytest.fixture
def mock_server():
    return MockBrowserServer()


@pytest_asyncio.fixture
async def browser_client(browser_env, helper_config, mock_server):
    client = CMISClientBrowser(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(mock_server.handler))
    yield client
    await client.close()
