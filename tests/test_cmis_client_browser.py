import httpx
import pytest

from cmisclient.clients.cmis.browser.CMISClientBrowser import CMISClientBrowser
from cmisclient.clients.cmis.errors import (
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
from cmisclient.clients.cmis.models.Enums import AclPropagation, PropertyType, UnfileObject
from cmisclient.clients.cmis.models.ObjectData import Ace, Acl, Principal

from conftest import (
    BASE_URL,
    INVOICE_TYPE_JSON,
    REPOSITORY_ID,
    TAGGABLE_TYPE_JSON,
    MockBrowserServer,
    explicit_object_json,
    repository_info_json,
    succinct_object_json,
)


def type_requests(mock_server: MockBrowserServer) -> list[str]:
    return [request.url.params["typeId"] for request in mock_server.requests_for("GET", "typeDefinition")]


##########################################
############ CONFIG / LIFECYCLE ##########
##########################################

class TestSetup:
    def test_names_and_config(self, browser_env, helper_config):
        client = CMISClientBrowser(helper_config=helper_config)
        assert client.get_client_type() == "cmis"
        assert client.get_engine_name() == "browser"
        assert client.is_succinct() is True
        assert client.timeout == 30.0

    def test_missing_base_url_raises(self, browser_env, helper_config):
        browser_env.delenv("CMIS_BROWSER_BASE_URL")
        with pytest.raises(ValueError):
            CMISClientBrowser(helper_config=helper_config)

    def test_no_auth_header_without_username(self, browser_env, helper_config):
        browser_env.delenv("CMIS_BROWSER_USERNAME")
        assert CMISClientBrowser(helper_config=helper_config)._get_auth_header() == {}

    @pytest.mark.asyncio
    async def test_requests_need_boot(self, browser_env, helper_config):
        client = CMISClientBrowser(helper_config=helper_config)
        with pytest.raises(RuntimeError):
            await client.do_fetch_repository_infos()

    @pytest.mark.asyncio
    async def test_healthcheck(self, browser_client, mock_server):
        response = await browser_client.do_healthcheck()
        assert response.status_code == 200
        assert str(mock_server.requests[0].url) == BASE_URL


##########################################
############## REPOSITORIES ##############
##########################################

class TestRepositories:
    @pytest.mark.asyncio
    async def test_service_document_fills_url_cache(self, browser_client, mock_server):
        repository_infos = await browser_client.do_fetch_repository_infos()
        assert [repository.id for repository in repository_infos.repositories] == [REPOSITORY_ID]
        assert browser_client.get_url_cache().has_repository(REPOSITORY_ID)
        assert mock_server.requests[0].headers["Authorization"] == "Basic YWRtaW46c2VjcmV0"

    @pytest.mark.asyncio
    async def test_repository_info(self, browser_client, mock_server):
        mock_server.on("GET", "repositoryInfo", {REPOSITORY_ID: repository_info_json()})
        repository_info = await browser_client.do_fetch_repository_info(REPOSITORY_ID)
        assert repository_info.name == "Test repository"
        request = mock_server.requests_for("GET", "repositoryInfo")[0]
        assert request.url.path == "/browser/repo1"

    @pytest.mark.asyncio
    async def test_unknown_repository_raises(self, browser_client):
        with pytest.raises(ObjectNotFoundError):
            await browser_client.do_fetch_object("nope", "doc-1")

    @pytest.mark.asyncio
    async def test_service_document_is_fetched_once(self, browser_client, mock_server):
        mock_server.on("GET", "allowableActions", {"canDelete": True})
        await browser_client.do_fetch_allowable_actions(REPOSITORY_ID, "doc-1")
        await browser_client.do_fetch_allowable_actions(REPOSITORY_ID, "doc-1")
        assert len(mock_server.requests_for("GET", None)) == 1


##########################################
################# TYPES ##################
##########################################

class TestTypes:
    @pytest.mark.asyncio
    async def test_type_definition_is_cached(self, browser_client, mock_server):
        first = await browser_client.do_fetch_type_definition(REPOSITORY_ID, "custom:invoice")
        second = await browser_client.do_fetch_type_definition(REPOSITORY_ID, "custom:invoice")
        assert first is second
        assert type_requests(mock_server) == ["custom:invoice"]

    @pytest.mark.asyncio
    async def test_type_children_with_definitions_are_cached(self, browser_client, mock_server):
        mock_server.on("GET", "typeChildren", {"types": [INVOICE_TYPE_JSON], "hasMoreItems": False, "numItems": 1})
        type_children = await browser_client.do_fetch_type_children(REPOSITORY_ID, "cmis:document", include_property_definitions=True)
        assert [type_definition.id for type_definition in type_children.types] == ["custom:invoice"]
        assert browser_client.get_type_cache().get(REPOSITORY_ID, "custom:invoice") is not None
        request = mock_server.requests_for("GET", "typeChildren")[0]
        assert request.url.params["typeId"] == "cmis:document"
        assert request.url.params["includePropertyDefinitions"] == "true"

    @pytest.mark.asyncio
    async def test_type_descendants(self, browser_client, mock_server):
        mock_server.on("GET", "typeDescendants", [{"type": TAGGABLE_TYPE_JSON, "children": []}])
        tree = await browser_client.do_fetch_type_descendants(REPOSITORY_ID, "cmis:secondary", depth=2)
        assert tree[0].type_definition.id == "custom:taggable"
        assert mock_server.requests_for("GET", "typeDescendants")[0].url.params["depth"] == "2"


##########################################
################ OBJECTS #################
##########################################

class TestObjects:
    @pytest.mark.asyncio
    async def test_succinct_object_prefetches_types(self, browser_client, mock_server):
        mock_server.on("GET", "object", succinct_object_json("doc-1", properties={
            "count": 5,
            "cmis:secondaryObjectTypeIds": ["custom:taggable"],
            "tags": ["a"],
        }))
        obj = await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1", include_allowable_actions=True)

        assert obj.id == "doc-1"
        assert obj.properties.get_property("count").property_type == PropertyType.INTEGER
        assert obj.properties.get_property("tags").display_name == "tags label"
        assert type_requests(mock_server) == ["custom:invoice", "custom:taggable", "cmis:document", "cmis:folder"]

        request = mock_server.requests_for("GET", "object")[0]
        assert request.url.path == "/browser/repo1/root"
        assert request.url.params["objectId"] == "doc-1"
        assert request.url.params["succinct"] == "true"
        assert request.url.params["includeAllowableActions"] == "true"
        assert "filter" not in request.url.params

        await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")
        assert len(type_requests(mock_server)) == 4

    @pytest.mark.asyncio
    async def test_unknown_type_falls_back_to_heuristic(self, browser_client, mock_server):
        mock_server.on("GET", "object", succinct_object_json("doc-1", type_id="custom:gone", properties={"count": 5}))
        obj = await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")
        count = obj.properties.get_property("count")
        assert count.property_type == PropertyType.INTEGER
        assert count.display_name == "count"

    @pytest.mark.asyncio
    async def test_explicit_mode(self, browser_env, helper_config, mock_server):
        browser_env.setenv("CMIS_BROWSER_SUCCINCT", "false")
        client = CMISClientBrowser(helper_config=helper_config)
        await client.boot(transport=httpx.MockTransport(mock_server.handler))
        try:
            mock_server.on("GET", "object", explicit_object_json("doc-2"))
            obj = await client.do_fetch_object(REPOSITORY_ID, "doc-2")
        finally:
            await client.close()
        assert obj.id == "doc-2"
        assert "succinct" not in mock_server.requests_for("GET", "object")[0].url.params
        assert type_requests(mock_server) == []

    @pytest.mark.asyncio
    async def test_object_by_path(self, browser_client, mock_server):
        mock_server.on("GET", "object", succinct_object_json("doc-3"))
        obj = await browser_client.do_fetch_object_by_path(REPOSITORY_ID, "/Invoices/2024 Q1.pdf")
        assert obj.id == "doc-3"
        request = mock_server.requests_for("GET", "object")[0]
        assert request.url.raw_path.startswith(b"/browser/repo1/root/Invoices/2024%20Q1.pdf")

    @pytest.mark.asyncio
    async def test_properties(self, browser_client, mock_server):
        mock_server.on("GET", "properties", {"cmis:objectId": "doc-4", "cmis:objectTypeId": "custom:invoice", "amount": 12.5})
        properties = await browser_client.do_fetch_properties(REPOSITORY_ID, "doc-4")
        assert properties.get_property("amount").property_type == PropertyType.DECIMAL
        assert "custom:invoice" in type_requests(mock_server)

    @pytest.mark.asyncio
    async def test_object_parts(self, browser_client, mock_server):
        mock_server.on("GET", "allowableActions", {"canDelete": True, "canCheckOut": False})
        mock_server.on("GET", "acl", {"aces": [{"principal": {"principalId": "alice"}, "permissions": ["cmis:read"], "isDirect": True}]})
        mock_server.on("GET", "renditions", [{"streamId": "s1", "kind": "cmis:thumbnail"}])

        actions = await browser_client.do_fetch_allowable_actions(REPOSITORY_ID, "doc-1")
        acl = await browser_client.do_fetch_acl(REPOSITORY_ID, "doc-1", only_basic_permissions=False)
        renditions = await browser_client.do_fetch_renditions(REPOSITORY_ID, "doc-1", rendition_filter="cmis:thumbnail")

        assert actions.allowable_actions == {"canDelete"}
        assert acl.aces[0].principal_id == "alice"
        assert renditions[0].stream_id == "s1"
        assert mock_server.requests_for("GET", "acl")[0].url.params["onlyBasicPermissions"] == "false"
        assert mock_server.requests_for("GET", "renditions")[0].url.params["renditionFilter"] == "cmis:thumbnail"


##########################################
############### NAVIGATION ###############
##########################################

class TestNavigation:
    @pytest.mark.asyncio
    async def test_all_children_pages_until_no_more_items(self, browser_client, mock_server):
        pages = {
            "0": {"objects": [{"object": succinct_object_json("a")}, {"object": succinct_object_json("b")}], "hasMoreItems": True, "numItems": 3},
            "2": {"objects": [{"object": succinct_object_json("c")}], "hasMoreItems": False, "numItems": 3},
        }
        mock_server.on_request("GET", "children", lambda request: mock_server.response(pages[request.url.params["skipCount"]]))

        children = await browser_client.do_fetch_all_children(REPOSITORY_ID, "folder-1", page_size=2)

        assert [child.object.id for child in children] == ["a", "b", "c"]
        requests = mock_server.requests_for("GET", "children")
        assert [request.url.params["skipCount"] for request in requests] == ["0", "2"]
        assert all(request.url.params["maxItems"] == "2" for request in requests)

    @pytest.mark.asyncio
    async def test_descendants_and_folder_tree(self, browser_client, mock_server):
        tree = [{"object": {"object": succinct_object_json("f1", type_id="cmis:folder", base_type_id="cmis:folder")}, "children": []}]
        mock_server.on("GET", "descendants", tree)
        mock_server.on("GET", "folder", tree)

        descendants = await browser_client.do_fetch_descendants(REPOSITORY_ID, "root-id", depth=-1)
        folders = await browser_client.do_fetch_descendants(REPOSITORY_ID, "root-id", folder_tree_only=True)

        assert descendants[0].object.object.id == "f1"
        assert folders[0].object.object.id == "f1"
        assert mock_server.requests_for("GET", "descendants")[0].url.params["depth"] == "-1"

    @pytest.mark.asyncio
    async def test_object_parents(self, browser_client, mock_server):
        mock_server.on("GET", "parents", [{"object": succinct_object_json("f1", type_id="cmis:folder", base_type_id="cmis:folder"), "relativePathSegment": "a.pdf"}])
        parents = await browser_client.do_fetch_object_parents(REPOSITORY_ID, "doc-1", include_relative_path_segment=True)
        assert parents[0].relative_path_segment == "a.pdf"


##########################################
############### DISCOVERY ################
##########################################

class TestDiscovery:
    @pytest.mark.asyncio
    async def test_query_is_posted(self, browser_client, mock_server):
        mock_server.on("POST", "query", {"results": [succinct_object_json("q1")], "hasMoreItems": False, "numItems": 1})
        result = await browser_client.do_query(REPOSITORY_ID, "SELECT * FROM cmis:document", max_items=10)

        assert [obj.id for obj in result.objects] == ["q1"]
        request = mock_server.requests_for("POST", "query")[0]
        assert str(request.url) == f"{BASE_URL}/{REPOSITORY_ID}"
        form = mock_server.form(request)
        assert form["statement"] == "SELECT * FROM cmis:document"
        assert form["maxItems"] == "10"
        assert form["succinct"] == "true"
        assert "searchAllVersions" not in form

    @pytest.mark.asyncio
    async def test_content_changes(self, browser_client, mock_server):
        mock_server.on("GET", "contentChanges", {
            "objects": [succinct_object_json("d1", changeEventInfo={"changeType": "created", "changeTime": 0})],
            "changeLogToken": "token-2",
        })
        changes = await browser_client.do_fetch_content_changes(REPOSITORY_ID, change_log_token="token-1")
        assert changes.change_log_token == "token-2"
        assert changes.objects[0].change_event_info is not None
        assert mock_server.requests_for("GET", "contentChanges")[0].url.params["changeLogToken"] == "token-1"


##########################################
############### MUTATIONS ################
##########################################

class TestMutations:
    @pytest.mark.asyncio
    async def test_create_document(self, browser_client, mock_server):
        mock_server.on("POST", "createDocument", succinct_object_json("new-doc"))
        created = await browser_client.do_create_document(
            REPOSITORY_ID,
            {"cmis:objectTypeId": "custom:invoice", "cmis:name": "new.pdf", "count": 3},
            folder_id="folder-1",
            policies=["policy-1"],
            add_aces=Acl(aces=[Ace(principal=Principal(id="alice"), permissions=["cmis:read"])]),
        )

        assert created.id == "new-doc"
        request = mock_server.requests_for("POST", "createDocument")[0]
        assert request.url.params["objectId"] == "folder-1"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        form = mock_server.form(request)
        assert form["propertyId[0]"] == "cmis:objectTypeId"
        assert form["propertyValue[2]"] == "3"
        assert form["policy[0]"] == "policy-1"
        assert form["addACEPrincipal[0]"] == "alice"
        assert form["addACEPermission[0][0]"] == "cmis:read"

    @pytest.mark.asyncio
    async def test_create_unfiled_document_posts_to_repository(self, browser_client, mock_server):
        mock_server.on("POST", "createDocument", succinct_object_json("new-doc"))
        await browser_client.do_create_document(REPOSITORY_ID, {"cmis:objectTypeId": "cmis:document", "cmis:name": "x"})
        assert mock_server.requests_for("POST", "createDocument")[0].url.path == "/browser/repo1"

    @pytest.mark.asyncio
    async def test_create_folder(self, browser_client, mock_server):
        mock_server.on("POST", "createFolder", succinct_object_json("new-folder", type_id="cmis:folder", base_type_id="cmis:folder"))
        created = await browser_client.do_create_folder(REPOSITORY_ID, {"cmis:objectTypeId": "cmis:folder", "cmis:name": "Archive"}, "root-id")
        assert created.base_type_id.value == "cmis:folder"

    @pytest.mark.asyncio
    async def test_update_properties_sends_change_token(self, browser_client, mock_server):
        mock_server.on("POST", "update", succinct_object_json("doc-1", properties={"cmis:changeToken": "ct-2"}))
        updated = await browser_client.do_update_properties(REPOSITORY_ID, "doc-1", {"cmis:name": "renamed.pdf"}, change_token="ct-1")
        assert updated.change_token == "ct-2"
        form = mock_server.form(mock_server.requests_for("POST", "update")[0])
        assert form["changeToken"] == "ct-1"
        assert form["propertyValue[0]"] == "renamed.pdf"

    @pytest.mark.asyncio
    async def test_delete_object(self, browser_client, mock_server):
        mock_server.on("POST", "delete", None)
        await browser_client.do_delete_object(REPOSITORY_ID, "doc-1", all_versions=False)
        assert mock_server.form(mock_server.requests_for("POST", "delete")[0])["allVersions"] == "false"

    @pytest.mark.asyncio
    async def test_delete_tree(self, browser_client, mock_server):
        mock_server.on("POST", "deleteTree", {"ids": ["doc-9"]})
        failed = await browser_client.do_delete_tree(REPOSITORY_ID, "folder-1", unfile_objects=UnfileObject.DELETE, continue_on_failure=True)
        assert failed.ids == ["doc-9"]
        form = mock_server.form(mock_server.requests_for("POST", "deleteTree")[0])
        assert form["unfileObjects"] == "delete"
        assert form["continueOnFailure"] == "true"

    @pytest.mark.asyncio
    async def test_delete_tree_without_failures(self, browser_client, mock_server):
        mock_server.on("POST", "deleteTree", None)
        assert await browser_client.do_delete_tree(REPOSITORY_ID, "folder-1") is None

    @pytest.mark.asyncio
    async def test_apply_acl(self, browser_client, mock_server):
        mock_server.on("POST", "applyACL", {"aces": [{"principal": {"principalId": "bob"}, "permissions": ["cmis:write"], "isDirect": True}], "isExact": True})
        acl = await browser_client.do_apply_acl(
            REPOSITORY_ID,
            "doc-1",
            add_aces=Acl(aces=[Ace(principal=Principal(id="bob"), permissions=["cmis:write"])]),
            remove_aces=Acl(aces=[Ace(principal=Principal(id="eve"), permissions=["cmis:read"])]),
            acl_propagation=AclPropagation.OBJECTONLY,
        )
        assert acl.aces[0].principal_id == "bob"
        form = mock_server.form(mock_server.requests_for("POST", "applyACL")[0])
        assert form["addACEPrincipal[0]"] == "bob"
        assert form["removeACEPrincipal[0]"] == "eve"
        assert form["ACLPropagation"] == "objectonly"

    @pytest.mark.asyncio
    async def test_apply_and_remove_policy(self, browser_client, mock_server):
        mock_server.on("POST", "applyPolicy", succinct_object_json("doc-1"))
        mock_server.on("POST", "removePolicy", succinct_object_json("doc-1"))
        await browser_client.do_apply_policy(REPOSITORY_ID, "policy-1", "doc-1")
        await browser_client.do_remove_policy(REPOSITORY_ID, "policy-1", "doc-1")
        assert mock_server.form(mock_server.requests_for("POST", "applyPolicy")[0])["policyId"] == "policy-1"
        assert mock_server.form(mock_server.requests_for("POST", "removePolicy")[0])["policyId"] == "policy-1"


##########################################
################# ERRORS #################
##########################################

class TestErrors:
    @pytest.mark.parametrize("status_code, exception_name, error_class", [
        (400, "invalidArgument", InvalidArgumentError),
        (400, "filterNotValid", FilterNotValidError),
        (401, None, PermissionDeniedError),
        (403, "permissionDenied", PermissionDeniedError),
        (403, "streamNotSupported", StreamNotSupportedError),
        (404, "objectNotFound", ObjectNotFoundError),
        (405, "notSupported", NotSupportedError),
        (409, "constraint", ConstraintError),
        (409, "nameConstraintViolation", NameConstraintViolationError),
        (409, "updateConflict", UpdateConflictError),
        (409, "contentAlreadyExists", ContentAlreadyExistsError),
        (409, "versioning", VersioningError),
        (500, "storage", StorageError),
        (500, "runtime", ServerError),
        (502, None, ServerError),
    ])
    @pytest.mark.asyncio
    async def test_status_mapping(self, browser_client, mock_server, status_code, exception_name, error_class):
        body = {"exception": exception_name, "message": "server says no"} if exception_name else None
        mock_server.on("GET", "object", body, status_code=status_code)
        with pytest.raises(error_class) as exc_info:
            await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")
        assert exc_info.value.status_code == status_code
        if exception_name:
            assert exc_info.value.message == "server says no"

    @pytest.mark.asyncio
    async def test_redirect_is_a_connection_failure(self, browser_client, mock_server):
        mock_server.on_request("GET", "object", lambda request: httpx.Response(302, headers={"Location": "http://elsewhere.test"}))
        with pytest.raises(ConnectionFailureError) as exc_info:
            await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")
        assert exc_info.value.status_code == 302

    @pytest.mark.asyncio
    async def test_non_json_body_is_a_connection_failure(self, browser_client, mock_server):
        mock_server.on_request("GET", "object", lambda request: httpx.Response(200, text="<html>login</html>"))
        with pytest.raises(ConnectionFailureError):
            await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")

    @pytest.mark.asyncio
    async def test_transport_error_is_a_connection_failure(self, browser_client, mock_server):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        mock_server.on_request("GET", None, refuse)
        with pytest.raises(ConnectionFailureError):
            await browser_client.do_fetch_repository_infos()

    @pytest.mark.asyncio
    async def test_unexpected_json_shape_is_a_connection_failure(self, browser_client, mock_server):
        mock_server.on("GET", "object", ["not", "an", "object"])
        with pytest.raises(ConnectionFailureError):
            await browser_client.do_fetch_object(REPOSITORY_ID, "doc-1")
