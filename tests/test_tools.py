"""Tests for how tool handlers map arguments onto Baasix requests."""

import json

import httpx
import pytest

from baasix_mcp.tools import auth, files, items, notifications, permissions, reports, schemas
from baasix_mcp.tools import settings as settings_tools
from baasix_mcp.tools import utilities
from baasix_mcp.tools.base import NoArgs, query_params, segment
from baasix_mcp.utils.errors import AuthenticationError

from .conftest import login_response, make_response


def last_request(mock_http) -> tuple[str, str, dict]:
    call = mock_http.request.call_args
    method, endpoint = call.args
    return method, endpoint, call.kwargs


@pytest.fixture
def ok(mock_http):
    mock_http.request.return_value = make_response(200, {"data": {}})
    return mock_http


class TestHelpers:
    """Tests for the shared request-building helpers."""

    def test_segment_quotes_path_characters(self):
        """Test that path segments are percent-encoded."""
        assert segment("a/b c") == "a%2Fb%20c"
        assert segment(42) == "42"

    def test_query_params(self):
        """Test that query parameters are JSON-encoded and None values dropped."""
        params = query_params(filter={"status": {"eq": "active"}}, sort=None, page=1, tags=["a"])
        assert params == {
            "filter": json.dumps({"status": {"eq": "active"}}),
            "page": 1,
            "tags": json.dumps(["a"]),
        }


class TestSchemaTools:
    """Tests for the schema management tools."""

    @pytest.mark.asyncio
    async def test_list_schemas_defaults(self, token_client, ok):
        """Test list_schemas with default arguments."""
        await schemas.list_schemas(token_client, schemas.ListSchemasArgs())

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("GET", "/schemas")
        assert kwargs["params"] == {"page": 1, "limit": 10, "sort": "collectionName:asc"}

    @pytest.mark.asyncio
    async def test_create_schema_forwards_definition(self, token_client, ok):
        """Test that create_schema posts the definition."""
        definition = {"name": "Product", "fields": {"id": {"type": "UUID", "primaryKey": True}}}
        args = schemas.SchemaBodyArgs.model_validate(
            {"collection": "products", "schema": definition}
        )

        await schemas.create_schema(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/schemas/products")
        assert kwargs["json"] == definition

    @pytest.mark.asyncio
    async def test_add_index(self, token_client, ok):
        """Test that add_index posts the index definition."""
        args = schemas.AddIndexArgs.model_validate(
            {
                "collection": "products",
                "indexDefinition": {"name": "idx_sku", "fields": ["sku"], "unique": True},
            }
        )

        await schemas.add_index(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/schemas/products/indexes")
        assert kwargs["json"] == {"name": "idx_sku", "fields": ["sku"], "unique": True}

    @pytest.mark.asyncio
    async def test_create_relationship_uses_wire_names(self, token_client, ok):
        """Test that create_relationship sends wire field names."""
        args = schemas.CreateRelationshipArgs.model_validate(
            {
                "sourceCollection": "orders",
                "relationshipData": {
                    "name": "customer",
                    "type": "M2O",
                    "target": "customers",
                    "onDelete": "SET NULL",
                },
            }
        )

        await schemas.create_relationship(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/schemas/orders/relationships")
        assert kwargs["json"] == {
            "name": "customer",
            "type": "M2O",
            "target": "customers",
            "onDelete": "SET NULL",
        }

    @pytest.mark.asyncio
    async def test_update_relationship_is_patch(self, token_client, ok):
        """Test that update_relationship uses PATCH."""
        args = schemas.UpdateRelationshipArgs.model_validate(
            {"sourceCollection": "orders", "fieldName": "customer", "updateData": {"alias": "o"}}
        )

        await schemas.update_relationship(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("PATCH", "/schemas/orders/relationships/customer")
        assert kwargs["json"] == {"alias": "o"}


class TestItemTools:
    """Tests for the item and file tools."""

    @pytest.mark.asyncio
    async def test_list_items_encodes_filter(self, token_client, ok):
        """Test that list_items JSON-encodes the filter."""
        args = items.ListItemsArgs.model_validate(
            {"collection": "products", "filter": {"price": {"gt": 10}}, "sort": "name:asc"}
        )

        await items.list_items(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("GET", "/items/products")
        assert kwargs["params"] == {
            "filter": '{"price": {"gt": 10}}',
            "sort": "name:asc",
            "page": 1,
            "limit": 10,
        }

    @pytest.mark.asyncio
    async def test_empty_filter_is_forwarded(self, token_client, ok):
        """Test that an empty filter object is still sent to Baasix."""
        args = items.ListItemsArgs.model_validate({"collection": "products", "filter": {}})

        await items.list_items(token_client, args)

        _, _, kwargs = last_request(ok)
        assert kwargs["params"]["filter"] == "{}"

    @pytest.mark.asyncio
    async def test_empty_filter_forwarded_by_every_listing_tool(self, token_client, ok):
        """Test that files, permissions and reports forward an empty filter."""
        calls = [
            (files.list_files, files.ListFilesArgs(filter={})),
            (permissions.list_permissions, permissions.ListPermissionsArgs(filter={})),
            (reports.generate_report, reports.GenerateReportArgs(collection="orders", filter={})),
        ]
        for handler, args in calls:
            await handler(token_client, args)

            _, _, kwargs = last_request(ok)
            assert kwargs["params"]["filter"] == "{}", handler.__name__

    @pytest.mark.asyncio
    async def test_update_item_is_put(self, token_client, ok):
        """Test that update_item uses PUT."""
        args = items.UpdateItemArgs(collection="products", id="7", data={"price": 12})

        await items.update_item(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("PUT", "/items/products/7")
        assert kwargs["json"] == {"price": 12}

    @pytest.mark.asyncio
    async def test_path_segments_are_quoted(self, token_client, ok):
        """Test that item ids are quoted in the path."""
        await items.get_item(token_client, items.ItemArgs(collection="products", id="a/b"))

        _, endpoint, _ = last_request(ok)
        assert endpoint == "/items/products/a%2Fb"

    @pytest.mark.asyncio
    async def test_delete_file(self, token_client, ok):
        """Test that delete_file sends DELETE to the file path."""
        await files.delete_file(token_client, files.FileArgs(id="f1"))

        assert last_request(ok)[:2] == ("DELETE", "/files/f1")


class TestCredentialTools:
    """Tests for the tools reporting the server's own credentials."""

    @pytest.mark.asyncio
    async def test_refresh_with_explicit_token(self, token_client, mock_http):
        """Test refresh_auth with an explicit token."""
        result = await auth.refresh_auth(token_client, NoArgs())

        assert result == {
            "message": "Using manual token (BAASIX_AUTH_TOKEN), no refresh needed",
            "auth_method": "Manual Token",
        }
        mock_http.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_with_login(self, login_client, mock_http):
        """Test that refresh_auth performs a new login."""
        mock_http.post.side_effect = [login_response("t1"), login_response("t2")]
        await login_client.auth.get_token()

        result = await auth.refresh_auth(login_client, NoArgs())

        assert result["success"] is True
        assert result["user"] == "a@b.com"
        assert result["auth_method"] == "Auto-login"
        assert mock_http.post.call_count == 2

    @pytest.mark.asyncio
    async def test_refresh_failure_reported_in_payload(self, login_client, mock_http):
        """Test that refresh failures are reported in the payload."""
        mock_http.post.return_value = make_response(401, {"message": "Invalid credentials"})

        result = await auth.refresh_auth(login_client, NoArgs())

        assert result["success"] is False
        assert "Invalid credentials" in result["error"]

    @pytest.mark.asyncio
    async def test_auth_status(self, token_client):
        """Test that auth_status reports the token mode."""
        result = await auth.auth_status(token_client, NoArgs())
        assert result["auth_method"] == "Manual Token"


class TestAuthEndpointTools:
    """Tests for the tools wrapping Baasix auth endpoints."""

    @pytest.mark.asyncio
    async def test_register_user_forwards_custom_fields(self, anonymous_client, ok):
        """Test that register_user forwards custom fields."""
        args = auth.RegisterUserArgs.model_validate(
            {"email": "new@example.com", "password": "pw", "firstName": "Ada", "referral": "x"}
        )

        await auth.register_user(anonymous_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/auth/register")
        assert kwargs["json"] == {
            "email": "new@example.com",
            "password": "pw",
            "firstName": "Ada",
            "authMode": "jwt",
            "referral": "x",
        }
        assert "Authorization" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_login_is_public(self, anonymous_client, ok):
        """Test that login works without server credentials."""
        args = auth.LoginArgs.model_validate(
            {"email": "u@example.com", "password": "pw", "tenant_Id": "t1"}
        )

        await auth.login(anonymous_client, args)

        _, endpoint, kwargs = last_request(ok)
        assert endpoint == "/auth/login"
        assert kwargs["json"] == {
            "email": "u@example.com",
            "password": "pw",
            "tenant_Id": "t1",
            "authMode": "jwt",
        }

    @pytest.mark.asyncio
    async def test_verify_invite(self, anonymous_client, ok):
        """Test that verify_invite passes the link as a query parameter."""
        args = auth.VerifyInviteArgs(token="abc", link="https://app.example.com")

        await auth.verify_invite(anonymous_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("GET", "/auth/verify-invite/abc")
        assert kwargs["params"] == {"link": "https://app.example.com"}

    @pytest.mark.asyncio
    async def test_get_current_user_joins_fields(self, token_client, ok):
        """Test that get_current_user joins the requested fields."""
        await auth.get_current_user(token_client, auth.CurrentUserArgs(fields=["id", "email"]))

        _, endpoint, kwargs = last_request(ok)
        assert endpoint == "/auth/me"
        assert kwargs["params"] == {"fields": "id,email"}

    @pytest.mark.asyncio
    async def test_send_invite_requires_token(self, anonymous_client, mock_http):
        """Test that send_invite requires server credentials."""
        args = auth.SendInviteArgs.model_validate(
            {"email": "u@example.com", "role_Id": "r1", "link": "https://app.example.com"}
        )

        with pytest.raises(AuthenticationError, match="No authentication method available"):
            await auth.send_invite(anonymous_client, args)


class TestReportAndNotificationTools:
    """Tests for the report and notification tools."""

    @pytest.mark.asyncio
    async def test_generate_report(self, token_client, ok):
        """Test that generate_report posts the report query."""
        args = reports.GenerateReportArgs.model_validate(
            {
                "collection": "orders",
                "groupBy": "status",
                "dateRange": {"start": "2025-01-01", "end": "2025-01-31"},
            }
        )

        await reports.generate_report(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("GET", "/reports/orders")
        assert kwargs["params"] == {
            "groupBy": "status",
            "dateRange": '{"start": "2025-01-01", "end": "2025-01-31"}',
        }

    @pytest.mark.asyncio
    async def test_collection_stats(self, token_client, ok):
        """Test that collection_stats posts the collections and timeframe."""
        args = reports.CollectionStatsArgs(collections=["orders"], timeframe="7d")

        await reports.collection_stats(token_client, args)

        _, endpoint, kwargs = last_request(ok)
        assert endpoint == "/reports/stats"
        assert kwargs["params"] == {"collections": '["orders"]', "timeframe": "7d"}

    @pytest.mark.asyncio
    async def test_list_notifications_seen_flag(self, token_client, ok):
        """Test that list_notifications forwards the seen flag."""
        await notifications.list_notifications(
            token_client, notifications.ListNotificationsArgs(seen=False)
        )

        _, endpoint, kwargs = last_request(ok)
        assert endpoint == "/notifications"
        assert kwargs["params"] == {"page": 1, "limit": 10, "seen": "false"}

    @pytest.mark.asyncio
    async def test_send_notification_default_type(self, token_client, ok):
        """Test that send_notification defaults the type to info."""
        args = notifications.SendNotificationArgs(recipients=["u1"], title="Hi", message="Hello")

        await notifications.send_notification(token_client, args)

        assert last_request(ok)[2]["json"] == {
            "recipients": ["u1"],
            "title": "Hi",
            "message": "Hello",
            "type": "info",
        }

    @pytest.mark.asyncio
    async def test_mark_notification_seen(self, token_client, ok):
        """Test that mark_notification_seen posts the ids."""
        await notifications.mark_notification_seen(
            token_client, notifications.NotificationArgs(id="n1")
        )

        assert last_request(ok)[:2] == ("PUT", "/notifications/n1/seen")


class TestSettingsAndPermissionTools:
    """Tests for the settings and permission tools."""

    @pytest.mark.asyncio
    async def test_get_single_setting(self, token_client, ok):
        """Test fetching a single setting by key."""
        await settings_tools.get_settings(
            token_client, settings_tools.GetSettingsArgs(key="project_name")
        )

        assert last_request(ok)[:2] == ("GET", "/settings/project_name")

    @pytest.mark.asyncio
    async def test_get_all_settings(self, token_client, ok):
        """Test fetching all settings."""
        await settings_tools.get_settings(token_client, settings_tools.GetSettingsArgs())

        assert last_request(ok)[:2] == ("GET", "/settings")

    @pytest.mark.asyncio
    async def test_create_permission(self, token_client, ok):
        """Test that create_permission posts the permission."""
        args = permissions.CreatePermissionArgs.model_validate(
            {
                "role_Id": "r1",
                "collection": "products",
                "action": "read",
                "fields": ["*"],
                "relConditions": {"owner": {"eq": "$CURRENT_USER"}},
            }
        )

        await permissions.create_permission(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/permissions")
        assert kwargs["json"] == {
            "fields": ["*"],
            "relConditions": {"owner": {"eq": "$CURRENT_USER"}},
            "role_Id": "r1",
            "collection": "products",
            "action": "read",
        }

    @pytest.mark.asyncio
    async def test_update_permission_excludes_id_from_body(self, token_client, ok):
        """Test that update_permission keeps the id out of the body."""
        args = permissions.UpdatePermissionArgs(id="p1", action="update")

        await permissions.update_permission(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("PATCH", "/permissions/p1")
        assert kwargs["json"] == {"action": "update"}

    @pytest.mark.asyncio
    async def test_reload_permissions(self, token_client, ok):
        """Test that reload_permissions posts to the reload endpoint."""
        await permissions.reload_permissions(token_client, NoArgs())

        assert last_request(ok)[:2] == ("POST", "/permissions/reload")


class TestUtilityTools:
    """Tests for the utility tools."""

    @pytest.mark.asyncio
    async def test_server_info(self, token_client, mock_http):
        """Test that server_info reports the backend status."""
        mock_http.request.return_value = make_response(200, {"status": "ok", "version": "0.9"})

        result = await utilities.server_info(token_client, NoArgs())

        assert result["baasix_server"] == {"status": "ok", "version": "0.9"}
        assert result["mcp_server"]["name"] == "baasix-mcp-server"
        assert result["mcp_server"]["baasix_url"] == token_client.base_url

    @pytest.mark.asyncio
    async def test_server_info_when_backend_down(self, token_client, mock_http):
        """Test that server_info reports an unreachable backend."""
        mock_http.request.side_effect = httpx.ConnectError("Connection refused")

        result = await utilities.server_info(token_client, NoArgs())

        assert result["error"] == "Could not fetch Baasix server info"
        assert "mcp_server" in result

    @pytest.mark.asyncio
    async def test_server_info_without_credentials(self, anonymous_client, mock_http):
        """Test server_info with no credentials configured."""
        mock_http.request.return_value = make_response(200, {"status": "ok"})

        result = await utilities.server_info(anonymous_client, NoArgs())

        assert result["baasix_server"] == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_sort_items(self, token_client, ok):
        """Test that sort_items posts the move."""
        args = utilities.SortItemsArgs(collection="tasks", item="3", to="1")

        await utilities.sort_items(token_client, args)

        method, endpoint, kwargs = last_request(ok)
        assert (method, endpoint) == ("POST", "/utils/sort/tasks")
        assert kwargs["json"] == {"item": "3", "to": "1"}
