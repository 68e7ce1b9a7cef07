"""Role and permission management tools."""

from typing import Any, Literal

from pydantic import Field

from ..core.client import BaasixClient
from .base import NoArgs, PageArgs, ToolArgs, query_params, segment

PermissionAction = Literal["create", "read", "update", "delete"]


class ListPermissionsArgs(PageArgs):
    filter: dict[str, Any] | None = Field(default=None, description="Filter criteria")
    sort: str | None = Field(
        default=None, description='Sort field and direction (e.g., "collection:asc")'
    )
    page: int = Field(default=1, description="Page number (default: 1)")
    limit: int = Field(default=10, description="Permissions per page (default: 10)")


class PermissionIdArgs(ToolArgs):
    id: str = Field(..., description="Permission ID")


class RoleArgs(ToolArgs):
    role: str = Field(..., description="Role name")


class PermissionFields(ToolArgs):
    fields: list[str] | None = Field(default=None, description="Allowed fields")
    conditions: dict[str, Any] | None = Field(default=None, description="Permission conditions")
    default_values: dict[str, Any] | None = Field(
        default=None, alias="defaultValues", description="Default values for creation"
    )
    rel_conditions: dict[str, Any] | None = Field(
        default=None, alias="relConditions", description="Relationship conditions"
    )


class CreatePermissionArgs(PermissionFields):
    role_id: str = Field(..., alias="role_Id", description="Role ID")
    collection: str = Field(..., description="Collection name")
    action: PermissionAction = Field(..., description="Permission action")


class UpdatePermissionArgs(PermissionFields):
    id: str = Field(..., description="Permission ID")
    role_id: str | None = Field(default=None, alias="role_Id", description="Role ID")
    collection: str | None = Field(default=None, description="Collection name")
    action: PermissionAction | None = Field(default=None, description="Permission action")


class UpdateRolePermissionsArgs(RoleArgs):
    permissions: dict[str, Any] = Field(..., description="Permissions object")


async def list_roles(client: BaasixClient, args: NoArgs) -> Any:
    return await client.get("/permissions/roles")


async def list_permissions(client: BaasixClient, args: ListPermissionsArgs) -> Any:
    params = query_params(
        filter=args.filter, sort=args.sort or None, page=args.page, limit=args.limit
    )
    return await client.get("/permissions", params=params)


async def get_permission(client: BaasixClient, args: PermissionIdArgs) -> Any:
    return await client.get(f"/permissions/{segment(args.id)}")


async def get_role_permissions(client: BaasixClient, args: RoleArgs) -> Any:
    return await client.get(f"/permissions/{segment(args.role)}")


async def create_permission(client: BaasixClient, args: CreatePermissionArgs) -> Any:
    return await client.post("/permissions", args.payload())


async def update_permission(client: BaasixClient, args: UpdatePermissionArgs) -> Any:
    body = {key: value for key, value in args.payload().items() if key != "id"}
    return await client.patch(f"/permissions/{segment(args.id)}", body)


async def delete_permission(client: BaasixClient, args: PermissionIdArgs) -> Any:
    return await client.delete(f"/permissions/{segment(args.id)}")


async def reload_permissions(client: BaasixClient, args: NoArgs) -> Any:
    return await client.post("/permissions/reload")


async def update_role_permissions(client: BaasixClient, args: UpdateRolePermissionsArgs) -> Any:
    return await client.put(f"/permissions/{segment(args.role)}", args.permissions)


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_list_roles",
        "description": "List all available roles",
        "input_model": NoArgs,
        "handler": list_roles,
    },
    {
        "name": "baasix_list_permissions",
        "description": "List all permissions with optional filtering",
        "input_model": ListPermissionsArgs,
        "handler": list_permissions,
    },
    {
        "name": "baasix_get_permission",
        "description": "Get a specific permission by ID",
        "input_model": PermissionIdArgs,
        "handler": get_permission,
    },
    {
        "name": "baasix_get_permissions",
        "description": "Get permissions for a specific role",
        "input_model": RoleArgs,
        "handler": get_role_permissions,
    },
    {
        "name": "baasix_create_permission",
        "description": "Create a new permission",
        "input_model": CreatePermissionArgs,
        "handler": create_permission,
    },
    {
        "name": "baasix_update_permission",
        "description": "Update an existing permission",
        "input_model": UpdatePermissionArgs,
        "handler": update_permission,
    },
    {
        "name": "baasix_delete_permission",
        "description": "Delete a permission",
        "input_model": PermissionIdArgs,
        "handler": delete_permission,
    },
    {
        "name": "baasix_reload_permissions",
        "description": "Reload the permission cache",
        "input_model": NoArgs,
        "handler": reload_permissions,
    },
    {
        "name": "baasix_update_permissions",
        "description": "Update permissions for a role",
        "input_model": UpdateRolePermissionsArgs,
        "handler": update_role_permissions,
    },
]
