"""Authentication tools.

Two groups live here: the server's own credential state
(``baasix_auth_status``, ``baasix_refresh_auth``), answered locally from the
``AuthManager``, and the Baasix user/auth endpoints (register, login,
invites, magic links, tenants).
"""

from typing import Any, Literal

from pydantic import ConfigDict, Field

from ..core.auth import AuthMode
from ..core.client import BaasixClient
from ..utils.errors import AuthenticationError
from .base import NoArgs, ToolArgs, query_params, segment

AuthModeName = Literal["jwt", "cookie"]

EMAIL_FORMAT = {"format": "email"}
URI_FORMAT = {"format": "uri"}


async def auth_status(client: BaasixClient, args: NoArgs) -> dict[str, Any]:
    return await client.auth.status()


async def refresh_auth(client: BaasixClient, args: NoArgs) -> dict[str, Any]:
    """Force a new login. Explicit tokens are never refreshed."""
    auth = client.auth
    user = auth.credentials.email or "Not configured"

    if auth.mode is AuthMode.TOKEN:
        return {
            "message": "Using manual token (BAASIX_AUTH_TOKEN), no refresh needed",
            "auth_method": AuthMode.TOKEN.value,
        }

    try:
        token = await auth.force_refresh()
    except AuthenticationError as e:
        return {"success": False, "error": str(e), "user": user}

    expires_at = auth.token_expires_at
    return {
        "success": bool(token),
        "user": user,
        "token_received": bool(token),
        "expires": expires_at.isoformat() if expires_at else "Unknown",
        "auth_method": AuthMode.LOGIN.value,
    }


class RegisterUserArgs(ToolArgs):
    # Extra fields are custom registration parameters and are forwarded as-is
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., description="User email address", json_schema_extra=EMAIL_FORMAT)
    password: str = Field(..., description="User password")
    first_name: str | None = Field(default=None, alias="firstName", description="User first name")
    last_name: str | None = Field(default=None, alias="lastName", description="User last name")
    tenant: dict[str, Any] | None = Field(
        default=None, description="Tenant information for multi-tenant mode"
    )
    role_name: str | None = Field(default=None, alias="roleName", description="Role name to assign")
    invite_token: str | None = Field(
        default=None, alias="inviteToken", description="Invitation token"
    )
    auth_mode: AuthModeName = Field(
        default="jwt", alias="authMode", description="Authentication mode"
    )


class LoginArgs(ToolArgs):
    email: str = Field(..., description="User email address", json_schema_extra=EMAIL_FORMAT)
    password: str = Field(..., description="User password")
    tenant_id: str | None = Field(
        default=None, alias="tenant_Id", description="Tenant ID for multi-tenant mode"
    )
    auth_mode: AuthModeName = Field(
        default="jwt", alias="authMode", description="Authentication mode"
    )


class SendInviteArgs(ToolArgs):
    email: str = Field(..., description="Email address to invite", json_schema_extra=EMAIL_FORMAT)
    role_id: str = Field(..., alias="role_Id", description="Role ID to assign")
    tenant_id: str | None = Field(default=None, alias="tenant_Id", description="Tenant ID")
    link: str = Field(
        ...,
        description="Application URL for the invitation link",
        json_schema_extra=URI_FORMAT,
    )


class VerifyInviteArgs(ToolArgs):
    token: str = Field(..., description="Invitation token")
    link: str | None = Field(
        default=None, description="Application URL to validate", json_schema_extra=URI_FORMAT
    )


class MagicLinkArgs(ToolArgs):
    email: str = Field(..., description="User email address", json_schema_extra=EMAIL_FORMAT)
    link: str | None = Field(
        default=None, description="Application URL for magic link", json_schema_extra=URI_FORMAT
    )
    mode: Literal["link", "code"] = Field(default="link", description="Magic authentication mode")


class SwitchTenantArgs(ToolArgs):
    tenant_id: str = Field(..., alias="tenant_Id", description="Tenant ID to switch to")


class CurrentUserArgs(ToolArgs):
    fields: list[str] | None = Field(default=None, description="Specific fields to retrieve")


async def register_user(client: BaasixClient, args: RegisterUserArgs) -> Any:
    return await client.post("/auth/register", args.payload(), public=True)


async def login(client: BaasixClient, args: LoginArgs) -> Any:
    return await client.post("/auth/login", args.payload(), public=True)


async def send_invite(client: BaasixClient, args: SendInviteArgs) -> Any:
    return await client.post("/auth/invite", args.payload())


async def verify_invite(client: BaasixClient, args: VerifyInviteArgs) -> Any:
    return await client.get(
        f"/auth/verify-invite/{segment(args.token)}",
        params=query_params(link=args.link or None),
        public=True,
    )


async def send_magic_link(client: BaasixClient, args: MagicLinkArgs) -> Any:
    return await client.post("/auth/magiclink", args.payload(), public=True)


async def get_user_tenants(client: BaasixClient, args: NoArgs) -> Any:
    return await client.get("/auth/tenants")


async def switch_tenant(client: BaasixClient, args: SwitchTenantArgs) -> Any:
    return await client.post("/auth/switch-tenant", args.payload())


async def logout(client: BaasixClient, args: NoArgs) -> Any:
    return await client.get("/auth/logout")


async def get_current_user(client: BaasixClient, args: CurrentUserArgs) -> Any:
    fields = ",".join(args.fields) if args.fields else None
    return await client.get("/auth/me", params=query_params(fields=fields))


# Listed right after the file tools in the catalog
CREDENTIAL_TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_auth_status",
        "description": "Check the current authentication status and token validity",
        "input_model": NoArgs,
        "handler": auth_status,
    },
    {
        "name": "baasix_refresh_auth",
        "description": (
            "Force refresh the authentication token (only works for email/password auth)"
        ),
        "input_model": NoArgs,
        "handler": refresh_auth,
    },
]

TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_register_user",
        "description": "Register a new user",
        "input_model": RegisterUserArgs,
        "handler": register_user,
    },
    {
        "name": "baasix_login",
        "description": "Login user with email and password",
        "input_model": LoginArgs,
        "handler": login,
    },
    {
        "name": "baasix_send_invite",
        "description": "Send an invitation to a user",
        "input_model": SendInviteArgs,
        "handler": send_invite,
    },
    {
        "name": "baasix_verify_invite",
        "description": "Verify an invitation token",
        "input_model": VerifyInviteArgs,
        "handler": verify_invite,
    },
    {
        "name": "baasix_send_magic_link",
        "description": "Send magic link or code for authentication",
        "input_model": MagicLinkArgs,
        "handler": send_magic_link,
    },
    {
        "name": "baasix_get_user_tenants",
        "description": "Get available tenants for the current user",
        "input_model": NoArgs,
        "handler": get_user_tenants,
    },
    {
        "name": "baasix_switch_tenant",
        "description": "Switch to a different tenant context",
        "input_model": SwitchTenantArgs,
        "handler": switch_tenant,
    },
    {
        "name": "baasix_logout",
        "description": "Logout the current user",
        "input_model": NoArgs,
        "handler": logout,
    },
    {
        "name": "baasix_get_current_user",
        "description": "Get current user information with role and permissions",
        "input_model": CurrentUserArgs,
        "handler": get_current_user,
    },
]
