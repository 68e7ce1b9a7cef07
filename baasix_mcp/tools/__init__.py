"""Baasix tools exposed over MCP.

Each module exposes a ``TOOL_SCHEMAS`` list of dicts with ``name``,
``description``, ``input_model`` and ``handler`` keys.  ``ALL_TOOL_SCHEMAS``
concatenates them in catalog order, which is the order advertised to
clients.
"""

from .auth import CREDENTIAL_TOOL_SCHEMAS as _credential_schemas
from .auth import TOOL_SCHEMAS as _auth_schemas
from .files import TOOL_SCHEMAS as _file_schemas
from .items import TOOL_SCHEMAS as _item_schemas
from .notifications import TOOL_SCHEMAS as _notification_schemas
from .permissions import TOOL_SCHEMAS as _permission_schemas
from .reports import TOOL_SCHEMAS as _report_schemas
from .schemas import TOOL_SCHEMAS as _schema_schemas
from .settings import TOOL_SCHEMAS as _settings_schemas
from .utilities import TOOL_SCHEMAS as _utility_schemas

ALL_TOOL_SCHEMAS: list[dict] = [
    *_schema_schemas,
    *_item_schemas,
    *_file_schemas,
    *_credential_schemas,
    *_report_schemas,
    *_notification_schemas,
    *_settings_schemas,
    *_permission_schemas,
    *_utility_schemas,
    *_auth_schemas,
]

__all__ = ["ALL_TOOL_SCHEMAS"]
