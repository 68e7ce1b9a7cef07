"""Schema management tools.

Collections, indexes and relationships, plus bulk export/import of schema
definitions.  Schema bodies are forwarded to Baasix unmodified.
"""

from typing import Any, Literal

from pydantic import ConfigDict, Field

from ..core.client import BaasixClient
from .base import NoArgs, ToolArgs, query_params, segment

ReferentialAction = Literal["CASCADE", "RESTRICT", "SET NULL"]


class ListSchemasArgs(ToolArgs):
    model_config = ConfigDict(extra="forbid")

    search: str | None = Field(
        default=None,
        description="Search term to filter schemas by collection name or schema name",
    )
    page: int = Field(default=1, description="Page number for pagination (default: 1)")
    limit: int = Field(default=10, description="Number of schemas per page (default: 10)")
    sort: str = Field(
        default="collectionName:asc",
        description='Sort field and direction (e.g., "collectionName:asc", "collectionName:desc")',
    )


class CollectionArgs(ToolArgs):
    collection: str = Field(..., description="Collection name")


class SchemaBodyArgs(CollectionArgs):
    schema_definition: dict[str, Any] = Field(
        ..., alias="schema", description="Schema definition object"
    )


class IndexDefinition(ToolArgs):
    name: str = Field(..., description="Index name")
    fields: list[str] = Field(..., description="Array of field names to index")
    unique: bool | None = Field(default=None, description="Whether the index should be unique")


class AddIndexArgs(CollectionArgs):
    index_definition: IndexDefinition = Field(
        ...,
        alias="indexDefinition",
        description="Index definition with fields and options",
    )


class RemoveIndexArgs(CollectionArgs):
    index_name: str = Field(..., alias="indexName", description="Name of the index to remove")


class RelationshipData(ToolArgs):
    name: str = Field(..., description="Relationship field name")
    type: Literal["M2O", "O2M", "O2O", "M2M", "M2A"] = Field(
        ..., description="Relationship type"
    )
    target: str | None = Field(default=None, description="Target collection name")
    alias: str | None = Field(default=None, description="Alias for reverse relationship")
    description: str | None = Field(default=None, description="Relationship description")
    on_delete: ReferentialAction | None = Field(
        default=None, alias="onDelete", description="Delete behavior"
    )
    on_update: ReferentialAction | None = Field(
        default=None, alias="onUpdate", description="Update behavior"
    )
    tables: list[str] | None = Field(
        default=None, description="Target tables for M2A relationships"
    )


class CreateRelationshipArgs(ToolArgs):
    source_collection: str = Field(
        ..., alias="sourceCollection", description="Source collection name"
    )
    relationship_data: RelationshipData = Field(
        ..., alias="relationshipData", description="Relationship configuration"
    )


class RelationshipFieldArgs(ToolArgs):
    source_collection: str = Field(
        ..., alias="sourceCollection", description="Source collection name"
    )
    field_name: str = Field(..., alias="fieldName", description="Relationship field name")


class UpdateRelationshipArgs(RelationshipFieldArgs):
    update_data: dict[str, Any] = Field(
        ..., alias="updateData", description="Update data for the relationship"
    )


class ImportSchemasArgs(ToolArgs):
    schemas: dict[str, Any] = Field(..., description="Schema data to import")


async def list_schemas(client: BaasixClient, args: ListSchemasArgs) -> Any:
    params = query_params(search=args.search or None, page=args.page, limit=args.limit, sort=args.sort)
    return await client.get("/schemas", params=params)


async def get_schema(client: BaasixClient, args: CollectionArgs) -> Any:
    return await client.get(f"/schemas/{segment(args.collection)}")


async def create_schema(client: BaasixClient, args: SchemaBodyArgs) -> Any:
    return await client.post(f"/schemas/{segment(args.collection)}", args.schema_definition)


async def update_schema(client: BaasixClient, args: SchemaBodyArgs) -> Any:
    return await client.put(f"/schemas/{segment(args.collection)}", args.schema_definition)


async def delete_schema(client: BaasixClient, args: CollectionArgs) -> Any:
    return await client.delete(f"/schemas/{segment(args.collection)}")


async def add_index(client: BaasixClient, args: AddIndexArgs) -> Any:
    return await client.post(
        f"/schemas/{segment(args.collection)}/indexes", args.index_definition.payload()
    )


async def remove_index(client: BaasixClient, args: RemoveIndexArgs) -> Any:
    return await client.delete(
        f"/schemas/{segment(args.collection)}/indexes/{segment(args.index_name)}"
    )


async def create_relationship(client: BaasixClient, args: CreateRelationshipArgs) -> Any:
    return await client.post(
        f"/schemas/{segment(args.source_collection)}/relationships",
        args.relationship_data.payload(),
    )


async def update_relationship(client: BaasixClient, args: UpdateRelationshipArgs) -> Any:
    return await client.patch(
        f"/schemas/{segment(args.source_collection)}/relationships/{segment(args.field_name)}",
        args.update_data,
    )


async def delete_relationship(client: BaasixClient, args: RelationshipFieldArgs) -> Any:
    return await client.delete(
        f"/schemas/{segment(args.source_collection)}/relationships/{segment(args.field_name)}"
    )


async def export_schemas(client: BaasixClient, args: NoArgs) -> Any:
    return await client.get("/schemas-export")


async def import_schemas(client: BaasixClient, args: ImportSchemasArgs) -> Any:
    # Baasix takes a file upload here; JSON is accepted directly as well
    return await client.post("/schemas-import", args.schemas)


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_list_schemas",
        "description": (
            "Get all available collections/schemas in Baasix with optional search and pagination"
        ),
        "input_model": ListSchemasArgs,
        "handler": list_schemas,
    },
    {
        "name": "baasix_get_schema",
        "description": "Get detailed schema information for a specific collection",
        "input_model": CollectionArgs,
        "handler": get_schema,
    },
    {
        "name": "baasix_create_schema",
        "description": "Create a new collection schema in Baasix",
        "input_model": SchemaBodyArgs,
        "handler": create_schema,
    },
    {
        "name": "baasix_update_schema",
        "description": "Update an existing collection schema",
        "input_model": SchemaBodyArgs,
        "handler": update_schema,
    },
    {
        "name": "baasix_delete_schema",
        "description": "Delete a collection schema",
        "input_model": CollectionArgs,
        "handler": delete_schema,
    },
    {
        "name": "baasix_add_index",
        "description": "Add an index to a collection schema",
        "input_model": AddIndexArgs,
        "handler": add_index,
    },
    {
        "name": "baasix_remove_index",
        "description": "Remove an index from a collection schema",
        "input_model": RemoveIndexArgs,
        "handler": remove_index,
    },
    {
        "name": "baasix_create_relationship",
        "description": "Create a relationship between collections",
        "input_model": CreateRelationshipArgs,
        "handler": create_relationship,
    },
    {
        "name": "baasix_update_relationship",
        "description": "Update an existing relationship",
        "input_model": UpdateRelationshipArgs,
        "handler": update_relationship,
    },
    {
        "name": "baasix_delete_relationship",
        "description": "Delete a relationship",
        "input_model": RelationshipFieldArgs,
        "handler": delete_relationship,
    },
    {
        "name": "baasix_export_schemas",
        "description": "Export all schemas as JSON",
        "input_model": NoArgs,
        "handler": export_schemas,
    },
    {
        "name": "baasix_import_schemas",
        "description": "Import schemas from JSON data",
        "input_model": ImportSchemasArgs,
        "handler": import_schemas,
    },
]
