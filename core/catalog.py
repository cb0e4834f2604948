# =============================================================================
# core/catalog.py  -  Tool Catalog (what the host sees on discovery)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the eight workflow tools: name, description, and a JSON Schema
#   for the arguments.  The transport serves this tuple verbatim on every
#   tools/list request.  No filtering, no paging.
#
# THE SCHEMA IS DOCUMENTATION:
#   The host uses inputSchema to build a sensible call.  Enforcement happens
#   in core/validators.py, so a schema tweak here never changes what the
#   server accepts.
# =============================================================================

from typing import Any, Optional

from core.models import Operation, ToolDescriptor

# Reused property fragments.
_ID = {"type": "string", "description": "Workflow ID"}
_NAME = {"type": "string", "description": "Name of the workflow"}
_NODES = {"type": "array", "description": "Array of workflow nodes"}
_CONNECTIONS = {"type": "object", "description": "Node connections"}
_ACTIVE = {"type": "boolean", "description": "Whether the workflow should be active"}
_TAGS = {"type": "array", "items": {"type": "string"}, "description": "Workflow tags"}


def _object_schema(properties: dict[str, Any], required: Optional[list[str]] = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _id_only(name: Operation, description: str) -> ToolDescriptor:
    return ToolDescriptor(
        name=name.value,
        description=description,
        input_schema=_object_schema({"id": _ID}, required=["id"]),
    )


TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=Operation.LIST_WORKFLOWS.value,
        description="List all workflows",
        input_schema=_object_schema({
            "active": {"type": "boolean", "description": "Filter by active status"},
            "tags": {"type": "array", "items": {"type": "string"}, "description": "Filter by tags"},
        }),
    ),
    _id_only(Operation.GET_WORKFLOW, "Get a specific workflow by ID"),
    ToolDescriptor(
        name=Operation.CREATE_WORKFLOW.value,
        description="Create a new workflow",
        input_schema=_object_schema(
            {
                "name": _NAME,
                "nodes": _NODES,
                "connections": _CONNECTIONS,
                "active": _ACTIVE,
                "tags": _TAGS,
                "settings": {
                    "type": "object",
                    "description": 'Workflow settings (defaults to {"executionOrder": "v1"})',
                },
            },
            required=["name"],
        ),
    ),
    ToolDescriptor(
        name=Operation.UPDATE_WORKFLOW.value,
        description="Update an existing workflow",
        input_schema=_object_schema(
            {
                "id": _ID,
                "name": _NAME,
                "nodes": _NODES,
                "connections": _CONNECTIONS,
                "active": _ACTIVE,
                "tags": _TAGS,
            },
            required=["id"],
        ),
    ),
    _id_only(Operation.DELETE_WORKFLOW, "Delete a workflow"),
    _id_only(Operation.ACTIVATE_WORKFLOW, "Activate a workflow"),
    _id_only(Operation.DEACTIVATE_WORKFLOW, "Deactivate a workflow"),
    ToolDescriptor(
        name=Operation.EXECUTE_WORKFLOW.value,
        description="Execute a workflow",
        input_schema=_object_schema(
            {
                "id": _ID,
                "data": {"type": "object", "description": "Input data for the workflow execution"},
            },
            required=["id"],
        ),
    ),
)

_BY_NAME = {descriptor.name: descriptor for descriptor in TOOL_CATALOG}


def list_tools() -> list[dict[str, Any]]:
    """The discovery payload: every descriptor, in catalog order."""
    return [descriptor.to_dict() for descriptor in TOOL_CATALOG]


def get_descriptor(name: str) -> Optional[ToolDescriptor]:
    return _BY_NAME.get(name)
