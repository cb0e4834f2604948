# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the tool-dispatch layer)
# =============================================================================
#
# These dataclasses define the *shape* of everything that flows through one
# tool call: the validated argument records, the descriptors advertised on
# discovery, and the result envelope handed back to the transport.
#
# Nothing here outlives a single request/response cycle.  A record is built
# by a validator, read by the dispatcher, and thrown away.
#
# DESIGN PRINCIPLE  -  "Absent is not Empty":
#   For create_workflow, a missing `nodes` means "send an empty list".
#   For update_workflow, a missing `nodes` means "don't touch the nodes".
#   The update record therefore uses None for "absent" and only its
#   payload() method decides what reaches the wire.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


# -----------------------------------------------------------------------------
# Operation  -  the closed set of tools this server exposes
# -----------------------------------------------------------------------------
# The enum value IS the tool name seen by the host.  The dispatcher keeps one
# handler per member and refuses to import if one is missing.
# -----------------------------------------------------------------------------
class Operation(str, Enum):
    LIST_WORKFLOWS = "list_workflows"
    GET_WORKFLOW = "get_workflow"
    CREATE_WORKFLOW = "create_workflow"
    UPDATE_WORKFLOW = "update_workflow"
    DELETE_WORKFLOW = "delete_workflow"
    ACTIVATE_WORKFLOW = "activate_workflow"
    DEACTIVATE_WORKFLOW = "deactivate_workflow"
    EXECUTE_WORKFLOW = "execute_workflow"

    @classmethod
    def lookup(cls, name: str) -> Optional["Operation"]:
        """Return the member whose value is exactly `name`, or None."""
        try:
            return cls(name)
        except ValueError:
            return None


# -----------------------------------------------------------------------------
# ToolDescriptor  -  one entry of the discovery response
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A callable operation as advertised to the host.

    input_schema is advisory JSON Schema for the caller.  The validators in
    core/validators.py are what actually enforce the contract.
    """

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# Validated argument records (one per argument contract)
# -----------------------------------------------------------------------------
@dataclass
class ListWorkflowsArgs:
    active: Optional[bool] = None      # None = don't filter on status
    tags: Optional[list[str]] = None   # None = don't filter on tags


@dataclass
class WorkflowIdArgs:
    id: str


@dataclass
class CreateWorkflowArgs:
    """Fully-defaulted create request.

    `active` and `tags` are accepted here but never forwarded to n8n by the
    dispatcher; see payload().
    """

    name: str
    nodes: list[Any] = field(default_factory=list)
    connections: dict[str, Any] = field(default_factory=dict)
    active: bool = False
    tags: list[Any] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=lambda: {"executionOrder": "v1"})

    def payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "nodes": self.nodes,
            "connections": self.connections,
            "settings": self.settings,
        }


@dataclass
class UpdateWorkflowArgs:
    id: str
    name: Optional[str] = None
    nodes: Optional[list[Any]] = None
    connections: Optional[dict[str, Any]] = None
    active: Optional[bool] = None
    tags: Optional[list[Any]] = None

    def payload(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied, id excluded."""
        candidates = {
            "name": self.name,
            "nodes": self.nodes,
            "connections": self.connections,
            "active": self.active,
            "tags": self.tags,
        }
        return {key: value for key, value in candidates.items() if value is not None}


@dataclass
class ExecuteWorkflowArgs:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# ValidationFailure  -  the "rejected" arm of every validator result
# -----------------------------------------------------------------------------
# Validators return this instead of raising, so an expected shape mismatch is
# just a value.  The dispatcher is the one place that turns it into a
# protocol error.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str


ValidatedArgs = Union[
    ListWorkflowsArgs,
    WorkflowIdArgs,
    CreateWorkflowArgs,
    UpdateWorkflowArgs,
    ExecuteWorkflowArgs,
]

ValidationResult = Union[ValidatedArgs, ValidationFailure]


# -----------------------------------------------------------------------------
# CallResult  -  the uniform success envelope
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextBlock:
    text: str
    type: str = "text"


@dataclass(frozen=True)
class CallResult:
    content: list[TextBlock]

    @classmethod
    def text(cls, text: str) -> "CallResult":
        return cls(content=[TextBlock(text=text)])
