# =============================================================================
# core/validators.py  -  Argument Validators
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the loosely-typed `arguments` mapping of a tool call into one of
#   the typed records in core/models.py, or into a ValidationFailure.
#
# THE RULES (same for every validator):
#   1. Required fields are checked first.  A missing or wrongly-typed
#      required field is the ONLY way to fail.
#   2. Optional fields are accept-or-fallback: the caller's value is kept
#      when it already has the right type, otherwise the documented fallback
#      is used.  Nothing is coerced ("true" is not a boolean).
#   3. No exceptions for shape mismatches.  The result is a value.
#
# Type checks follow JSON, not Python: booleans are checked with
# isinstance(x, bool) so that 0/1 don't pass, lists stand for arrays and
# dicts stand for objects.
# =============================================================================

from collections.abc import Mapping
from typing import Any, Union

from core.models import (
    CreateWorkflowArgs,
    ExecuteWorkflowArgs,
    ListWorkflowsArgs,
    UpdateWorkflowArgs,
    ValidationFailure,
    WorkflowIdArgs,
)

WORKFLOW_ID_MESSAGE = "Workflow ID is required and must be a string"
WORKFLOW_NAME_MESSAGE = "Workflow name is required and must be a string"

DEFAULT_SETTINGS = {"executionOrder": "v1"}


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _list_or(value: Any, fallback):
    return value if isinstance(value, list) else fallback


def _dict_or(value: Any, fallback):
    return value if isinstance(value, dict) else fallback


def _bool_or(value: Any, fallback):
    return value if isinstance(value, bool) else fallback


def validate_list_workflows(args: Mapping[str, Any]) -> ListWorkflowsArgs:
    """Filters for list_workflows.  Every field is optional, so this never fails.

    An empty tags list is treated the same as no tags at all.
    """
    tags = args.get("tags")
    return ListWorkflowsArgs(
        active=_bool_or(args.get("active"), None),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) and tags else None,
    )


def validate_workflow_id(
    args: Mapping[str, Any],
) -> Union[WorkflowIdArgs, ValidationFailure]:
    workflow_id = args.get("id")
    if not _non_empty_string(workflow_id):
        return ValidationFailure(field="id", message=WORKFLOW_ID_MESSAGE)
    return WorkflowIdArgs(id=workflow_id)


def validate_create_workflow(
    args: Mapping[str, Any],
) -> Union[CreateWorkflowArgs, ValidationFailure]:
    """Validate and fully default a create_workflow call.

    `settings` is taken as-is when it's an object.  It is NOT merged with
    the default, so {"timezone": "UTC"} loses executionOrder.
    """
    name = args.get("name")
    if not _non_empty_string(name):
        return ValidationFailure(field="name", message=WORKFLOW_NAME_MESSAGE)

    return CreateWorkflowArgs(
        name=name,
        nodes=_list_or(args.get("nodes"), []),
        connections=_dict_or(args.get("connections"), {}),
        active=_bool_or(args.get("active"), False),
        tags=_list_or(args.get("tags"), []),
        settings=_dict_or(args.get("settings"), dict(DEFAULT_SETTINGS)),
    )


def validate_update_workflow(
    args: Mapping[str, Any],
) -> Union[UpdateWorkflowArgs, ValidationFailure]:
    # Fallback here is None ("absent"), never an empty container.
    workflow_id = args.get("id")
    if not _non_empty_string(workflow_id):
        return ValidationFailure(field="id", message=WORKFLOW_ID_MESSAGE)

    name = args.get("name")
    return UpdateWorkflowArgs(
        id=workflow_id,
        name=name if isinstance(name, str) else None,
        nodes=_list_or(args.get("nodes"), None),
        connections=_dict_or(args.get("connections"), None),
        active=_bool_or(args.get("active"), None),
        tags=_list_or(args.get("tags"), None),
    )


def validate_execute_workflow(
    args: Mapping[str, Any],
) -> Union[ExecuteWorkflowArgs, ValidationFailure]:
    workflow_id = args.get("id")
    if not _non_empty_string(workflow_id):
        return ValidationFailure(field="id", message=WORKFLOW_ID_MESSAGE)
    return ExecuteWorkflowArgs(id=workflow_id, data=_dict_or(args.get("data"), {}))
