# =============================================================================
# core/dispatcher.py  -  Tool Dispatcher (the heart of the server)
# =============================================================================
#
# HOW ONE CALL FLOWS:
#   1. ROUTE     tool name -> Operation (unknown name: METHOD_NOT_FOUND)
#   2. VALIDATE  raw arguments -> typed record (failure: INVALID_PARAMS,
#                and no HTTP request is made)
#   3. REQUEST   one call through the n8n client
#   4. SHAPE     response body -> one pretty-printed JSON text block
#
# ERROR TRANSLATION:
#   Only N8nApiError (5xx / network) is caught here, once, and recast as
#   INTERNAL_ERROR with n8n's own message when the body has one.  Every
#   other exception, including our own ProtocolErrors, passes through as-is.
#
# The dispatcher holds nothing but the client reference, so concurrent
# calls on the same instance don't interfere with each other.
# =============================================================================

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Optional, Protocol

from core.catalog import get_descriptor
from core.errors import ErrorKind, N8nApiError, ProtocolError
from core.models import CallResult, Operation, ValidationFailure
from core.n8n_client import N8nResponse
from core.validators import (
    validate_create_workflow,
    validate_execute_workflow,
    validate_list_workflows,
    validate_update_workflow,
    validate_workflow_id,
)

logger = logging.getLogger(__name__)

HTML_MARKER = "<!DOCTYPE html>"
HTML_RESPONSE_MESSAGE = (
    "Error: Received HTML instead of JSON. Please check that N8N_API_URL "
    "points to the API endpoint (should end with /api/v1)"
)


class WorkflowClient(Protocol):
    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> N8nResponse: ...


def _require(result):
    """Unwrap a validator result or reject the call."""
    if isinstance(result, ValidationFailure):
        raise ProtocolError(ErrorKind.INVALID_PARAMS, result.message)
    return result


def _as_json_text(data: Any) -> CallResult:
    return CallResult.text(json.dumps(data, indent=2, ensure_ascii=False))


class Dispatcher:
    def __init__(self, client: WorkflowClient):
        self._client = client

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> CallResult:
        operation = Operation.lookup(name)
        if operation is None:
            raise ProtocolError(ErrorKind.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        handler = _HANDLERS[operation]
        try:
            return await handler(self, arguments or {})
        except N8nApiError as exc:
            message = exc.remote_message
            logger.error("[API Error] %s %s", exc.status_code, message)
            raise ProtocolError(ErrorKind.INTERNAL_ERROR, f"n8n API error: {message}") from exc

    async def _send(self, method: str, path: str, **kwargs) -> N8nResponse:
        detail = kwargs.get("params") or kwargs.get("json")
        if detail:
            logger.info("%s %s %s", method, path, detail)
        else:
            logger.info("%s %s", method, path)
        return await self._client.request(method, path, **kwargs)

    # -------------------------------------------------------------------------
    # One handler per Operation
    # -------------------------------------------------------------------------
    async def _list_workflows(self, arguments: Mapping[str, Any]) -> CallResult:
        args = validate_list_workflows(arguments)
        params: dict[str, Any] = {}
        if args.active is not None:
            params["active"] = "true" if args.active else "false"
        if args.tags:
            params["tags"] = ",".join(args.tags)

        response = await self._send("GET", "/workflows", params=params)
        if isinstance(response.data, str) and HTML_MARKER in response.data:
            logger.warning("Received HTML response instead of JSON. Ensure N8N_API_URL points to the API endpoint")
            return CallResult.text(HTML_RESPONSE_MESSAGE)
        return _as_json_text(response.data)

    async def _get_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_workflow_id(arguments))
        response = await self._send("GET", f"/workflows/{args.id}")
        return _as_json_text(response.data)

    async def _create_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        # active and tags are validated but not part of the create payload.
        args = _require(validate_create_workflow(arguments))
        response = await self._send("POST", "/workflows", json=args.payload())
        return _as_json_text(response.data)

    async def _update_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_update_workflow(arguments))
        response = await self._send("PATCH", f"/workflows/{args.id}", json=args.payload())
        return _as_json_text(response.data)

    async def _delete_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_workflow_id(arguments))
        response = await self._send("DELETE", f"/workflows/{args.id}")
        # An empty object or array is still a body and gets echoed back.
        if not response.data and not isinstance(response.data, (dict, list)):
            return CallResult.text(f"Workflow {args.id} deleted successfully")
        return _as_json_text(response.data)

    async def _activate_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_workflow_id(arguments))
        response = await self._send("POST", f"/workflows/{args.id}/activate")
        return _as_json_text(response.data)

    async def _deactivate_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_workflow_id(arguments))
        response = await self._send("POST", f"/workflows/{args.id}/deactivate")
        return _as_json_text(response.data)

    async def _execute_workflow(self, arguments: Mapping[str, Any]) -> CallResult:
        args = _require(validate_execute_workflow(arguments))
        response = await self._send("POST", f"/workflows/{args.id}/execute", json=args.data)
        return _as_json_text(response.data)


Handler = Callable[[Dispatcher, Mapping[str, Any]], Awaitable[CallResult]]

_HANDLERS: dict[Operation, Handler] = {
    Operation.LIST_WORKFLOWS: Dispatcher._list_workflows,
    Operation.GET_WORKFLOW: Dispatcher._get_workflow,
    Operation.CREATE_WORKFLOW: Dispatcher._create_workflow,
    Operation.UPDATE_WORKFLOW: Dispatcher._update_workflow,
    Operation.DELETE_WORKFLOW: Dispatcher._delete_workflow,
    Operation.ACTIVATE_WORKFLOW: Dispatcher._activate_workflow,
    Operation.DEACTIVATE_WORKFLOW: Dispatcher._deactivate_workflow,
    Operation.EXECUTE_WORKFLOW: Dispatcher._execute_workflow,
}

# Every operation needs a handler and a catalog entry, or the server
# would advertise tools it can't run.
_unhandled = [op.value for op in Operation if op not in _HANDLERS or get_descriptor(op.value) is None]
if _unhandled:
    raise RuntimeError(f"Operations missing a handler or catalog entry: {_unhandled}")
