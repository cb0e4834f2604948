# =============================================================================
# core/errors.py  -  Error Taxonomy
# =============================================================================
#
# Two kinds of failure exist in this system:
#
#   ProtocolError  -  what the HOST sees.  Exactly one of three kinds, each
#                     carrying the JSON-RPC code the MCP transport reports.
#
#   N8nApiError    -  what the HTTP adapter raises when n8n answers with a
#                     5xx or cannot be reached at all.  It never escapes the
#                     dispatcher; it is recast as ProtocolError(INTERNAL_ERROR).
#
# 4xx responses are NOT errors at this level.  The adapter hands them back
# as ordinary responses so n8n's diagnostic JSON reaches the caller intact.
# =============================================================================

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    INVALID_PARAMS = -32602
    METHOD_NOT_FOUND = -32601
    INTERNAL_ERROR = -32603

    @property
    def code(self) -> int:
        return self.value


class ProtocolError(Exception):
    """A terminal, caller-visible failure of one tool call."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ProtocolError({self.kind.name}, {self.message!r})"


class N8nApiError(Exception):
    """Raised by the HTTP adapter for 5xx responses and transport failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def remote_message(self) -> str:
        """n8n's own `message` field when the body carries one."""
        if isinstance(self.body, dict) and self.body.get("message"):
            return str(self.body["message"])
        return self.message
