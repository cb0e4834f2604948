# =============================================================================
# core/__init__.py
# =============================================================================
# The tool-dispatch layer for the n8n workflow server: argument validators,
# the tool catalog, the n8n HTTP adapter, and the dispatcher that ties them
# together.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  The dispatcher
#   speaks in plain dataclasses (CallResult) and its own ProtocolError; the
#   tools/ layer translates both to the wire.  That keeps every rule about
#   arguments, defaults and error messages testable with a fake client and
#   no transport at all.
# =============================================================================
