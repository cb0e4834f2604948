# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP transport binding for the n8n workflow tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP host and core/:
#     1. It publishes core.catalog.TOOL_CATALOG on tools/list
#     2. It forwards tools/call to core.dispatcher.Dispatcher
#     3. It converts results and ProtocolErrors into MCP types
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments (core/validators.py)
#   - They do NOT build HTTP requests (core/dispatcher.py)
#   - They do NOT know n8n's URL layout
# =============================================================================
