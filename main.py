# =============================================================================
# main.py  -  Entry Point for the n8n Workflow MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
#   Normally you don't run this by hand: an MCP host spawns it and speaks
#   JSON-RPC over its stdin/stdout.  Example host config:
#
#     {
#       "mcpServers": {
#         "n8n": {
#           "command": "uv",
#           "args": ["run", "python", "/path/to/main.py"],
#           "env": {"N8N_API_URL": "https://n8n.example.com",
#                   "N8N_API_KEY": "..."}
#         }
#       }
#     }
#
# WHAT HAPPENS:
#   1. Variables from .env are loaded (real environment variables win)
#   2. N8N_API_URL / N8N_API_KEY are read; missing ones are logged, not fatal
#   3. The FastMCP server starts on stdio with the eight workflow tools
#   4. Ctrl+C (SIGINT) closes the transport and exits with code 0
# =============================================================================

from dotenv import load_dotenv

# Must run BEFORE core.config reads the environment.
load_dotenv()

from tools.mcp_server import run


if __name__ == "__main__":
    run()
