# =============================================================================
# nora_tools/__init__.py
# =============================================================================
# This package exposes the Odoo core as MCP tools.
#
# ARCHITECTURAL ROLE:
#   nora_tools/ is the translation layer between MCP and nora_core/:
#     - catalog.py        names, descriptions and input schemas of the tools
#     - dispatcher.py     routes a call, applies the field-check retry policy
#     - results.py        turns any exception into a failed tool result
#     - logging_setup.py  stderr logging for tool traffic
#     - mcp_server.py     FastMCP registration
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT speak JSON-RPC to Odoo (that's nora_core/client.py)
#   - They do NOT parse raw arguments by hand (that's nora_core/validation.py)
# =============================================================================
