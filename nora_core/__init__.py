# =============================================================================
# nora_core/__init__.py
# =============================================================================
# This package contains the remote-call engine for the Odoo MCP server.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any MCP plumbing.  Every module
#   here is plain Python plus httpx (the JSON-RPC transport) and pydantic
#   (argument schemas).  The tools/ layer wraps it; the core does the work.
#
# WHAT LIVES HERE:
#   - config.py      Settings read from the environment
#   - errors.py      The error taxonomy every layer speaks
#   - models.py      Data shapes: session, RPC outcomes, tool results
#   - client.py      OdooClient: lazy authentication, then execute_kw calls
#   - validation.py  Per-tool argument schemas
#   - classify.py    Heuristic "is this a bad field name?" classifier
# =============================================================================
