# =============================================================================
# api/__init__.py
# =============================================================================
# HTTP entry point.  index.py holds the ASGI `app` that both uvicorn (long-
# running mode) and serverless platforms mount.  It only translates HTTP to
# JSON-RPC; all tool logic lives in core/.
# =============================================================================
