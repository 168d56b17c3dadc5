# =============================================================================
# core/__init__.py
# =============================================================================
# All tool logic for Godsaeng Mate: input schemas, Kakao adapters,
# formatters and the dispatcher that ties them together.
#
# Nothing in this package imports FastMCP or FastAPI.  The transports in
# tools/ and api/ depend on core/, never the other way round.
# =============================================================================
