# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, root URLconf and the ASGI/WSGI entry points. The ASGI application
# serves both the REST API and the chat WebSocket.
# =============================================================================
