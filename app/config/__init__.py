# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, URLs and the WSGI/ASGI applications for the donation server.
# =============================================================================
