from boxy.backend import ChatBackend, build_backend
from boxy.gemini import UpstreamError

__all__ = ["ChatBackend", "UpstreamError", "build_backend"]
