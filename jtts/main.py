"""ASGI entry point for the synthesis proxy.

Usage:
    python -m jtts.main
    uvicorn jtts.main:app --reload
    jtts serve
"""

from jtts.api.app import create_app
from jtts.config import get_settings

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "jtts.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
    )
