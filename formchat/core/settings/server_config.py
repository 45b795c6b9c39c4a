"""HTTP server configuration."""

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """Host and port uvicorn binds to."""

    host: str
    port: int
