from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from infrastructure.configuration.settings import VERSION
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

handler = FastAPI(
    title="IP Geolocation API",
    description=(
        "IP address geolocation and coordinate timezone lookup, with JSON or"
        " protobuf responses and an MCP (JSON-RPC) interface for agents."
    ),
    version=VERSION,
    lifespan=lifespan,
)

# Public read-only API
handler.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)
handler.add_middleware(RequestContextMiddleware)

handler.include_router(api_router)
