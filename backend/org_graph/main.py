import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from org_graph.rate_limit import limiter
from org_graph.routers.directory import router as directory_router
from org_graph.routers.graph import router as graph_router


app = FastAPI(title="Org Graph API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# --- Optional API token authentication ---
# Set ORG_GRAPH_API_TOKEN to require a Bearer token on all /api/ endpoints
# except the health check.
_api_token = os.environ.get("ORG_GRAPH_API_TOKEN")
_PUBLIC_PATHS = {"/api/health"}


class AuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if _api_token and path.startswith("/api/") and path not in _PUBLIC_PATHS:
            auth = request.headers.get("Authorization", "")
            if auth != f"Bearer {_api_token}":
                return JSONResponse(
                    status_code=401,
                    content={"detail": "Invalid or missing API token"},
                )
        return await call_next(request)


if _api_token:
    app.add_middleware(AuthMiddleware)

# CORS: load origins from env (comma-separated), default to localhost dev server
_cors_env = os.environ.get("CORS_ORIGINS", "http://localhost:5173")
cors_origins = [o.strip() for o in _cors_env.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


app.include_router(directory_router)
app.include_router(graph_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
