from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from api.config import create_db
from api.errors import ProxyError, error_body
from api.models import models  # noqa: F401 (register tables before create_db)
from api.routes.function_routes import function_routes
from api.routes.profile_routes import profile_routes
from api.utils.logger import clear_request_id, configure_logging, set_request_id
from infra.llm.gateway import close_http_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_http_client()


app = FastAPI(title="AI Mentor proxy", lifespan=lifespan)
logger = configure_logging()
create_db()
# Browser clients call the functions directly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logger(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    path = request.url.path
    try:
        logger.info("request start method=%s path=%s client=%s", request.method, path, request.client)
        response: Response = await call_next(request)
        logger.info("request end status=%s method=%s path=%s", response.status_code, request.method, path)
        response.headers["x-request-id"] = rid
        return response
    except Exception:
        logger.exception("request error method=%s path=%s", request.method, path)
        raise
    finally:
        clear_request_id()


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("proxy error status=%s path=%s error=%s", exc.status_code, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning("http error status=%s method=%s path=%s detail=%s", exc.status_code, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


def _invalid_fields(exc: RequestValidationError) -> str:
    # loc is ("body", field, ...); drop the source part.
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    return ", ".join(field or "body" for field in fields)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("validation error method=%s path=%s errors=\n%s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content=error_body(f"Invalid request: {_invalid_fields(exc)}"),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internal exception details to clients.
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error"),
    )


@app.get("/")
def read_root():
    return {"message": "AI Mentor is Healthy"}

app.include_router(function_routes, prefix="/functions/v1")
app.include_router(profile_routes)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
