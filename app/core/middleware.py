from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
import time
import uuid
import logging

from app.config.settings import settings
from app.core.masking import SensitiveDataMasker, mask_headers

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str:
    """Request id assigned by the logging middleware, or a fresh one"""
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""
    masker = SensitiveDataMasker(settings.log_encryption_key)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        body = await request.body()
        client = request.client.host if request.client else "-"
        logger.info(
            f"[RequestId: {request_id}] Incoming request: {request.method} {request.url.path} - "
            f"Client: {client} - Headers: {mask_headers(request.headers)}"
        )
        if body:
            logger.info(
                f"[RequestId: {request_id}] Request body: "
                f"{masker.mask_sensitive_data(body.decode('utf-8', errors='replace'))}"
            )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[RequestId: {request_id}] Exception occurred during request processing")
            raise

        # Buffer the body so it can be logged and then sent as-is
        response_body = b"".join([chunk async for chunk in response.body_iterator])

        process_time = time.time() - start_time
        logger.info(
            f"[RequestId: {request_id}] Outgoing response: {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        if response_body:
            logger.info(
                f"[RequestId: {request_id}] Response body: "
                f"{masker.mask_sensitive_data(response_body.decode('utf-8', errors='replace'))}"
            )

        headers = dict(response.headers)
        headers.pop("content-length", None)
        headers[REQUEST_ID_HEADER] = request_id
        return Response(
            content=response_body,
            status_code=response.status_code,
            headers=headers,
            media_type=response.media_type,
        )
