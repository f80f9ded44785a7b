# messagely/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from messagely.api import auth, users, messages
from messagely.core.errors import MessagelyError
from messagely.core.rate_limit import limiter
from messagely.utils.logger import setup_logger

setup_logger()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Messagely Backend",
    version="1.0.0",
    description="Direct messaging between registered users"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(MessagelyError)
def messagely_error_handler(request: Request, exc: MessagelyError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


# Register routers
app.include_router(auth.router, tags=["Auth"])
app.include_router(users.router, tags=["Users"])
app.include_router(messages.router, tags=["Messages"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
