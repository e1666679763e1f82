import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from exploding_kittens.errors import GameError
from exploding_kittens.load_secrets import (
    log_level,
    redis_db,
    redis_host,
    redis_port,
    server_host,
    server_port,
)
from exploding_kittens.redis_client import redis
from exploding_kittens.routers import game

logging.basicConfig(level=log_level)


@asynccontextmanager
async def lifespan(app):
    """Log the Redis target on start and release its connections on stop."""
    logging.info(f"Start Server (redis://{redis_host}:{redis_port}/{redis_db})")
    try:
        yield
    finally:
        await redis.aclose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(game.game_router)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logging.info(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
    )


if __name__ == "__main__":
    uvicorn.run(app, host=server_host, port=server_port)
