# main.py
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from fastapi.responses import JSONResponse
from util.functions import client_ip
from util.logger import init_logger


async def _limiter_identifier(request: Request) -> str:
    return client_ip(request)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    logger = init_logger()
    try:
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        await FastAPILimiter.init(redis, identifier=_limiter_identifier)
        logger.info("airdrop.startup tree=%s", settings.MERKLE_TREE_PATH)
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        logger.error("Failed to connect to Redis: %s", e)
        raise

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            logger.error("Error closing Redis: %s", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    retry = str(settings.RATE_LIMIT_SECONDS)
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Rate limited. Please try again in {retry}s.",
        },
        headers={"Retry-After": retry},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
