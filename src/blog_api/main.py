from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import get_settings
from .lib.wordpress import WordPressClient
from .routers import batch, debug, health, posts, search, terms


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One shared client (and connection pool) per process. Tests replace
    # `app.state.wp` with a fake instead of entering the lifespan.
    async with WordPressClient(get_settings()) as wp:
        app.state.wp = wp
        yield


app = FastAPI(
    title="Headless Blog API",
    description="JSON front end for a WordPress site served through its REST API",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(posts.router)
app.include_router(terms.router)
app.include_router(search.router)
app.include_router(batch.router)
app.include_router(debug.router)


@app.get("/")
async def root():
    return {"message": "Headless Blog API"}
