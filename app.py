"""FastAPI application entry point for MindLoom."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from api import (
    transform_router, chat_router, files_router, history_router,
    analyze_router, export_router, usage_router
)
from api.deps import initialize_all

# Load environment variables
load_dotenv()

CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type", "x-session-id"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Initialize all services via DI
    await initialize_all()
    yield


# Create FastAPI app
app = FastAPI(
    title="MindLoom",
    description="Turn web pages, text and files into summaries, mind maps, notes and more",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_HEADERS,
)

# Include routers
app.include_router(transform_router)
app.include_router(chat_router)
app.include_router(files_router)
app.include_router(history_router)
app.include_router(analyze_router)
app.include_router(export_router)
app.include_router(usage_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8079, reload=True)
