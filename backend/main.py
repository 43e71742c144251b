from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from config import settings
settings.setup_environment()

from infra.database.connection import init_db, close_db
from api.routers import setlists, songs

# Lifespan event to handle startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()  # DuckDB schema bootstrap (sequences and tables via raw SQL)
    yield
    close_db()

app = FastAPI(title="Setlist Studio Backend API", lifespan=lifespan)

# CORS Configuration
origins = [
    f"http://localhost:{settings.FRONTEND_PORT}",  # Frontend dev server
    f"http://127.0.0.1:{settings.FRONTEND_PORT}",
    f"http://localhost:{settings.PORT}",
    f"http://127.0.0.1:{settings.PORT}",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Root endpoint for health check
@app.get("/")
async def root():
    return {"message": "Setlist Studio Backend API is running"}

# Include Routers
app.include_router(songs.router)
app.include_router(setlists.router)
