from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend import config
from backend.routers import export, guide, world

app = FastAPI(
    title="BrickWorld API",
    description="Backend API for the procedural LEGO Great Wall scene",
    version="0.1.0",
)

# ---------------------------------------------------------------------------
# CORS -- allow the Vite dev server
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(world.router)
app.include_router(guide.router)
app.include_router(export.router)

# ---------------------------------------------------------------------------
# Static files -- serve exported GLB assets
# ---------------------------------------------------------------------------
config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/output", StaticFiles(directory=str(config.OUTPUT_DIR)), name="output")


@app.get("/")
async def root():
    return {"status": "ok", "service": "BrickWorld API"}
