from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
import os

from db import SessionLocal, get_db, init_db
from mobimap.repository import load_snapshot, persisting_hook
from mobimap.routes import router as mobimap_router, set_store
from mobimap.state import AppStore

load_dotenv()

logging.basicConfig(
    level=os.getenv("MOBIMAP_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.info("App starting with DATABASE_URL")

CORS_ORIGINS = [o.strip() for o in os.getenv("MOBIMAP_CORS_ORIGINS", "*").split(",") if o.strip()]
SEED_DEFAULTS = os.getenv("MOBIMAP_SEED_DEFAULTS", "true").lower() in ("1", "true", "yes")

app = FastAPI(title="MobiMap API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_store() -> AppStore:
    init_db()
    with get_db() as db:
        snapshot = load_snapshot(db, seed_defaults=SEED_DEFAULTS)
    return AppStore(snapshot, on_commit=persisting_hook(SessionLocal))


@app.on_event("startup")
def startup():
    store = build_store()
    set_store(store)
    logging.info(f"Loaded {len(store.snapshot().options)} universities (state v{store.version})")


app.include_router(mobimap_router)


@app.get("/")
def root():
    return {"message": "MobiMap API is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
