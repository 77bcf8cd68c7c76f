from .config import settings
from .database import engine, SessionLocal, get_db, Base, dispose_engine

__all__ = ["settings", "engine", "SessionLocal", "get_db", "Base", "dispose_engine"]
