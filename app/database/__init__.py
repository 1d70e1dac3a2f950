from app.database.base import Base
from app.database.engine import build_engine, create_tables, engine
from app.database.session import SessionLocal, get_db, session_scope

__all__ = ["Base", "SessionLocal", "build_engine", "create_tables", "engine", "get_db", "session_scope"]
