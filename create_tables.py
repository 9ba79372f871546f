from pathlib import Path

from sqlalchemy.engine import make_url

from app.db.base import Base
from app.db import models  # noqa: F401  # Imported for side effects
from app.db.session import engine

if __name__ == "__main__":
    url = make_url(str(engine.url))
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")
