from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator
from fastapi import Request

Base = declarative_base()


class Database:
    """
    Explicitly scoped database handle.

    Opened once at process start (see the lifespan in main.py), stored on
    app.state and disposed at shutdown. Nothing else holds a global engine.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False
    ):
        engine_kwargs = {
            "pool_pre_ping": True,  # Verify connections before using
            "echo": echo,
        }
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        """
        Create all tables.
        Should be called on application startup.
        """
        # Model modules register themselves on Base when imported
        import eventdesk.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        """
        Drop all tables - USE WITH CAUTION!
        Only for development/testing purposes.
        """
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Automatically closes session after use.

    Usage:
        @router.get("/events")
        def list_events(db: Session = Depends(get_db)):
            return db.query(Event).all()
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
