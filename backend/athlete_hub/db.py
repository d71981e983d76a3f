from __future__ import annotations
import logging
import threading
from typing import Iterator, Optional

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .settings import settings


logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
	"""Owns the process-wide engine.

	The engine is created on the first ``connect()`` call. Concurrent first
	callers wait on the same lock and all receive the engine built by
	whichever thread got there first.
	"""

	def __init__(self, url: str) -> None:
		self.url = url
		self._engine: Optional[Engine] = None
		self._sessionmaker: Optional[sessionmaker] = None
		self._lock = threading.Lock()

	@property
	def connected(self) -> bool:
		return self._engine is not None

	def _create_engine(self) -> Engine:
		kwargs = {"future": True}
		if self.url.startswith("sqlite"):
			kwargs["connect_args"] = {"check_same_thread": False}
			if self.url in ("sqlite://", "sqlite:///:memory:"):
				kwargs["poolclass"] = StaticPool
		return create_engine(self.url, **kwargs)

	def connect(self) -> Engine:
		if self._engine is not None:
			return self._engine
		with self._lock:
			if self._engine is None:
				logger.info("Connecting to database %s", self.url.split("@")[-1])
				engine = self._create_engine()
				# Import registers the tables on Base.metadata
				from . import models  # noqa: F401
				Base.metadata.create_all(bind=engine)
				self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
				self._engine = engine
		return self._engine

	def session(self) -> Session:
		self.connect()
		return self._sessionmaker()

	def dispose(self) -> None:
		with self._lock:
			if self._engine is not None:
				self._engine.dispose()
			self._engine = None
			self._sessionmaker = None


_database: Optional[Database] = None
_database_lock = threading.Lock()


def get_database() -> Database:
	global _database
	if _database is None:
		with _database_lock:
			if _database is None:
				_database = Database(settings.database_url)
	return _database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
	db = database.session()
	try:
		yield db
	finally:
		db.close()
