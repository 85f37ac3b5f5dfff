# tests/conftest.py
from __future__ import annotations

import os
from datetime import datetime
from itertools import count
from typing import Callable, Dict, Generator, Iterator, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_CLEANUP_ENABLED", "false")

from forum.core.security import create_session_token, get_password_hash
from forum.crud import crud_session
from forum.database import Base, get_db
from forum.main import app as fastapi_app
from forum.models import Category, Comment, Post, User, UserRole, UserStatus

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret123"

# Hashing is slow; every factory user shares one hash.
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(db_session: Session) -> Iterator[FastAPI]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    fastapi_app.dependency_overrides[get_db] = _get_session_override
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    # Not entered as a context manager: the lifespan would seed the global engine.
    return TestClient(app)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    counter = count(1)

    def _make(
        username: Optional[str] = None,
        *,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        username = username or f"reader{next(counter)}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=_PASSWORD_HASH,
            role=role.value,
            status=status.value,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_category(db_session: Session) -> Callable[..., Category]:
    counter = count(1)

    def _make(name: Optional[str] = None) -> Category:
        category = Category(name=name or f"Category {next(counter)}", description="Books")
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make


@pytest.fixture()
def category(make_category) -> Category:
    return make_category("Fiction")


@pytest.fixture()
def make_post(db_session: Session, category: Category) -> Callable[..., Post]:
    counter = count(1)

    def _make(
        author: User,
        *,
        title: Optional[str] = None,
        content: str = "A thoughtful post about books.",
        category_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> Post:
        post = Post(
            user_id=author.id,
            category_id=category_id or category.id,
            title=title or f"Post {next(counter)}",
            content=content,
        )
        if created_at is not None:
            post.created_at = created_at
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make(
        post: Post,
        author: User,
        *,
        parent: Optional[Comment] = None,
        content: str = "Agreed!",
    ) -> Comment:
        comment = Comment(
            post_id=post.id,
            user_id=author.id,
            parent_id=parent.id if parent else None,
            content=content,
        )
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make


@pytest.fixture()
def auth_headers(db_session: Session) -> Callable[[User], Dict[str, str]]:
    """Bearer header backed by a real session row for the given user."""

    def _headers(user: User) -> Dict[str, str]:
        session = crud_session.create_session(db_session, user_id=user.id)
        token = create_session_token(session.uuid, expires_at=session.expires_at)
        return {"Authorization": f"Bearer {token}"}

    return _headers
