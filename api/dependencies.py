"""
API Dependencies - Singleton state management and FastAPI dependency injection

Holds the repository and the resource service, authenticates bearer tokens
into an Actor and gates endpoints on role rights.
"""

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from music_commerce.access.roles import has_right
from music_commerce.access.schemas import Actor, Role
from music_commerce.errors import ForbiddenError, UnauthorizedError
from music_commerce.settings import Settings, get_settings
from music_commerce.tokens import read_access_token
from api.repositories.base import BaseRepository
from api.repositories.local import LocalFileRepository
from api.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AppState:
    """
    Global application state - holds the repository and the service.

    Singleton pattern: one instance shared across all requests.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.repository: Optional[BaseRepository] = None
        self.service: Optional[ResourceService] = None

        # State tracking for lazy initialization
        self._initialized = False
        self._initialization_lock = threading.Lock()

    def initialize(self, repository: Optional[BaseRepository] = None) -> None:
        """
        Create the repository and the service, then bootstrap the first admin.

        Safe to call more than once; only the first call does the work.
        """
        with self._initialization_lock:
            if self._initialized:
                logger.debug("AppState already initialized")
                return

            logger.info("Initializing AppState...")
            try:
                self.repository = repository or LocalFileRepository(self.settings.data_root / "collections")
                self.service = ResourceService(
                    self.repository,
                    scope_policy=self.settings.list_scope_policy,
                    default_limit=self.settings.default_page_limit,
                    max_limit=self.settings.max_page_limit,
                )
                logger.info(f"List scope policy: {self.settings.list_scope_policy.value}")

                self._bootstrap_admin()

                self._initialized = True
                logger.info("AppState initialization complete!")

            except Exception as e:
                logger.error(f"Failed to initialize AppState: {e}", exc_info=True)
                raise

    def _bootstrap_admin(self) -> None:
        email = self.settings.bootstrap_admin_email
        if not email:
            return

        email = email.lower()
        existing = self.repository.find("users", {"email": email})
        if existing:
            logger.info(f"Bootstrap admin {email} already present ({existing[0]['id']})")
            return

        admin = self.repository.create("users", {
            "name": self.settings.bootstrap_admin_name,
            "email": email,
            "role": Role.ADMIN.value,
        })
        logger.info(
            f"Created bootstrap admin {email} ({admin['id']}); "
            f"issue a token with: python -m music_commerce.cli.issue_token --user-id {admin['id']}"
        )

    def is_ready(self) -> bool:
        """Check if app is ready to serve requests"""
        return self._initialized and self.repository is not None and self.service is not None

    def get_status(self) -> dict:
        """Get current initialization status"""
        return {
            "initialized": self._initialized,
            "ready": self.is_ready(),
            "repository": type(self.repository).__name__ if self.repository is not None else None,
            "list_scope_policy": self.settings.list_scope_policy.value,
        }


# Global singleton instance
app_state = AppState()


def get_app_state() -> AppState:
    """
    FastAPI dependency to access app state.

    Usage in routers:
        @router.get("/example")
        def example(state: AppState = Depends(get_app_state)):
            repo = state.repository
            ...
    """
    # Ensure initialization (blocking if not initialized yet)
    if not app_state.is_ready():
        logger.warning("AppState not initialized, initializing synchronously...")
        app_state.initialize()

    return app_state


def get_resource_service(state: AppState = Depends(get_app_state)) -> ResourceService:
    """FastAPI dependency to access the resource service"""
    if state.service is None:
        raise RuntimeError("Resource service not initialized")
    return state.service


def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    state: AppState = Depends(get_app_state),
) -> Actor:
    """
    Authenticate the bearer token and build the request's Actor.

    Raises:
        UnauthorizedError: token missing, invalid or expired, or user unknown
    """
    if credentials is None:
        raise UnauthorizedError()

    user_id = read_access_token(credentials.credentials, state.settings)
    user = state.repository.get("users", user_id)
    if user is None:
        logger.info(f"Token for unknown user {user_id}")
        raise UnauthorizedError()

    return Actor(id=user["id"], role=Role(user.get("role", Role.USER.value)))


def require_right(right: str) -> Callable[..., Actor]:
    """
    Dependency factory: the authenticated actor, provided its role holds ``right``.

    Usage in routers:
        @router.get("/example")
        def example(actor: Actor = Depends(require_right("get_albums"))):
            ...
    """

    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not has_right(actor.role, right):
            logger.info(f"Actor {actor.id} ({actor.role.value}) lacks right {right}")
            raise ForbiddenError("Forbidden")
        return actor

    return dependency


async def preload_app_state() -> None:
    """Initialize the app state off the event loop during startup."""
    logger.info("Starting preload of app state...")
    try:
        await asyncio.to_thread(app_state.initialize)
        logger.info("Preload complete!")
    except Exception as e:
        logger.error(f"Preload failed: {e}", exc_info=True)


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    logger.info("FastAPI starting up...")
    preload_task = asyncio.create_task(preload_app_state())

    yield  # App is now running

    logger.info("FastAPI shutting down...")
    if not preload_task.done():
        logger.info("Waiting for preload task to finish...")
        await preload_task
    logger.info("Shutdown complete")
