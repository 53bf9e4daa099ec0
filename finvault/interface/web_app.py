"""Mini README: FastAPI application exposing the Finvault HTTP/JSON API.

Structure:
    * Request payload models - every field optional so missing values reach
      the services and produce their 400 messages.
    * create_application - application factory wiring store, services, routes,
      CORS, and error translation.

Routes:
    POST /signup, POST /login, POST /add-finance, GET /getfinancedata,
    PUT /update-finance, DELETE /delete-finance, GET /health.

Handlers are plain functions so blocking pymongo calls run in FastAPI's
threadpool instead of on the event loop. Errors are returned as
``{"error": message}``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..accounts import AccountService, PasswordHasher, TokenIssuer
from ..accounts.service import LOGIN_MESSAGE
from ..configuration import FinvaultSettings, get_settings
from ..errors import INTERNAL_ERROR_MESSAGE, FinvaultError, InternalError
from ..finance import FinanceRecordService
from ..logging_utils import get_logger
from ..models import Number
from ..storage import UserStore, create_user_store

LOGGER = get_logger(__name__)


class CredentialsPayload(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class FinanceEntryPayload(BaseModel):
    username: Optional[str] = None
    month: Optional[str] = None
    income: Optional[Number] = None
    expenses: Optional[Number] = None
    savings: Optional[Number] = None


class DeleteEntryPayload(BaseModel):
    username: Optional[str] = None
    month: Optional[str] = None


def _connect_store(store: UserStore) -> None:
    """Check connectivity at startup; failures are logged, never fatal."""

    try:
        store.ping()
        store.ensure_indexes()
    except InternalError:
        LOGGER.exception("Store connection error (%s backend)", store.backend_name)
        return
    LOGGER.info("Connected to %s store", store.backend_name)


def create_application(
    settings: Optional[FinvaultSettings] = None,
    store: Optional[UserStore] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies.

    When ``store`` is omitted the factory builds one from ``settings`` and
    owns its lifecycle: it is checked on startup and closed on shutdown.
    An injected store belongs to the caller.
    """

    settings = settings or get_settings()
    owns_store = store is None
    user_store = store if store is not None else create_user_store(settings)

    accounts = AccountService(
        user_store,
        PasswordHasher(rounds=settings.bcrypt_rounds),
        TokenIssuer(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            lifetime=settings.token_lifetime,
        ),
    )
    finance = FinanceRecordService(user_store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if owns_store:
            _connect_store(user_store)
        yield
        if owns_store:
            user_store.close()

    app = FastAPI(title="Finvault", version="1.0.0", lifespan=lifespan)

    # Registered before CORS so it runs inside it and 500s keep CORS headers.
    @app.middleware("http")
    async def convert_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            LOGGER.exception("Unexpected error handling %s %s", request.method, request.url.path)
            return JSONResponse({"error": INTERNAL_ERROR_MESSAGE}, status_code=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FinvaultError)
    async def handle_finvault_error(request: Request, error: FinvaultError) -> JSONResponse:
        if error.status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.url.path, error.message)
        else:
            LOGGER.debug("%s %s rejected: %s", request.method, request.url.path, error.message)
        return JSONResponse({"error": error.message}, status_code=error.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(
        request: Request, error: RequestValidationError
    ) -> JSONResponse:
        LOGGER.debug("Malformed request to %s: %s", request.url.path, error.errors())
        return JSONResponse({"error": "Invalid request payload."}, status_code=400)

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Report process liveness and whether the store answers."""

        try:
            user_store.ping()
        except InternalError:
            return {"status": "ok", "store": "unavailable"}
        return {"status": "ok", "store": "ok"}

    @app.post("/signup", status_code=201)
    def signup(payload: Optional[CredentialsPayload] = None) -> Dict[str, str]:
        payload = payload or CredentialsPayload()
        message = accounts.register(payload.username, payload.password)
        return {"message": message}

    @app.post("/login")
    def login(payload: Optional[CredentialsPayload] = None) -> Dict[str, str]:
        payload = payload or CredentialsPayload()
        token = accounts.authenticate(payload.username, payload.password)
        return {"message": LOGIN_MESSAGE, "token": token}

    @app.post("/add-finance", status_code=201)
    def add_finance(payload: Optional[FinanceEntryPayload] = None) -> Dict[str, str]:
        payload = payload or FinanceEntryPayload()
        finance.add_entry(
            payload.username,
            payload.month,
            payload.income,
            payload.expenses,
            payload.savings,
        )
        return {"message": "Finance data added successfully!"}

    @app.get("/getfinancedata")
    def get_finance_data(username: Optional[str] = None) -> List[Dict[str, Any]]:
        return [entry.as_dict() for entry in finance.get_entries(username)]

    @app.put("/update-finance")
    def update_finance(payload: Optional[FinanceEntryPayload] = None) -> Dict[str, str]:
        payload = payload or FinanceEntryPayload()
        finance.update_entry(
            payload.username,
            payload.month,
            payload.income,
            payload.expenses,
            payload.savings,
        )
        return {"message": "Finance data updated successfully!"}

    @app.delete("/delete-finance")
    def delete_finance(payload: Optional[DeleteEntryPayload] = None) -> Dict[str, str]:
        payload = payload or DeleteEntryPayload()
        finance.delete_entry(payload.username, payload.month)
        return {"message": "Finance data deleted successfully!"}

    return app
