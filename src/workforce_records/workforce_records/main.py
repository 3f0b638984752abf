from __future__ import annotations

import importlib
import logging
import traceback
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import fail
from .container import Container, build_container, build_store
from .core.exceptions import AccountDeactivatedError, AuthenticationError, AuthorizationError, DomainError, ValidationError
from .notifications.notifier import LoggingNotifier
from .payroll.controller import register as register_payroll
from .timeoff.controller import register as register_time_off
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(AccountDeactivatedError)
    def _deactivated(e: AccountDeactivatedError):
        return fail(str(e), 401)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return fail(str(e), 403)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return fail(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)
        logger.error("unhandled error: %s\n%s", e, traceback.format_exc())
        if app.config.get("DEBUG"):
            return fail(f"Internal error: {e}", 500)
        return fail("Internal error", 500)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        store = build_store(
            getattr(settings, "STORE_BACKEND", "json"),
            store_path=getattr(settings, "STORE_PATH", None),
            db_config=getattr(settings, "DB_CONFIG", None),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )
        container = build_container(
            store=store,
            policy=getattr(settings, "POLICY", None),
            notifier=LoggingNotifier(),
            otp_ttl_minutes=int(getattr(settings, "OTP_TTL_MINUTES", 10)),
        )
    app.extensions["workforce_records"] = container

    logger.info("workforce-records settings=%s store=%s", settings_module, type(container.store).__name__)

    _register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_time_off(app, container)
    register_payroll(app, container)

    return app
