from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .access.controller import register as register_access
from .container import Container, build_container
from .leave_requests.controller import register as register_leave_requests
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    backend_config = getattr(settings, "BACKEND_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("settings=%s backend=%s", settings_module, backend_config.get("base_url"))

    if container is None:
        container = build_container(
            backend_config=backend_config,
            success_banner_seconds=int(getattr(settings, "SUCCESS_BANNER_SECONDS", 5)),
            session_days=int(getattr(settings, "SESSION_DAYS", 7)),
        )

    app.permanent_session_lifetime = timedelta(days=container.session_days)

    register_access(app, container)
    register_leaves(app, container)
    register_leave_requests(app, container)

    return app
