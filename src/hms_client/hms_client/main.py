from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import LOG_PREFIX
from .core.enums import Role
from .shifts.controller import register as register_shifts


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = dict(getattr(settings, "API_CONFIG"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["USER_ROLE"] = Role.parse(getattr(settings, "USER_ROLE", Role.ADMIN))

    if app.config["DEBUG"]:
        print(
            f"{LOG_PREFIX} settings=", settings_module,
            " api=", f"{api_config.get('base_url')}{api_config.get('endpoint', '')}",
            " role=", app.config["USER_ROLE"].value,
        )

    if container is None:
        container = build_container(api_config=api_config)

    register_shifts(app, container)

    return app
