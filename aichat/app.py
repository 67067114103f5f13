# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from aichat.container import Container
from aichat.shared.config import AppConfig, load_config
from aichat.shared.logging import logger, setup_logging
from aichat.shared.middleware.error_handler import configure_error_handling
from aichat.shared.middleware.request_logger import configure_request_logging

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def create_app(
    config: AppConfig | None = None, container: Container | None = None
) -> Flask:
    config = config or load_config()
    setup_logging(debug_mode=config.debug_logging)

    container = container or Container(config)
    container.database.init_schema()

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(SECRET_KEY=config.secret_key)

    CORS(
        app,
        resources={r"/api/*": {"origins": config.security.allowed_origins}},
        supports_credentials=True,
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.extensions["aichat"] = container

    logger.info(
        f"Flask app initialized env={config.app_env} "
        f"origins={config.security.allowed_origins}"
    )
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    logger.info(f"Server is running on http://{config.host}:{config.port}")
    try:
        app.run(host=config.host, port=config.port)
    except OSError as exc:
        logger.error(f"Could not bind {config.host}:{config.port}: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
