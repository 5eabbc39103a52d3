import logging

from flask import Flask

from config import Config
from extensions import db


def configure_logging(level_name):
    level = getattr(logging, level_name or "INFO", logging.INFO)
    logger = logging.getLogger("lxpfeedback")
    logger.setLevel(level)

    # create_app may run many times in one process (tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config.get("LOG_LEVEL"))
    db.init_app(app)

    from lxpfeedback.routes import register_routes
    register_routes(app)

    with app.app_context():
        import lxpfeedback.models  # noqa: F401
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
