import os

import pytest

# The web app builds its store at import time
os.environ.setdefault("COMPARISON_DATABASE_URL", "sqlite://")


@pytest.fixture
def web_app():
    from mortgage_calc_web.app import app

    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(web_app):
    return web_app.test_client()
