"""Test configuration and shared fixtures"""

import os

# the app refuses to start without a secret key
os.environ.setdefault("SCRIPTSHARE_SECRET_KEY", "scriptshare-test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from scriptshare.app import app  # noqa: E402
from scriptshare.config import Config, get_config  # noqa: E402
from scriptshare.db import DatabaseConnection  # noqa: E402
from scriptshare.services.token import TokenService  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "user@example.com"


@pytest.fixture(scope="session")
def config_factory():
    def f(**overrides) -> Config:
        options = dict(
            # overwrite application name so it will use another database file
            app_name="scriptshare-test",
            # no captcha, no pings
            debug=True,
            admin_users=[ADMIN_EMAIL],
        )
        options.update(overrides)
        return Config(**options)

    return f


@pytest.fixture(scope="class")
def test_config(config_factory) -> Config:
    return config_factory()


# each test class have it's own empty database
@pytest.fixture(scope="class")
def db_conn(test_config: Config):
    db_conn = DatabaseConnection(config=test_config)
    yield db_conn
    db_conn.drop_tables()
    # clean up test database file after tests
    if os.path.exists(test_config.database_path):
        os.remove(test_config.database_path)


@pytest.fixture(scope="class")
def test_app(test_config: Config, db_conn: DatabaseConnection):
    app.dependency_overrides = {get_config: lambda: test_config}
    client = TestClient(app)
    yield client
    app.dependency_overrides = {}


@pytest.fixture
def count_rows(db_conn: DatabaseConnection):
    """Count committed rows. Uses a short session so sqlite locks are released."""

    def f(model, **filters) -> int:
        with db_conn.get_session() as session:
            return session.query(model).filter_by(**filters).count()

    return f


@pytest.fixture(scope="class")
def token_factory(test_config: Config):
    """Get token of any user by email"""

    def f(email: str) -> str:
        return TokenService(config=test_config)._generate_new_token(email)

    return f


@pytest.fixture(scope="class")
def admin_token(token_factory):
    return token_factory(ADMIN_EMAIL)


@pytest.fixture(scope="class")
def user_token(token_factory):
    return token_factory(USER_EMAIL)


@pytest.fixture(scope="class")
def submit_script(test_app: TestClient):
    """Post the share form, returns the raw response"""

    def f(ajax: bool = True, **fields):
        data = {
            "author": "tom",
            "source": "print('hello')",
            "title": "Hello World",
            "tags": "",
        }
        data.update(fields)
        data = {key: value for key, value in data.items() if value is not None}
        headers = {"X-Requested-With": "XMLHttpRequest"} if ajax else {}
        return test_app.post(
            "/script", data=data, headers=headers, follow_redirects=False
        )

    return f


@pytest.fixture(scope="class")
def create_script(submit_script):
    """Share a script and return its permalink"""

    def f(**fields) -> str:
        response = submit_script(**fields)
        assert response.status_code == 201, response.text
        return response.headers["location"].rsplit("/", 1)[1]

    return f
