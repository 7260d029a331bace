import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from fakes import FakeSMTP, FakeSession
from studio_gateway.main import app
from studio_gateway.services.backend_client import BackendClient, get_backend_client
from studio_gateway.services.mailer import BookingMailer, get_mailer
from studio_gateway.utils.rate_limit import limiter

BACKEND_URL = "http://backend.test/api"
ADMIN_EMAIL = "admin@glimit.test"


@pytest.fixture
def backend():
    """Fake content backend session."""
    return FakeSession()


@pytest.fixture
def smtp_connections():
    return []


@pytest.fixture
def mailer(smtp_connections):
    def factory(host, port, secure, timeout):
        connection = FakeSMTP(host, port, secure, timeout)
        smtp_connections.append(connection)
        return connection

    return BookingMailer(
        host="smtp.glimit.test",
        port=587,
        user="studio@glimit.test",
        password="secret",
        admin_email=ADMIN_EMAIL,
        smtp_factory=factory,
    )


@pytest.fixture
def client(backend, mailer):
    app.dependency_overrides[get_backend_client] = lambda: BackendClient(BACKEND_URL, session=backend)
    app.dependency_overrides[get_mailer] = lambda: mailer
    rate_limiting = limiter.enabled
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = rate_limiting


@pytest.fixture
def admin_client(client):
    client.cookies.set("admin_token", "admin-token-123")
    return client


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (1200, 800), (200, 120, 40)).save(buffer, format="PNG")
    return buffer.getvalue()
