import json
from unittest.mock import MagicMock

import pytest
import requests

from userdesk.config import AppConfig
from userdesk.services import UsersService
from userdesk.tasks import InlineRunner

API_URL = "http://backend.test"


def make_response(status_code, payload=None):
    """Construit une vraie requests.Response avec un corps JSON optionnel."""
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class DeferredRunner:
    """Retient les appels jusqu'à ce que le test les déclenche avec flush()."""

    def __init__(self):
        self.pending = []

    def run(self, call, *, on_success, on_error, token):
        self.pending.append((call, on_success, on_error, token))

    def flush(self):
        inline = InlineRunner()
        while self.pending:
            call, on_success, on_error, token = self.pending.pop(0)
            inline.run(call, on_success=on_success, on_error=on_error, token=token)


@pytest.fixture
def config():
    return AppConfig(api_url=API_URL, timeout=2.0)


@pytest.fixture
def session():
    fake = MagicMock(spec=requests.Session)
    fake.request.return_value = make_response(200, {})
    return fake


@pytest.fixture
def service(config, session):
    return UsersService(config, session=session)


@pytest.fixture
def runner():
    return InlineRunner()


def requested(session):
    """Liste des (méthode, url) envoyées à la session factice."""
    return [(call.args[0], call.args[1]) for call in session.request.call_args_list]
