from unittest.mock import MagicMock

import pytest
import requests

from tests.conftest import DeferredRunner, make_response, requested
from userdesk.credentials import CredentialForm
from userdesk.presenter import present_error
from userdesk.state import AppState, View
from userdesk.validation import FormMode

REGISTRATION = {
    "username": "ana01",
    "password": "abc123",
    "email": "ana@dominio.com",
    "birthDate": "1990-05-17",
    "fullName": "Ana Pérez",
}


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def form(service, runner, notify, state):
    return CredentialForm(service, runner, notify=notify, on_authenticated=state.authenticate)


def fill(form, values):
    for name, value in values.items():
        form.change(name, value)


class TestEditing:
    def test_change_normalizes_and_validates_only_that_field(self, form):
        stored = form.change("username", "  AB cd!!")

        assert stored == "abcd!!"
        assert form.values["username"] == "abcd!!"
        assert set(form.errors) == {"username"}
        assert not form.is_valid

    def test_fixing_a_field_clears_its_error(self, form):
        form.change("password", "abc")
        assert "password" in form.errors
        form.change("password", "abc123")
        assert "password" not in form.errors

    def test_validity_is_recomputed_against_the_whole_form(self, form):
        form.change("password", "abc123")
        assert not form.is_valid
        form.change("username", "ana01")
        assert form.is_valid

    def test_mode_switch_keeps_values_and_errors(self, form):
        fill(form, {"username": "ana01", "password": "abc123"})
        assert form.is_valid

        form.toggle_mode()

        assert form.mode is FormMode.REGISTER
        assert form.visible_fields == tuple(REGISTRATION)
        assert form.values["username"] == "ana01"
        assert not form.is_valid

        form.change("email", "nope")
        form.toggle_mode()

        assert form.mode is FormMode.LOGIN
        assert form.values["email"] == "nope"
        assert form.errors.keys() == {"email"}
        assert not form.is_valid

    def test_listeners_are_notified(self, form):
        listener = MagicMock()
        form.subscribe(listener)
        form.change("username", "ana")
        form.toggle_mode()
        assert listener.call_count == 2


class TestLogin:
    def test_successful_login_opens_the_roster(self, form, session, notify, state):
        session.request.return_value = make_response(200, {"intMessage": "Operation Successful"})
        fill(form, {"username": "ana01", "password": "abc123"})

        form.submit()

        assert state.is_authenticated
        assert state.username == "ana01"
        assert state.current_view is View.ROSTER
        notify.assert_called_once_with("Operation Successful")
        assert session.request.call_args.kwargs["headers"] == {"Username": "ana01", "Password": "abc123"}

    def test_invalid_form_is_not_submitted(self, form, session, state):
        form.change("username", "ana01")
        form.submit()
        assert session.request.call_count == 0
        assert not state.is_authenticated

    def test_rejected_login_shows_the_error(self, form, session, state):
        session.request.return_value = make_response(401, {"statusCode": 401, "message": "Invalid credentials"})
        fill(form, {"username": "ana01", "password": "wrong123"})

        form.submit()

        assert not state.is_authenticated
        assert present_error(form.server_error).title == "Inicio de sesión fallido"
        assert form.values["password"] == "wrong123"
        assert not form.submitting

    def test_network_failure_uses_connection_error(self, form, session):
        session.request.side_effect = requests.ConnectionError("down")
        fill(form, {"username": "ana01", "password": "abc123"})

        form.submit()

        assert form.server_error.message == "connection error"
        assert form.server_error.status_code == 500

    def test_dismiss_error(self, form, session):
        session.request.return_value = make_response(401, {"message": "Invalid credentials"})
        fill(form, {"username": "ana01", "password": "abc123"})
        form.submit()

        form.dismiss_error()

        assert form.server_error is None


class TestRegister:
    def test_successful_registration_resets_the_form(self, form, session, notify, state):
        session.request.return_value = make_response(201, {"message": "User registered successfully"})
        form.toggle_mode()
        fill(form, REGISTRATION)
        assert form.is_valid

        form.submit()

        assert session.request.call_args.kwargs["json"] == REGISTRATION
        notify.assert_called_once_with("User registered successfully")
        assert all(value == "" for value in form.values.values())
        assert not form.is_valid
        assert form.mode is FormMode.REGISTER
        assert not state.is_authenticated

    def test_duplicate_username_keeps_the_input(self, form, session):
        session.request.return_value = make_response(409, {"message": "Username already exists"})
        form.toggle_mode()
        fill(form, REGISTRATION)

        form.submit()

        presentation = present_error(form.server_error)
        assert presentation.title == "Nombre de usuario no disponible"
        assert form.values == REGISTRATION


class TestBackgroundWork:
    def test_double_submit_sends_one_request(self, service, session, notify, state):
        runner = DeferredRunner()
        form = CredentialForm(service, runner, notify=notify, on_authenticated=state.authenticate)
        session.request.return_value = make_response(200, {"intMessage": "ok"})
        fill(form, {"username": "ana01", "password": "abc123"})

        form.submit()
        form.submit()
        assert form.submitting
        runner.flush()

        assert session.request.call_count == 1
        assert state.is_authenticated

    def test_late_response_is_discarded_after_close(self, service, session, notify, state):
        runner = DeferredRunner()
        form = CredentialForm(service, runner, notify=notify, on_authenticated=state.authenticate)
        session.request.return_value = make_response(200, {"intMessage": "ok"})
        fill(form, {"username": "ana01", "password": "abc123"})

        form.submit()
        form.close()
        runner.flush()

        assert session.request.call_count == 0
        assert not state.is_authenticated
        notify.assert_not_called()

    def test_unexpected_errors_propagate(self, form, service, monkeypatch):
        monkeypatch.setattr(service, "validate_credentials", MagicMock(side_effect=KeyError("boom")))
        fill(form, {"username": "ana01", "password": "abc123"})
        with pytest.raises(KeyError):
            form.submit()
        assert not form.submitting


class TestGreeting:
    def test_loads_welcome_and_ip(self, form, session):
        session.request.side_effect = [
            make_response(200, {"message": "Por Victor"}),
            make_response(200, {"ip": "10.0.0.7", "data": "Monterrey"}),
        ]

        form.load_greeting()

        assert form.welcome_message == "Por Victor"
        assert form.ip == "10.0.0.7"
        assert form.ip_data == "Monterrey"
        assert [path for _, path in requested(session)] == ["http://backend.test/", "http://backend.test/ip"]

    def test_failures_are_only_logged(self, form, session, caplog):
        session.request.side_effect = requests.ConnectionError("down")

        form.load_greeting()

        assert form.welcome_message == ""
        assert form.ip == ""
        assert form.server_error is None
        assert "Could not fetch welcome message" in caplog.text
        assert "Could not fetch IP address" in caplog.text

    def test_unexpected_greeting_error_is_not_swallowed(self, form, service, monkeypatch):
        monkeypatch.setattr(service, "fetch_welcome", MagicMock(side_effect=TypeError("bad")))
        with pytest.raises(TypeError):
            form.load_greeting()

