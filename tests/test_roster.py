from unittest.mock import MagicMock

import pytest

from tests.conftest import API_URL, DeferredRunner, make_response, requested
from userdesk.roster import CONFIRM_DELETE, DELETE_FAILED, DELETED, UPDATE_FAILED, UPDATED, RosterController
from userdesk.services import UserRecord

USERS = {
    "data": [
        {"id": 5, "username": "ana", "email": "ana@x.com", "fullName": "Ana Pérez", "birthDate": "1990-05-17"},
        {"id": 2, "username": "luis", "email": "luis@x.com", "fullName": "Luis Gil", "birthDate": "1988-01-02"},
    ]
}


@pytest.fixture
def confirm():
    return MagicMock(return_value=True)


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def roster(service, runner, session, confirm, notify):
    session.request.return_value = make_response(200, USERS)
    controller = RosterController(service, runner, confirm=confirm, notify=notify)
    controller.refresh()
    session.request.reset_mock()
    return controller


class TestRefresh:
    def test_loads_users_in_backend_order(self, roster):
        assert [user.username for user in roster.users] == ["ana", "luis"]
        assert roster.loaded
        assert not roster.is_stale

    def test_initial_failure_leaves_an_empty_roster(self, service, runner, session, confirm, notify, caplog):
        session.request.return_value = make_response(500, {"message": "Error fetching users"})
        controller = RosterController(service, runner, confirm=confirm, notify=notify)

        controller.refresh()

        assert controller.users == []
        assert controller.loaded
        notify.assert_not_called()
        assert "Could not fetch users" in caplog.text


class TestDelete:
    def test_declined_confirmation_sends_nothing(self, roster, session, confirm):
        confirm.return_value = False

        assert roster.delete(5) is False

        confirm.assert_called_once_with(CONFIRM_DELETE)
        assert session.request.call_count == 0

    def test_delete_then_refetch(self, roster, session, notify):
        session.request.side_effect = [
            make_response(200, {"message": "User deleted successfully"}),
            make_response(200, {"data": USERS["data"][1:]}),
        ]

        assert roster.delete(5) is True

        assert requested(session) == [("DELETE", f"{API_URL}/users/5"), ("GET", f"{API_URL}/users")]
        assert [user.id for user in roster.users] == [2]
        notify.assert_called_once_with(DELETED)

    def test_refetch_failure_marks_data_stale(self, roster, session):
        session.request.side_effect = [
            make_response(200, {"message": "User deleted successfully"}),
            make_response(500, {"message": "Error fetching users"}),
        ]

        roster.delete(5)

        assert roster.is_stale
        assert [user.id for user in roster.users] == [5, 2]

    def test_delete_failure_alerts(self, roster, session, notify):
        session.request.return_value = make_response(404, {"message": "User not found"})

        roster.delete(5)

        notify.assert_called_once_with(DELETE_FAILED, error=True)
        assert requested(session) == [("DELETE", f"{API_URL}/users/5")]
        assert len(roster.users) == 2

    def test_refetch_starts_after_delete_completes(self, service, session, confirm, notify):
        runner = DeferredRunner()
        controller = RosterController(service, runner, confirm=confirm, notify=notify)
        session.request.return_value = make_response(200, USERS)

        controller.delete(5)
        assert len(runner.pending) == 1
        runner.flush()

        assert requested(session) == [("DELETE", f"{API_URL}/users/5"), ("GET", f"{API_URL}/users")]


class TestEdit:
    def test_begin_edit_prefills_the_form(self, roster):
        record = roster.users[0]

        roster.begin_edit(record)

        assert roster.editing is record
        assert roster.edit_values == {
            "email": "ana@x.com",
            "birthDate": "1990-05-17",
            "fullName": "Ana Pérez",
            "password": "",
        }

    def test_cancel_sends_nothing(self, roster, session):
        before = list(roster.users)
        roster.begin_edit(roster.users[0])
        roster.change_edit("email", "otro@x.com")

        roster.cancel_edit()

        assert roster.editing is None
        assert set(roster.edit_values.values()) == {""}
        assert session.request.call_count == 0
        assert roster.users == before

    def test_update_merges_the_username(self, roster, session, notify):
        session.request.side_effect = [
            make_response(200, {"message": "User updated successfully"}),
            make_response(200, USERS),
        ]
        roster.begin_edit(roster.users[0])
        roster.change_edit("email", "nueva@x.com")
        roster.change_edit("password", "abc123")

        roster.submit_edit()

        put = session.request.call_args_list[0]
        assert put.args == ("PUT", f"{API_URL}/users/5")
        assert put.kwargs["json"] == {
            "email": "nueva@x.com",
            "birthDate": "1990-05-17",
            "fullName": "Ana Pérez",
            "password": "abc123",
            "username": "ana",
        }
        assert requested(session)[1] == ("GET", f"{API_URL}/users")
        assert roster.editing is None
        notify.assert_called_once_with(UPDATED)

    def test_update_failure_keeps_the_target(self, roster, session, notify):
        session.request.return_value = make_response(409, {"message": "Email already exists"})
        record = roster.users[1]
        roster.begin_edit(record)

        roster.submit_edit()

        assert roster.editing is record
        notify.assert_called_once_with(UPDATE_FAILED, error=True)
        assert session.request.call_count == 1

    def test_submit_without_target_is_ignored(self, roster, session):
        roster.submit_edit()
        assert session.request.call_count == 0

    def test_username_is_not_editable(self, roster):
        roster.begin_edit(UserRecord(id=1, username="ana"))
        with pytest.raises(ValueError):
            roster.change_edit("username", "otro")


def test_close_discards_pending_results(service, session, confirm, notify):
    runner = DeferredRunner()
    controller = RosterController(service, runner, confirm=confirm, notify=notify)
    session.request.return_value = make_response(200, USERS)

    controller.refresh()
    controller.close()
    runner.flush()

    assert controller.users == []
    assert not controller.loaded
