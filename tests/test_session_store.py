import json

from flask import session

from freshmart.app.common.session_store import SESSION_KEY, FlaskSessionStorage, SessionStore


def test_save_then_load(session_store, storage):
    session_store.save({"userType": "CUSTOMER", "userData": {"customerId": "CUST001"}})

    assert json.loads(storage.items[SESSION_KEY])["userType"] == "CUSTOMER"
    assert session_store.load() == {"userType": "CUSTOMER", "userData": {"customerId": "CUST001"}}
    assert session_store.is_logged_in()


def test_absent_session_is_none(session_store):
    assert session_store.load() is None
    assert not session_store.is_logged_in()


def test_clear_removes_the_record(session_store, storage):
    session_store.save({"userType": "CUSTOMER"})
    session_store.clear()

    assert SESSION_KEY not in storage.items
    assert session_store.load() is None


def test_corrupt_record_is_discarded(session_store, storage):
    storage.set_item(SESSION_KEY, "{not json")

    assert session_store.load() is None
    assert SESSION_KEY not in storage.items


def test_null_payload_still_counts_as_logged_in(session_store):
    session_store.save(None)

    assert session_store.load() == {}
    assert session_store.is_logged_in()


def test_flask_session_storage(app):
    with app.test_request_context("/"):
        store = SessionStore(FlaskSessionStorage())
        store.save({"userType": "ADMIN"})

        assert session[SESSION_KEY] == json.dumps({"userType": "ADMIN"})
        assert store.load() == {"userType": "ADMIN"}

        store.clear()
        assert SESSION_KEY not in session
