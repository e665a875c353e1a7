import structlog
from storefront.persistence.records import UserRole
from storefront.utils.logging import bind_session, clear_context, remove_context


def test_bind_session_tags_state_dir_and_user(tmp_path):
    bind_session(tmp_path, "u2")

    assert structlog.contextvars.get_contextvars() == {"state_dir": str(tmp_path), "user_id": "u2"}


def test_bind_session_without_user_drops_previous_user(tmp_path):
    bind_session(tmp_path, "u1")
    bind_session(tmp_path)

    assert structlog.contextvars.get_contextvars() == {"state_dir": str(tmp_path)}


def test_remove_context_keeps_other_keys(tmp_path):
    bind_session(tmp_path, "u1")
    remove_context("user_id")

    assert "user_id" not in structlog.contextvars.get_contextvars()
    assert structlog.contextvars.get_contextvars()["state_dir"] == str(tmp_path)


def test_storefront_session_context(shop, state_store):
    assert structlog.contextvars.get_contextvars() == {"state_dir": str(state_store.directory)}

    shop.sign_in(UserRole.CUSTOMER)
    assert structlog.contextvars.get_contextvars()["user_id"] == "u2"

    shop.sign_out()
    assert structlog.contextvars.get_contextvars() == {"state_dir": str(state_store.directory)}


def test_clear_context(tmp_path):
    bind_session(tmp_path, "u2")
    clear_context()

    assert structlog.contextvars.get_contextvars() == {}
