"""
Session store tests
"""

from datetime import datetime, timedelta

from concierge.interfaces.booking_directory import BookingDirectory
from concierge.interfaces.session_store import SessionStore
from concierge.schemas.ai_schemas import TravelStyle, UserSession


def make_session(order_id: str = "1001") -> UserSession:
    directory = BookingDirectory()
    booking = directory.validate_user(order_id)
    return UserSession(
        session_id=SessionStore.new_session_id(order_id),
        booking=booking,
        travel_style=TravelStyle.SOLO,
        status=directory.get_trip_status(booking),
    )


def test_session_id_format():
    assert SessionStore.new_session_id("1001").startswith("sess_1001_")


def test_fresh_session_is_kept():
    store = SessionStore(ttl_hours=24)
    session = store.save_session(make_session())
    assert store.get_session(session.session_id) == session
    assert store.count() == 1


def test_idle_session_expires_with_its_coordinators():
    store = SessionStore(ttl_hours=24)
    idle = store.save_session(make_session("1001"))
    store.set_coordinator(idle.session_id, "dashboard", object())
    store._last_seen[idle.session_id] = datetime.utcnow() - timedelta(hours=25)

    active = store.save_session(make_session("1002"))

    assert store.get_session(idle.session_id) is None
    assert store.get_coordinator(idle.session_id, "dashboard") is None
    assert store.get_session(active.session_id) == active
    assert store.count() == 1


def test_reading_a_session_keeps_it_alive():
    store = SessionStore(ttl_hours=1)
    session = store.save_session(make_session())
    store._last_seen[session.session_id] = datetime.utcnow() - timedelta(minutes=50)

    assert store.get_session(session.session_id) == session
    assert store._last_seen[session.session_id] > datetime.utcnow() - timedelta(minutes=1)
    assert store.expire_idle() == 0


def test_delete_session():
    store = SessionStore()
    session = store.save_session(make_session())
    assert store.delete_session(session.session_id) is True
    assert store.delete_session(session.session_id) is False
    assert store.count() == 0
