"""BDD tests for live notification fan-out."""

from pytest_bdd import given, parsers, scenarios, then, when

from engagement.notification.dispatch import dispatch
from engagement.notification.reading import mark_all_read
from engagement.realtime.fake_connection import FakeConnection

scenarios("features/live_fanout.feature")


@given(parsers.cfparse('device "{name}" is connected as "{user_id}"'))
def device_connected(registry, devices, name, user_id):
    devices[name] = FakeConnection(connection_id=name)
    registry.register(devices[name], user_id)


@when(parsers.cfparse('device "{name}" disconnects'))
def device_disconnects(registry, devices, name):
    registry.unregister(devices[name])


@when(parsers.cfparse('a notification titled "{title}" is dispatched to "{user_id}"'))
def when_dispatched(title, user_id):
    dispatch(user_id, "ticket_update", title, "Body")


@when(parsers.cfparse('the recipient "{user_id}" marks everything as read'))
def read_everything(user_id):
    mark_all_read(user_id)


@then(parsers.cfparse('device "{name}" receives "{event}"'))
def device_receives(devices, name, event):
    assert len(devices[name].events(event)) == 1


@then(parsers.cfparse('device "{name}" receives nothing'))
def device_receives_nothing(devices, name):
    assert devices[name].received == []


@then(parsers.cfparse('device "{name}" receives "{event}" with count {count:d}'))
def device_receives_count(devices, name, event, count):
    assert devices[name].events(event)[-1] == {"count": count}
