"""Shared BDD fixtures and step definitions for the Engagement domain."""

import pytest
from pytest_bdd import given, parsers

from engagement.notification.dispatch import dispatch


@pytest.fixture()
def devices():
    """Named fake connections opened during a scenario."""
    return {}


@given(parsers.cfparse('recipient "{user_id}" with an email address'))
def recipient_with_email(make_recipient, user_id):
    make_recipient(user_id)


@given(parsers.cfparse('recipient "{user_id}" without an email address'))
def recipient_without_email(make_recipient, user_id):
    make_recipient(user_id, email=None)


@given(parsers.cfparse('a notification titled "{title}" is dispatched to "{user_id}"'))
def given_dispatched(title, user_id):
    dispatch(user_id, "ticket_update", title, "Body")
