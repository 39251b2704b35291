"""Tests for the single-slot in-flight guard."""
from asl_translator.core.in_flight import InFlightGuard


def test_second_acquire_is_rejected_until_release():
    guard = InFlightGuard('detection')

    token = guard.try_acquire()
    assert token is not None
    assert guard.busy
    assert guard.try_acquire() is None

    assert guard.release(token)
    assert not guard.busy
    assert guard.try_acquire() is not None


def test_reset_makes_old_token_release_a_no_op():
    guard = InFlightGuard('detection')
    old = guard.try_acquire()

    guard.reset()
    new = guard.try_acquire()

    assert not guard.release(old)
    assert guard.busy
    assert guard.release(new)
    assert not guard.busy


def test_release_twice_only_frees_once():
    guard = InFlightGuard('speech')
    token = guard.try_acquire()

    assert guard.release(token)
    assert not guard.release(token)
