from datetime import timedelta

from launchpad.core.time import utcnow
from launchpad.models import LaunchStatus
from launchpad.services.rate_limit_service import LaunchRateLimiter
from launchpad.tests.fakes import BOB, seed_launch, seed_user


def test_allows_first_launch(db):
    bob = seed_user(db, BOB)
    assert LaunchRateLimiter().allow(db, bob.id)


def test_launch_inside_window_blocks(db):
    bob = seed_user(db, BOB)
    seed_launch(db, bob, created_at_utc=utcnow() - timedelta(hours=23))
    limiter = LaunchRateLimiter(window=timedelta(hours=24), max_launches=1)
    assert limiter.recent_launches(db, bob.id) == 1
    assert not limiter.allow(db, bob.id)


def test_launch_outside_window_does_not_count(db):
    bob = seed_user(db, BOB)
    seed_launch(db, bob, created_at_utc=utcnow() - timedelta(hours=25))
    assert LaunchRateLimiter(window=timedelta(hours=24), max_launches=1).allow(db, bob.id)


def test_failed_launches_are_excluded(db):
    bob = seed_user(db, BOB)
    seed_launch(db, bob, status=LaunchStatus.FAILED, created_at_utc=utcnow() - timedelta(minutes=5))
    assert LaunchRateLimiter(window=timedelta(hours=24), max_launches=1).allow(db, bob.id)


def test_in_flight_launches_count(db):
    bob = seed_user(db, BOB)
    seed_launch(db, bob, status=LaunchStatus.DEPLOYING)
    assert not LaunchRateLimiter(window=timedelta(hours=24), max_launches=1).allow(db, bob.id)


def test_configurable_quota(db):
    bob = seed_user(db, BOB)
    seed_launch(db, bob)
    limiter = LaunchRateLimiter(window=timedelta(hours=24), max_launches=2)
    assert limiter.allow(db, bob.id)
    seed_launch(db, bob)
    assert not limiter.allow(db, bob.id)
