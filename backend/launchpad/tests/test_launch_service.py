from datetime import timedelta

import pytest

from launchpad.chain.results import ADAPTER_UNAVAILABLE, Err
from launchpad.core.errors import DeploymentFailed, RateLimited, Unauthorized
from launchpad.core.time import utcnow
from launchpad.models import AuditLog, Launch, LaunchStatus, User
from launchpad.schemas.launch import LaunchCreateRequest
from launchpad.services import launch_service
from launchpad.services.launch_service import LaunchOrchestrator
from launchpad.tests.fakes import ALICE, BOB, FakeAdapter, seed_launch, seed_user


def request(**overrides):
    body = dict(
        targetHandle="@alice",
        targetDisplayName="Alice",
        tokenName="Alice Coin",
        tokenSymbol="alice",
        tokenImageUrl="https://img.test/alice.png",
    )
    body.update(overrides)
    return LaunchCreateRequest(**body)


def actions(db, launch_id):
    return sorted(a.action for a in db.query(AuditLog).filter(AuditLog.launch_id == launch_id))


def test_create_launch_deploys_and_records_result(db):
    adapter = FakeAdapter(authoritative=False, with_router=True)
    launch = LaunchOrchestrator(db, adapter).create_launch(BOB, request())

    assert launch.status == LaunchStatus.DEPLOYED
    assert launch.target_handle == "alice"
    assert launch.token_symbol == "ALICE"
    assert launch.token_address == "0x" + "0" * 39 + "1"
    assert launch.deploy_tx_hash is not None
    assert launch.pool_id is not None
    assert launch.fee_router_address is not None
    assert launch.claimed is False

    metadata, request_key = adapter.deploy_calls[0]
    assert metadata.symbol == "ALICE"
    assert request_key == launch.id.replace("-", "")
    assert launch.request_key == request_key

    launcher = db.query(User).filter(User.external_id == BOB.external_id).one()
    assert launch.launcher_user_id == launcher.id
    assert actions(db, launch.id) == ["LAUNCH_CREATED", "LAUNCH_DEPLOYED"]


def test_create_launch_requires_identity(db):
    adapter = FakeAdapter()
    with pytest.raises(Unauthorized) as exc:
        LaunchOrchestrator(db, adapter).create_launch(None, request())
    assert exc.value.status_code == 401
    assert db.query(Launch).count() == 0
    assert db.query(User).count() == 0
    assert adapter.deploy_calls == []


def test_deploy_error_marks_launch_failed(db):
    adapter = FakeAdapter()
    adapter.deploy_result = Err(ADAPTER_UNAVAILABLE, "rpc timeout")

    with pytest.raises(DeploymentFailed) as exc:
        LaunchOrchestrator(db, adapter).create_launch(BOB, request())
    assert exc.value.status_code == 500

    launch = db.query(Launch).one()
    db.refresh(launch)
    assert exc.value.details["launchId"] == launch.id
    assert launch.status == LaunchStatus.FAILED
    assert launch.token_address is None
    assert actions(db, launch.id) == ["LAUNCH_CREATED", "LAUNCH_FAILED"]


def test_deploy_exception_marks_launch_failed(db):
    adapter = FakeAdapter()
    adapter.deploy_result = RuntimeError("boom")

    with pytest.raises(DeploymentFailed):
        LaunchOrchestrator(db, adapter).create_launch(BOB, request())

    launch = db.query(Launch).one()
    db.refresh(launch)
    assert launch.status == LaunchStatus.FAILED


def test_second_launch_within_a_day_is_rate_limited(db):
    adapter = FakeAdapter()
    orchestrator = LaunchOrchestrator(db, adapter)
    orchestrator.create_launch(BOB, request())

    with pytest.raises(RateLimited) as exc:
        orchestrator.create_launch(BOB, request(targetHandle="someone_else"))
    assert exc.value.status_code == 429
    assert db.query(Launch).count() == 1
    assert len(adapter.deploy_calls) == 1


def test_failed_launch_does_not_use_up_quota(db):
    adapter = FakeAdapter()
    orchestrator = LaunchOrchestrator(db, adapter)
    adapter.deploy_result = Err(ADAPTER_UNAVAILABLE, "down")
    with pytest.raises(DeploymentFailed):
        orchestrator.create_launch(BOB, request())

    adapter.deploy_result = None
    launch = orchestrator.create_launch(BOB, request())
    assert launch.status == LaunchStatus.DEPLOYED


def test_rate_limit_is_per_user(db):
    orchestrator = LaunchOrchestrator(db, FakeAdapter())
    orchestrator.create_launch(BOB, request())
    launch = orchestrator.create_launch(ALICE, request(targetHandle="bob"))
    assert launch.status == LaunchStatus.DEPLOYED


def test_transitions_only_move_forward(db):
    bob = seed_user(db, BOB)
    launch = seed_launch(db, bob)
    orchestrator = LaunchOrchestrator(db, FakeAdapter())

    with pytest.raises(ValueError):
        orchestrator._transition(launch.id, LaunchStatus.DEPLOYED, LaunchStatus.PENDING)
    with pytest.raises(ValueError):
        orchestrator._transition(launch.id, LaunchStatus.FAILED, LaunchStatus.DEPLOYING)


def test_transition_is_guarded_by_current_status(db):
    bob = seed_user(db, BOB)
    launch = seed_launch(db, bob, status=LaunchStatus.DEPLOYED)
    orchestrator = LaunchOrchestrator(db, FakeAdapter())

    assert orchestrator._transition(launch.id, LaunchStatus.DEPLOYING, LaunchStatus.FAILED) is False
    db.refresh(launch)
    assert launch.status == LaunchStatus.DEPLOYED


def test_list_launches_newest_first_with_pagination(db):
    bob = seed_user(db, BOB)
    now = utcnow()
    for i in range(5):
        seed_launch(db, bob, created_at_utc=now - timedelta(minutes=10 - i))
    seed_launch(db, bob, status=LaunchStatus.FAILED, created_at_utc=now)

    items, pagination = launch_service.list_launches(db, page=1, limit=2)
    assert [l.token_symbol for l in items] == ["TK6", "TK5"]
    assert pagination == {"page": 1, "limit": 2, "total": 6, "totalPages": 3}

    items, pagination = launch_service.list_launches(db, page=3, limit=2, deployed_only=True)
    assert [l.token_symbol for l in items] == ["TK1"]
    assert pagination["total"] == 5
    assert pagination["totalPages"] == 3
