from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.timeclock_portal.timeclock_portal.admin.service import AdminAuthService
from src.timeclock_portal.timeclock_portal.core.enums import AuditAction
from src.timeclock_portal.timeclock_portal.core.exceptions import AuthenticationError
from src.timeclock_portal.timeclock_portal.geo.model import OriginMetadata


def test_admin_login_records_origin(recorder, audit_repo, fixed_now):
    svc = AdminAuthService(generate_password_hash("s3cret"), recorder)

    svc.authenticate("s3cret", origin=OriginMetadata(ip="192.0.2.1", city="Oslo"), now=fixed_now)

    assert audit_repo.events[-1].action == AuditAction.ADMIN_LOGIN
    assert audit_repo.events[-1].actor is None
    assert audit_repo.events[-1].origin.city == "Oslo"


@pytest.mark.parametrize("password", ["", "wrong"])
def test_admin_login_wrong_password(recorder, audit_repo, password):
    svc = AdminAuthService(generate_password_hash("s3cret"), recorder)

    with pytest.raises(AuthenticationError):
        svc.authenticate(password)

    assert audit_repo.events == []


def test_admin_login_with_unusable_hash(recorder):
    svc = AdminAuthService("!", recorder)

    with pytest.raises(AuthenticationError):
        svc.authenticate("anything")
