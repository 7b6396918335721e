from __future__ import annotations

from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash

from ..audit.service import AuditRecorder
from ..core.enums import AuditAction
from ..core.exceptions import AuthenticationError
from ..geo.model import OriginMetadata


class AdminAuthService:
    """Use case: admin sign-in with the shared admin password."""

    def __init__(self, password_hash: str, recorder: AuditRecorder):
        self._password_hash = password_hash
        self._recorder = recorder

    def authenticate(
        self,
        password: str,
        *,
        origin: Optional[OriginMetadata] = None,
        now: Optional[datetime] = None,
    ) -> None:
        try:
            ok = bool(password) and check_password_hash(self._password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hash in configuration
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")

        self._recorder.record(AuditAction.ADMIN_LOGIN, origin=origin, now=now)
