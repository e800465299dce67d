"""Gateway audit log writer."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gdms.config import settings
from gdms.models import GatewayAction, GatewayLog
from gdms.storage.repositories import Repository

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Appends GatewayLog entries inside the caller's transaction.

    Each entry is written under a SAVEPOINT. Unless ``strict`` is set, a
    failed write only rolls back the savepoint and is logged, so the
    gateway mutation it describes still goes through.
    """

    def __init__(self, db: AsyncSession, strict: bool | None = None):
        self.db = db
        self.logs = Repository(db, GatewayLog)
        self.strict = settings.audit_log_strict if strict is None else strict

    async def record(
        self, gateway_id: str, action: GatewayAction, details: dict[str, Any]
    ) -> GatewayLog | None:
        try:
            async with self.db.begin_nested():
                entry = await self.logs.insert(
                    GatewayLog(gateway_id=gateway_id, action=action.value, details=details)
                )
        except SQLAlchemyError:
            if self.strict:
                raise
            logger.exception("Failed to write %s audit entry for gateway %s", action.value, gateway_id)
            return None
        logger.debug("Audit %s for gateway %s (log id %s)", action.value, gateway_id, entry.id)
        return entry

    async def history(self, gateway_id: str) -> list[GatewayLog]:
        """Entries for one gateway, oldest first."""
        return await self.logs.find_all_ordered("id", descending=False, gateway_id=gateway_id)
