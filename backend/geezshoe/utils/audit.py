import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from geezshoe.models.log import Log

logger = logging.getLogger("geezshoe.audit")


# Persist one audit entry and mirror it to the application log
def write_log(db: Session, *, user_id: Optional[str], action: str, resource: str,
              status: str = "SUCCESS", ip: Optional[str] = None, meta: Optional[dict] = None) -> Log:
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()

    level = logging.INFO if status == "SUCCESS" else logging.WARNING
    logger.log(level, "%s %s %s by %s from %s", action, resource, status, user_id or "-", ip or "-")
    return entry
