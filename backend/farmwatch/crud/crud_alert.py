from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import select, desc, delete
from datetime import datetime, timedelta, timezone

from farmwatch.models.alert import Alert

class CRUDAlert:
    def create(self, db: Session, obj_in: Dict[str, Any]) -> Alert:
        db_obj = Alert(**obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_unacknowledged_alerts(
        self,
        db: Session,
        severity: Optional[str] = None,
        parameter: Optional[str] = None
    ) -> List[Alert]:
        query = select(Alert).where(Alert.acknowledged.is_(False))

        if severity:
            query = query.where(Alert.severity == severity)
        if parameter:
            query = query.where(Alert.parameter == parameter)

        query = query.order_by(desc(Alert.timestamp), desc(Alert.id))
        result = db.execute(query)
        return list(result.scalars().all())

    def acknowledge_alert(self, db: Session, alert_id: int) -> Optional[Alert]:
        alert = db.get(Alert, alert_id)

        if alert:
            alert.acknowledged = True
            alert.acknowledged_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(alert)

        return alert

    def dismiss_alert(self, db: Session, alert_id: int) -> bool:
        alert = db.get(Alert, alert_id)
        if alert is None:
            return False
        db.delete(alert)
        db.commit()
        return True

    def clear_alerts(self, db: Session) -> int:
        result = db.execute(delete(Alert))
        db.commit()
        return result.rowcount or 0

    def get_recent_alerts(
        self,
        db: Session,
        hours: int = 24,
        limit: int = 100
    ) -> List[Alert]:
        start_time = datetime.now(timezone.utc) - timedelta(hours=hours)
        query = select(Alert).where(
            Alert.timestamp >= start_time
        ).order_by(desc(Alert.timestamp), desc(Alert.id)).limit(limit)

        result = db.execute(query)
        return list(result.scalars().all())

alert_crud = CRUDAlert()
