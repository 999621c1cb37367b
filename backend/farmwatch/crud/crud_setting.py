from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from farmwatch.models.setting import SettingEntry


class CRUDSetting:
    def get_many(self, db: Session, keys: Iterable[str]) -> Dict[str, str]:
        result = db.execute(select(SettingEntry).where(SettingEntry.key.in_(list(keys))))
        return {row.key: row.value for row in result.scalars().all()}

    def set_many(self, db: Session, values: Dict[str, str]) -> None:
        for key, value in values.items():
            entry = db.get(SettingEntry, key)
            if entry is None:
                db.add(SettingEntry(key=key, value=value))
            else:
                entry.value = value
        db.commit()

setting_crud = CRUDSetting()
