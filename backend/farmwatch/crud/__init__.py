from farmwatch.crud.crud_alert import alert_crud
from farmwatch.crud.crud_setting import setting_crud

__all__ = ["alert_crud", "setting_crud"]
