from farmwatch.models.alert import Alert
from farmwatch.models.setting import SettingEntry

__all__ = ["Alert", "SettingEntry"]
