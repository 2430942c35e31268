from .base import Base
from .option import OptionRecord, AppSettingRecord
from .preset import PresetRecord

__all__ = ["Base", "OptionRecord", "AppSettingRecord", "PresetRecord"]
