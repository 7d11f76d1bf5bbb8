from .resource_loader import APP_NAME, get_config_dir, get_settings_path
from .warning_manager import WarningManager, WarningType, warning_manager
