from .config import IntegrationSettings, load_settings_from_env
from .favorites import FavoritesListManager
from .icons import ICON_SIZE_LADDER, IconResolver, bucket_size, decode_data_url
from .installer import Installer
from .integration import WebappIntegration
from .reconciler import DirectoryReconciler
from .shebang import SHEBANG, RepairResult, repair

__all__ = [
    "DirectoryReconciler",
    "FavoritesListManager",
    "ICON_SIZE_LADDER",
    "IconResolver",
    "Installer",
    "IntegrationSettings",
    "RepairResult",
    "SHEBANG",
    "WebappIntegration",
    "bucket_size",
    "decode_data_url",
    "load_settings_from_env",
    "repair",
]
