from typing import Dict, Optional

from app.core.config import Settings, get_settings
from app.models.flight import Network
from app.services.networks.base import NetworkStrategy
from app.services.networks.ivao import IvaoStrategy
from app.services.networks.vatsim import VatsimStrategy


def build_strategies(settings: Optional[Settings] = None) -> Dict[Network, NetworkStrategy]:
    """Strategies for every network enabled in settings"""
    settings = settings or get_settings()

    strategies: Dict[Network, NetworkStrategy] = {}
    if settings.ENABLE_IVAO_SYNC:
        strategies[Network.IVAO] = IvaoStrategy()
    if settings.ENABLE_VATSIM_SYNC:
        strategies[Network.VATSIM] = VatsimStrategy()
    return strategies


__all__ = [
    "NetworkStrategy",
    "IvaoStrategy",
    "VatsimStrategy",
    "build_strategies",
]
