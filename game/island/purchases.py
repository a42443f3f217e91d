"""
Mock in-app store. Nothing here talks to a payment provider; every call
just flips a flag and posts a short-lived status message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .entities import BonusType
from .frame import FrameController

logger = logging.getLogger(__name__)


@dataclass
class PurchaseState:
    remove_ads: bool = False
    bonus_pack: bool = False
    vip: bool = False


class MockStore:
    """Purchase flags survive restarts; they belong to the player, not the session"""

    def __init__(self, controller: FrameController):
        self.controller = controller
        self.purchases = PurchaseState()
        self._status: Optional[str] = None
        self._status_until = 0.0

    def purchase_remove_ads(self) -> str:
        self.purchases.remove_ads = True
        return self._post("Ads removed successfully.")

    def purchase_bonus_pack(self, pack_id: str) -> str:
        kind = BonusType.from_name(pack_id)
        if kind is not BonusType.MULTIBALL:
            return self._post("Unknown bonus pack.")
        self.controller.apply_bonus(kind)
        self.purchases.bonus_pack = True
        return self._post("Bonus pack purchased: Multiball.")

    def restore_purchases(self) -> str:
        self.purchases.remove_ads = True
        self.purchases.bonus_pack = True
        self.purchases.vip = True
        return self._post("Purchases restored.")

    def activate_vip_mode(self) -> str:
        self.purchases.vip = True
        return self._post("VIP mode activated.")

    def is_vip_user(self) -> bool:
        return self.purchases.vip

    @property
    def status(self) -> Optional[str]:
        """Current status message, or None once it has timed out"""
        if self._status is not None and self.controller.now >= self._status_until:
            self._status = None
        return self._status

    def _post(self, message: str) -> str:
        self._status = message
        self._status_until = self.controller.now + self.controller.config.purchase_status_ms
        logger.info("Store: %s", message)
        return message
