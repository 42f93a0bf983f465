"""Service layer for donation campaigns.

Donations are recorded as ``pending`` pledges; no payment is processed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jamaah.core.store import Repository
from jamaah.errors import NotFoundError
from jamaah.utils import new_id, now_ms, sort_newest_first

from .models import ANONYMOUS_DONOR, DONATION_STATUS_PENDING

if TYPE_CHECKING:
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import DonationCampaign, Donation


class DonationService:
    """Handles business logic and data access for campaigns and donations."""

    @staticmethod
    def _campaigns(store: KVStore) -> Repository[DonationCampaign]:
        return Repository(store, "campaign:")

    @staticmethod
    def list_campaigns(store: KVStore) -> list[DonationCampaign]:
        return sort_newest_first(DonationService._campaigns(store).list(), "created_at")

    @staticmethod
    def create_campaign(
        store: KVStore, user_id: str, data: dict[str, Any]
    ) -> DonationCampaign:
        campaign_id = new_id()
        campaign: DonationCampaign = {
            "id": campaign_id,
            "title": data["title"],
            "description": data.get("description") or "",
            "target_amount": data["target_amount"],
            "current_amount": 0,
            "created_at": now_ms(),
            "created_by": user_id,
        }
        for field in ("image", "category", "deadline"):
            if data.get(field):
                campaign[field] = data[field]  # type: ignore[literal-required]
        return DonationService._campaigns(store).put(campaign_id, campaign)

    @staticmethod
    def donate(
        store: KVStore, identity: Identity | None, data: dict[str, Any]
    ) -> Donation:
        """Record a pledge and add its amount to the campaign total.

        The total is read, incremented and written back without a version
        check; concurrent donations can lose an increment.
        """
        campaigns = DonationService._campaigns(store)
        campaign_id = data["campaign_id"]
        if not campaigns.exists(campaign_id):
            raise NotFoundError("Kampanye tidak ditemukan")

        anonymous = bool(data.get("is_anonymous"))
        donor_name = data.get("donor_name") or (
            identity.get("name") if identity else None
        )
        donation: Donation = {
            "id": new_id(),
            "campaign_id": campaign_id,
            "amount": data["amount"],
            "donor_name": ANONYMOUS_DONOR if anonymous or not donor_name else donor_name,
            "donor_id": identity["id"] if identity else None,
            "is_anonymous": anonymous,
            "created_at": now_ms(),
            "status": DONATION_STATUS_PENDING,
        }
        store.set(f"donation:{donation['id']}", donation)

        campaigns.update(
            campaign_id,
            lambda c: {**c, "current_amount": (c.get("current_amount") or 0) + donation["amount"]},
        )
        return donation
