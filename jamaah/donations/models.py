"""Data models for donation campaigns."""

from __future__ import annotations

from typing import TypedDict

ANONYMOUS_DONOR = "Hamba Allah"
DONATION_STATUS_PENDING = "pending"


class _CampaignBase(TypedDict):
    id: str
    title: str
    description: str
    target_amount: int
    current_amount: int
    created_at: int


class DonationCampaign(_CampaignBase, total=False):
    """A campaign stored at ``campaign:<id>``."""

    image: str
    category: str
    deadline: str
    created_by: str


class Donation(TypedDict):
    """A pledge stored at ``donation:<id>``; nothing is ever charged."""

    id: str
    campaign_id: str
    amount: int
    donor_name: str
    donor_id: str | None
    is_anonymous: bool
    created_at: int
    status: str
