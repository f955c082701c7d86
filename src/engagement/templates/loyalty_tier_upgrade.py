"""Loyalty tier upgrade template: congratulates a client on a new tier."""

from enum import Enum

from engagement.notification.notification import NotificationType


class LoyaltyTier(Enum):
    STANDARD = "Standard"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


LOYALTY_REWARDS = {
    LoyaltyTier.STANDARD.value: "None",
    LoyaltyTier.BRONZE.value: "10% off your next quote",
    LoyaltyTier.SILVER.value: "One month of free maintenance",
    LoyaltyTier.GOLD.value: "Permanent VIP discount",
}


class LoyaltyTierUpgradeTemplate:
    notification_type = NotificationType.LOYALTY_TIER_UPGRADE.value

    @staticmethod
    def render(context: dict) -> dict:
        new_tier = context["new_tier"]
        reward = context.get("reward") or LOYALTY_REWARDS.get(new_tier, "None")
        return {
            "title": f"New loyalty tier: {new_tier}!",
            "message": f"Congratulations! You reached the {new_tier} tier. Your new reward: {reward}",
            "data": {
                "old_tier": context.get("old_tier"),
                "new_tier": new_tier,
                "reward": reward,
                "client_id": context.get("client_id"),
            },
        }
