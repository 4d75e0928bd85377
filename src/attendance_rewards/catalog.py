"""Default reward and badge catalogs."""

from __future__ import annotations

from attendance_rewards.domain import BadgeDefinition, RewardCategory, RewardDefinition

POINT_COLLECTOR = "point_collector"
STREAK_MASTER = "streak_master"

BADGE_CATALOG: dict[str, BadgeDefinition] = {
    badge.badge_id: badge
    for badge in (
        BadgeDefinition("early_bird", "Early Bird", "Checked in early 5 times", "sunrise", "#F59E0B"),
        BadgeDefinition(STREAK_MASTER, "Streak Master", "Maintained a 7-day streak", "flame", "#EF4444"),
        BadgeDefinition("perfect_week", "Perfect Week", "Perfect attendance for a week", "trophy", "#10B981"),
        BadgeDefinition(POINT_COLLECTOR, "Point Collector", "Earned 100 total points", "medal", "#8B5CF6"),
        BadgeDefinition("consistency_king", "Consistency King", "Checked in on time 20 times", "clock", "#06B6D4"),
    )
}


def _reward(
    reward_id: str,
    name: str,
    description: str,
    points_cost: int,
    category: RewardCategory,
    icon: str,
) -> RewardDefinition:
    return RewardDefinition(
        reward_id=reward_id,
        name=name,
        description=description,
        points_cost=points_cost,
        category=category,
        icon=icon,
    )


DEFAULT_REWARDS: tuple[RewardDefinition, ...] = (
    # Weekly wins
    _reward("w1", "$5 Maverik Card", "Fuel up with a $5 Maverik gift card", 5, RewardCategory.WEEKLY, "card"),
    _reward("w2", "Extra 15min Break", "Take an extra 15-minute break", 8, RewardCategory.WEEKLY, "time"),
    # Monthly momentum
    _reward("m1", "$25 Gift Card", "Choose from popular retailers", 25, RewardCategory.MONTHLY, "gift"),
    _reward("m2", "Casual Friday Pass", "Dress casual for a Friday", 30, RewardCategory.MONTHLY, "shirt"),
    _reward("m3", "Premium Parking Spot", "Reserve the best parking spot for a week", 40, RewardCategory.MONTHLY, "car"),
    # Quarterly crushers
    _reward("q1", "$100 Gift Card", "High-value gift card of your choice", 75, RewardCategory.QUARTERLY, "gift"),
    _reward("q2", "Half Day Off", "Take a half day off with pay", 100, RewardCategory.QUARTERLY, "calendar"),
    _reward("q3", "Team Lunch Sponsorship", "We sponsor lunch for you and your team", 125, RewardCategory.QUARTERLY, "restaurant"),
    # Annual legends
    _reward("a1", "Paid Weekend Trip", "Two-day paid trip to a destination of choice", 300, RewardCategory.ANNUAL, "airplane"),
    _reward("a2", "Extra Vacation Day", "Additional paid vacation day", 250, RewardCategory.ANNUAL, "calendar"),
    _reward("a3", "VIP Experience", "Premium event or experience package", 400, RewardCategory.ANNUAL, "star"),
)
