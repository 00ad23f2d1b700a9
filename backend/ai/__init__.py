from .profiles import (
    AI_PROFILES, assign_random_profiles, create_custom_profile, get_all_profiles,
    get_profile, get_random_profile
)
from .tier_analyzer import (
    PositionTier, analyze_position_tiers, calculate_tier_urgency, get_best_in_tier,
    get_remaining_in_tier, get_tier_distribution, identify_tiers, is_last_in_tier,
    should_draft_position_now
)
from .psychology import (
    analyze_draft_context, calculate_panic_bonus, calculate_panic_score,
    calculate_reach_penalty, calculate_scarcity_bonus, calculate_scarcity_index,
    detect_positional_run, detect_value_falling_off, should_panic_pick,
    should_reach_for_scarcity
)
from .need_calculator import (
    RosterBalance, calculate_need_value, calculate_position_need, calculate_team_needs,
    evaluate_roster_balance, get_highest_need_position, should_reach_for_need
)
from .decision_engine import AIDecisionEngine, explain_pick, simulate_thinking_delay, validate_ai_pick

__all__ = [
    "AI_PROFILES",
    "assign_random_profiles",
    "create_custom_profile",
    "get_all_profiles",
    "get_profile",
    "get_random_profile",

    "PositionTier",
    "analyze_position_tiers",
    "calculate_tier_urgency",
    "get_best_in_tier",
    "get_remaining_in_tier",
    "get_tier_distribution",
    "identify_tiers",
    "is_last_in_tier",
    "should_draft_position_now",

    "analyze_draft_context",
    "calculate_panic_bonus",
    "calculate_panic_score",
    "calculate_reach_penalty",
    "calculate_scarcity_bonus",
    "calculate_scarcity_index",
    "detect_positional_run",
    "detect_value_falling_off",
    "should_panic_pick",
    "should_reach_for_scarcity",

    "RosterBalance",
    "calculate_need_value",
    "calculate_position_need",
    "calculate_team_needs",
    "evaluate_roster_balance",
    "get_highest_need_position",
    "should_reach_for_need",

    "AIDecisionEngine",
    "explain_pick",
    "simulate_thinking_delay",
    "validate_ai_pick",
]
