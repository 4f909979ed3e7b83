"""Map effective weeks to a plan archetype."""
from app.models.plan import PlanType
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig


def select_plan_type(weeks: int, config: PlanningConfig = DEFAULT_CONFIG) -> PlanType:
    for upper, plan_type in config.plan_type_bounds:
        if weeks <= upper:
            return plan_type
    return PlanType.LONG_TERM
