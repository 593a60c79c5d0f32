"""Pytest decorators for seed data generation."""

from collections.abc import Callable, Iterable
from typing import Any

from refseed.models import SeedPlan, Seeds
from refseed.seeder import Seeder


def seed_data(
    factory: str,
    count: int = 1,
    args: dict[str, Any] | None = None,
    reuse_refs: bool = True,
):
    """
    Decorator to inject seeded records into pytest test functions.

    Usage:
        @seed_data("channel", count=2)
        @seed_data("user", count=5)
        async def test_api(seeds):
            assert len(seeds.user) == 5

    Plans run top to bottom. The decorator works with a `seeds` fixture that
    calls run_seed_plans() with the test function's plans.
    """

    def decorator(func: Callable) -> Callable:
        if not hasattr(func, "_seed_plans"):
            func._seed_plans = []

        # Decorators apply bottom-up; insert first to keep reading order
        func._seed_plans.insert(
            0,
            SeedPlan(factory=factory, count=count, args=args or {}, reuse_refs=reuse_refs),
        )

        return func

    return decorator


def get_seed_plans(func: Callable) -> list[SeedPlan]:
    return list(getattr(func, "_seed_plans", []))


async def run_seed_plans(seeder: Seeder, plans: Iterable[SeedPlan]) -> Seeds:
    """
    Execute seed plans in order.

    Args:
        seeder: Seeder with factories and a writer
        plans: Plans to run

    Returns:
        Seeds with the seeded records grouped by factory name
    """
    seeds = Seeds()
    for plan in plans:
        results = await seeder.seed_many(
            plan.factory, args=plan.args, count=plan.count, reuse_refs=plan.reuse_refs
        )
        seeds.add(plan.factory, [r.record for r in results])
    return seeds
