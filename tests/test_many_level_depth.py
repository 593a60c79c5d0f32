"""Test three-level dependency chains."""

import pytest
from faker import Faker

from refseed import Factory, InMemoryWriter, Seeder, ref

fake = Faker()


@pytest.fixture
def plan_writer() -> InMemoryWriter:
    return InMemoryWriter()


@pytest.fixture
def plan_seeder(plan_writer) -> Seeder:
    """plan <- billing_cycle <- subscription, subscription also refs plan."""
    seeder = Seeder(plan_writer)
    seeder.register(
        # Registered before its dependencies on purpose
        Factory(
            name="subscription",
            table_name="subscriptions",
            primary_key="subscriptionID",
            provider=lambda args, context: {"name": fake.name()},
            refs=[
                ref(factory_name="plan", foreign_key="planID"),
                ref(factory_name="billing_cycle", foreign_key="billingCycleID"),
            ],
        ),
        Factory(
            name="plan",
            table_name="plans",
            primary_key="planID",
            provider=lambda args, context: {"name": fake.word()},
        ),
        Factory(
            name="billing_cycle",
            table_name="billing_cycles",
            primary_key="billingCycleID",
            provider=lambda args, context: {"name": fake.word()},
            refs=[ref(factory_name="plan", foreign_key="planID")],
        ),
    )
    return seeder


@pytest.mark.asyncio
async def test_subscription_with_explicit_plan_and_cycle(plan_seeder, plan_writer):
    """Test explicitly supplied plan and billing cycle are not duplicated."""
    plan = await plan_seeder.seed("plan")
    billing_cycle = await plan_seeder.seed("billing_cycle", {"planID": plan})
    await plan_seeder.seed("subscription", {"planID": plan, "billingCycleID": billing_cycle})

    assert len(plan_writer.get_data("subscriptions")) == 1
    assert len(plan_writer.get_data("plans")) == 1
    assert len(plan_writer.get_data("billing_cycles")) == 1


@pytest.mark.asyncio
async def test_subscription_reuses_plan_for_billing_cycle(plan_seeder, plan_writer):
    """Test the billing cycle links to the plan created for the subscription."""
    _, subscription, context = await plan_seeder.seed("subscription")

    assert len(plan_writer.get_data("subscriptions")) == 1
    assert len(plan_writer.get_data("plans")) == 1
    assert len(plan_writer.get_data("billing_cycles")) == 1

    plan_id = plan_writer.get_data("plans")[0]["planID"]
    assert subscription["planID"] == plan_id
    assert plan_writer.get_data("billing_cycles")[0]["planID"] == plan_id
    assert context["billing_cycle"]["planID"] == plan_id


@pytest.mark.asyncio
async def test_subscription_without_reuse_duplicates_plan(plan_seeder, plan_writer):
    """Test no reuse creates a separate plan for the billing cycle."""
    await plan_seeder.seed("subscription", reuse_refs=False)

    assert len(plan_writer.get_data("plans")) == 2
    assert len(plan_writer.get_data("billing_cycles")) == 1
