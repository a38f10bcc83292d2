from decimal import Decimal as D

from taxengine.core.advisor import (
    DEFAULT_RULES,
    AdvisorContext,
    OptimizationRule,
    advise,
)
from taxengine.core.room import ContributionRoom


def _ctx(income: str, rrsp_room: str = "13500", tfsa_room: str = "7000", savings: str = "2767.5"):
    room = ContributionRoom(
        rrsp_room=D(rrsp_room),
        tfsa_room=D(tfsa_room),
        marginal_rate_pct=D("20.5"),
        rrsp_tax_savings=D(savings),
    )
    return AdvisorContext(income=D(income), taxable_income=D(income), room=room)


def test_reference_income_gets_all_four_suggestions_in_order():
    advice = advise(_ctx("75000"))
    assert [s.key for s in advice.suggestions] == ["rrsp", "tfsa", "home_office", "medical"]
    assert [s.estimated_savings for s in advice.suggestions] == [D("2767.5"), D("105"), D("400"), D("200")]
    assert advice.potential_savings == D("3472.5")


def test_descriptions():
    descriptions = [s.description for s in advise(_ctx("75000")).suggestions]
    assert descriptions == [
        "Maximize RRSP contribution: Save $2,768 in taxes",
        "Use TFSA room: $7,000 tax-free growth potential",
        "Claim home office expenses if working from home",
        "Claim eligible medical expenses above 3% of net income",
    ]


def test_income_thresholds_are_strict():
    keys = [s.key for s in advise(_ctx("30000")).suggestions]
    assert "home_office" not in keys
    keys = [s.key for s in advise(_ctx("30001")).suggestions]
    assert "home_office" in keys and "medical" not in keys
    keys = [s.key for s in advise(_ctx("40000.01")).suggestions]
    assert "medical" in keys


def test_zero_room_skips_registered_account_rules():
    advice = advise(_ctx("0", rrsp_room="0", tfsa_room="0", savings="0"))
    assert advice.suggestions == ()
    assert advice.potential_savings == D("0")


def test_custom_rules_are_evaluated_in_given_order():
    always = OptimizationRule(
        key="always",
        applies=lambda ctx: True,
        savings=lambda ctx: D("1"),
        describe=lambda ctx, amount: "always",
    )
    advice = advise(_ctx("75000"), rules=(always, DEFAULT_RULES[0]))
    assert [s.key for s in advice.suggestions] == ["always", "rrsp"]
