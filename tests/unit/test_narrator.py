"""Unit tests for factor narration"""

import pytest
from agrilend_gateway.domain.models import ScoringInput
from agrilend_gateway.domain.narrator import narrate
from agrilend_gateway.domain.profiles import PROFILES, SELF_ASSESSMENT, UNDERWRITING
from agrilend_gateway.domain.scoring import calculate_score
from agrilend_gateway.domain.tiers import CategoricalFactor


def _effects(factor):
    if isinstance(factor, CategoricalFactor):
        return list(factor.effects.values()) + [factor.default]
    return [band.value for band in factor.bands.bands] + [factor.bands.otherwise]


@pytest.mark.parametrize("definition", list(PROFILES.values()))
def test_every_scoring_band_is_narrated(definition):
    """A band that moves the score must say why"""
    for factor in definition.factors:
        for effect in _effects(factor):
            if effect.delta != 0:
                assert effect.narration, f"{definition.profile.value}.{factor.name} has an unnarrated band"


def _narrate(scoring_input, definition):
    breakdown = calculate_score(scoring_input, definition)
    return narrate(breakdown.contributions, scoring_input, breakdown.score, definition)


def test_strong_self_assessment_has_reasons_only():
    narration = _narrate(
        ScoringInput(monthly_income=6000, farm_size_ha=2, years_farming=6, has_collateral=True),
        SELF_ASSESSMENT,
    )

    assert narration.reasons == (
        "Good monthly income",
        "Substantial farm size",
        "Significant farming experience",
        "Has collateral for loan security",
        "No existing loan obligations",
    )
    assert narration.recommendations == ()
    assert narration.risk_factors == ()


def test_weak_self_assessment_recommendations_in_factor_order_then_advisories():
    narration = _narrate(ScoringInput(existing_monthly_obligations=200), SELF_ASSESSMENT)

    assert narration.reasons == ()
    assert narration.recommendations == (
        "Focus on increasing your monthly income through diversified farming or additional income sources",
        "Consider expanding your farm operations or improving productivity on existing land",
        "Gain more farming experience through mentorship, training programs, or working with experienced farmers",
        "Consider providing collateral (land, equipment, livestock) to improve loan terms and approval chances",
        "Focus on reducing your existing loan burden before applying for new loans",
        "Work on improving your overall credit profile before applying",
        "Consider value-added farming activities to increase income per hectare",
        "Join farming cooperatives or associations for support and guidance",
    )


def test_mid_score_self_assessment_advises_smaller_loans():
    # 300 + 100 + 70 + 60 - 20 + 20 (obligations at 30% of income) = 530
    scoring_input = ScoringInput(
        monthly_income=3000, farm_size_ha=1, years_farming=2, existing_monthly_obligations=900
    )
    narration = _narrate(scoring_input, SELF_ASSESSMENT)

    assert "Consider smaller loan amounts initially to build credit history" in narration.recommendations
    assert "Work on improving your overall credit profile before applying" not in narration.recommendations


def test_underwriting_favorable_factors_are_negative_deltas():
    scoring_input = ScoringInput(
        monthly_income=4000,
        requested_amount=60000,
        verification_status="verified",
        stored_credit_score=750,
    )
    narration = _narrate(scoring_input, UNDERWRITING)

    assert narration.reasons == (
        "Farmer verified by a field data collector",
        "Strong credit score on record",
    )
    assert narration.recommendations[0] == "Consider a smaller loan amount to limit exposure"
    assert "Poor payment history" in narration.risk_factors


def test_underwriting_risk_flags():
    scoring_input = ScoringInput(
        requested_amount=150000,
        verification_status="rejected",
        stored_credit_score=100,
        purpose="debt_consolidation",
    )
    narration = _narrate(scoring_input, UNDERWRITING)

    assert narration.risk_factors == (
        "High loan amount",
        "Poor payment history",
        "Farmer verification rejected",
        "Low credit score",
        "High-risk loan purpose",
    )
    assert narration.reasons == ()
    assert narration.recommendations[-1] == "Confirm a monthly income of at least 1,000 ETB before approval"


def test_narration_matches_contributions():
    """One reason or recommendation per non-zero factor, never more"""
    scoring_input = ScoringInput(monthly_income=2000, farm_size_ha=0.2, years_farming=3)
    breakdown = calculate_score(scoring_input, SELF_ASSESSMENT)
    narration = narrate(breakdown.contributions, scoring_input, breakdown.score, SELF_ASSESSMENT)

    favorable = [c for c in breakdown.contributions if c.delta > 0]
    assert len(narration.reasons) == len(favorable)
    assert list(narration.reasons) == [c.narration for c in favorable]
