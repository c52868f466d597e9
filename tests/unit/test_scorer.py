import pytest

from provider_router.domain.models import (
    CallerProfile,
    ProviderCapability,
    ScoredCandidate,
    TaskDescriptor,
)
from provider_router.routing.ledger import PerformanceLedger
from provider_router.routing.scorer import ProfileWeighting, TaskScorer


def _capability(provider_id: str = "p", **overrides) -> ProviderCapability:
    values = dict(
        id=provider_id,
        family="custom",
        cost_efficiency=5,
        speed=5,
        accuracy=5,
        context_window_tokens=10_000,
    )
    values.update(overrides)
    return ProviderCapability(**values)


def _score(capability, ledger=None, **task_fields) -> float:
    scorer = TaskScorer(ledger or PerformanceLedger())
    task = TaskDescriptor(**{"type": "analysis", **task_fields})
    return scorer.score_one(capability, task)


def test_base_score_includes_neutral_history():
    # 0.3*5 + 0.2*5 + 0.2*5 + 0.1*5
    assert _score(_capability()) == pytest.approx(4.0)


def test_optimal_task_bonus():
    assert _score(_capability(optimal_for=["analysis"])) == pytest.approx(6.0)


@pytest.mark.parametrize(
    "task_type,strengths,expected",
    [
        ("analysis", ["analysis"], 5.0),
        ("analysis", ["complex-analysis"], 4.0),
        ("structured-data", ["data"], 5.0),
        ("code", ["code-generation"], 4.0),
        ("reasoning", ["reasoning", "reason"], 5.0),
    ],
)
def test_strength_bonus_matches_text_inside_task_type(task_type, strengths, expected):
    capability = _capability(strengths=strengths)

    assert _score(capability, type=task_type) == pytest.approx(expected)


@pytest.mark.parametrize(
    "urgency,expected",
    [("high", 4.0 + 2.4), ("medium", 4.0), ("low", 4.0 + 0.6)],
)
def test_urgency_weights_speed_or_cost(urgency, expected):
    # base: 0.3*5 + 0.2*8 + 0.2*2 + 0.5 = 4.0
    capability = _capability(speed=8, cost_efficiency=2)

    assert _score(capability, urgency=urgency) == pytest.approx(expected)


@pytest.mark.parametrize(
    "complexity,expected",
    [("high", 4.0 + 2.0), ("medium", 4.0), ("low", 4.0 + 2.4 + 0.6)],
)
def test_complexity_weights_accuracy_or_speed_and_cost(complexity, expected):
    capability = _capability(speed=8, cost_efficiency=2)

    assert _score(capability, complexity=complexity) == pytest.approx(expected)


def test_history_influences_score():
    ledger = PerformanceLedger()
    capability = _capability()
    before = _score(capability, ledger)

    ledger.record_outcome(capability.id, True)

    assert _score(capability, ledger) == pytest.approx(before + 0.01)


def test_score_returns_one_entry_per_candidate():
    scorer = TaskScorer(PerformanceLedger())
    candidates = [_capability("a"), _capability("b", accuracy=9)]

    scored = scorer.score(candidates, TaskDescriptor(type="analysis"))

    assert [s.capability.id for s in scored] == ["a", "b"]
    assert scored[1].score > scored[0].score


def _weighted(capability, profile) -> float:
    [candidate] = ProfileWeighting().apply(
        [ScoredCandidate(capability=capability, score=0.0)], profile
    )
    return candidate.score


def test_profile_weighting_without_profile_is_identity():
    scored = [ScoredCandidate(capability=_capability(), score=3.0)]

    assert ProfileWeighting().apply(scored, None) == scored


def test_profile_preferred_provider_bonus():
    profile = CallerProfile(id="c", history={"preferred_providers": ["p"]})

    assert _weighted(_capability("p"), profile) == pytest.approx(1.0)
    assert _weighted(_capability("q"), profile) == pytest.approx(0.0)


def test_profile_style_and_length_bonuses():
    profile = CallerProfile(
        id="c",
        preferences={
            "communication_style": "technical",
            "response_length": "comprehensive",
        },
    )
    coder = _capability(strengths=["code-generation"], context_window_tokens=128_000)
    small = _capability(context_window_tokens=50_000)

    assert _weighted(coder, profile) == pytest.approx(1.0)
    assert _weighted(small, profile) == pytest.approx(0.0)


@pytest.mark.parametrize(
    "ai_score,capability_fields,expected",
    [
        (90, {"accuracy": 9}, 0.3),
        (90, {"accuracy": 8, "speed": 10}, 0.0),
        (40, {"speed": 8}, 0.3),
        (40, {"speed": 7}, 0.0),
        (60, {"accuracy": 10, "speed": 10}, 0.0),
    ],
)
def test_profile_ai_score_bonus(ai_score, capability_fields, expected):
    profile = CallerProfile(id="c", ai_score=ai_score)

    assert _weighted(_capability(**capability_fields), profile) == pytest.approx(expected)
