import pytest

from provider_router.domain.models import CallerProfile, ProviderCapability, TaskDescriptor
from provider_router.routing.catalog import ProviderCatalog
from provider_router.routing.ledger import PerformanceLedger
from provider_router.routing.scorer import TaskScorer
from provider_router.routing.selector import ProviderSelector


def _capability(provider_id: str, **overrides) -> ProviderCapability:
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


@pytest.fixture
def provider_a() -> ProviderCapability:
    return _capability(
        "A",
        accuracy=9,
        speed=5,
        cost_efficiency=4,
        optimal_for=["code"],
        strengths=["reasoning", "code-generation"],
    )


@pytest.fixture
def provider_b() -> ProviderCapability:
    return _capability(
        "B",
        accuracy=6,
        speed=9,
        cost_efficiency=9,
        optimal_for=["conversation"],
    )


@pytest.fixture
def ledger() -> PerformanceLedger:
    return PerformanceLedger()


def _selector(capabilities, ledger) -> ProviderSelector:
    return ProviderSelector(ProviderCatalog(capabilities), TaskScorer(ledger))


def _scores(result):
    return {candidate.capability.id: candidate.score for candidate in result.ranked}


def test_high_complexity_code_task_prefers_accurate_provider(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)
    task = TaskDescriptor(type="code", complexity="high", urgency="low")

    result = selector.select(task)

    assert result.chosen.id == "A"
    assert [c.capability.id for c in result.ranked] == ["A", "B"]
    assert _scores(result) == {"A": pytest.approx(11.8), "B": pytest.approx(11.0)}
    assert result.adjusted_by_profile is False
    assert result.used_unfiltered_catalog is False


def test_high_urgency_flips_ranking_to_fast_provider(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)

    calm = selector.select(TaskDescriptor(type="code", urgency="medium"))
    rushed = selector.select(TaskDescriptor(type="code", urgency="high"))

    assert calm.chosen.id == "A"
    assert rushed.chosen.id == "B"
    assert _scores(rushed) == {"A": pytest.approx(8.5), "B": pytest.approx(8.6)}


def test_preferred_provider_bonus_crosses_over_margin(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)
    task_fields = dict(type="code", complexity="high", urgency="low")
    profile = CallerProfile(
        id="contact-7",
        ai_score=60,
        preferences={"communication_style": "formal", "response_length": "brief"},
        history={"preferred_providers": ["B"]},
    )

    baseline = selector.select(TaskDescriptor(**task_fields))
    weighted = selector.select(TaskDescriptor(**task_fields, caller_profile=profile))

    margin = _scores(baseline)["A"] - _scores(baseline)["B"]
    # The +1 preference bonus only flips the choice when it exceeds A's lead.
    assert margin == pytest.approx(0.8)
    assert margin < 1.0
    assert weighted.chosen.id == "B"
    assert weighted.adjusted_by_profile is True
    assert _scores(weighted) == {"A": pytest.approx(11.8), "B": pytest.approx(12.0)}


def test_equal_scores_keep_catalog_order(ledger):
    first = _capability("first")
    second = _capability("second")
    task = TaskDescriptor(type="analysis")

    forward = _selector([first, second], ledger).select(task)
    backward = _selector([second, first], ledger).select(task)

    assert forward.ranked[0].score == forward.ranked[1].score
    assert [c.capability.id for c in forward.ranked] == ["first", "second"]
    assert [c.capability.id for c in backward.ranked] == ["second", "first"]


def test_selection_is_deterministic(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)
    task = TaskDescriptor(type="creative", complexity="low", urgency="high")

    assert selector.select(task) == selector.select(task)


def test_successes_strictly_increase_final_score(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)
    task = TaskDescriptor(type="code")
    before = _scores(selector.select(task))

    for _ in range(3):
        ledger.record_outcome("B", True)
    after = _scores(selector.select(task))

    assert after["B"] > before["B"]
    assert after["A"] == before["A"]


def test_token_limit_filters_small_windows(ledger):
    small = _capability("small", context_window_tokens=8_000)
    large = _capability("large", context_window_tokens=1_000_000)
    selector = _selector([small, large], ledger)

    result = selector.select(TaskDescriptor(type="research", token_limit=100_000))

    assert [c.capability.id for c in result.ranked] == ["large"]
    assert result.used_unfiltered_catalog is False


def test_no_candidate_falls_back_to_full_catalog(ledger):
    small = _capability("small", context_window_tokens=8_000)
    medium = _capability("medium", context_window_tokens=16_000, accuracy=7)
    selector = _selector([small, medium], ledger)

    result = selector.select(TaskDescriptor(type="research", token_limit=5_000_000))

    assert {c.capability.id for c in result.ranked} == {"small", "medium"}
    assert result.chosen.id == "medium"
    assert result.used_unfiltered_catalog is True


def test_recommend_returns_top_three_for_profile(ledger):
    selector = ProviderSelector(ProviderCatalog.default(), TaskScorer(ledger))
    profile = CallerProfile(id="c", ai_score=90)

    recommended = selector.recommend(profile)

    assert len(recommended) == 3
    assert recommended[0].id in {"openai:gpt-4o", "gemini:gemini-2.5-pro"}
    with pytest.raises(ValueError):
        selector.recommend(profile, limit=0)


def test_explain_mentions_choice_and_alternatives(provider_a, provider_b, ledger):
    selector = _selector([provider_a, provider_b], ledger)
    result = selector.select(TaskDescriptor(type="code", complexity="high"))

    explanation = selector.explain(result)

    assert "A" in explanation
    assert "Alternatives considered: B" in explanation
