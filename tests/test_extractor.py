import json

import pytest
from google.api_core import exceptions as google_exceptions

from app.ai.agents.extractor import (
    MISSING_API_KEY_ERROR,
    NO_MODEL_ERROR,
    PARSE_ERROR,
    FinancialExtractor,
)
from app.ai.llm.gemini import is_model_not_found
from app.utils.llm_output import strip_code_fences
from tests.fakes import FakeClientFactory, not_found

MODELS = ["model-a", "model-b", "model-c", "model-d"]


def make_extractor(outcomes, models=None, **kwargs):
    factory = FakeClientFactory(outcomes)
    extractor = FinancialExtractor(
        client_factory=factory,
        model_candidates=MODELS if models is None else models,
        **kwargs,
    )
    return extractor, factory


def test_missing_api_key_returns_error_without_calling_provider(sample_json):
    extractor, factory = make_extractor({m: sample_json for m in MODELS})

    result = extractor.extract("", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == MISSING_API_KEY_ERROR
    assert factory.api_keys == []
    assert factory.calls == []


def test_first_candidate_success_stops_the_scan(sample_json):
    extractor, factory = make_extractor({m: sample_json for m in MODELS})

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.ok
    assert result.data.company_name == "Acme"
    assert factory.calls == ["model-a"]


@pytest.mark.parametrize("k", [1, 2, 3])
def test_falls_back_past_not_found_models_to_candidate_k(sample_json, k):
    outcomes = {}
    for i, model in enumerate(MODELS):
        if i < k:
            outcomes[model] = not_found(model)
        elif i == k:
            outcomes[model] = sample_json
        else:
            outcomes[model] = '{"companyName": "Should not be used"}'
    extractor, factory = make_extractor(outcomes)

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.error is None
    assert result.data.company_name == "Acme"
    assert len(result.data.income_statement) == 6
    assert factory.calls == MODELS[: k + 1]


def test_every_candidate_not_found_returns_last_error():
    extractor, factory = make_extractor({m: not_found(m) for m in MODELS})

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == str(not_found("model-d"))
    assert factory.calls == MODELS


def test_empty_candidate_list_returns_generic_error():
    extractor, factory = make_extractor({}, models=[])

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == NO_MODEL_ERROR


def test_malformed_response_is_terminal(sample_json):
    outcomes = {
        "model-a": not_found("model-a"),
        "model-b": "Here is the data you asked for:\n```json\n" + sample_json + "\n```",
        "model-c": sample_json,
        "model-d": sample_json,
    }
    extractor, factory = make_extractor(outcomes)

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == PARSE_ERROR
    assert factory.calls == ["model-a", "model-b"]


def test_other_errors_fall_through_by_default(sample_json):
    outcomes = {
        "model-a": RuntimeError("403 API key not valid"),
        "model-b": sample_json,
        "model-c": sample_json,
        "model-d": sample_json,
    }
    extractor, factory = make_extractor(outcomes)

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.ok
    assert factory.calls == ["model-a", "model-b"]


def test_other_errors_stop_the_scan_when_fallback_is_narrowed(sample_json):
    outcomes = {
        "model-a": not_found("model-a"),
        "model-b": RuntimeError("429 quota exceeded"),
        "model-c": sample_json,
        "model-d": sample_json,
    }
    extractor, factory = make_extractor(outcomes, fallback_on_any_error=False)

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == "429 quota exceeded"
    assert factory.calls == ["model-a", "model-b"]


def test_fenced_and_unfenced_responses_decode_identically(sample_json):
    fenced, _ = make_extractor({"model-a": f"```json\n{sample_json}\n```"}, models=["model-a"])
    plain, _ = make_extractor({"model-a": sample_json}, models=["model-a"])

    fenced_result = fenced.extract("key", b"%PDF", "application/pdf")
    plain_result = plain.extract("key", b"%PDF", "application/pdf")

    assert fenced_result.data == plain_result.data


def test_strip_code_fences_is_idempotent(sample_json):
    wrapped = f"```json\n{sample_json}\n```"

    once = strip_code_fences(wrapped)

    assert once == sample_json
    assert strip_code_fences(once) == once
    assert strip_code_fences(sample_json) == sample_json


def test_enum_fields_are_normalized(sample_payload):
    sample_payload["sentiment"] = " Cautious "
    sample_payload["confidenceDetail"] = "LOW"
    extractor, _ = make_extractor({"model-a": json.dumps(sample_payload)}, models=["model-a"])

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data.sentiment == "cautious"
    assert result.data.confidence_detail == "low"


def test_unknown_sentiment_is_a_parse_error(sample_payload):
    sample_payload["sentiment"] = "ecstatic"
    extractor, _ = make_extractor({"model-a": json.dumps(sample_payload)}, models=["model-a"])

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.data is None
    assert result.error == PARSE_ERROR


def test_null_income_statement_decodes_as_empty(sample_payload):
    sample_payload["incomeStatement"] = None
    extractor, factory = make_extractor({m: json.dumps(sample_payload) for m in MODELS})

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.ok
    assert result.data.income_statement == []
    assert factory.calls == ["model-a"]


def test_loosely_typed_fields_are_accepted(sample_payload):
    sample_payload["keyPositives"] = ["Record", 15, None]
    sample_payload["keyConcerns"] = "Single concern"
    sample_payload["growthInitiatives"] = None
    sample_payload["year"] = 2024
    sample_payload["incomeStatement"] = [
        {"value": 10, "unit": 1000},
        {"description": "Net Income", "value": None, "currency": None},
    ]
    extractor, _ = make_extractor({"model-a": json.dumps(sample_payload)}, models=["model-a"])

    result = extractor.extract("key", b"%PDF", "application/pdf")

    assert result.error is None
    assert result.data.key_positives == ["Record", "15"]
    assert result.data.key_concerns == ["Single concern"]
    assert result.data.growth_initiatives == []
    assert result.data.year == "2024"
    assert result.data.income_statement[0].description == ""
    assert result.data.income_statement[0].unit == "1000"
    assert result.data.income_statement[1].value is None


def test_line_item_values_keep_their_type(sample_data):
    values = [item.value for item in sample_data.income_statement]

    assert values[0] == 1200 and isinstance(values[0], int)
    assert values[3] == "n/a"
    assert values[4] == 210.5


@pytest.mark.parametrize(
    "error,expected",
    [
        (google_exceptions.NotFound("models/gemini-pro-vision"), True),
        (RuntimeError("[404 Not Found] model unavailable"), True),
        (RuntimeError("model is not found for API version"), True),
        (google_exceptions.PermissionDenied("API key not valid"), False),
        (RuntimeError("Deadline exceeded"), False),
    ],
)
def test_is_model_not_found(error, expected):
    assert is_model_not_found(error) is expected
