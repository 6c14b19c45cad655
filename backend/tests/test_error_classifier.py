import pytest

from renoplan.errors import (
    EmptyResponseError,
    NotFoundError,
    PlanIncompleteError,
    PlanParseError,
    RateLimitExceeded,
    UpstreamUnavailableError,
)
from renoplan.services.error_classifier import (
    format_retry_time,
    get_error_details,
    get_retry_delay,
    is_retryable_error,
)


def test_overloaded_message_maps_to_busy() -> None:
    details = get_error_details("Request failed: overloaded")
    assert details.title == "AI Service Busy"
    assert details.retryable is True
    assert details.retry_after == 60


def test_status_404_without_phrase_maps_to_not_found() -> None:
    details = get_error_details("Something odd happened", status=404)
    assert details.title == "Not Found"
    assert details.retryable is False


def test_matching_is_case_insensitive() -> None:
    assert get_error_details("model UNAVAILABLE right now").title == "AI Service Unavailable"
    assert get_error_details("service unavailable").title == "AI Service Unavailable"


def test_phrase_wins_over_status() -> None:
    assert get_error_details("Project not found", status=500).title == "Project Not Found"


def test_specific_rate_limit_phrase_precedes_generic() -> None:
    details = get_error_details("Too many project creation attempts. Too many requests.")
    assert details.title == "Rate Limit Reached"
    assert details.retry_after == 900


def test_server_retry_after_overrides_table() -> None:
    assert get_error_details("overloaded", retry_after=120).retry_after == 120
    assert get_error_details("teapot", status=503, retry_after=7).retry_after == 7


def test_status_prefix_in_message_is_parsed() -> None:
    details = get_error_details("401: please sign in")
    assert details.title == "Authentication Required"


def test_response_mapping_is_understood() -> None:
    details = get_error_details({"status": 429, "data": {"error": "slow", "retryAfter": 300}})
    assert details.title == "Too Many Requests"
    assert details.retry_after == 300


def test_unknown_error_falls_back_to_generic() -> None:
    details = get_error_details("kaboom")
    assert details.title == "Something Went Wrong"
    assert details.message == "kaboom"
    assert details.retryable is True


@pytest.mark.parametrize(
    ("error", "title", "retryable"),
    [
        (UpstreamUnavailableError(), "AI Service Busy", True),
        (EmptyResponseError(), "No AI Response", True),
        (PlanParseError(), "AI Response Error", True),
        (PlanIncompleteError(["materials: field required"]), "Incomplete AI Response", True),
        (NotFoundError(), "Project Not Found", False),
    ],
)
def test_app_errors_classify(error, title: str, retryable: bool) -> None:
    details = get_error_details(error)
    assert details.title == title
    assert details.retryable is retryable


def test_rate_limit_error_carries_retry_after() -> None:
    error = RateLimitExceeded("Too many AI generation attempts", "Too many requests.", 1800)
    assert get_error_details(error).retry_after == 1800
    assert get_retry_delay(error) == 1800


def test_retry_helpers() -> None:
    assert is_retryable_error("overloaded") is True
    assert is_retryable_error("session has expired") is False
    assert get_retry_delay("kaboom") == 5
    assert format_retry_time(1) == "1 second"
    assert format_retry_time(45) == "45 seconds"
    assert format_retry_time(60) == "1 minute"
    assert format_retry_time(900) == "15 minutes"


def test_server_retry_after_of_zero_is_kept() -> None:
    assert get_error_details("overloaded", retry_after=0).retry_after == 0
    assert get_error_details("teapot", status=503, retry_after=0).retry_after == 0
    assert get_error_details({"status": 418, "data": {"error": "odd", "retryAfter": 0}}).retry_after == 0
