"""Translate raw failures into user-facing ErrorDetails.

Classification is a first-match walk over ``ERROR_MAPPINGS`` using a
case-insensitive substring test on the error message, then a fallback on the
HTTP status. Entry order matters: specific phrases must precede generic ones.

Matching on message text is brittle across upstream API versions. Callers
that can raise a typed ``AppError`` should; its status code feeds step two.
"""

import re
from collections.abc import Mapping
from typing import Any

from renoplan.schemas.errors import ErrorDetails

ERROR_MAPPINGS: list[tuple[str, ErrorDetails]] = [
    # AI service
    ("overloaded", ErrorDetails(
        title="AI Service Busy",
        message="The AI service is currently busy. Please try again in a few minutes.",
        action="Consider simplifying your request or waiting before retrying.",
        retryable=True,
        retry_after=60,
    )),
    ("UNAVAILABLE", ErrorDetails(
        title="AI Service Unavailable",
        message="The AI service is temporarily unavailable. Please try again shortly.",
        action="The service should be back online soon.",
        retryable=True,
        retry_after=30,
    )),
    ("No response candidates", ErrorDetails(
        title="AI Response Failed",
        message="The AI couldn't generate a proper response. Please try rephrasing your request.",
        action="Try providing more details or simplifying your description.",
        retryable=True,
    )),
    ("Empty response", ErrorDetails(
        title="No AI Response",
        message="The AI returned an empty response. Please try again with a different description.",
        action="Ensure your description is clear and specific.",
        retryable=True,
    )),
    ("AI response validation failed", ErrorDetails(
        title="Invalid AI Response",
        message="The AI generated an invalid response. Please try with a simpler or clearer description.",
        action="Avoid using special characters or overly complex requirements.",
        retryable=True,
    )),
    ("Failed to parse AI response", ErrorDetails(
        title="AI Response Error",
        message="We couldn't understand the AI's response. The service may be experiencing issues.",
        action="Please wait a moment and try again.",
        retryable=True,
        retry_after=15,
    )),
    ("AI response is missing required fields", ErrorDetails(
        title="Incomplete AI Response",
        message="The AI didn't provide all necessary information. Please provide more details in your request.",
        action="Try being more specific about your project requirements.",
        retryable=True,
    )),
    # Rate limiting
    ("Too many project creation attempts", ErrorDetails(
        title="Rate Limit Reached",
        message="You've created too many projects recently. Please wait before creating another.",
        action="You can try again in 15 minutes.",
        retryable=True,
        retry_after=900,
    )),
    ("Too many AI generation attempts", ErrorDetails(
        title="Generation Limit Reached",
        message="You've generated too many plans recently. Please wait before generating another.",
        action="You can try again in 30 minutes.",
        retryable=True,
        retry_after=1800,
    )),
    ("Too many project planning attempts", ErrorDetails(
        title="Planning Limit Reached",
        message="You've requested too many plans recently. Please wait before requesting another.",
        action="You can try again in 30 minutes.",
        retryable=True,
        retry_after=1800,
    )),
    ("Too many requests", ErrorDetails(
        title="Slow Down",
        message="You're making requests too quickly. Please wait a moment.",
        action="Wait a few seconds before trying again.",
        retryable=True,
        retry_after=5,
    )),
    # Authentication
    ("Unauthorized", ErrorDetails(
        title="Session Expired",
        message="Your session has expired. Please log in again to continue.",
        action="You will be redirected to the login page.",
        retryable=False,
    )),
    ("session has expired", ErrorDetails(
        title="Session Timeout",
        message="Your session has timed out due to inactivity.",
        action="Please log in again to continue.",
        retryable=False,
    )),
    # Resources
    ("Project not found", ErrorDetails(
        title="Project Not Found",
        message="The requested project could not be found. It may have been deleted.",
        action="Return to your projects list to see available projects.",
        retryable=False,
    )),
    ("already been generated", ErrorDetails(
        title="Plan Already Generated",
        message="A plan has already been generated for this project.",
        action="Create a new project to generate another plan.",
        retryable=False,
    )),
    ("Failed to fetch project", ErrorDetails(
        title="Loading Error",
        message="We couldn't load the project. Please check your connection and try again.",
        action="Ensure you have a stable internet connection.",
        retryable=True,
    )),
    ("Failed to delete project", ErrorDetails(
        title="Deletion Failed",
        message="The project couldn't be deleted. Please try again.",
        action="If the problem persists, refresh the page.",
        retryable=True,
    )),
    ("Failed to save project", ErrorDetails(
        title="Save Failed",
        message="Your changes couldn't be saved. Please try again.",
        action="Check your connection and retry saving.",
        retryable=True,
    )),
    # Validation
    ("Invalid project description", ErrorDetails(
        title="Invalid Description",
        message="Please provide a valid project description.",
        action="Describe what you want to build in clear, simple terms.",
        retryable=False,
    )),
    ("Description too short", ErrorDetails(
        title="More Details Needed",
        message="Your description is too brief. Please provide more details.",
        action="Include specific features or requirements for your project.",
        retryable=False,
    )),
    ("Description too long", ErrorDetails(
        title="Description Too Long",
        message="Your description exceeds the maximum length. Please be more concise.",
        action="Focus on the key features and requirements.",
        retryable=False,
    )),
    # Network
    ("Network Error", ErrorDetails(
        title="Connection Problem",
        message="Unable to connect to the server. Please check your internet connection.",
        action="Ensure you're connected to the internet and try again.",
        retryable=True,
    )),
    ("ECONNREFUSED", ErrorDetails(
        title="Server Unreachable",
        message="Cannot reach the server. It may be down for maintenance.",
        action="Please try again in a few minutes.",
        retryable=True,
        retry_after=60,
    )),
    ("ETIMEDOUT", ErrorDetails(
        title="Request Timeout",
        message="The request took too long to complete. The server may be busy.",
        action="Please try again with a simpler request.",
        retryable=True,
    )),
    # Database
    ("Database connection failed", ErrorDetails(
        title="Database Error",
        message="We're having trouble accessing data. Please try again.",
        action="Our team has been notified of this issue.",
        retryable=True,
        retry_after=10,
    )),
    ("Transaction failed", ErrorDetails(
        title="Operation Failed",
        message="The operation couldn't be completed. Please try again.",
        action="If this continues, try refreshing the page.",
        retryable=True,
    )),
]

STATUS_MAPPINGS: dict[int, ErrorDetails] = {
    400: ErrorDetails(
        title="Invalid Request",
        message="Your request contains invalid information. Please check and try again.",
        action="Review your input for any errors or invalid characters.",
        retryable=False,
    ),
    401: ErrorDetails(
        title="Authentication Required",
        message="You need to be logged in to perform this action.",
        action="Please log in and try again.",
        retryable=False,
    ),
    403: ErrorDetails(
        title="Access Denied",
        message="You don't have permission to perform this action.",
        action="Contact support if you believe this is an error.",
        retryable=False,
    ),
    404: ErrorDetails(
        title="Not Found",
        message="The requested resource could not be found.",
        action="It may have been moved or deleted.",
        retryable=False,
    ),
    429: ErrorDetails(
        title="Too Many Requests",
        message="You've made too many requests. Please slow down.",
        action="Wait a moment before trying again.",
        retryable=True,
        retry_after=60,
    ),
    500: ErrorDetails(
        title="Server Error",
        message="Something went wrong on our end. Please try again.",
        action="If this persists, please contact support.",
        retryable=True,
    ),
    502: ErrorDetails(
        title="Gateway Error",
        message="We're having trouble connecting to our services.",
        action="Please wait a moment and try again.",
        retryable=True,
        retry_after=30,
    ),
    503: ErrorDetails(
        title="Service Temporarily Unavailable",
        message="Our service is temporarily unavailable. Please try again shortly.",
        action="We're working to restore service as quickly as possible.",
        retryable=True,
        retry_after=60,
    ),
}

DEFAULT_RETRY_DELAY = 5

_STATUS_PREFIX = re.compile(r"^(\d{3}):\s*")


def _parse_error(error: Any) -> tuple[int | None, str, int | None]:
    """Pull (status, message, retry_after) out of whatever was raised or returned."""
    if isinstance(error, Mapping):
        data = error.get("data") or error
        message = data.get("error") or data.get("message") or "An error occurred"
        return error.get("status"), str(message), data.get("retryAfter")

    if isinstance(error, BaseException):
        status = getattr(error, "status_code", None)
        retry_after = getattr(error, "retry_after", None)
        message = getattr(error, "message", None) or str(error)
        if status is not None:
            return status, message, retry_after
    else:
        retry_after = None
        message = str(error) if error is not None else ""

    match = _STATUS_PREFIX.match(message)
    if match:
        return int(match.group(1)), message[match.end():], retry_after
    return None, message, retry_after


def get_error_details(
    error: Any,
    status: int | None = None,
    retry_after: int | None = None,
) -> ErrorDetails:
    parsed_status, message, parsed_retry_after = _parse_error(error)
    status = status if status is not None else parsed_status
    retry_after = retry_after if retry_after is not None else parsed_retry_after

    lowered = message.lower()
    for pattern, details in ERROR_MAPPINGS:
        if pattern.lower() in lowered:
            return details.model_copy(update={"retry_after": retry_after}) if retry_after is not None else details

    if status is not None and status in STATUS_MAPPINGS:
        details = STATUS_MAPPINGS[status]
        return details.model_copy(update={"retry_after": retry_after}) if retry_after is not None else details

    return ErrorDetails(
        title="Something Went Wrong",
        message=message or "An unexpected error occurred. Please try again.",
        action="If this problem persists, please refresh the page or contact support.",
        retryable=True,
        retry_after=retry_after,
    )


def format_retry_time(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    minutes = -(-seconds // 60)
    return f"{minutes} minute{'s' if minutes != 1 else ''}"


def is_retryable_error(error: Any) -> bool:
    return get_error_details(error).retryable


def get_retry_delay(error: Any) -> int:
    """Seconds to wait before retrying; defaults to 5."""
    return get_error_details(error).retry_after or DEFAULT_RETRY_DELAY
