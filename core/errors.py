# =============================================================================
# core/errors.py  —  Domain error taxonomy
# =============================================================================
#
# Adapters never raise to their caller.  Every failure comes back as a
# DomainError value, and the dispatcher branches on its `kind`.  The
# `message` is already user-facing (Korean, like the rest of the product)
# and never contains a traceback or a raw provider payload.
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    PROVIDER_ERROR = "provider_error"
    CONFIG_MISSING = "config_missing"
    UNKNOWN_TOOL = "unknown_tool"
    TIMEOUT = "timeout"


# Caller may retry these unchanged.
TRANSIENT_KINDS = frozenset({ErrorKind.RATE_LIMITED, ErrorKind.TIMEOUT})


# OAuth scope -> what the user sees in the permission message.
SCOPE_LABELS = {
    "talk_calendar": "톡캘린더",
    "talk_message": "메시지 전송",
}

LOGIN_REQUIRED_MESSAGE = "카카오 로그인이 필요합니다. PlayMCP에서 카카오 계정으로 로그인해주세요."
TOKEN_EXPIRED_MESSAGE = "카카오 인증이 만료되었습니다. 다시 로그인해주세요."


@dataclass(frozen=True)
class DomainError:
    """A classified failure, ready to render."""

    kind: ErrorKind
    message: str
    status: Optional[int] = None        # Provider HTTP status, if any
    detail: Optional[str] = None        # Short provider-supplied text
    scope: Optional[str] = None         # Missing OAuth scope (FORBIDDEN)
    location: Optional[str] = None      # Unresolved location (NOT_FOUND)

    @property
    def transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS


# -----------------------------------------------------------------------------
# Constructors
# -----------------------------------------------------------------------------

def validation_failed(detail: str) -> DomainError:
    return DomainError(
        kind=ErrorKind.VALIDATION_FAILED,
        message=f"입력 오류: {detail}",
        detail=detail,
    )


def not_found(location: str) -> DomainError:
    return DomainError(
        kind=ErrorKind.NOT_FOUND,
        message=f"위치를 찾을 수 없습니다: {location}",
        location=location,
    )


def unauthorized(message: str = TOKEN_EXPIRED_MESSAGE) -> DomainError:
    return DomainError(kind=ErrorKind.UNAUTHORIZED, message=message, status=401)


def forbidden(scope: str) -> DomainError:
    label = SCOPE_LABELS.get(scope, scope)
    return DomainError(
        kind=ErrorKind.FORBIDDEN,
        message=f"{label} 권한이 없습니다. PlayMCP에서 {scope} 권한을 허용해주세요.",
        status=403,
        scope=scope,
    )


def rate_limited() -> DomainError:
    return DomainError(
        kind=ErrorKind.RATE_LIMITED,
        message="API 호출 한도 초과. 잠시 후 다시 시도해주세요.",
        status=429,
    )


def provider_error(action: str, status: Optional[int] = None, detail: Optional[str] = None) -> DomainError:
    """`action` is the Korean verb phrase, e.g. "일정 생성"."""
    if detail:
        reason = detail
    elif status is not None:
        reason = f"HTTP {status}"
    else:
        reason = "알 수 없는 오류가 발생했습니다."
    return DomainError(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"{action} 실패: {reason}",
        status=status,
        detail=detail,
    )


def config_missing(message: str = LOGIN_REQUIRED_MESSAGE) -> DomainError:
    return DomainError(kind=ErrorKind.CONFIG_MISSING, message=message)


def unknown_tool(name: str) -> DomainError:
    return DomainError(kind=ErrorKind.UNKNOWN_TOOL, message=f"알 수 없는 도구: {name}")


def timed_out(action: str, seconds: float) -> DomainError:
    return DomainError(
        kind=ErrorKind.TIMEOUT,
        message=f"{action} 실패: 요청 시간이 초과되었습니다 ({seconds:g}초). 잠시 후 다시 시도해주세요.",
    )
