"""
tenant_platform.smoke

Smoke checks against a running deployment.

Usage:
    python -m tenant_platform.smoke --base-url http://localhost:8080/api

Each check issues a GET and compares the status code with the expected one.
Request errors are caught and reported as ERROR; the process exits 1 if any
check did not pass.
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

import httpx

from tenant_platform.observability.logging import configure_logging, get_logger

log = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api"
SAMPLE_VENDOR_ID = "507f1f77bcf86cd799439011"
PREVIEW_CHARS = 200

Outcome = Literal["pass", "fail", "error"]


@dataclass(frozen=True, slots=True)
class SmokeCheck:
    name: str
    path: str
    expect_status: int = 200


@dataclass(frozen=True, slots=True)
class CheckResult:
    check: SmokeCheck
    outcome: Outcome
    status_code: int | None = None
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.outcome == "pass"


def default_checks(vendor_id: str = SAMPLE_VENDOR_ID) -> list[SmokeCheck]:
    return [
        SmokeCheck("Health Check", "/health"),
        SmokeCheck("API Info", ""),
        SmokeCheck("Review Stats (Public)", f"/reviews/target/Vendor/{vendor_id}/stats"),
        SmokeCheck("Get Reviews (Public)", f"/reviews/target/Vendor/{vendor_id}"),
    ]


def run_check(client: httpx.Client, base_url: str, check: SmokeCheck) -> CheckResult:
    url = f"{base_url.rstrip('/')}{check.path}"
    log.info("check_started", check=check.name, url=url)
    try:
        response = client.get(url, headers={"Content-Type": "application/json"})
    except httpx.HTTPError as e:
        log.error("check_error", check=check.name, error=str(e))
        return CheckResult(check=check, outcome="error", detail=str(e))

    preview = response.text[:PREVIEW_CHARS]
    if response.status_code == check.expect_status:
        log.info("check_passed", check=check.name, status_code=response.status_code, body=preview)
        return CheckResult(check=check, outcome="pass", status_code=response.status_code)

    log.warning(
        "check_failed",
        check=check.name,
        expected=check.expect_status,
        status_code=response.status_code,
        body=response.text,
    )
    return CheckResult(
        check=check, outcome="fail", status_code=response.status_code, detail=preview
    )


def run_checks(
    client: httpx.Client,
    base_url: str,
    checks: Sequence[SmokeCheck],
    *,
    delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> list[CheckResult]:
    results: list[CheckResult] = []
    for i, check in enumerate(checks):
        if i and delay > 0:
            sleep(delay)
        results.append(run_check(client, base_url, check))
    return results


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run smoke checks against the platform API.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL (ends in /api)")
    parser.add_argument("--vendor-id", default=SAMPLE_VENDOR_ID, help="Vendor id for review checks")
    parser.add_argument("--timeout", type=float, default=5.0, help="Per-request timeout in seconds")
    parser.add_argument("--delay", type=float, default=1.0, help="Pause between checks in seconds")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(service_name="tenant-platform-smoke", level=args.log_level, json_output=False)

    with httpx.Client(timeout=args.timeout) as client:
        results = run_checks(
            client, args.base_url, default_checks(args.vendor_id), delay=args.delay
        )

    passed = sum(r.passed for r in results)
    log.info("smoke_completed", passed=passed, total=len(results))
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
