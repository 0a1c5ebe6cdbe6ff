#!/usr/bin/env python3
"""
Post-Deployment Health Check Script

Confirms that a deployed API process is up by calling its liveness endpoint.

Usage:
    python scripts/health_check.py --url <DEPLOYMENT_URL> [--retry 3] [--retry-delay 10]

Checks Performed:
    1. /api/health returns 200 OK
    2. The body is {"status": "OK", "message": "Server is running"}

The liveness endpoint does not report database connectivity, so a passing
check only means the HTTP process is serving requests.

Exit Codes:
    0: All health checks passed
    1: One or more health checks failed after all retries
"""

import argparse
import sys
import time
import requests
from typing import Dict, Tuple

HEALTH_ENDPOINT = "/api/health"
EXPECTED_BODY = {"status": "OK", "message": "Server is running"}


def check_health_endpoint(url: str, timeout: int = 10) -> Tuple[bool, str]:
    """
    Calls /api/health and verifies status code and payload.

    Args:
        url: Base deployment URL
        timeout: Request timeout in seconds

    Returns:
        Tuple[bool, str]: (success, message)
    """
    full_url = f"{url.rstrip('/')}{HEALTH_ENDPOINT}"

    try:
        response = requests.get(full_url, timeout=timeout)
    except requests.exceptions.Timeout:
        return False, f"✗ {HEALTH_ENDPOINT} timed out after {timeout} seconds"
    except requests.exceptions.ConnectionError:
        return False, f"✗ {HEALTH_ENDPOINT} connection failed"
    except requests.exceptions.RequestException as e:
        return False, f"✗ {HEALTH_ENDPOINT} error: {str(e)}"

    if response.status_code != 200:
        return False, f"✗ {HEALTH_ENDPOINT} returned {response.status_code} (expected 200)"

    try:
        data = response.json()
    except ValueError:
        return False, f"✗ {HEALTH_ENDPOINT} returned invalid JSON"

    if data != EXPECTED_BODY:
        return False, f"✗ {HEALTH_ENDPOINT} returned unexpected body: {data}"

    return True, f"✓ {HEALTH_ENDPOINT} returned 200, server is running"


def run_health_checks(url: str, timeout: int = 10) -> Dict[str, Tuple[bool, str]]:
    print(f"\n{'='*60}")
    print("Post-Deployment Health Checks")
    print(f"{'='*60}\n")
    print(f"Target URL: {url}\n")

    results = {}

    print(f"Check 1: Liveness ({HEALTH_ENDPOINT})...")
    success, message = check_health_endpoint(url, timeout=timeout)
    results["liveness"] = (success, message)
    print(f"  {message}\n")

    return results


def print_summary(results: Dict[str, Tuple[bool, str]]) -> bool:
    """
    Prints a summary of health check results.

    Returns:
        bool: True if all checks passed, False otherwise
    """
    passed = sum(1 for success, _ in results.values() if success)
    total = len(results)

    for check_name, (success, _) in results.items():
        status = "PASS" if success else "FAIL"
        symbol = "✓" if success else "✗"
        print(f"{symbol} {check_name}: {status}")

    print(f"\nTotal: {passed}/{total} checks passed\n")
    return passed == total


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run post-deployment health checks")
    parser.add_argument("--url", required=True, help="Deployment URL to check")
    parser.add_argument(
        "--timeout",
        type=int,
        default=10,
        help="Request timeout in seconds (default: 10)"
    )
    parser.add_argument(
        "--retry",
        type=int,
        default=3,
        help="Number of attempts before giving up (default: 3)"
    )
    parser.add_argument(
        "--retry-delay",
        type=int,
        default=10,
        help="Delay in seconds between retries (default: 10)"
    )

    args = parser.parse_args(argv)

    for attempt in range(1, args.retry + 1):
        if attempt > 1:
            print(f"Retry attempt {attempt}/{args.retry}")
            time.sleep(args.retry_delay)

        results = run_health_checks(args.url, timeout=args.timeout)
        if print_summary(results):
            return 0

    print(f"✗ HEALTH CHECKS FAILED AFTER {args.retry} ATTEMPTS", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
