#!/usr/bin/env python3
"""
Smoke test for the session lifecycle of a running tally service.

Each iteration registers a fresh user, checks that duplicate registration and
bad passwords are rejected, logs in, creates and clicks a counter, then logs
out and confirms the old token no longer works. It talks to the public HTTP
interface only, so point `--base-url` at any environment (local dev, staging).

Requirements:
  pip install requests

Typical use:
  python session_smoke_tester.py --base-url http://127.0.0.1:3000 --iterations 3
"""

from __future__ import annotations

import argparse
import sys
import uuid
from dataclasses import dataclass
from typing import Optional

import requests


@dataclass
class UserContext:
    session: requests.Session
    username: str
    password: str
    token: Optional[str] = None

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


class CheckFailed(RuntimeError):
    pass


def expect_status(resp: requests.Response, expected: int, step: str) -> None:
    if resp.status_code != expected:
        raise CheckFailed(f"{step}: expected {expected}, got {resp.status_code} ({resp.text.strip()})")


def register(base_url: str, user: UserContext, password: Optional[str] = None) -> requests.Response:
    return user.session.post(
        f"{base_url}/api/register",
        json={"username": user.username, "password": password or user.password},
    )


def login(base_url: str, user: UserContext, password: Optional[str] = None) -> requests.Response:
    resp = user.session.post(
        f"{base_url}/api/login",
        json={"username": user.username, "password": password or user.password},
    )
    if resp.status_code == 200:
        user.token = resp.json()["token"]
    return resp


def run_iteration(base_url: str, iteration: int) -> bool:
    user = UserContext(
        session=requests.Session(),
        username=f"smoke{iteration}_{uuid.uuid4().hex[:8]}",
        password="Automation123!",
    )
    counter_name = f"SmokeCounter_{uuid.uuid4().hex[:8]}"

    try:
        expect_status(register(base_url, user), 201, "register")
        expect_status(register(base_url, user, password="other"), 400, "duplicate register")
        expect_status(login(base_url, user, password="wrong"), 401, "login with wrong password")
        expect_status(login(base_url, user), 200, "login")

        resp = user.session.post(
            f"{base_url}/api/add", json={"name": counter_name}, headers=user.auth_headers()
        )
        expect_status(resp, 201, "add counter")

        resp = user.session.post(
            f"{base_url}/api/increment/{counter_name}", headers=user.auth_headers()
        )
        expect_status(resp, 200, "increment counter")

        resp = user.session.get(f"{base_url}/api/names")
        expect_status(resp, 200, "list names")
        if resp.json().get(counter_name, {}).get("count") != 1:
            raise CheckFailed(f"list names: {counter_name} does not show one click")

        resp = user.session.delete(
            f"{base_url}/api/delete/{counter_name}", headers=user.auth_headers()
        )
        expect_status(resp, 200, "delete counter")

        stale_headers = user.auth_headers()
        expect_status(
            user.session.post(f"{base_url}/api/logout", headers=stale_headers), 200, "logout"
        )
        resp = user.session.post(
            f"{base_url}/api/add", json={"name": counter_name}, headers=stale_headers
        )
        expect_status(resp, 401, "add after logout")
    except CheckFailed as exc:
        print(f"[FAIL] Iteration {iteration}: {exc}", file=sys.stderr)
        return False

    print(f"[PASS] Iteration {iteration}: session checks passed.")
    return True


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exercise the login/session lifecycle of a running tally service."
    )
    parser.add_argument(
        "--base-url",
        required=True,
        help="Root URL of a running tally instance (e.g. http://127.0.0.1:3000)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=1,
        help="How many independent users to run through the checks (default: 1).",
    )
    parser.add_argument(
        "--stop-on-fail",
        action="store_true",
        help="Abort after the first failing iteration.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    base_url = args.base_url.rstrip("/")
    failures = 0
    for i in range(1, args.iterations + 1):
        ok = run_iteration(base_url, i)
        if not ok:
            failures += 1
            if args.stop_on_fail:
                break
    if failures:
        print(f"\nCompleted with {failures} failing iteration(s).", file=sys.stderr)
        return 1
    print(f"\nAll {args.iterations} iteration(s) passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
