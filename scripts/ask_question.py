#!/usr/bin/env python3
"""
Smoke client: send one question to a running relay and print the response.

Run from project root:

    python scripts/ask_question.py "What projects are in the portfolio?"
    python scripts/ask_question.py --verbose
    python scripts/ask_question.py --host http://localhost:7071 --get

HOST defaults to $RELAY_HOST or http://127.0.0.1:8000. Exit code is 0 on HTTP 200.
"""

import argparse
import json
import os
import sys

import requests

HOST = os.getenv("RELAY_HOST", "http://127.0.0.1:8000")
ROUTE = "/api/QueryChatbot"


def ask(host: str, question: str | None, use_get: bool = False, timeout: float = 30.0) -> requests.Response:
    url = f"{host.rstrip('/')}{ROUTE}"
    if use_get:
        return requests.get(url, timeout=timeout)
    payload = {"question": question} if question else {}
    return requests.post(url, json=payload, timeout=timeout)


def main() -> int:
    parser = argparse.ArgumentParser(description="Ask the question relay one question.")
    parser.add_argument("question", nargs="?", default=None, help="Question text (server default when omitted)")
    parser.add_argument("--host", default=HOST, help=f"Relay base URL (default: {HOST})")
    parser.add_argument("--get", action="store_true", help="Send a bodiless GET instead of POST")
    parser.add_argument("--verbose", action="store_true", help="Print the full JSON payload")
    args = parser.parse_args()

    try:
        r = ask(args.host, args.question, use_get=args.get)
    except requests.RequestException as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 2

    print(f"HTTP {r.status_code}")
    try:
        data = r.json()
    except ValueError:
        print(r.text[:500])
        return 1
    if args.verbose or not r.ok:
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        answers = data.get("answers") or []
        print(answers[0].get("answer", "") if answers else "(no answers)")
    return 0 if r.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
