"""Simple sanity check script to exercise each style preset against a running backend."""

from __future__ import annotations

from typing import Any

import httpx

BASE_URL = "http://localhost:8000"


def run_sample(client: httpx.Client, text: str, changes: dict[str, Any]) -> None:
    """Apply settings, send a sample rewrite, and dump the response."""
    client.post(f"{BASE_URL}/settings", json=changes).raise_for_status()
    response = client.post(f"{BASE_URL}/v1/rewrite", json={"text": text})
    if response.is_error:
        print(f"Settings: {changes}")
        print(f"Error {response.status_code}: {response.json()['detail']}")
        print("-" * 60)
        return
    data = response.json()
    print(f"Provider: {data['provider']}  Style: {data['style']}  Custom: {data['using_custom_prompt']}")
    print(data["output_text"])
    print("-" * 60)


def main() -> None:
    """Invoke each style preset and a custom prompt with canned text."""
    sample_text = "login bug fixed, tested on staging, still need to check the mobile app before friday"
    scenarios: list[dict[str, Any]] = [
        {"selected_style": style, "custom_prompt": ""}
        for style in ("professional", "friendly", "concise", "detailed", "update")
    ]
    scenarios.append({"custom_prompt": "Summarise as a single bullet list of action items."})

    with httpx.Client(timeout=120.0) as client:
        for changes in scenarios:
            run_sample(client, sample_text, changes)


if __name__ == "__main__":
    main()
