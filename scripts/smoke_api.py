#!/usr/bin/env python3
"""Smoke check for a running front-desk API."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"


def check_form_guard() -> bool:
    """Open a form, dirty it, press back, then confirm the exit."""
    print("=" * 60)
    print("Checking /api/v1/forms back-navigation guard")
    print("=" * 60)

    try:
        form = httpx.post(
            f"{BASE_URL}/api/v1/forms",
            json={"name": "edit-client", "original": {"name": "ANA"}, "redirect_to": "/clients"},
            timeout=10.0,
        )
        form.raise_for_status()
        form_id = form.json()["id"]

        httpx.post(
            f"{BASE_URL}/api/v1/forms/{form_id}/change",
            json={"name": "name", "value": "ANA S."},
            timeout=10.0,
        ).raise_for_status()
        after_back = httpx.post(f"{BASE_URL}/api/v1/forms/{form_id}/back", timeout=10.0).json()
        print(f"after back: state={after_back['state']} path={after_back['current_path']}")

        closed = httpx.post(f"{BASE_URL}/api/v1/forms/{form_id}/confirm-close", timeout=10.0).json()
        print(f"after confirm: state={closed['form']['state']} path={closed['form']['current_path']}")
        print(f"directives: {closed['form']['directives']}")
        return closed["form"]["state"] == "closed"
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except Exception as e:
        print(f"❌ Error: {e}")
        return False


def check_checklist() -> bool:
    """Fill an android checklist and complete it."""
    print("\n" + "=" * 60)
    print("Checking /api/v1/checklists")
    print("=" * 60)

    try:
        checklist = httpx.post(f"{BASE_URL}/api/v1/checklists", timeout=10.0).json()
        checklist_id = checklist["id"]
        selected = httpx.post(
            f"{BASE_URL}/api/v1/checklists/{checklist_id}/category",
            json={"category": "android"},
            timeout=10.0,
        ).json()
        for item in selected["checklist"]["items"]:
            httpx.post(
                f"{BASE_URL}/api/v1/checklists/{checklist_id}/item",
                json={"item_id": item["id"], "status": "working"},
                timeout=10.0,
            ).raise_for_status()

        done = httpx.post(f"{BASE_URL}/api/v1/checklists/{checklist_id}/complete", timeout=10.0).json()
        snapshot = done["checklist"]["snapshot"]
        print(f"✅ Completed {snapshot['category']} checklist, complete={snapshot['is_complete']}")
        return snapshot["is_complete"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except Exception as e:
        print(f"❌ Error: {e}")
        return False


def main():
    print("\n🚀 Smoke checking front-desk API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn repairdesk.main:app --reload --port 8001")
        sys.exit(1)

    ok = check_form_guard() and check_checklist()

    print("\n" + "=" * 60)
    print("✅ Smoke checks passed!" if ok else "❌ Smoke checks failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
